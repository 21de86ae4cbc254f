import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from lessonscript.config_loader import load_script_config
from lessonscript.models.configs import ScriptConfig, TagVocabulary
from lessonscript.settings import Settings


def test_default_vocabulary():
    vocab = ScriptConfig().vocabulary

    assert (vocab.outer_open, vocab.outer_close, vocab.inner_open, vocab.inner_close) == ("s1", "s2", "s3", "s4")
    assert vocab.trackable_tags == {"line", "title", "mp", "p"}


def test_vocabulary_normalizes_tags():
    vocab = TagVocabulary(outer_open=" OPEN ", trackable="Line, P")

    assert vocab.outer_open == "open"
    assert vocab.trackable == ["line", "p"]


def test_vocabulary_rejects_duplicate_markers():
    with pytest.raises(ValidationError):
        TagVocabulary(outer_close="s1")


def test_vocabulary_rejects_trackable_markers():
    with pytest.raises(ValidationError):
        TagVocabulary(trackable=["line", "s3"])


def test_load_script_config_yaml(tmp_path):
    path = tmp_path / "vocab.yaml"
    path.write_text("vocabulary:\n  trackable: [line, p]\n", encoding="utf-8")

    config = load_script_config(path)

    assert config.vocabulary.trackable == ["line", "p"]
    assert config.vocabulary.outer_open == "s1"


def test_load_script_config_toml(tmp_path):
    path = tmp_path / "vocab.toml"
    path.write_text('[vocabulary]\nouter_open = "box"\nouter_close = "endbox"\n', encoding="utf-8")

    config = load_script_config(path)

    assert config.vocabulary.outer_open == "box"


def test_load_script_config_defaults_and_errors(tmp_path):
    assert load_script_config(None) == ScriptConfig()

    with pytest.raises(FileNotFoundError):
        load_script_config(tmp_path / "missing.yaml")

    bad = tmp_path / "vocab.ini"
    bad.write_text("x", encoding="utf-8")
    with pytest.raises(ValueError):
        load_script_config(bad)

    listing = tmp_path / "vocab.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_script_config(listing)


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LESSONSCRIPT_CONFIG", str(tmp_path / "vocab.yaml"))
    monkeypatch.setenv("LESSONSCRIPT_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.config_path == tmp_path / "vocab.yaml"
    assert settings.log_level == "DEBUG"
    assert logging.getLevelName(settings.log_level) == logging.DEBUG


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("LESSONSCRIPT_CONFIG", raising=False)
    monkeypatch.delenv("LESSONSCRIPT_LOG_LEVEL", raising=False)

    settings = Settings()

    assert settings.config_path is None
    assert settings.log_level == "WARNING"


def test_settings_rejects_unknown_level():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_settings_validates_environment_values(monkeypatch):
    monkeypatch.setenv("LESSONSCRIPT_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        Settings()


def test_settings_config_path_from_environment_is_a_path(monkeypatch, tmp_path):
    monkeypatch.setenv("LESSONSCRIPT_CONFIG", str(tmp_path / "vocab.toml"))
    monkeypatch.delenv("LESSONSCRIPT_LOG_LEVEL", raising=False)

    assert isinstance(Settings().config_path, Path)
