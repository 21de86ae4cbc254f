from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict

import yaml

from lessonscript.models.configs import ScriptConfig


def read_structured_file(path: Path) -> Any:
    """Parse a YAML, TOML or JSON file; a leading UTF-8 BOM is ignored."""

    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    ext = path.suffix.lower()
    text = path.read_text(encoding="utf-8-sig")

    if ext in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    if ext == ".toml":
        return tomllib.loads(text)
    if ext == ".json":
        return json.loads(text)
    raise ValueError(f"Unsupported file format '{ext}' for {path}")


def _load_mapping(path: Path) -> Dict[str, Any]:
    data = read_structured_file(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def load_script_config(path: Path | None) -> ScriptConfig:
    """Load a ScriptConfig from YAML/TOML/JSON; ``None`` gives the defaults."""

    if path is None:
        return ScriptConfig()
    return ScriptConfig.model_validate(_load_mapping(path))


__all__ = ["load_script_config", "read_structured_file"]
