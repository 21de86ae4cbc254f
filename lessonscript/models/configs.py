from __future__ import annotations

from typing import FrozenSet, List

from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_TRACKABLE_TAGS = ["line", "title", "mp", "p"]


class TagVocabulary(BaseModel):
    """Tags that open and close groups, and the leaf tags counted for skip tracking."""

    outer_open: str = "s1"
    outer_close: str = "s2"
    inner_open: str = "s3"
    inner_close: str = "s4"
    trackable: List[str] = Field(default_factory=lambda: list(DEFAULT_TRACKABLE_TAGS))

    model_config = {
        "frozen": True,
    }

    @field_validator("outer_open", "outer_close", "inner_open", "inner_close", mode="before")
    @classmethod
    def _normalize_marker(cls, value: object) -> str:
        tag = str(value or "").strip().lower()
        if not tag:
            raise ValueError("group marker tags must not be empty")
        return tag

    @field_validator("trackable", mode="before")
    @classmethod
    def _normalize_trackable(cls, value: object) -> List[str]:
        if value is None:
            return list(DEFAULT_TRACKABLE_TAGS)
        if isinstance(value, str):
            value = value.split(",")
        return [str(tag).strip().lower() for tag in value if str(tag).strip()]

    @model_validator(mode="after")
    def _check_markers(self) -> "TagVocabulary":
        markers = self.markers
        if len(markers) != 4:
            raise ValueError("group open/close markers must be four distinct tags")
        overlap = markers.intersection(self.trackable)
        if overlap:
            raise ValueError(f"group markers cannot be trackable leaf tags: {sorted(overlap)}")
        return self

    @property
    def markers(self) -> FrozenSet[str]:
        return frozenset({self.outer_open, self.outer_close, self.inner_open, self.inner_close})

    @property
    def trackable_tags(self) -> FrozenSet[str]:
        return frozenset(self.trackable)


class ScriptConfig(BaseModel):
    vocabulary: TagVocabulary = Field(default_factory=TagVocabulary)

    model_config = {
        "frozen": True,
    }


__all__ = ["DEFAULT_TRACKABLE_TAGS", "ScriptConfig", "TagVocabulary"]
