from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class ScriptRow:
    """A single tagged row of an authored script."""

    tag: str
    content: str = ""

    @classmethod
    def normalized(cls, tag: Optional[str], content: Optional[str] = None) -> "ScriptRow":
        return cls(tag=(tag or "").strip().lower(), content=(content or "").strip())


__all__ = ["ScriptRow"]
