"""Data records shared by the tree builder, the skip detector and renderers."""

from .block import Block, BlockKind, ScriptTag, SkipReport
from .configs import ScriptConfig, TagVocabulary
from .row import ScriptRow

__all__ = [
    "Block",
    "BlockKind",
    "ScriptConfig",
    "ScriptRow",
    "ScriptTag",
    "SkipReport",
    "TagVocabulary",
]
