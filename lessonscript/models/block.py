from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple


class BlockKind(str, Enum):
    LEAF = "leaf"
    GROUP = "group"


class ScriptTag(str, Enum):
    TITLE = "title"
    LINE = "line"
    INSTRUCTION = "att"
    PRIVATE_MESSAGE = "mp"
    RESPONSE = "rep"
    QUESTION = "p"
    OUTER_OPEN = "s1"
    OUTER_CLOSE = "s2"
    INNER_OPEN = "s3"
    INNER_CLOSE = "s4"

    @classmethod
    def parse(cls, tag: str) -> Optional["ScriptTag"]:
        try:
            return cls(tag)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Block:
    """A node of the script tree, either a content leaf or a collapsible group."""

    id: str
    kind: BlockKind
    tag: str
    content: str = ""
    parent_id: Optional[str] = None
    children: Tuple["Block", ...] = field(default_factory=tuple)
    level: Optional[int] = None

    @property
    def is_group(self) -> bool:
        return self.kind is BlockKind.GROUP

    @property
    def is_leaf(self) -> bool:
        return self.kind is BlockKind.LEAF

    def walk(self) -> Iterator["Block"]:
        """Yield this block and its descendants in pre-order."""

        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "parent_id": self.parent_id,
            "type": self.kind.value,
            "tag": self.tag,
            "content": self.content,
        }
        if self.is_group:
            data["level"] = self.level
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(frozen=True, slots=True)
class SkipReport:
    """Trackable reading order plus the leaves flagged as skipped."""

    sequence: Tuple[str, ...] = ()
    skipped: FrozenSet[str] = frozenset()

    def is_skipped(self, block_id: str) -> bool:
        return block_id in self.skipped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence": list(self.sequence),
            "skipped": [block_id for block_id in self.sequence if block_id in self.skipped],
        }


__all__ = ["Block", "BlockKind", "ScriptTag", "SkipReport"]
