from __future__ import annotations

from enum import Enum
from typing import FrozenSet, List, Optional, Sequence, assert_never

from lessonscript.models.block import Block, ScriptTag, SkipReport


OUTER_GROUP_FALLBACK_TITLE = "Expandable content"
INNER_GROUP_FALLBACK_TITLE = "Details"


class Widget(str, Enum):
    COPYABLE_TEXT = "copyable_text"
    PRIVATE_MESSAGE = "private_message"
    INSTRUCTION = "instruction"
    RESPONSE = "response"
    SPOILER = "spoiler"
    UNKNOWN = "unknown"


def widget_for(block: Block) -> Widget:
    """Map a block to the widget a renderer should draw for it."""

    if block.is_group:
        return Widget.SPOILER
    return leaf_widget(ScriptTag.parse(block.tag))


def leaf_widget(tag: Optional[ScriptTag]) -> Widget:
    match tag:
        case ScriptTag.TITLE | ScriptTag.LINE | ScriptTag.QUESTION:
            return Widget.COPYABLE_TEXT
        case ScriptTag.PRIVATE_MESSAGE:
            return Widget.PRIVATE_MESSAGE
        case ScriptTag.INSTRUCTION:
            return Widget.INSTRUCTION
        case ScriptTag.RESPONSE:
            return Widget.RESPONSE
        case ScriptTag.OUTER_OPEN | ScriptTag.OUTER_CLOSE | ScriptTag.INNER_OPEN | ScriptTag.INNER_CLOSE:
            # group markers only reach the tree as leaves under a custom vocabulary
            return Widget.UNKNOWN
        case None:
            return Widget.UNKNOWN
        case _:
            assert_never(tag)


def group_title(block: Block) -> str:
    if block.content.strip():
        return block.content
    return OUTER_GROUP_FALLBACK_TITLE if block.level == 1 else INNER_GROUP_FALLBACK_TITLE


def _marker(block: Block, report: Optional[SkipReport], interacted: FrozenSet[str]) -> str:
    if report is None or block.id not in report.sequence:
        return "   "
    if block.id in interacted:
        return "[x]"
    if report.is_skipped(block.id):
        return "[!]"
    return "[ ]"


def render_outline(
    blocks: Sequence[Block],
    report: Optional[SkipReport] = None,
    interacted: FrozenSet[str] = frozenset(),
    indent: str = "  ",
) -> str:
    """Plain-text outline of the tree with interaction/skip markers on trackable leaves."""

    lines: List[str] = []

    def visit(block: Block, depth: int) -> None:
        prefix = indent * depth
        if block.is_group:
            lines.append(f"{prefix}    [{block.tag}] {group_title(block)}")
            for child in block.children:
                visit(child, depth + 1)
            return
        marker = _marker(block, report, interacted)
        lines.append(f"{prefix}{marker} {block.tag}: {block.content}")

    for block in blocks:
        visit(block, 0)
    return "\n".join(lines)


__all__ = [
    "INNER_GROUP_FALLBACK_TITLE",
    "OUTER_GROUP_FALLBACK_TITLE",
    "Widget",
    "group_title",
    "leaf_widget",
    "render_outline",
    "widget_for",
]
