from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from lessonscript.ingest.utils import BlockIdAllocator, NamespaceSequence
from lessonscript.models.block import Block, BlockKind
from lessonscript.models.configs import ScriptConfig, TagVocabulary
from lessonscript.models.row import ScriptRow


logger = logging.getLogger(__name__)

TOP_LEVEL = 0
OUTER_LEVEL = 1
INNER_LEVEL = 2


class _Parse:
    """State of a single parse: the rows, the vocabulary and the id allocator.

    The cursor is not stored here; every method takes a position and returns the
    position after what it consumed.
    """

    def __init__(self, rows: Sequence[ScriptRow], vocabulary: TagVocabulary, ids: BlockIdAllocator) -> None:
        self.rows = rows
        self.vocabulary = vocabulary
        self.ids = ids

    def collect(self, pos: int, level: int, parent_id: Optional[str]) -> Tuple[List[Block], int]:
        """Collect sibling blocks at ``level`` until a boundary or end of input."""

        vocab = self.vocabulary
        blocks: List[Block] = []

        while pos < len(self.rows):
            row = self.rows[pos]
            tag = row.tag

            if tag == vocab.outer_open:
                if level != TOP_LEVEL:
                    logger.debug("row %d: %r implicitly closes the open group", pos, tag)
                    return blocks, pos
                block, pos = self.group(pos, OUTER_LEVEL, parent_id)
                blocks.append(block)
            elif tag == vocab.inner_open:
                if level == INNER_LEVEL:
                    logger.debug("row %d: %r implicitly closes the open inner group", pos, tag)
                    return blocks, pos
                block, pos = self.group(pos, INNER_LEVEL, parent_id)
                blocks.append(block)
            elif tag == vocab.outer_close:
                if level != TOP_LEVEL:
                    return blocks, pos
                logger.debug("row %d: ignoring orphan close marker %r", pos, tag)
                pos += 1
            elif tag == vocab.inner_close:
                if level == INNER_LEVEL:
                    return blocks, pos
                logger.debug("row %d: ignoring orphan close marker %r", pos, tag)
                pos += 1
            else:
                blocks.append(
                    Block(
                        id=self.ids.next_id(),
                        kind=BlockKind.LEAF,
                        tag=tag,
                        content=row.content,
                        parent_id=parent_id,
                    )
                )
                pos += 1

        return blocks, pos

    def group(self, pos: int, level: int, parent_id: Optional[str]) -> Tuple[Block, int]:
        opener = self.rows[pos]
        closer = self.vocabulary.outer_close if level == OUTER_LEVEL else self.vocabulary.inner_close
        group_id = self.ids.next_id()

        children, pos = self.collect(pos + 1, level, group_id)
        if pos < len(self.rows) and self.rows[pos].tag == closer:
            pos += 1
        elif pos >= len(self.rows):
            logger.debug("group %s (%r) closed implicitly at end of input", group_id, opener.tag)

        block = Block(
            id=group_id,
            kind=BlockKind.GROUP,
            tag=opener.tag,
            content=opener.content,
            parent_id=parent_id,
            children=tuple(children),
            level=level,
        )
        return block, pos


class ScriptTreeBuilder:
    """Turn a flat stream of tagged rows into a nested block tree.

    Nesting is resolved from paired open/close markers only: outer groups may hold
    inner groups and leaves, inner groups hold leaves. Malformed nesting never
    raises; orphan close markers are skipped and unterminated groups close at
    end of input.
    """

    def __init__(self, config: ScriptConfig | None = None) -> None:
        self.config = config or ScriptConfig()
        self._namespaces = NamespaceSequence()

    def build(self, rows: Iterable[ScriptRow | Tuple[str, str]]) -> List[Block]:
        materialized = [row if isinstance(row, ScriptRow) else ScriptRow(*row) for row in rows]
        parse = _Parse(materialized, self.config.vocabulary, self._namespaces.allocator())
        blocks, _ = parse.collect(0, TOP_LEVEL, None)
        logger.debug(
            "built %d top-level blocks from %d rows (namespace %s)",
            len(blocks),
            len(materialized),
            parse.ids.namespace,
        )
        return blocks


def build_blocks(rows: Iterable[ScriptRow | Tuple[str, str]], config: ScriptConfig | None = None) -> List[Block]:
    """Build a tree with a fresh builder."""

    return ScriptTreeBuilder(config).build(rows)


__all__ = ["ScriptTreeBuilder", "build_blocks"]
