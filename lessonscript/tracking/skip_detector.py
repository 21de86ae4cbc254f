from __future__ import annotations

import logging
from functools import lru_cache
from typing import AbstractSet, Collection, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from lessonscript.models.block import Block, SkipReport
from lessonscript.models.configs import DEFAULT_TRACKABLE_TAGS


logger = logging.getLogger(__name__)


class TrackingIndex:
    """Per-tree lookup tables: node map, trackable reading order and lineages.

    Built once per tree; the tree itself is never modified.
    """

    def __init__(self, blocks: Sequence[Block], trackable_tags: Collection[str] | None = None) -> None:
        self.blocks = tuple(blocks)
        self.trackable_tags = frozenset(trackable_tags if trackable_tags is not None else DEFAULT_TRACKABLE_TAGS)
        self.nodes: Dict[str, Block] = {}
        sequence: List[str] = []

        for root in self.blocks:
            for node in root.walk():
                self.nodes[node.id] = node
                if node.is_leaf and node.tag in self.trackable_tags:
                    sequence.append(node.id)

        self.sequence: Tuple[str, ...] = tuple(sequence)
        self.positions: Dict[str, int] = {block_id: idx for idx, block_id in enumerate(self.sequence)}
        self._lineages: Dict[str, Optional[Tuple[Block, ...]]] = {}

    @classmethod
    def from_blocks(cls, blocks: Sequence[Block], trackable_tags: Collection[str] | None = None) -> "TrackingIndex":
        return cls(blocks, trackable_tags)

    def lineage(self, block_id: str) -> Optional[Tuple[Block, ...]]:
        """Return the root-to-node path for ``block_id``.

        ``None`` means the walk failed: the id is unknown, a ``parent_id`` does not
        resolve, or the parent chain loops.
        """

        if block_id in self._lineages:
            return self._lineages[block_id]

        chain: List[Block] = []
        seen: set[str] = set()
        current = self.nodes.get(block_id)
        result: Optional[Tuple[Block, ...]] = None

        while current is not None and current.id not in seen:
            chain.append(current)
            seen.add(current.id)
            if current.parent_id is None:
                result = tuple(reversed(chain))
                break
            current = self.nodes.get(current.parent_id)

        if result is None:
            logger.debug("lineage lookup failed for block %s", block_id)
        self._lineages[block_id] = result
        return result


def _is_alternative_branch(candidate: Sequence[Block], checkpoint: Sequence[Block]) -> bool:
    """True when both lineages split into two different group blocks right below their LCA."""

    lca = -1
    for left, right in zip(candidate, checkpoint):
        if left.id != right.id:
            break
        lca += 1

    if lca < 0 or lca >= len(candidate) - 1 or lca >= len(checkpoint) - 1:
        return False
    return candidate[lca + 1].is_group and checkpoint[lca + 1].is_group


class SkipDetector:
    """Infer which trackable leaves were bypassed during a linear read-through.

    A gap before the furthest interacted leaf counts as skipped unless the gap
    and its next interacted checkpoint sit in sibling groups under a common
    ancestor, which marks them as alternatives rather than a skip.
    """

    def __init__(self, index: TrackingIndex, cache_size: int = 32) -> None:
        self.index = index
        self._cached = lru_cache(maxsize=cache_size)(self._compute)

    @property
    def sequence(self) -> Tuple[str, ...]:
        return self.index.sequence

    def detect(self, interacted: Iterable[str]) -> SkipReport:
        return self._cached(frozenset(interacted))

    def _compute(self, interacted: FrozenSet[str]) -> SkipReport:
        sequence = self.index.sequence
        if not interacted:
            return SkipReport(sequence=sequence)

        positions = self.index.positions
        reached = sorted(positions[block_id] for block_id in interacted if block_id in positions)
        if not reached:
            return SkipReport(sequence=sequence)
        max_index = reached[-1]

        skipped: set[str] = set()
        checkpoints = iter(reached)
        checkpoint = next(checkpoints)

        for idx in range(max_index):
            candidate_id = sequence[idx]
            if candidate_id in interacted:
                continue
            while checkpoint < idx:
                checkpoint = next(checkpoints)
            if not self._exempt(candidate_id, sequence[checkpoint]):
                skipped.add(candidate_id)

        return SkipReport(sequence=sequence, skipped=frozenset(skipped))

    def _exempt(self, candidate_id: str, checkpoint_id: str) -> bool:
        candidate = self.index.lineage(candidate_id)
        checkpoint = self.index.lineage(checkpoint_id)
        if candidate is None or checkpoint is None:
            return False
        return _is_alternative_branch(candidate, checkpoint)


def detect(
    blocks: Sequence[Block],
    interacted: AbstractSet[str] | Iterable[str],
    trackable_tags: Collection[str] | None = None,
) -> SkipReport:
    """One-shot detection; prefer a long-lived ``SkipDetector`` when the tree is reused."""

    return SkipDetector(TrackingIndex.from_blocks(blocks, trackable_tags)).detect(interacted)


__all__ = ["SkipDetector", "TrackingIndex", "detect"]
