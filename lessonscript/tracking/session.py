from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Sequence, Tuple

from lessonscript.ingest.tree_builder import ScriptTreeBuilder
from lessonscript.models.block import Block, SkipReport
from lessonscript.models.configs import ScriptConfig
from lessonscript.models.row import ScriptRow
from lessonscript.tracking.skip_detector import SkipDetector, TrackingIndex


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BlockStatus:
    is_clicked: bool
    is_skipped: bool


class ReadingSession:
    """Interaction state for one loaded script.

    The interacted set only grows. Each event replaces it with a new frozenset so
    readers never observe a partially updated set; writers are serialized.
    """

    def __init__(self, blocks: Sequence[Block], config: ScriptConfig | None = None) -> None:
        self.config = config or ScriptConfig()
        self.blocks: Tuple[Block, ...] = tuple(blocks)
        self.index = TrackingIndex.from_blocks(self.blocks, self.config.vocabulary.trackable_tags)
        self.detector = SkipDetector(self.index)
        self._interacted: FrozenSet[str] = frozenset()
        self._lock = threading.Lock()

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[ScriptRow | Tuple[str, str]],
        config: ScriptConfig | None = None,
    ) -> "ReadingSession":
        builder = ScriptTreeBuilder(config)
        return cls(builder.build(rows), builder.config)

    @property
    def interacted(self) -> FrozenSet[str]:
        return self._interacted

    @property
    def sequence(self) -> Tuple[str, ...]:
        return self.index.sequence

    def record(self, block_id: str) -> SkipReport:
        return self.record_many([block_id])

    def record_many(self, block_ids: Iterable[str]) -> SkipReport:
        incoming: List[str] = list(block_ids)
        unknown = [block_id for block_id in incoming if block_id not in self.index.nodes]
        if unknown:
            logger.debug("recording interactions for unknown blocks: %s", unknown)

        with self._lock:
            self._interacted = current = self._interacted.union(incoming)
        return self.detector.detect(current)

    def report(self) -> SkipReport:
        return self.detector.detect(self._interacted)

    def status(self, block_id: str) -> BlockStatus:
        return BlockStatus(
            is_clicked=block_id in self._interacted,
            is_skipped=self.report().is_skipped(block_id),
        )


__all__ = ["BlockStatus", "ReadingSession"]
