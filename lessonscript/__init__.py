"""Build nested trees from tagged script rows and flag skipped leaves."""

from .ingest.tree_builder import ScriptTreeBuilder, build_blocks
from .models.block import Block, BlockKind, ScriptTag, SkipReport
from .models.row import ScriptRow
from .tracking.session import ReadingSession
from .tracking.skip_detector import SkipDetector, TrackingIndex, detect

__all__ = [
    "Block",
    "BlockKind",
    "ReadingSession",
    "ScriptRow",
    "ScriptTag",
    "ScriptTreeBuilder",
    "SkipDetector",
    "SkipReport",
    "TrackingIndex",
    "build_blocks",
    "detect",
]
