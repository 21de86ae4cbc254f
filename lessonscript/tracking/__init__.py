"""Skip tracking over built script trees."""

from .session import BlockStatus, ReadingSession
from .skip_detector import SkipDetector, TrackingIndex, detect

__all__ = ["BlockStatus", "ReadingSession", "SkipDetector", "TrackingIndex", "detect"]
