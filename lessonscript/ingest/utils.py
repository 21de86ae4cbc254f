from __future__ import annotations

import itertools


class BlockIdAllocator:
    """Hand out deterministic, collision-free block ids for one parse."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self.namespace}-{next(self._counter)}"


class NamespaceSequence:
    """Monotonic parse namespaces (p1, p2, ...) so ids are never reused across re-parses."""

    def __init__(self, prefix: str = "p") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def allocator(self) -> BlockIdAllocator:
        return BlockIdAllocator(f"{self.prefix}{next(self._counter)}")


__all__ = ["BlockIdAllocator", "NamespaceSequence"]
