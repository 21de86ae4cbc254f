"""Ingestion utilities for turning flat script rows into block trees."""

from .rows import load_rows, parse_csv_rows, rows_from_records
from .tree_builder import ScriptTreeBuilder, build_blocks
from .utils import BlockIdAllocator, NamespaceSequence

__all__ = [
    "BlockIdAllocator",
    "NamespaceSequence",
    "ScriptTreeBuilder",
    "build_blocks",
    "load_rows",
    "parse_csv_rows",
    "rows_from_records",
]
