from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Iterable, List

from lessonscript.config_loader import read_structured_file
from lessonscript.models.row import ScriptRow


def parse_csv_rows(text: str) -> List[ScriptRow]:
    """Parse a two-column ``tag,content`` CSV export into normalized rows.

    Extra columns are ignored, a missing content column becomes an empty string
    and rows whose tag is blank are dropped.
    """

    rows: List[ScriptRow] = []
    for record in csv.reader(io.StringIO(text)):
        if not record:
            continue
        row = ScriptRow.normalized(record[0], record[1] if len(record) > 1 else "")
        if row.tag:
            rows.append(row)
    return rows


def rows_from_records(records: Iterable[Any]) -> List[ScriptRow]:
    """Normalize ``[tag, content]`` pairs or ``{"tag", "content"}`` mappings."""

    rows: List[ScriptRow] = []
    for idx, record in enumerate(records):
        if isinstance(record, dict):
            tag, content = record.get("tag"), record.get("content")
        elif isinstance(record, (list, tuple)) and 1 <= len(record) <= 2:
            tag = record[0]
            content = record[1] if len(record) > 1 else ""
        else:
            raise ValueError(f"Row {idx} must be a [tag, content] pair or a mapping, got {record!r}")
        row = ScriptRow.normalized(
            None if tag is None else str(tag),
            None if content is None else str(content),
        )
        if row.tag:
            rows.append(row)
    return rows


def load_rows(path: Path) -> List[ScriptRow]:
    """Load rows from a ``.csv`` export or a YAML/TOML/JSON row list."""

    if not path.exists():
        raise FileNotFoundError(f"Script file not found: {path}")

    if path.suffix.lower() == ".csv":
        return parse_csv_rows(path.read_text(encoding="utf-8-sig"))

    data = read_structured_file(path)
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("rows", [])
    if not isinstance(data, list):
        raise ValueError(f"Script file {path} must contain a list of rows")
    return rows_from_records(data)


__all__ = ["load_rows", "parse_csv_rows", "rows_from_records"]
