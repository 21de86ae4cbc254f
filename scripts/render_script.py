from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from lessonscript.config_loader import load_script_config
from lessonscript.ingest import load_rows
from lessonscript.render import render_outline
from lessonscript.settings import get_settings
from lessonscript.tracking import ReadingSession


def parse_args() -> argparse.Namespace:
    if Path(".env").exists():
        load_dotenv(".env", override=False)
    parser = argparse.ArgumentParser(description="Build a script tree from tagged rows and report skipped lines.")
    parser.add_argument("rows", type=Path, help="Row file (.csv with tag,content columns, or .yaml/.json list)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional tag vocabulary config (YAML/TOML/JSON). Defaults to $LESSONSCRIPT_CONFIG.",
    )
    parser.add_argument(
        "--interacted",
        nargs="*",
        default=[],
        metavar="BLOCK_ID",
        help="Block ids the reader has interacted with, in any order.",
    )
    parser.add_argument("--json", action="store_true", help="Emit blocks, sequence and skipped ids as JSON.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = load_script_config(args.config or settings.config_path)
    session = ReadingSession.from_rows(load_rows(args.rows), config)
    report = session.record_many(args.interacted)

    if args.json:
        payload = {
            "blocks": [block.to_dict() for block in session.blocks],
            **report.to_dict(),
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    print(render_outline(session.blocks, report, session.interacted))
    print(
        "Summary",
        {
            "trackable": len(report.sequence),
            "interacted": len(session.interacted),
            "skipped": len(report.skipped),
        },
    )


if __name__ == "__main__":
    main()
