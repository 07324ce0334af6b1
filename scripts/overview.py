from __future__ import annotations

import argparse

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings
from presentation.cli import OverviewCommand


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the practice overview.")
    parser.add_argument("--json", action="store_true", help="print the overview as JSON")
    args = parser.parse_args(argv)

    bootstrap_logging(service="practice-overview", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="overview.jsonl")
    try:
        OverviewCommand().run(as_json=args.json)
        return 0
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
