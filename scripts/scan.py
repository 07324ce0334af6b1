"""One-shot practice scan for cron.

Exit codes: 0 scan finished, 1 scan aborted (bad API key), 2 scan not
started (configuration problem or another scan running).
"""
from __future__ import annotations

import argparse
import asyncio

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings
from presentation.cli import ScanCommand


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Scan roster match history for practice matches.")
    parser.add_argument("--json", action="store_true", help="print the scan report as JSON")
    args = parser.parse_args(argv)

    bootstrap_logging(service="practice-scan", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="scan.jsonl")
    try:
        return asyncio.run(ScanCommand().run(as_json=args.json))
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
