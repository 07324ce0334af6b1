"""Main CLI entry-point."""
from __future__ import annotations

import asyncio
import shutil
import sys

from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings

_BRIGHT_GREEN = "\033[1;92m"
_CYAN = "\033[96m"
_YELLOW = "\033[93m"
_RESET = "\033[0m"
_BOLD = "\033[1m"


def _g(s: str) -> str:
    return f"{_BRIGHT_GREEN}{s}{_RESET}"


def _c(s: str) -> str:
    return f"{_CYAN}{s}{_RESET}"


def _print_header() -> None:
    cols = shutil.get_terminal_size(fallback=(100, 20)).columns
    div = "═" * min(cols, 64)
    print(_g(div))
    print(_g("  PRACTICE TRACKER"))
    print(_c("  Team practice detection, champion pools and leaderboards"))
    print(_g(div))


def _menu() -> None:
    _print_header()
    # Imported here so logging is configured before services create loggers
    from application.services import PracticeService
    from presentation.cli import ScanCommand, OverviewCommand, StatsCommand, RosterCommand

    service = PracticeService.from_settings()
    actions = {
        "1": ("Scan for practice matches", lambda: asyncio.run(ScanCommand(service).run())),
        "2": ("Overview", lambda: OverviewCommand(service).run()),
        "3": ("Player stats & match history", lambda: StatsCommand(service).run()),
        "4": ("Roster & settings", lambda: RosterCommand(service).run()),
    }
    exit_key = str(len(actions) + 1)
    try:
        while True:
            width = min(shutil.get_terminal_size(fallback=(96, 20)).columns, 48)
            print(f"\n{_g('═' * width)}\n  {_BOLD}MAIN MENU{_RESET}\n{_g('═' * width)}")
            for key, (label, _) in actions.items():
                print(f"  {_c(key)}  {label}")
            print(f"  {_c(exit_key)}  Exit")
            print(_g("─" * width))

            choice = input("  Choose: ").strip()
            if choice == exit_key:
                print(f"\n  {_g('Goodbye!')}\n")
                return
            if choice not in actions:
                print(f"  {_YELLOW}Invalid option.{_RESET}")
                continue
            actions[choice][1]()
    finally:
        service.close()


def main(argv: list[str]) -> int:
    bootstrap_logging(
        service="practice",
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="practice.jsonl",
    )
    try:
        _menu()
        return 0
    finally:
        shutdown_logging()


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
