"""Presentation CLI exports."""
from .scan_command import ScanCommand, EXIT_OK, EXIT_ABORTED, EXIT_NOT_STARTED
from .overview_command import OverviewCommand
from .stats_command import StatsCommand
from .roster_command import RosterCommand

__all__ = [
    "ScanCommand",
    "OverviewCommand",
    "StatsCommand",
    "RosterCommand",
    "EXIT_OK",
    "EXIT_ABORTED",
    "EXIT_NOT_STARTED",
]
