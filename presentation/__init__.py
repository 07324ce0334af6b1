"""Presentation layer - User interfaces."""
from .cli import ScanCommand, OverviewCommand, StatsCommand, RosterCommand

__all__ = [
    "ScanCommand",
    "OverviewCommand",
    "StatsCommand",
    "RosterCommand",
]
