"""SQLite persistence for the practice engine."""
from .database import Database
from .practice_match_repository import PracticeMatchRepository
from .champion_stats_repository import ChampionStatsRepository
from .roster_repository import RosterRepository
from .settings_repository import ScanSettingsRepository

__all__ = [
    'Database',
    'PracticeMatchRepository',
    'ChampionStatsRepository',
    'RosterRepository',
    'ScanSettingsRepository',
]
