"""Infrastructure layer - API client, match source and SQLite persistence."""
from .api import RiotAPIClient, RateLimiter
from .repositories import RiotMatchSource
from .persistence import (
    Database,
    PracticeMatchRepository,
    ChampionStatsRepository,
    RosterRepository,
    ScanSettingsRepository,
)

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'RiotMatchSource',
    'Database',
    'PracticeMatchRepository',
    'ChampionStatsRepository',
    'RosterRepository',
    'ScanSettingsRepository',
]
