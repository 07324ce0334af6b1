"""Domain entities."""
from .participant import ParticipantSnapshot
from .match import MatchDetail, PracticeMatch
from .player import Player
from .champion_aggregate import ChampionAggregate
from .scan import ScanSettings, ScanReport
from .overview import (
    LeaderboardEntry,
    BestStatEntry,
    Overview,
    PlayerPracticeStats,
    MatchPage,
    PracticeMatchView,
)

__all__ = [
    'ParticipantSnapshot',
    'MatchDetail',
    'PracticeMatch',
    'Player',
    'ChampionAggregate',
    'ScanSettings',
    'ScanReport',
    'LeaderboardEntry',
    'BestStatEntry',
    'Overview',
    'PlayerPracticeStats',
    'MatchPage',
    'PracticeMatchView',
]
