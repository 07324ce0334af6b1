"""Domain layer - Business entities, enums, and interfaces."""
from .entities import (
    ParticipantSnapshot, MatchDetail, PracticeMatch, Player,
    ChampionAggregate, ScanSettings, ScanReport, Overview,
)
from .enums import Region, Role, FetchErrorKind, StatMetric
from .interfaces import (
    IMatchSource,
    IPracticeMatchRepository,
    IChampionStatsRepository,
    IRosterRepository,
    IScanSettingsRepository,
)

__all__ = [
    # Entities
    'ParticipantSnapshot',
    'MatchDetail',
    'PracticeMatch',
    'Player',
    'ChampionAggregate',
    'ScanSettings',
    'ScanReport',
    'Overview',
    # Enums
    'Region',
    'Role',
    'FetchErrorKind',
    'StatMetric',
    # Interfaces
    'IMatchSource',
    'IPracticeMatchRepository',
    'IChampionStatsRepository',
    'IRosterRepository',
    'IScanSettingsRepository',
]
