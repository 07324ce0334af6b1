"""Domain interfaces."""
from .repository import (
    IMatchSource,
    IPracticeMatchRepository,
    IChampionStatsRepository,
    IRosterRepository,
    IScanSettingsRepository,
    ITransactionManager,
)

__all__ = [
    'IMatchSource',
    'IPracticeMatchRepository',
    'IChampionStatsRepository',
    'IRosterRepository',
    'IScanSettingsRepository',
    'ITransactionManager',
]
