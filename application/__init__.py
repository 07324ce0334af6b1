"""Application layer - Services and use cases."""
from .services import PracticeService, PoolPromoter, OverviewProjector
from .use_cases import ScanPracticeMatchesUseCase

__all__ = [
    'PracticeService',
    'PoolPromoter',
    'OverviewProjector',
    'ScanPracticeMatchesUseCase',
]
