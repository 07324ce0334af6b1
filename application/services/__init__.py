"""Application services root exports."""
from .match_classifier import classify_practice_match, MIN_ROSTER_PARTICIPANTS
from .pool_promoter import PoolPromoter
from .overview_projector import OverviewProjector
from .practice_service import PracticeService

__all__ = [
    "classify_practice_match",
    "MIN_ROSTER_PARTICIPANTS",
    "PoolPromoter",
    "OverviewProjector",
    "PracticeService",
]
