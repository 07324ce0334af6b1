"""Application use cases."""
from .scan_practice_matches import ScanPracticeMatchesUseCase

__all__ = ['ScanPracticeMatchesUseCase']
