"""Scan settings and scan report entities."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ScanSettings:
    """The single settings record driving scans and pool promotion."""

    auto_pool_threshold: int = 3
    last_scan_at: Optional[str] = None  # ISO-8601 UTC
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'auto_pool_threshold': self.auto_pool_threshold,
            'last_scan_at': self.last_scan_at,
            'updated_at': self.updated_at,
        }


@dataclass
class ScanReport:
    """Outcome of one scan cycle.

    ``matches_scanned`` counts candidates that were fetched and evaluated;
    candidates whose fetch failed are counted in ``match_failures`` and
    are picked up again by the next scan.
    """

    matches_scanned: int = 0
    practice_matches_found: int = 0
    players_updated: int = 0
    pools_updated: int = 0

    candidates: int = 0
    player_failures: int = 0
    match_failures: int = 0
    duplicates: int = 0

    aborted: bool = False
    abort_reason: Optional[str] = None

    started_at: Optional[str] = None
    finished_at: Optional[str] = None

    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.aborted

    @property
    def degraded(self) -> bool:
        return bool(self.player_failures or self.match_failures)

    def to_dict(self) -> dict:
        return {
            'success': self.success,
            'matchesScanned': self.matches_scanned,
            'practiceMatchesFound': self.practice_matches_found,
            'playersUpdated': self.players_updated,
            'poolsUpdated': self.pools_updated,
            'candidates': self.candidates,
            'playerFailures': self.player_failures,
            'matchFailures': self.match_failures,
            'duplicates': self.duplicates,
            'aborted': self.aborted,
            'abortReason': self.abort_reason,
            'startedAt': self.started_at,
            'finishedAt': self.finished_at,
        }
