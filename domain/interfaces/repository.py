"""Repository and match-source interfaces for the practice engine."""
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, List

from ..entities import (
    ChampionAggregate,
    MatchDetail,
    ParticipantSnapshot,
    Player,
    PracticeMatch,
    ScanSettings,
)
from ..enums import Region


class IMatchSource(ABC):
    """Read-only access to the external match-history provider.

    Every call is a single round-trip; failures raise a
    ``MatchSourceError`` subclass and are never retried here.
    """

    @abstractmethod
    async def list_recent_match_ids(
        self,
        account_handle: str,
        region: Region,
        count: int = 20,
        start_time: Optional[int] = None,
    ) -> List[str]:
        """Most-recent-first match ids for an account."""
        pass

    @abstractmethod
    async def fetch_match_detail(self, match_id: str, region: Region) -> MatchDetail:
        """Full match record."""
        pass


class ITransactionManager(ABC):
    """Groups repository writes into one atomic unit."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        pass


class IPracticeMatchRepository(ABC):
    """Append-only store of practice matches keyed by match id."""

    @abstractmethod
    def get_processed_match_ids(self) -> set[str]:
        pass

    @abstractmethod
    def insert(self, match: PracticeMatch) -> None:
        """Insert if absent; raises ``PersistenceConflict`` on a duplicate id."""
        pass

    @abstractmethod
    def list_matches(
        self, limit: int = 20, offset: int = 0, player_id: Optional[int] = None
    ) -> List[PracticeMatch]:
        """Newest first, optionally only matches a roster player appears in."""
        pass

    @abstractmethod
    def count(self, player_id: Optional[int] = None) -> int:
        pass


class IChampionStatsRepository(ABC):
    """Per-(player, champion) counters, upserted by addition."""

    @abstractmethod
    def record_appearance(
        self, player_id: int, snapshot: ParticipantSnapshot, updated_at: str
    ) -> None:
        pass

    @abstractmethod
    def list_for_player(self, player_id: int, min_games: int = 0) -> List[ChampionAggregate]:
        """Rows for one player, most games first."""
        pass

    @abstractmethod
    def list_all(self, min_games: int = 0) -> List[ChampionAggregate]:
        """All rows with roster display names joined in."""
        pass


class IRosterRepository(ABC):
    """Roster access. The engine only reads handles and writes pools."""

    @abstractmethod
    def list_players(self) -> List[Player]:
        pass

    @abstractmethod
    def list_linked_players(self) -> List[Player]:
        pass

    @abstractmethod
    def get_player(self, player_id: int) -> Optional[Player]:
        pass

    @abstractmethod
    def update_champion_pool(self, player_id: int, pool: List[str]) -> None:
        pass


class IScanSettingsRepository(ABC):
    """The single settings row plus the scan lease."""

    @abstractmethod
    def get(self) -> ScanSettings:
        pass

    @abstractmethod
    def set_auto_pool_threshold(self, threshold: int) -> ScanSettings:
        pass

    @abstractmethod
    def mark_scanned(self, scanned_at: str) -> None:
        pass

    @abstractmethod
    def try_acquire_scan_lock(self, now: float, stale_after_s: float) -> bool:
        pass

    @abstractmethod
    def release_scan_lock(self, acquired_at: float) -> bool:
        pass
