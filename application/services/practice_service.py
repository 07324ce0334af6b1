"""Practice service - the single entry point the CLI and scripts talk to."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from config import settings
from core.logging.logger import get_logger
from domain.entities import (
    MatchPage,
    Overview,
    Player,
    PlayerPracticeStats,
    PracticeMatchView,
    ScanReport,
    ScanSettings,
)
from domain.enums import Role
from domain.exceptions import PlayerNotFoundError
from domain.interfaces import IMatchSource
from infrastructure import (
    ChampionStatsRepository,
    Database,
    PracticeMatchRepository,
    RiotAPIClient,
    RiotMatchSource,
    RosterRepository,
    ScanSettingsRepository,
)
from application.services.overview_projector import OverviewProjector
from application.services.pool_promoter import PoolPromoter
from application.use_cases.scan_practice_matches import ScanPracticeMatchesUseCase


class PracticeService:
    """
    Wires the practice store, the roster and the match source together.

    Reads never touch the network. ``run_scan`` opens a Riot API client for
    the duration of the scan unless a match source was injected.
    """

    def __init__(
        self,
        db: Database,
        match_source: Optional[IMatchSource] = None,
        *,
        scan_options: Optional[dict] = None,
    ):
        self.db            = db
        self.match_source  = match_source
        self.scan_options  = dict(scan_options or {})

        self.match_repo    = PracticeMatchRepository(db)
        self.stats_repo    = ChampionStatsRepository(db)
        self.roster_repo   = RosterRepository(db)
        self.settings_repo = ScanSettingsRepository(db)
        self.promoter      = PoolPromoter(self.roster_repo, self.stats_repo)
        self.projector     = OverviewProjector(self.stats_repo, self.match_repo, self.settings_repo)

        self.log = get_logger(__name__, service="practice")

    @classmethod
    def from_settings(cls, db_path: Optional[Union[Path, str]] = None) -> "PracticeService":
        settings.create_directories()
        db = Database(
            db_path or settings.DB_PATH,
            default_auto_pool_threshold=settings.DEFAULT_AUTO_POOL_THRESHOLD,
        )
        return cls(db)

    def close(self) -> None:
        self.db.close()

    # ------------------------------------------------------------------ #
    # Scan
    # ------------------------------------------------------------------ #

    async def run_scan(self) -> ScanReport:
        """Run one scan cycle and return its report.

        Raises ConfigurationError when no API key is configured (only when
        the live Riot source is used), InsufficientRosterError and
        ScanInProgressError.
        """
        if self.match_source is not None:
            return await self._scan_with(self.match_source)

        settings.validate()
        async with RiotAPIClient(settings.RIOT_API_KEY) as client:
            return await self._scan_with(RiotMatchSource(client))

    async def _scan_with(self, match_source: IMatchSource) -> ScanReport:
        options = {"start_time": settings.scan_start_timestamp()}
        options.update(self.scan_options)
        use_case = ScanPracticeMatchesUseCase(
            match_source,
            self.db,
            self.match_repo,
            self.stats_repo,
            self.roster_repo,
            self.settings_repo,
            self.promoter,
            **options,
        )
        return await use_case.execute()

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def list_practice_matches(
        self, limit: int = 20, offset: int = 0, player_id: Optional[int] = None
    ) -> MatchPage:
        limit = max(0, limit)
        offset = max(0, offset)
        matches = self.match_repo.list_matches(limit=limit, offset=offset, player_id=player_id)
        roster = {p.id: p for p in self.roster_repo.list_players()}
        return MatchPage(
            matches=[
                PracticeMatchView(
                    match=m,
                    roster_participants=[
                        self._roster_entry(roster[pid]) for pid in m.roster_player_ids if pid in roster
                    ],
                )
                for m in matches
            ],
            total=self.match_repo.count(player_id=player_id),
            limit=limit,
            offset=offset,
        )

    @staticmethod
    def _roster_entry(player: Player) -> dict:
        return {
            'playerId': player.id,
            'playerName': player.display_name,
            'role': player.role,
            'profileIconId': player.profile_icon_id,
        }

    def get_aggregated_stats(
        self, player_id: Optional[int] = None
    ) -> Union[PlayerPracticeStats, List[PlayerPracticeStats]]:
        """One player's practice record, or every roster player's ordered by role."""
        if player_id is not None:
            player = self.roster_repo.get_player(player_id)
            if player is None:
                raise PlayerNotFoundError(f"Player {player_id} not found")
            return self._player_stats(player)

        players = sorted(self.roster_repo.list_players(), key=lambda p: (Role.roster_sort_key(p.role), p.id))
        return [self._player_stats(p) for p in players]

    def _player_stats(self, player: Player) -> PlayerPracticeStats:
        return PlayerPracticeStats(
            player_id=player.id,
            player_name=player.display_name,
            role=player.role,
            champion_pool=list(player.champion_pool),
            champions=self.stats_repo.list_for_player(player.id),
        )

    def get_overview(self) -> Overview:
        return self.projector.overview(
            top_n=settings.OVERVIEW_TOP_N,
            min_games=settings.OVERVIEW_MIN_GAMES,
        )

    # ------------------------------------------------------------------ #
    # Settings & roster
    # ------------------------------------------------------------------ #

    def get_settings(self) -> ScanSettings:
        return self.settings_repo.get()

    def set_auto_pool_threshold(self, threshold: int) -> ScanSettings:
        """Store the threshold clamped to the allowed range.

        The new value applies from the next scan; existing pools are left alone.
        """
        clamped = min(settings.MAX_AUTO_POOL_THRESHOLD, max(settings.MIN_AUTO_POOL_THRESHOLD, int(threshold)))
        if clamped != threshold:
            self.log.info(lambda: f"threshold-clamped requested={threshold} stored={clamped}")
        return self.settings_repo.set_auto_pool_threshold(clamped)

    def list_players(self) -> List[Player]:
        return self.roster_repo.list_players()

    def add_player(
        self,
        display_name: str,
        *,
        account_handle: Optional[str] = None,
        role: Optional[str] = None,
        region_code: Optional[str] = None,
    ) -> Player:
        player = self.roster_repo.add_player(
            display_name, account_handle=account_handle, role=role, region_code=region_code
        )
        self.log.info(lambda: f"player-added id={player.id} name={player.display_name}")
        return player

    def link_account(self, player_id: int, account_handle: str, region_code: Optional[str] = None) -> Player:
        player = self.roster_repo.link_account(player_id, account_handle, region_code)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found")
        return player
