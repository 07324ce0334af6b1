"""Use case for scanning roster match history for practice matches."""
from __future__ import annotations

import asyncio
import dataclasses
import time
import uuid
from typing import Awaitable, Callable, Dict, List, Optional

from config import settings
from core.clock import utc_now_iso
from core.logging.context import context as log_context
from core.logging.logger import get_logger
from domain.entities import MatchDetail, Player, ScanReport
from domain.enums import Region
from domain.exceptions import (
    AuthFailure,
    InsufficientRosterError,
    MatchFetchFailure,
    MatchSourceError,
    PersistenceConflict,
    PlayerFetchFailure,
    ScanInProgressError,
)
from domain.interfaces import (
    IChampionStatsRepository,
    IMatchSource,
    IPracticeMatchRepository,
    IRosterRepository,
    IScanSettingsRepository,
    ITransactionManager,
)
from application.services.match_classifier import MIN_ROSTER_PARTICIPANTS, classify_practice_match
from application.services.pool_promoter import PoolPromoter

Sleeper = Callable[[float], Awaitable[None]]


class ScanPracticeMatchesUseCase:
    """
    Runs one practice scan cycle.

    Flow
    ─────────────────────────────────────────────────────────────────
    1. list recent match ids for every linked roster player
    2. union them, drop ids already stored (one snapshot per scan)
    3. fetch each remaining id in ascending order and classify it
    4. store qualifying matches and add each roster participant's line
       to their (player, champion) counters, in one transaction
    5. promote champion pools for every player touched
    6. stamp last_scan_at and return the report
    ─────────────────────────────────────────────────────────────────
    A match is aggregated only if its insert succeeds, so the unique
    match id is what prevents double counting. Failed players and
    matches are skipped and retried naturally on the next scan while
    they stay inside the recency window.
    """

    def __init__(
        self,
        match_source: IMatchSource,
        transactions: ITransactionManager,
        match_repo: IPracticeMatchRepository,
        stats_repo: IChampionStatsRepository,
        roster_repo: IRosterRepository,
        settings_repo: IScanSettingsRepository,
        promoter: Optional[PoolPromoter] = None,
        *,
        match_window: Optional[int] = None,
        start_time: Optional[int] = None,
        list_delay_s: Optional[float] = None,
        detail_delay_s: Optional[float] = None,
        lock_stale_s: Optional[float] = None,
        sleep: Sleeper = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.match_source   = match_source
        self.transactions   = transactions
        self.match_repo     = match_repo
        self.stats_repo     = stats_repo
        self.roster_repo    = roster_repo
        self.settings_repo  = settings_repo
        self.promoter       = promoter or PoolPromoter(roster_repo, stats_repo)

        self.match_window   = match_window if match_window is not None else settings.SCAN_MATCH_WINDOW
        self.start_time     = start_time
        self.list_delay_s   = list_delay_s if list_delay_s is not None else settings.SCAN_LIST_DELAY_S
        self.detail_delay_s = detail_delay_s if detail_delay_s is not None else settings.SCAN_DETAIL_DELAY_S
        self.lock_stale_s   = lock_stale_s if lock_stale_s is not None else settings.SCAN_LOCK_STALE_S

        self._sleep = sleep
        self._clock = clock
        self.log = get_logger(__name__, service="practice-scan")

    async def execute(self) -> ScanReport:
        """Run a scan.

        Raises:
            InsufficientRosterError: fewer than two linked roster players
            ScanInProgressError: another scan holds the lease
        """
        players = self.roster_repo.list_linked_players()
        if len(players) < MIN_ROSTER_PARTICIPANTS:
            raise InsufficientRosterError(
                "Need at least 2 players with linked Riot IDs to detect practice matches"
            )

        lease = self._clock()
        if not self.settings_repo.try_acquire_scan_lock(lease, self.lock_stale_s):
            raise ScanInProgressError("A practice scan is already running")

        try:
            with log_context(scan_id=uuid.uuid4().hex[:8]):
                return await self._run(players)
        finally:
            if not self.settings_repo.release_scan_lock(lease):
                self.log.warning(lambda: f"scan-lease-lost acquired_at={lease}")

    async def _run(self, players: List[Player]) -> ScanReport:
        report = ScanReport(started_at=utc_now_iso())
        threshold = self.settings_repo.get().auto_pool_threshold
        players_by_handle = {p.account_handle: p for p in players}
        processed = self.match_repo.get_processed_match_ids()
        touched: set[int] = set()

        self.log.info(lambda: f"scan-start players={len(players)} known_matches={len(processed)}")

        try:
            regions = await self._discover(players, report)
            queue = sorted(mid for mid in regions if mid not in processed)
            report.candidates = len(queue)
            self.log.info(lambda: f"scan-candidates discovered={len(regions)} new={len(queue)}")

            for match_id in queue:
                try:
                    detail = await self._fetch_detail(match_id, regions[match_id])
                except MatchFetchFailure as e:
                    report.match_failures += 1
                    report.errors.append(str(e))
                    self.log.warning(lambda: f"match-fetch-failed {match_id} kind={e.cause.kind.value}")
                else:
                    report.matches_scanned += 1
                    self._record(match_id, detail, players_by_handle, report, touched)
                await self._pause(self.detail_delay_s)

        except AuthFailure as e:
            report.aborted = True
            report.abort_reason = f"Riot API key expired or invalid ({e})"
            self.log.error(lambda: f"scan-aborted auth-failure status={e.status_code}")

        report.players_updated = len(touched)
        report.pools_updated = self._promote(touched, threshold)

        report.finished_at = utc_now_iso()
        if not report.aborted:
            self.settings_repo.mark_scanned(report.finished_at)

        log = self.log.warning if report.aborted or report.degraded else self.log.success
        log(
            lambda: (
                f"scan-complete scanned={report.matches_scanned} found={report.practice_matches_found} "
                f"players={report.players_updated} pools={report.pools_updated} "
                f"player_failures={report.player_failures} match_failures={report.match_failures}"
            )
        )
        return report

    # ------------------------------------------------------------------ #
    # Discovery
    # ------------------------------------------------------------------ #

    async def _discover(self, players: List[Player], report: ScanReport) -> Dict[str, Region]:
        """Map every listed match id to the region of the first player who surfaced it."""
        regions: Dict[str, Region] = {}
        for player in players:
            try:
                match_ids = await self._list_for_player(player)
            except PlayerFetchFailure as e:
                report.player_failures += 1
                report.errors.append(str(e))
                self.log.warning(lambda: f"player-fetch-failed {player.display_name} kind={e.cause.kind.value}")
                match_ids = []
            for mid in match_ids:
                regions.setdefault(mid, player.region)
            await self._pause(self.list_delay_s)
        return regions

    async def _list_for_player(self, player: Player) -> List[str]:
        try:
            return await self.match_source.list_recent_match_ids(
                player.account_handle,
                player.region,
                count=self.match_window,
                start_time=self.start_time,
            )
        except AuthFailure:
            raise
        except MatchSourceError as e:
            raise PlayerFetchFailure(player.display_name, e) from e

    # ------------------------------------------------------------------ #
    # Classification & aggregation
    # ------------------------------------------------------------------ #

    async def _fetch_detail(self, match_id: str, region: Region) -> MatchDetail:
        try:
            detail = await self.match_source.fetch_match_detail(match_id, region)
        except AuthFailure:
            raise
        except MatchSourceError as e:
            raise MatchFetchFailure(match_id, e) from e
        if detail.match_id != match_id:
            self.log.warning(lambda: f"match-id-mismatch listed={match_id} fetched={detail.match_id}")
            detail = dataclasses.replace(detail, match_id=match_id)
        return detail

    def _record(
        self,
        match_id: str,
        detail: MatchDetail,
        players_by_handle: Dict[str, Player],
        report: ScanReport,
        touched: set[int],
    ) -> None:
        practice = classify_practice_match(detail, players_by_handle)
        if practice is None:
            self.log.debug(lambda: f"match-skipped {match_id} not practice")
            return

        updated_at = utc_now_iso()
        try:
            with self.transactions.transaction():
                self.match_repo.insert(practice)
                for participant in detail.participants_in(set(players_by_handle)):
                    player = players_by_handle[participant.account_handle]
                    self.stats_repo.record_appearance(player.id, participant, updated_at)
        except PersistenceConflict:
            report.duplicates += 1
            self.log.info(lambda: f"match-already-stored {match_id}")
            return

        report.practice_matches_found += 1
        touched.update(practice.roster_player_ids)
        self.log.info(lambda: f"practice-match {match_id} roster_players={practice.roster_player_count}")

    def _promote(self, player_ids: set[int], threshold: int) -> int:
        return sum(1 for pid in sorted(player_ids) if self.promoter.promote(pid, threshold))

    async def _pause(self, delay_s: float) -> None:
        if delay_s > 0:
            await self._sleep(delay_s)
