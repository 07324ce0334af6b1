# tests/helpers.py

import asyncio
from typing import Dict, List, Optional

from application.services import PracticeService
from domain.entities import MatchDetail, ParticipantSnapshot
from domain.interfaces import IMatchSource

BASE_CREATION_MS = 1_769_000_000_000


def line(handle: str, champion: str, *, team: int = 100, win: bool = True,
         kills: int = 5, deaths: int = 2, assists: int = 7, cs: int = 180,
         damage: int = 20_000, damage_taken: int = 15_000,
         name: Optional[str] = None) -> ParticipantSnapshot:
    """One participant line for a fake match."""
    return ParticipantSnapshot(
        account_handle=handle,
        display_name=name or handle,
        champion=champion,
        team_id=team,
        win=win,
        kills=kills,
        deaths=deaths,
        assists=assists,
        cs=cs,
        damage=damage,
        damage_taken=damage_taken,
    )


def fillers(count: int, team: int = 200) -> List[ParticipantSnapshot]:
    """Non-roster participants to pad a match out."""
    return [line(f"stranger-{i}", "Garen", team=team, win=False) for i in range(count)]


class FakeMatchSource(IMatchSource):
    """In-memory match source with per-call error injection."""

    def __init__(self) -> None:
        self.histories: Dict[str, List[str]] = {}
        self.matches: Dict[str, MatchDetail] = {}
        self.list_errors: Dict[str, Exception] = {}
        self.detail_errors: Dict[str, Exception] = {}
        self.list_calls: List[tuple] = []
        self.detail_calls: List[tuple] = []

    async def list_recent_match_ids(self, account_handle, region, count=20, start_time=None):
        self.list_calls.append((account_handle, region))
        if account_handle in self.list_errors:
            raise self.list_errors[account_handle]
        return list(self.histories.get(account_handle, []))[:count]

    async def fetch_match_detail(self, match_id, region):
        self.detail_calls.append((match_id, region))
        if match_id in self.detail_errors:
            raise self.detail_errors[match_id]
        return self.matches[match_id]

    def add_match(self, match_id: str, participants: List[ParticipantSnapshot],
                  *, offset: int = 0, duration: int = 1800, mode: str = "CLASSIC",
                  listed_by: Optional[List[str]] = None) -> MatchDetail:
        """Register a match and put it at the head of each participant's history."""
        detail = MatchDetail(
            match_id=match_id,
            creation_time=BASE_CREATION_MS + offset * 60_000,
            duration_seconds=duration,
            mode=mode,
            participants=tuple(participants),
        )
        self.matches[match_id] = detail
        handles = listed_by if listed_by is not None else [p.account_handle for p in participants]
        for handle in handles:
            self.histories.setdefault(handle, []).insert(0, match_id)
        return detail

    def detail_calls_for(self, match_id: str) -> int:
        return sum(1 for mid, _ in self.detail_calls if mid == match_id)


def run_scan(service: PracticeService):
    return asyncio.run(service.run_scan())
