from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from application.services import PracticeService
from core.logging.logger import get_logger
from domain.entities import MatchPage, PlayerPracticeStats
from domain.exceptions import PlayerNotFoundError


class StatsCommand:
    """Per-player practice stats and practice match history."""

    def __init__(self, service: Optional[PracticeService] = None) -> None:
        self._service = service
        self.log = get_logger(__name__, service="stats-cli")

    @property
    def service(self) -> PracticeService:
        if self._service is None:
            self._service = PracticeService.from_settings()
        return self._service

    def run(self) -> None:
        while True:
            print("\n=== Practice Stats ===", flush=True)
            print("1) All players", flush=True)
            print("2) One player", flush=True)
            print("3) Match history", flush=True)
            print("4) Back", flush=True)
            choice = input("Choose: ").strip()
            if choice == "1":
                self.show_all()
            elif choice == "2":
                self.show_player(self._ask_int("Player id: "))
            elif choice == "3":
                self.show_matches(player_id=self._ask_int("Player id (blank for all): ", allow_blank=True))
            elif choice == "4":
                return
            else:
                print("Invalid option.", flush=True)

    @staticmethod
    def _ask_int(prompt: str, allow_blank: bool = False) -> Optional[int]:
        while True:
            raw = input(prompt).strip()
            if not raw and allow_blank:
                return None
            try:
                return int(raw)
            except ValueError:
                print("Please enter a number.", flush=True)

    def show_all(self) -> None:
        for stats in self.service.get_aggregated_stats():
            self._print_player(stats)

    def show_player(self, player_id: Optional[int]) -> None:
        if player_id is None:
            return
        try:
            stats = self.service.get_aggregated_stats(player_id)
        except PlayerNotFoundError as e:
            print(str(e), flush=True)
            return
        self._print_player(stats)

    @staticmethod
    def _print_player(stats: PlayerPracticeStats) -> None:
        print(
            f"\n{stats.player_name} ({stats.role or '-'})  "
            f"{stats.total_games} games  {stats.total_wins}W  {stats.win_rate}% WR",
            flush=True,
        )
        if not stats.champions:
            print("  no practice games", flush=True)
            return
        print(f"  {'Champion':<14} {'G':>3} {'WR':>4} {'KDA':>8} {'Dmg':>7} {'CS':>5}  Pool", flush=True)
        for c in stats.champions:
            row = c.to_dict(in_pool=c.champion in stats.champion_pool)
            print(
                f"  {c.champion:<14} {c.games:>3} {c.win_rate:>3}% {c.kda_display:>8} "
                f"{row['avgDamage']:>7} {row['avgCs']:>5}  {'*' if row['inPool'] else ''}",
                flush=True,
            )

    def show_matches(self, player_id: Optional[int] = None, limit: int = 20, offset: int = 0) -> MatchPage:
        page = self.service.list_practice_matches(limit=limit, offset=offset, player_id=player_id)
        print(f"\nPractice matches {offset + 1}-{offset + len(page.matches)} of {page.total}", flush=True)
        for view in page.matches:
            m = view.match
            when = datetime.fromtimestamp(m.game_creation / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
            names = ", ".join(p['playerName'] for p in view.roster_participants)
            print(f"  {when}  {m.match_id:<18} {m.game_mode:<8} {m.game_duration // 60:>2}m  {names}", flush=True)
        return page
