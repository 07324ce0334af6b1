from __future__ import annotations

from typing import Optional

from application.services import PracticeService
from config import settings
from core.logging.logger import get_logger
from domain.enums import Region, Role
from domain.exceptions import PlayerNotFoundError


class RosterCommand:
    """Roster upkeep: list, add and link players, and the auto-pool threshold."""

    def __init__(self, service: Optional[PracticeService] = None) -> None:
        self._service = service
        self.log = get_logger(__name__, service="roster-cli")

    @property
    def service(self) -> PracticeService:
        if self._service is None:
            self._service = PracticeService.from_settings()
        return self._service

    def run(self) -> None:
        while True:
            print("\n=== Roster & Settings ===", flush=True)
            print("1) List roster", flush=True)
            print("2) Add player", flush=True)
            print("3) Link Riot account (PUUID)", flush=True)
            print(f"4) Auto-pool threshold (now {self.service.get_settings().auto_pool_threshold})", flush=True)
            print("5) Back", flush=True)
            choice = input("Choose: ").strip()
            if choice == "1":
                self.list_roster()
            elif choice == "2":
                self._add_interactive()
            elif choice == "3":
                self._link_interactive()
            elif choice == "4":
                self._threshold_interactive()
            elif choice == "5":
                return
            else:
                print("Invalid option.", flush=True)

    def list_roster(self) -> None:
        players = sorted(self.service.list_players(), key=lambda p: (Role.roster_sort_key(p.role), p.id))
        if not players:
            print("Roster is empty.", flush=True)
            return
        for p in players:
            linked = "linked" if p.is_linked else "not linked"
            pool = ", ".join(p.champion_pool) or "-"
            print(f"  [{p.id}] {p.display_name:<16} {p.role or '-':<8} {p.region.friendly:<22} {linked:<11} {pool}", flush=True)

    def _add_interactive(self) -> None:
        name = input("Display name: ").strip()
        if not name:
            print("Name is required.", flush=True)
            return
        role = Role.from_string(input("Role (Top/Jungle/Mid/ADC/Support): ").strip())
        region = input("Region label (e.g. euw, na): ").strip() or None
        handle = input("PUUID (optional): ").strip() or None
        player = self.service.add_player(
            name,
            account_handle=handle,
            role=role.display_name if role else None,
            region_code=region,
        )
        print(f"Added [{player.id}] {player.display_name} ({player.region.friendly})", flush=True)

    def _link_interactive(self) -> None:
        raw_id = input("Player id: ").strip()
        handle = input("PUUID: ").strip()
        if not raw_id.isdigit() or not handle:
            print("Player id and PUUID are required.", flush=True)
            return
        region = input("Region label (blank to keep): ").strip() or None
        if region and Region.lookup(region) is None:
            print(f"Unknown region {region!r}.", flush=True)
            return
        try:
            player = self.service.link_account(int(raw_id), handle, region)
        except PlayerNotFoundError as e:
            print(str(e), flush=True)
            return
        self.log.info(lambda: f"player-linked id={player.id}")
        print(f"Linked {player.display_name}.", flush=True)

    def _threshold_interactive(self) -> None:
        raw = input(
            f"Games needed to add a champion to a pool "
            f"({settings.MIN_AUTO_POOL_THRESHOLD}-{settings.MAX_AUTO_POOL_THRESHOLD}): "
        ).strip()
        try:
            value = int(raw)
        except ValueError:
            print("Please enter a number.", flush=True)
            return
        stored = self.service.set_auto_pool_threshold(value)
        print(f"Auto-pool threshold set to {stored.auto_pool_threshold}.", flush=True)
