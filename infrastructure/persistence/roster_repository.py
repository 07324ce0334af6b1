"""Roster store: players and their champion pools."""
import sqlite3
from typing import List, Optional

from domain.entities import Player
from domain.entities.player import format_champion_pool, parse_champion_pool
from domain.interfaces import IRosterRepository
from .database import Database


class RosterRepository(IRosterRepository):
    """Reads roster entries; writes only champion pools and account links."""

    def __init__(self, db: Database):
        self._db = db

    def list_players(self) -> List[Player]:
        rows = self._db.connection.execute("SELECT * FROM players ORDER BY id").fetchall()
        return [self._to_entity(r) for r in rows]

    def list_linked_players(self) -> List[Player]:
        rows = self._db.connection.execute(
            "SELECT * FROM players WHERE riot_puuid IS NOT NULL AND riot_puuid != '' ORDER BY id"
        ).fetchall()
        return [self._to_entity(r) for r in rows]

    def get_player(self, player_id: int) -> Optional[Player]:
        row = self._db.connection.execute(
            "SELECT * FROM players WHERE id = ?", (player_id,)
        ).fetchone()
        return self._to_entity(row) if row else None

    def update_champion_pool(self, player_id: int, pool: List[str]) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                "UPDATE players SET champion_pool = ? WHERE id = ?",
                (format_champion_pool(pool), player_id),
            )

    def add_player(
        self,
        display_name: str,
        *,
        account_handle: Optional[str] = None,
        role: Optional[str] = None,
        region_code: Optional[str] = None,
        champion_pool: Optional[List[str]] = None,
    ) -> Player:
        with self._db.transaction() as conn:
            cur = conn.execute(
                """INSERT INTO players (summoner_name, role, riot_puuid, opgg_region, champion_pool)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    display_name,
                    role,
                    account_handle or None,
                    region_code,
                    format_champion_pool(champion_pool or []),
                ),
            )
            row = conn.execute("SELECT * FROM players WHERE id = ?", (cur.lastrowid,)).fetchone()
        return self._to_entity(row)

    def link_account(
        self, player_id: int, account_handle: str, region_code: Optional[str] = None
    ) -> Optional[Player]:
        """Attach a Riot account; None when the player does not exist."""
        with self._db.transaction() as conn:
            cur = conn.execute(
                "UPDATE players SET riot_puuid = ?, opgg_region = COALESCE(?, opgg_region) WHERE id = ?",
                (account_handle, region_code, player_id),
            )
            if cur.rowcount == 0:
                return None
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        return self._to_entity(row)

    @staticmethod
    def _to_entity(row: sqlite3.Row) -> Player:
        return Player(
            id=row["id"],
            display_name=row["summoner_name"],
            account_handle=row["riot_puuid"],
            role=row["role"],
            region_code=row["opgg_region"],
            profile_icon_id=row["profile_icon_id"],
            champion_pool=parse_champion_pool(row["champion_pool"]),
        )
