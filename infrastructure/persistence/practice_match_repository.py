"""Practice match store: append-only, unique by match id."""
import json
import logging
import sqlite3
from typing import List, Optional

from domain.entities import ParticipantSnapshot, PracticeMatch
from domain.exceptions import PersistenceConflict
from domain.interfaces import IPracticeMatchRepository
from .database import Database

logger = logging.getLogger(__name__)


class PracticeMatchRepository(IPracticeMatchRepository):
    """SQLite-backed practice match store.

    The ``UNIQUE`` constraint on ``match_id`` is the only guard against
    aggregating a match twice, so inserts never check first.
    """

    def __init__(self, db: Database):
        self._db = db

    def get_processed_match_ids(self) -> set[str]:
        rows = self._db.connection.execute("SELECT match_id FROM practice_matches").fetchall()
        return {r[0] for r in rows}

    def insert(self, match: PracticeMatch) -> None:
        participants = json.dumps([p.to_dict() for p in match.participants])
        with self._db.transaction() as conn:
            try:
                conn.execute(
                    """INSERT INTO practice_matches
                       (match_id, game_creation, game_duration, game_mode, winning_team,
                        roster_player_count, participants)
                       VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    (
                        match.match_id,
                        match.game_creation,
                        match.game_duration,
                        match.game_mode,
                        match.winning_team,
                        match.roster_player_count,
                        participants,
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise PersistenceConflict(match.match_id) from e
            conn.executemany(
                "INSERT OR IGNORE INTO practice_match_players (match_id, player_id) VALUES (?, ?)",
                [(match.match_id, pid) for pid in match.roster_player_ids],
            )

    def list_matches(
        self, limit: int = 20, offset: int = 0, player_id: Optional[int] = None
    ) -> List[PracticeMatch]:
        where, params = self._player_filter(player_id)
        rows = self._db.connection.execute(
            f"""SELECT * FROM practice_matches {where}
                ORDER BY game_creation DESC, match_id DESC
                LIMIT ? OFFSET ?""",
            (*params, max(0, limit), max(0, offset)),
        ).fetchall()
        if not rows:
            return []

        ids = [r["match_id"] for r in rows]
        ph = ",".join(["?"] * len(ids))
        roster_rows = self._db.connection.execute(
            f"SELECT match_id, player_id FROM practice_match_players WHERE match_id IN ({ph}) ORDER BY player_id",
            ids,
        ).fetchall()
        roster: dict[str, list[int]] = {}
        for r in roster_rows:
            roster.setdefault(r["match_id"], []).append(r["player_id"])

        return [self._to_entity(r, roster.get(r["match_id"], [])) for r in rows]

    def get(self, match_id: str) -> Optional[PracticeMatch]:
        row = self._db.connection.execute(
            "SELECT * FROM practice_matches WHERE match_id = ?", (match_id,)
        ).fetchone()
        if row is None:
            return None
        player_ids = [
            r[0] for r in self._db.connection.execute(
                "SELECT player_id FROM practice_match_players WHERE match_id = ? ORDER BY player_id",
                (match_id,),
            ).fetchall()
        ]
        return self._to_entity(row, player_ids)

    def count(self, player_id: Optional[int] = None) -> int:
        where, params = self._player_filter(player_id)
        row = self._db.connection.execute(
            f"SELECT COUNT(*) FROM practice_matches {where}", params
        ).fetchone()
        return int(row[0]) if row else 0

    @staticmethod
    def _player_filter(player_id: Optional[int]) -> tuple[str, tuple]:
        if player_id is None:
            return "", ()
        return (
            "WHERE match_id IN (SELECT match_id FROM practice_match_players WHERE player_id = ?)",
            (player_id,),
        )

    @staticmethod
    def _to_entity(row: sqlite3.Row, roster_player_ids: List[int]) -> PracticeMatch:
        participants = [ParticipantSnapshot.from_dict(p) for p in json.loads(row["participants"] or "[]")]
        return PracticeMatch(
            match_id=row["match_id"],
            game_creation=row["game_creation"],
            game_duration=row["game_duration"],
            game_mode=row["game_mode"] or "",
            winning_team=row["winning_team"],
            roster_player_count=row["roster_player_count"],
            participants=participants,
            roster_player_ids=list(roster_player_ids),
            created_at=row["created_at"],
        )
