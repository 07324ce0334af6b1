"""Aggregate store: per-(player, champion) practice counters."""
import sqlite3
from typing import List

from domain.entities import ChampionAggregate, ParticipantSnapshot
from domain.interfaces import IChampionStatsRepository
from .database import Database

_COLUMNS = (
    "s.player_id, s.champion, s.games, s.wins, s.kills, s.deaths, s.assists, "
    "s.cs, s.total_damage, s.total_damage_taken, s.updated_at"
)


class ChampionStatsRepository(IChampionStatsRepository):
    def __init__(self, db: Database):
        self._db = db

    def record_appearance(
        self, player_id: int, snapshot: ParticipantSnapshot, updated_at: str
    ) -> None:
        """Add one game's line to the (player, champion) row, creating it if new."""
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO practice_player_stats
                   (player_id, champion, games, wins, kills, deaths, assists, cs,
                    total_damage, total_damage_taken, updated_at)
                   VALUES (?, ?, 1, ?, ?, ?, ?, ?, ?, ?, ?)
                   ON CONFLICT(player_id, champion) DO UPDATE SET
                   games = games + 1,
                   wins = wins + excluded.wins,
                   kills = kills + excluded.kills,
                   deaths = deaths + excluded.deaths,
                   assists = assists + excluded.assists,
                   cs = cs + excluded.cs,
                   total_damage = total_damage + excluded.total_damage,
                   total_damage_taken = total_damage_taken + excluded.total_damage_taken,
                   updated_at = excluded.updated_at""",
                (
                    player_id,
                    snapshot.champion,
                    1 if snapshot.win else 0,
                    snapshot.kills,
                    snapshot.deaths,
                    snapshot.assists,
                    snapshot.cs,
                    snapshot.damage,
                    snapshot.damage_taken,
                    updated_at,
                ),
            )

    def list_for_player(self, player_id: int, min_games: int = 0) -> List[ChampionAggregate]:
        rows = self._db.connection.execute(
            f"""SELECT {_COLUMNS}, p.summoner_name AS player_name
                FROM practice_player_stats s
                JOIN players p ON p.id = s.player_id
                WHERE s.player_id = ? AND s.games >= ?
                ORDER BY s.games DESC, s.champion""",
            (player_id, min_games),
        ).fetchall()
        return [self._to_entity(r) for r in rows]

    def list_all(self, min_games: int = 0) -> List[ChampionAggregate]:
        rows = self._db.connection.execute(
            f"""SELECT {_COLUMNS}, p.summoner_name AS player_name
                FROM practice_player_stats s
                JOIN players p ON p.id = s.player_id
                WHERE s.games >= ?
                ORDER BY s.games DESC, s.player_id, s.champion""",
            (min_games,),
        ).fetchall()
        return [self._to_entity(r) for r in rows]

    @staticmethod
    def _to_entity(row: sqlite3.Row) -> ChampionAggregate:
        return ChampionAggregate(
            player_id=row["player_id"],
            champion=row["champion"],
            games=row["games"] or 0,
            wins=row["wins"] or 0,
            kills=row["kills"] or 0,
            deaths=row["deaths"] or 0,
            assists=row["assists"] or 0,
            cs=row["cs"] or 0,
            damage=row["total_damage"] or 0,
            damage_taken=row["total_damage_taken"] or 0,
            updated_at=row["updated_at"],
            player_name=row["player_name"],
        )
