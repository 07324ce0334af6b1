"""SQLite connection, schema and transactions for the practice engine."""
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from domain.interfaces import ITransactionManager

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


class Database(ITransactionManager):
    """One SQLite connection shared by all repositories.

    The connection runs in autocommit mode; ``transaction()`` opens an
    explicit ``BEGIN IMMEDIATE`` so a practice match insert and its
    aggregate upserts commit or roll back together. Nested calls join
    the outer transaction.
    """

    def __init__(self, db_path: Union[Path, str], *, default_auto_pool_threshold: int = 3):
        self.db_path = db_path
        if str(db_path) != MEMORY:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(db_path), isolation_level=None)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA synchronous=NORMAL")
        self._depth = 0
        self._create_tables(default_auto_pool_threshold)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        if self._depth:
            self._depth += 1
            try:
                yield self._conn
            finally:
                self._depth -= 1
            return

        self._conn.execute("BEGIN IMMEDIATE")
        self._depth = 1
        try:
            yield self._conn
        except BaseException:
            self._depth = 0
            self._conn.execute("ROLLBACK")
            raise
        self._depth = 0
        self._conn.execute("COMMIT")

    def close(self) -> None:
        self._conn.close()

    def _create_tables(self, default_auto_pool_threshold: int) -> None:
        cur = self._conn.cursor()
        cur.execute(
            "CREATE TABLE IF NOT EXISTS players (id INTEGER PRIMARY KEY AUTOINCREMENT, summoner_name TEXT NOT NULL, role TEXT, riot_puuid TEXT UNIQUE, opgg_region TEXT, profile_icon_id INTEGER, champion_pool TEXT, created_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
        )
        cur.execute(
            "CREATE TABLE IF NOT EXISTS practice_matches (id INTEGER PRIMARY KEY AUTOINCREMENT, match_id TEXT UNIQUE NOT NULL, game_creation INTEGER NOT NULL, game_duration INTEGER NOT NULL, game_mode TEXT, winning_team INTEGER, roster_player_count INTEGER NOT NULL, participants TEXT NOT NULL, created_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
        )
        cur.execute(
            "CREATE TABLE IF NOT EXISTS practice_match_players (match_id TEXT NOT NULL, player_id INTEGER NOT NULL, PRIMARY KEY(match_id, player_id), FOREIGN KEY(match_id) REFERENCES practice_matches(match_id))"
        )
        cur.execute(
            "CREATE TABLE IF NOT EXISTS practice_player_stats (id INTEGER PRIMARY KEY AUTOINCREMENT, player_id INTEGER NOT NULL, champion TEXT NOT NULL, games INTEGER DEFAULT 0, wins INTEGER DEFAULT 0, kills INTEGER DEFAULT 0, deaths INTEGER DEFAULT 0, assists INTEGER DEFAULT 0, cs INTEGER DEFAULT 0, total_damage INTEGER DEFAULT 0, total_damage_taken INTEGER DEFAULT 0, updated_at DATETIME DEFAULT CURRENT_TIMESTAMP, UNIQUE(player_id, champion))"
        )
        cur.execute(
            "CREATE TABLE IF NOT EXISTS practice_settings (id INTEGER PRIMARY KEY CHECK (id = 1), auto_pool_threshold INTEGER DEFAULT 3, last_scan_at DATETIME, scan_lock_acquired_at REAL, updated_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
        )
        cur.execute("CREATE INDEX IF NOT EXISTS idx_practice_matches_creation ON practice_matches(game_creation)")
        cur.execute("CREATE INDEX IF NOT EXISTS idx_practice_match_players_player ON practice_match_players(player_id)")
        cur.execute("CREATE INDEX IF NOT EXISTS idx_practice_player_stats_player ON practice_player_stats(player_id)")

        # Databases created before damage taken and the scan lease were tracked
        scols = {c[1] for c in cur.execute("PRAGMA table_info(practice_player_stats)").fetchall()}
        if "total_damage_taken" not in scols:
            cur.execute("ALTER TABLE practice_player_stats ADD COLUMN total_damage_taken INTEGER DEFAULT 0")
            logger.info("migrated practice_player_stats: added total_damage_taken")
        setcols = {c[1] for c in cur.execute("PRAGMA table_info(practice_settings)").fetchall()}
        if "scan_lock_acquired_at" not in setcols:
            cur.execute("ALTER TABLE practice_settings ADD COLUMN scan_lock_acquired_at REAL")
            logger.info("migrated practice_settings: added scan_lock_acquired_at")

        cur.execute(
            "INSERT OR IGNORE INTO practice_settings (id, auto_pool_threshold) VALUES (1, ?)",
            (default_auto_pool_threshold,),
        )
