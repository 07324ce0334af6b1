"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from domain.exceptions import ConfigurationError

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


class Settings:
    """
    ─── SCAN BUDGET ──────────────────────────────────────────────────────
    One scan costs (linked players) + (new candidate ids) requests.
    With 5 players and a 20-game window that is at most 105 calls, which
    fits inside Riot's personal-key budget of 100 req / 120 s only
    because most ids are already processed after the first scan.
    The fixed delays below keep the burst rate far under 20 req / s.
    ──────────────────────────────────────────────────────────────────────
    """

    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '')

    # ── Rate limits (per 1 second / per 2 minutes = Riot's actual windows) ──
    RATE_LIMIT_PER_1_SEC: int = int(os.getenv('RATE_LIMIT_PER_1_SEC', '18'))
    RATE_LIMIT_PER_2_MIN: int = int(os.getenv('RATE_LIMIT_PER_2_MIN', '90'))

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    DATA_DIR: Path = BASE_DIR / 'data'
    DB_DIR:   Path = DATA_DIR / 'db'
    LOG_DIR:  Path = DATA_DIR / 'logs'
    DB_PATH:  Path = Path(os.getenv('PRACTICE_DB_PATH', '') or DB_DIR / 'practice.sqlite')

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: int = int(os.getenv('REQUEST_TIMEOUT', '30'))

    # ── Scan ───────────────────────────────────────────────────────────────
    # Most recent games listed per player on every scan.
    SCAN_MATCH_WINDOW: int = int(os.getenv('SCAN_MATCH_WINDOW', '20'))
    # Team start date; games created before it are never listed.
    SCAN_START_DATE: str = os.getenv('SCAN_START_DATE', '2026-01-20')
    SCAN_LIST_DELAY_S:   float = float(os.getenv('SCAN_LIST_DELAY_S', '0.10'))
    SCAN_DETAIL_DELAY_S: float = float(os.getenv('SCAN_DETAIL_DELAY_S', '0.15'))
    SCAN_LOCK_STALE_S:   int   = int(os.getenv('SCAN_LOCK_STALE_S', '1800'))

    # ── Champion pools ─────────────────────────────────────────────────────
    DEFAULT_AUTO_POOL_THRESHOLD: int = 3
    MIN_AUTO_POOL_THRESHOLD:     int = 1
    MAX_AUTO_POOL_THRESHOLD:     int = 20

    # ── Overview ───────────────────────────────────────────────────────────
    OVERVIEW_TOP_N:     int = int(os.getenv('OVERVIEW_TOP_N', '5'))
    OVERVIEW_MIN_GAMES: int = int(os.getenv('OVERVIEW_MIN_GAMES', '1'))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def scan_start_timestamp(cls) -> Optional[int]:
        """Epoch seconds of SCAN_START_DATE (UTC), or None when unset."""
        from datetime import datetime, timezone

        raw = (cls.SCAN_START_DATE or '').strip()
        if not raw:
            return None
        try:
            day = datetime.strptime(raw, '%Y-%m-%d').replace(tzinfo=timezone.utc)
        except ValueError as e:
            raise ConfigurationError(f"SCAN_START_DATE must be YYYY-MM-DD, got {raw!r}") from e
        return int(day.timestamp())

    @classmethod
    def validate(cls) -> None:
        if not cls.RIOT_API_KEY:
            raise ConfigurationError("RIOT_API_KEY must be set in config/.env")
        if cls.SCAN_MATCH_WINDOW < 1:
            raise ConfigurationError("SCAN_MATCH_WINDOW must be at least 1")
        cls.scan_start_timestamp()

    @classmethod
    def create_directories(cls) -> None:
        cls.DB_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)
        cls.DB_PATH.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
