"""Scan settings row and the system-wide scan lease."""
from core.clock import utc_now_iso
from domain.entities import ScanSettings
from domain.interfaces import IScanSettingsRepository
from .database import Database


class ScanSettingsRepository(IScanSettingsRepository):
    def __init__(self, db: Database):
        self._db = db

    def get(self) -> ScanSettings:
        row = self._db.connection.execute(
            "SELECT auto_pool_threshold, last_scan_at, updated_at FROM practice_settings WHERE id = 1"
        ).fetchone()
        if row is None:
            return ScanSettings()
        return ScanSettings(
            auto_pool_threshold=row["auto_pool_threshold"] or ScanSettings.auto_pool_threshold,
            last_scan_at=row["last_scan_at"],
            updated_at=row["updated_at"],
        )

    def set_auto_pool_threshold(self, threshold: int) -> ScanSettings:
        with self._db.transaction() as conn:
            conn.execute(
                "UPDATE practice_settings SET auto_pool_threshold = ?, updated_at = ? WHERE id = 1",
                (threshold, utc_now_iso()),
            )
        return self.get()

    def mark_scanned(self, scanned_at: str) -> None:
        with self._db.transaction() as conn:
            conn.execute("UPDATE practice_settings SET last_scan_at = ? WHERE id = 1", (scanned_at,))

    def try_acquire_scan_lock(self, now: float, stale_after_s: float) -> bool:
        """Take the lease unless a live one exists. One conditional UPDATE, so atomic."""
        cur = self._db.connection.execute(
            """UPDATE practice_settings SET scan_lock_acquired_at = ?
               WHERE id = 1 AND (scan_lock_acquired_at IS NULL OR scan_lock_acquired_at <= ?)""",
            (now, now - stale_after_s),
        )
        return cur.rowcount == 1

    def release_scan_lock(self, acquired_at: float) -> bool:
        """Clear the lease only if it is still the one taken at ``acquired_at``."""
        cur = self._db.connection.execute(
            "UPDATE practice_settings SET scan_lock_acquired_at = NULL WHERE id = 1 AND scan_lock_acquired_at = ?",
            (acquired_at,),
        )
        return cur.rowcount == 1

    def is_scan_locked(self, now: float, stale_after_s: float) -> bool:
        row = self._db.connection.execute(
            "SELECT scan_lock_acquired_at FROM practice_settings WHERE id = 1"
        ).fetchone()
        acquired = row[0] if row else None
        return acquired is not None and acquired > now - stale_after_s
