from __future__ import annotations

import json
from typing import Optional

from application.services import PracticeService
from core.logging.logger import get_logger
from domain.entities import ScanReport
from domain.exceptions import ConfigurationError, ScanInProgressError

EXIT_OK = 0
EXIT_ABORTED = 1
EXIT_NOT_STARTED = 2


class ScanCommand:
    """Runs one practice scan and prints its report."""

    def __init__(self, service: Optional[PracticeService] = None) -> None:
        self._service = service
        self._log = get_logger(__name__, service="scan-cli")

    @property
    def service(self) -> PracticeService:
        if self._service is None:
            self._service = PracticeService.from_settings()
        return self._service

    async def run(self, *, as_json: bool = False) -> int:
        """Returns the process exit code: 0 done, 1 aborted, 2 not started."""
        try:
            report = await self.service.run_scan()
        except ConfigurationError as e:
            self._log.error(lambda: f"scan-not-started config {e}")
            print(f"Scan not started: {e}", flush=True)
            return EXIT_NOT_STARTED
        except ScanInProgressError as e:
            self._log.warning(lambda: f"scan-not-started busy {e}")
            print(f"Scan not started: {e}", flush=True)
            return EXIT_NOT_STARTED

        if as_json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            self._print_report(report)
        return EXIT_ABORTED if report.aborted else EXIT_OK

    @staticmethod
    def _print_report(report: ScanReport) -> None:
        print("\n" + "=" * 48)
        print("PRACTICE SCAN")
        print("=" * 48)
        print(f"Candidates:              {report.candidates}")
        print(f"Matches scanned:         {report.matches_scanned}")
        print(f"Practice matches found:  {report.practice_matches_found}")
        print(f"Players updated:         {report.players_updated}")
        print(f"Pools updated:           {report.pools_updated}")
        if report.duplicates:
            print(f"Already stored:          {report.duplicates}")
        if report.degraded:
            print(f"Player fetch failures:   {report.player_failures}")
            print(f"Match fetch failures:    {report.match_failures}")
            for err in report.errors[:10]:
                print(f"  - {err}")
        if report.aborted:
            print(f"ABORTED: {report.abort_reason}")
        print("=" * 48, flush=True)
