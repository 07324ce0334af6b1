from __future__ import annotations

import json
from typing import Optional

from application.services import PracticeService
from core.logging.logger import get_logger
from domain.entities import Overview

_CATEGORY_ORDER = ("kda", "damage", "damageTaken", "cs", "kills")


class OverviewCommand:
    """Prints the practice overview: most played picks and best-stat leaders."""

    def __init__(self, service: Optional[PracticeService] = None) -> None:
        self._service = service
        self._log = get_logger(__name__, service="overview-cli")

    @property
    def service(self) -> PracticeService:
        if self._service is None:
            self._service = PracticeService.from_settings()
        return self._service

    def run(self, *, as_json: bool = False) -> None:
        overview = self.service.get_overview()
        self._log.debug(lambda: f"overview total_matches={overview.total_matches}")
        if as_json:
            print(json.dumps(overview.to_dict(), indent=2))
            return
        print(self.render(overview), flush=True)

    @staticmethod
    def render(overview: Overview) -> str:
        lines = [
            "",
            "=" * 56,
            "PRACTICE OVERVIEW",
            "=" * 56,
            f"Practice matches: {overview.total_matches}",
            f"Last scan:        {overview.last_scan or 'never'}",
            "",
            "Most played",
        ]
        if not overview.most_played:
            lines.append("  (no practice games yet)")
        for i, entry in enumerate(overview.most_played, start=1):
            lines.append(
                f"  {i}. {entry.player_name or entry.player_id:<16} {entry.champion:<14} "
                f"{entry.games:>3} games  {entry.win_rate:>3}% WR"
            )
        lines.append("")
        lines.append("Best stats")
        for key in _CATEGORY_ORDER:
            best = overview.best_stats.get(key)
            if best is None:
                continue
            lines.append(
                f"  {best.label:<22} {best.player_name or best.player_id:<16} {best.champion:<14} {best.display}"
            )
        lines.append("=" * 56)
        return "\n".join(lines)
