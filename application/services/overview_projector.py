"""Read-only leaderboards and best-stat entries over practice aggregates."""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from domain.entities import BestStatEntry, ChampionAggregate, LeaderboardEntry, Overview
from domain.enums import StatMetric
from domain.interfaces import (
    IChampionStatsRepository,
    IPracticeMatchRepository,
    IScanSettingsRepository,
)

BEST_KDA_LABEL = "Best KDA"


def _leader(
    rows: Iterable[ChampionAggregate], value: Callable[[ChampionAggregate], float]
) -> Optional[ChampionAggregate]:
    """Row with the highest value; ties go to more games, then lower player id, then champion."""
    ranked = sorted(rows, key=lambda r: (-value(r), -r.games, r.player_id, r.champion))
    return ranked[0] if ranked else None


class OverviewProjector:
    """Computes the practice overview on demand.

    Categories are independent: one (player, champion) row may lead
    several. A category with no row meeting ``min_games`` is None.
    """

    def __init__(
        self,
        stats_repo: IChampionStatsRepository,
        match_repo: Optional[IPracticeMatchRepository] = None,
        settings_repo: Optional[IScanSettingsRepository] = None,
    ) -> None:
        self.stats_repo = stats_repo
        self.match_repo = match_repo
        self.settings_repo = settings_repo

    def most_played(self, top_n: int = 5) -> List[LeaderboardEntry]:
        rows = self.stats_repo.list_all()
        rows.sort(key=lambda r: (-r.games, r.player_id, r.champion))
        return [
            LeaderboardEntry(
                player_id=r.player_id,
                player_name=r.player_name,
                champion=r.champion,
                games=r.games,
                wins=r.wins,
                win_rate=r.win_rate,
            )
            for r in rows[:max(0, top_n)]
        ]

    def best_kda(self, min_games: int = 1) -> Optional[BestStatEntry]:
        leader = _leader(self.stats_repo.list_all(min_games=min_games), lambda r: r.kda)
        if leader is None:
            return None
        return BestStatEntry(
            label=BEST_KDA_LABEL,
            player_id=leader.player_id,
            player_name=leader.player_name,
            champion=leader.champion,
            value=leader.kda,
            display=leader.kda_display,
            games=leader.games,
        )

    def highest_average(self, metric: StatMetric, min_games: int = 1) -> Optional[BestStatEntry]:
        rows = self.stats_repo.list_all(min_games=min_games)
        if metric.requires_nonzero_total:
            rows = [r for r in rows if getattr(r, metric.field_name) > 0]
        leader = _leader(rows, lambda r: r.average(metric))
        if leader is None:
            return None
        average = leader.average(metric)
        return BestStatEntry(
            label=metric.label,
            player_id=leader.player_id,
            player_name=leader.player_name,
            champion=leader.champion,
            value=average,
            display=metric.format_value(average),
            games=leader.games,
        )

    def best_stats(self, min_games: int = 1) -> dict[str, Optional[BestStatEntry]]:
        stats: dict[str, Optional[BestStatEntry]] = {"kda": self.best_kda(min_games)}
        for metric in StatMetric:
            stats[metric.overview_key] = self.highest_average(metric, min_games)
        return stats

    def overview(self, top_n: int = 5, min_games: int = 1) -> Overview:
        return Overview(
            total_matches=self.match_repo.count() if self.match_repo else 0,
            most_played=self.most_played(top_n),
            best_stats=self.best_stats(min_games),
            last_scan=self.settings_repo.get().last_scan_at if self.settings_repo else None,
        )
