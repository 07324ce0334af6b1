"""Threshold-driven champion pool promotion."""
from __future__ import annotations

from domain.interfaces import IChampionStatsRepository, IRosterRepository
from core.logging.logger import get_logger, traceable


class PoolPromoter:
    """Adds champions played often enough in practice to a player's pool.

    Promotion is additive only. Every call recomputes all of the player's
    qualifying champions, which makes it idempotent.
    """

    def __init__(self, roster_repo: IRosterRepository, stats_repo: IChampionStatsRepository) -> None:
        self.roster_repo = roster_repo
        self.stats_repo = stats_repo
        self.log = get_logger(__name__, service="pool-promoter")

    @traceable
    def promote(self, player_id: int, threshold: int) -> bool:
        """Returns True when the stored pool changed."""
        player = self.roster_repo.get_player(player_id)
        if player is None:
            self.log.warning(lambda: f"promote-skip unknown player_id={player_id}")
            return False

        pool = list(player.champion_pool)
        added = []
        for aggregate in self.stats_repo.list_for_player(player_id, min_games=threshold):
            if aggregate.champion not in pool:
                pool.append(aggregate.champion)
                added.append(aggregate.champion)

        if not added:
            return False

        self.roster_repo.update_champion_pool(player_id, pool)
        self.log.info(lambda: f"pool-promoted player={player.display_name} added={','.join(added)}")
        return True
