"""Per-player, per-champion practice counters."""
import math
from dataclasses import dataclass
from typing import Optional

from ..enums.stat_metric import StatMetric, round_half_up

PERFECT_KDA_LABEL = "Perfect"


@dataclass
class ChampionAggregate:
    """Running totals for one (player, champion) pair.

    Counters only ever grow: every new practice match adds to them once.
    """

    player_id: int
    champion: str

    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    cs: int = 0
    damage: int = 0
    damage_taken: int = 0

    updated_at: Optional[str] = None

    # Joined from the roster when read for display
    player_name: Optional[str] = None

    @property
    def win_rate(self) -> int:
        """Win rate as a whole percent."""
        if self.games == 0:
            return 0
        return round_half_up(self.wins / self.games * 100)

    @property
    def kda(self) -> float:
        """(kills + assists) / deaths; deathless rows are infinite."""
        if self.deaths == 0:
            return math.inf
        return (self.kills + self.assists) / self.deaths

    @property
    def kda_display(self) -> str:
        if self.deaths == 0:
            return PERFECT_KDA_LABEL
        return f"{self.kda:.2f}"

    def average(self, metric: StatMetric) -> float:
        """Per-game average of a counter."""
        if self.games == 0:
            return 0.0
        return getattr(self, metric.field_name) / self.games

    def to_dict(self, *, in_pool: Optional[bool] = None) -> dict:
        """Convert to the enriched stats line shown per champion."""
        per_game = self.games or 1
        data = {
            'champion': self.champion,
            'games': self.games,
            'wins': self.wins,
            'kills': self.kills,
            'deaths': self.deaths,
            'assists': self.assists,
            'cs': self.cs,
            'total_damage': self.damage,
            'total_damage_taken': self.damage_taken,
            'winRate': self.win_rate,
            'kda': self.kda_display,
            'avgKills': f"{self.kills / per_game:.1f}",
            'avgDeaths': f"{self.deaths / per_game:.1f}",
            'avgAssists': f"{self.assists / per_game:.1f}",
            'avgCs': round_half_up(self.cs / per_game),
            'avgDamage': round_half_up(self.damage / per_game),
        }
        if in_pool is not None:
            data['inPool'] = in_pool
        return data
