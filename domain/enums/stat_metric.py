"""Per-game average metrics ranked on the practice overview."""
import math
from enum import Enum


class StatMetric(Enum):
    """Aggregate counters that can be ranked by per-game average.

    Provides:
    - field_name: ChampionAggregate attribute holding the total
    - label: title shown on the overview
    - overview_key: key used in the overview's best-stats mapping
    """

    DAMAGE = "damage"
    DAMAGE_TAKEN = "damage_taken"
    CS = "cs"
    KILLS = "kills"

    @property
    def field_name(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        labels = {
            "damage": "Highest Damage",
            "damage_taken": "Most Damage Taken",
            "cs": "Best CS",
            "kills": "Most Kills",
        }
        return labels[self.value]

    @property
    def overview_key(self) -> str:
        return "damageTaken" if self is StatMetric.DAMAGE_TAKEN else self.value

    @property
    def requires_nonzero_total(self) -> bool:
        """Damage taken was not recorded for older rows; zero means missing."""
        return self is StatMetric.DAMAGE_TAKEN

    def format_value(self, average: float) -> str:
        if self in (StatMetric.DAMAGE, StatMetric.DAMAGE_TAKEN):
            return f"{round_half_up(average):,}"
        if self is StatMetric.CS:
            return str(round_half_up(average))
        return f"{average:.1f}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))
