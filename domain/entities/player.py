"""Player entity representing a roster member."""
from dataclasses import dataclass, field
from typing import Optional

from ..enums import Region


@dataclass
class Player:
    """A roster member, optionally linked to a Riot account."""

    id: int
    display_name: str
    account_handle: Optional[str] = None  # PUUID
    role: Optional[str] = None
    region_code: Optional[str] = None     # roster label, e.g. "euw"
    profile_icon_id: Optional[int] = None

    # Tracked "played champions"; order is display order only
    champion_pool: list[str] = field(default_factory=list)

    @property
    def is_linked(self) -> bool:
        return bool(self.account_handle)

    @property
    def region(self) -> Region:
        return Region.from_string(self.region_code)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.display_name,
            'puuid': self.account_handle,
            'role': self.role,
            'region': self.region_code,
            'profileIconId': self.profile_icon_id,
            'championPool': list(self.champion_pool),
        }


def parse_champion_pool(raw: Optional[str]) -> list[str]:
    """Split the stored "Ahri, Zed" form into a list, dropping blanks."""
    if not raw:
        return []
    return [c.strip() for c in raw.split(',') if c.strip()]


def format_champion_pool(pool: list[str]) -> str:
    return ', '.join(pool)
