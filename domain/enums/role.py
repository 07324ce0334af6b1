"""Role/Position enumeration."""
from enum import Enum
from typing import Optional


class Role(Enum):
    """Roster lane roles, declared in display order."""

    TOP = "Top"
    JUNGLE = "Jungle"
    MIDDLE = "Mid"
    BOTTOM = "ADC"
    UTILITY = "Support"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def sort_index(self) -> int:
        """Position of the role in roster listings (Top first)."""
        return list(Role).index(self)

    @classmethod
    def from_string(cls, role_str: Optional[str]) -> Optional['Role']:
        """Create Role from a roster or provider label; None when unknown."""
        if not role_str:
            return None
        key = role_str.strip().upper()
        for role in cls:
            if key in (role.name, role.value.upper()):
                return role
        mappings = {
            "SUP": cls.UTILITY,
            "BOT": cls.BOTTOM,
            "BOTTOM": cls.BOTTOM,
            "MIDDLE": cls.MIDDLE,
            "JG": cls.JUNGLE,
            "JGL": cls.JUNGLE,
        }
        return mappings.get(key)

    @classmethod
    def roster_sort_key(cls, role_str: Optional[str]) -> int:
        """Sort key placing unknown roles after Support."""
        role = cls.from_string(role_str)
        return role.sort_index if role else len(cls)
