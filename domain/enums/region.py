"""Region enumeration for League of Legends servers."""
from enum import Enum
from typing import Optional


class Region(Enum):
    """Platform a roster account plays on.

    The match API is served per regional route, so a match detail is
    requested from ``regional_route`` rather than the platform host.
    Roster entries store the short ``friendly`` label (``euw``, ``lan``).
    """

    EUW1 = "euw1"
    EUN1 = "eun1"
    TR1 = "tr1"
    RU = "ru"
    ME1 = "me1"
    NA1 = "na1"
    BR1 = "br1"
    LA1 = "la1"
    LA2 = "la2"
    KR = "kr"
    JP1 = "jp1"
    OC1 = "oc1"
    PH2 = "ph2"
    SG2 = "sg2"
    TH2 = "th2"
    TW2 = "tw2"
    VN2 = "vn2"

    @property
    def platform_route(self) -> str:
        return self.value

    @property
    def regional_route(self) -> str:
        """Match-V5 routing value; unknown platforms go to americas."""
        return _ROUTES.get(self.value, ("americas", self.value))[0]

    @property
    def friendly(self) -> str:
        """Short roster label, e.g. ``euw`` for EUW1."""
        return _ROUTES.get(self.value, ("americas", self.value))[1]

    @classmethod
    def from_string(cls, value: Optional[str], default: Optional['Region'] = None) -> 'Region':
        """Resolve a platform code ("euw1") or roster label ("euw").

        Unknown or empty values resolve to ``default`` (NA1 when omitted),
        matching the provider's americas fallback.
        """
        return cls.lookup(value) or default or cls.NA1

    @classmethod
    def lookup(cls, value: Optional[str]) -> Optional['Region']:
        """Strict variant of from_string: None when the value is not a known region."""
        if not value:
            return None
        key = value.strip().lower()
        return next((r for r in cls if key in (r.value, r.friendly)), None)


# platform -> (regional route, roster label)
_ROUTES = {
    "euw1": ("europe", "euw"),
    "eun1": ("europe", "eune"),
    "tr1": ("europe", "tr"),
    "ru": ("europe", "ru"),
    "me1": ("europe", "me"),
    "na1": ("americas", "na"),
    "br1": ("americas", "br"),
    "la1": ("americas", "lan"),
    "la2": ("americas", "las"),
    "kr": ("asia", "kr"),
    "jp1": ("asia", "jp"),
    "oc1": ("sea", "oce"),
    "ph2": ("sea", "ph"),
    "sg2": ("sea", "sg"),
    "th2": ("sea", "th"),
    "tw2": ("sea", "tw"),
    "vn2": ("sea", "vn"),
}
