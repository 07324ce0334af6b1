"""Classification of match-source failures."""
from enum import Enum


class FetchErrorKind(Enum):
    """How a failed provider call affects the running scan.

    Only AUTH_FAILURE is fatal; every other kind skips the item and the
    item stays eligible for the next scan.
    """

    NOT_FOUND = "not_found"
    AUTH_FAILURE = "auth_failure"
    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"

    @property
    def is_fatal(self) -> bool:
        return self is FetchErrorKind.AUTH_FAILURE

    @classmethod
    def from_status(cls, status_code: int) -> 'FetchErrorKind':
        """Map an HTTP status code to its error kind."""
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code in (401, 403):
            return cls.AUTH_FAILURE
        if status_code == 429:
            return cls.RATE_LIMITED
        if status_code >= 500:
            return cls.TRANSIENT
        return cls.UNKNOWN
