"""Domain exception hierarchy for the practice engine."""
from __future__ import annotations

from typing import Optional

from .enums.fetch_error_kind import FetchErrorKind


class PracticeEngineError(Exception):
    pass


class ConfigurationError(PracticeEngineError):
    """Engine cannot start: missing credential or invalid setting."""


class InsufficientRosterError(ConfigurationError):
    pass


class ScanInProgressError(PracticeEngineError):
    pass


class PlayerNotFoundError(PracticeEngineError):
    pass


class PersistenceConflict(PracticeEngineError):
    """Match id already stored; callers treat it as already processed."""

    def __init__(self, match_id: str) -> None:
        super().__init__(f"Practice match {match_id} already stored")
        self.match_id = match_id


# ── Match source errors ────────────────────────────────────────────────


class MatchSourceError(PracticeEngineError):
    kind: FetchErrorKind = FetchErrorKind.UNKNOWN

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(MatchSourceError):
    kind = FetchErrorKind.NOT_FOUND


class AuthFailure(MatchSourceError):
    """Credential rejected by the provider. Fatal for the whole scan."""

    kind = FetchErrorKind.AUTH_FAILURE


class RateLimitedError(MatchSourceError):
    kind = FetchErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = 429,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after


class TransientError(MatchSourceError):
    kind = FetchErrorKind.TRANSIENT


class UnknownSourceError(MatchSourceError):
    kind = FetchErrorKind.UNKNOWN


# ── Per-item scan failures (recovered inside a scan) ───────────────────


class PlayerFetchFailure(PracticeEngineError):
    def __init__(self, player_name: str, cause: MatchSourceError) -> None:
        super().__init__(f"Failed to list matches for {player_name}: {cause}")
        self.player_name = player_name
        self.cause = cause


class MatchFetchFailure(PracticeEngineError):
    def __init__(self, match_id: str, cause: MatchSourceError) -> None:
        super().__init__(f"Failed to fetch match {match_id}: {cause}")
        self.match_id = match_id
        self.cause = cause
