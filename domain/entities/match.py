"""Match entities: provider match records and stored practice matches."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .participant import ParticipantSnapshot


@dataclass(frozen=True)
class MatchDetail:
    """A full match record as returned by the match source."""

    match_id: str
    creation_time: int      # Unix timestamp milliseconds
    duration_seconds: int
    mode: str
    participants: tuple[ParticipantSnapshot, ...] = ()

    @property
    def winning_team(self) -> Optional[int]:
        """Team id of any winning participant, None for remakes."""
        return next((p.team_id for p in self.participants if p.win), None)

    def participants_in(self, account_handles: set[str]) -> list[ParticipantSnapshot]:
        """Participants whose account handle is in the given set, in match order."""
        return [p for p in self.participants if p.account_handle in account_handles]


@dataclass
class PracticeMatch:
    """A match classified as team practice (two or more roster players)."""

    # Identity
    match_id: str

    # Timing
    game_creation: int  # Unix timestamp milliseconds
    game_duration: int  # Seconds

    game_mode: str
    winning_team: Optional[int]
    roster_player_count: int

    # All participants, in provider order
    participants: list[ParticipantSnapshot] = field(default_factory=list)

    # Roster player ids present, resolved at classification time
    roster_player_ids: list[int] = field(default_factory=list)

    created_at: Optional[str] = None

    @property
    def game_date(self) -> datetime:
        """Get game date as a UTC datetime."""
        return datetime.fromtimestamp(self.game_creation / 1000, tz=timezone.utc)

    def to_dict(self) -> dict:
        """Convert match to dictionary."""
        return {
            'match_id': self.match_id,
            'game_creation': self.game_creation,
            'game_date': self.game_date.isoformat(),
            'game_duration': self.game_duration,
            'game_mode': self.game_mode,
            'winning_team': self.winning_team,
            'roster_player_count': self.roster_player_count,
            'participants': [p.to_dict() for p in self.participants],
            'created_at': self.created_at,
        }
