"""Practice-match classification."""
from __future__ import annotations

from typing import Mapping, Optional

from domain.entities import MatchDetail, Player, PracticeMatch

# A game is team practice once this many roster members played in it.
MIN_ROSTER_PARTICIPANTS = 2


def classify_practice_match(
    detail: MatchDetail,
    players_by_handle: Mapping[str, Player],
    *,
    min_roster_participants: int = MIN_ROSTER_PARTICIPANTS,
) -> Optional[PracticeMatch]:
    """Return the PracticeMatch for ``detail`` or None when it does not qualify.

    All participants are kept in the snapshot; only roster members are
    counted and linked to player ids.
    """
    roster_participants = detail.participants_in(set(players_by_handle))
    if len(roster_participants) < min_roster_participants:
        return None

    player_ids: list[int] = []
    for participant in roster_participants:
        pid = players_by_handle[participant.account_handle].id
        if pid not in player_ids:
            player_ids.append(pid)

    return PracticeMatch(
        match_id=detail.match_id,
        game_creation=detail.creation_time,
        game_duration=detail.duration_seconds,
        game_mode=detail.mode,
        winning_team=detail.winning_team,
        roster_player_count=len(roster_participants),
        participants=list(detail.participants),
        roster_player_ids=player_ids,
    )
