"""Read models produced by the overview/leaderboard projector."""
from dataclasses import dataclass, field
from typing import Optional

from ..enums.stat_metric import round_half_up
from .champion_aggregate import ChampionAggregate
from .match import PracticeMatch


@dataclass(frozen=True)
class LeaderboardEntry:
    """Most-played leaderboard row."""
    player_id: int
    player_name: Optional[str]
    champion: str
    games: int
    wins: int
    win_rate: int

    def to_dict(self) -> dict:
        return {
            'champion': self.champion,
            'player_id': self.player_id,
            'player_name': self.player_name,
            'games': self.games,
            'wins': self.wins,
            'winRate': self.win_rate,
        }


@dataclass(frozen=True)
class BestStatEntry:
    """Leader of one best-stat category.

    ``value`` is numeric for ranking (``math.inf`` for a perfect KDA);
    ``display`` is the rendered string.
    """
    label: str
    player_id: int
    player_name: Optional[str]
    champion: str
    value: float
    display: str
    games: int

    def to_dict(self) -> dict:
        return {
            'label': self.label,
            'player': self.player_name,
            'player_id': self.player_id,
            'champion': self.champion,
            'value': self.display,
            'games': self.games,
        }


@dataclass
class Overview:
    total_matches: int = 0
    most_played: list[LeaderboardEntry] = field(default_factory=list)
    best_stats: dict[str, Optional[BestStatEntry]] = field(default_factory=dict)
    last_scan: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'totalMatches': self.total_matches,
            'mostPlayed': [e.to_dict() for e in self.most_played],
            'bestStats': {k: (v.to_dict() if v else None) for k, v in self.best_stats.items()},
            'lastScan': self.last_scan,
        }


@dataclass
class PlayerPracticeStats:
    """A roster player's practice record across all champions."""
    player_id: int
    player_name: str
    role: Optional[str]
    champion_pool: list[str]
    champions: list[ChampionAggregate] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return sum(c.games for c in self.champions)

    @property
    def total_wins(self) -> int:
        return sum(c.wins for c in self.champions)

    @property
    def win_rate(self) -> int:
        if self.total_games == 0:
            return 0
        return round_half_up(self.total_wins / self.total_games * 100)

    def to_dict(self) -> dict:
        return {
            'player': {
                'id': self.player_id,
                'name': self.player_name,
                'role': self.role,
            },
            'totalGames': self.total_games,
            'totalWins': self.total_wins,
            'winRate': self.win_rate,
            'champions': [c.to_dict(in_pool=c.champion in self.champion_pool) for c in self.champions],
        }


@dataclass
class MatchPage:
    """A page of practice-match history."""
    matches: list["PracticeMatchView"] = field(default_factory=list)
    total: int = 0
    limit: int = 20
    offset: int = 0

    def to_dict(self) -> dict:
        return {
            'matches': [m.to_dict() for m in self.matches],
            'total': self.total,
            'limit': self.limit,
            'offset': self.offset,
        }


@dataclass
class PracticeMatchView:
    """A stored practice match with its roster participants resolved."""
    match: PracticeMatch
    roster_participants: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = self.match.to_dict()
        data['rosterParticipants'] = list(self.roster_participants)
        return data
