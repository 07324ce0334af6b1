"""Participant entities: one player's line in a provider match."""
from dataclasses import dataclass


@dataclass(frozen=True)
class ParticipantSnapshot:
    """A player's stat line frozen into a stored practice match."""

    # Identity
    account_handle: str
    display_name: str

    # Match context
    champion: str
    team_id: int
    win: bool = False

    # Performance
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    cs: int = 0
    damage: int = 0
    damage_taken: int = 0

    def to_dict(self) -> dict:
        """Convert snapshot to the JSON shape stored with the match."""
        return {
            'puuid': self.account_handle,
            'summonerName': self.display_name,
            'champion': self.champion,
            'kills': self.kills,
            'deaths': self.deaths,
            'assists': self.assists,
            'cs': self.cs,
            'damage': self.damage,
            'damageTaken': self.damage_taken,
            'win': self.win,
            'teamId': self.team_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ParticipantSnapshot':
        return cls(
            account_handle=data.get('puuid', ''),
            display_name=data.get('summonerName', ''),
            champion=data.get('champion', ''),
            team_id=int(data.get('teamId', 0)),
            win=bool(data.get('win', False)),
            kills=int(data.get('kills', 0)),
            deaths=int(data.get('deaths', 0)),
            assists=int(data.get('assists', 0)),
            cs=int(data.get('cs', 0)),
            damage=int(data.get('damage', 0)),
            damage_taken=int(data.get('damageTaken', 0)),
        )
