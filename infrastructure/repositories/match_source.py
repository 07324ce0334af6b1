"""Match source backed by the Riot Match-V5 API."""
import logging
from typing import Optional, List

from domain.entities import MatchDetail, ParticipantSnapshot
from domain.enums import Region
from domain.exceptions import UnknownSourceError
from domain.interfaces import IMatchSource
from infrastructure.api import RiotAPIClient

logger = logging.getLogger(__name__)


class RiotMatchSource(IMatchSource):
    """Lists and fetches matches through the Riot API client."""

    def __init__(self, api_client: RiotAPIClient):
        """
        Initialize match source.

        Args:
            api_client: Riot API client instance (already entered)
        """
        self.api_client = api_client

    async def list_recent_match_ids(
        self,
        account_handle: str,
        region: Region,
        count: int = 20,
        start_time: Optional[int] = None,
    ) -> List[str]:
        """Get the most recent match IDs for a PUUID."""
        return await self.api_client.get_match_ids_by_puuid(
            region=region,
            puuid=account_handle,
            start_time=start_time,
            start=0,
            count=count,
        )

    async def fetch_match_detail(self, match_id: str, region: Region) -> MatchDetail:
        """
        Get a single match by ID.

        Args:
            match_id: Match identifier (e.g. "NA1_5012345678")
            region: Region whose regional route serves the match

        Returns:
            Parsed MatchDetail

        Raises:
            MatchSourceError: classified provider failure, including
                ``UnknownSourceError`` for a body that cannot be parsed
        """
        data = await self.api_client.get_match_by_id(region, match_id)
        try:
            return parse_match_detail(data, fallback_id=match_id)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Error parsing match {match_id}: {e}")
            raise UnknownSourceError(f"Unparseable match {match_id}: {e}") from e


def parse_match_detail(data: dict, fallback_id: str = '') -> MatchDetail:
    """Parse raw API match data into a MatchDetail."""
    metadata = data.get('metadata', {})
    info = data['info']

    participants = tuple(
        _parse_participant(p_data) for p_data in info.get('participants', [])
    )

    return MatchDetail(
        match_id=metadata.get('matchId') or fallback_id,
        creation_time=int(info.get('gameCreation', 0)),
        duration_seconds=int(info.get('gameDuration', 0)),
        mode=info.get('gameMode', ''),
        participants=participants,
    )


def _parse_participant(p_data: dict) -> ParticipantSnapshot:
    """Parse raw participant data into a ParticipantSnapshot."""
    return ParticipantSnapshot(
        account_handle=p_data['puuid'],
        display_name=p_data.get('riotIdGameName') or p_data.get('summonerName', ''),
        champion=p_data.get('championName', ''),
        team_id=int(p_data.get('teamId', 0)),
        win=bool(p_data.get('win', False)),
        kills=int(p_data.get('kills', 0)),
        deaths=int(p_data.get('deaths', 0)),
        assists=int(p_data.get('assists', 0)),
        cs=int(p_data.get('totalMinionsKilled', 0)) + int(p_data.get('neutralMinionsKilled', 0)),
        damage=int(p_data.get('totalDamageDealtToChampions', 0)),
        damage_taken=int(p_data.get('totalDamageTaken', 0)),
    )
