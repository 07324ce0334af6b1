"""Riot Games Match-V5 API client."""
import logging
from typing import Optional, Any, List, Union

import httpx

from config import settings
from domain.enums import Region, FetchErrorKind
from domain.exceptions import (
    AuthFailure,
    MatchSourceError,
    NotFoundError,
    RateLimitedError,
    TransientError,
    UnknownSourceError,
)
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

_ERRORS_BY_KIND = {
    FetchErrorKind.NOT_FOUND: NotFoundError,
    FetchErrorKind.AUTH_FAILURE: AuthFailure,
    FetchErrorKind.TRANSIENT: TransientError,
    FetchErrorKind.UNKNOWN: UnknownSourceError,
}


class RiotAPIClient:
    """Asynchronous Riot API client.

    One HTTP round-trip per call. Non-200 responses and transport
    failures raise a classified ``MatchSourceError``; retry policy
    belongs to the caller.
    """

    def __init__(
        self,
        api_key: str,
        *,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key  = api_key
        self.session: Optional[httpx.AsyncClient] = None
        self.timeout  = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._transport = transport

        self.rate_limiter = rate_limiter or RateLimiter(
            requests_per_1_sec=settings.RATE_LIMIT_PER_1_SEC,
            requests_per_2_min=settings.RATE_LIMIT_PER_2_MIN,
        )

    async def __aenter__(self):
        kwargs: dict[str, Any] = {
            "timeout": self.timeout,
            "headers": {"X-Riot-Token": self.api_key},
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        self.session = httpx.AsyncClient(**kwargs)
        return self

    async def __aexit__(self, *_):
        if self.session:
            await self.session.aclose()
            self.session = None

    def _get_regional_url(self, region: Region) -> str:
        return f"https://{region.regional_route}.api.riotgames.com"

    async def _make_request(
        self, url: str, params: Optional[dict] = None
    ) -> Union[dict, list]:
        if self.session is None:
            raise RuntimeError("RiotAPIClient must be used as an async context manager")

        await self.rate_limiter.acquire()

        try:
            response = await self.session.get(url, params=params)
        except httpx.TimeoutException as exc:
            raise TransientError(f"Timeout calling {url}: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransientError(f"Network error calling {url}: {exc}") from exc

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as exc:
                raise UnknownSourceError(f"Malformed body from {url}", status_code=200) from exc

        raise self._classify(response, url)

    @staticmethod
    def _classify(response: httpx.Response, url: str) -> MatchSourceError:
        status = response.status_code
        kind = FetchErrorKind.from_status(status)

        if kind is FetchErrorKind.RATE_LIMITED:
            retry_after: Optional[float] = None
            try:
                retry_after = float(response.headers.get("Retry-After", ""))
            except ValueError:
                pass
            logger.warning(f"429 rate-limited retry_after={retry_after}")
            return RateLimitedError(f"Riot API: 429 for {url}", retry_after=retry_after)

        if kind is FetchErrorKind.AUTH_FAILURE:
            logger.error(f"{status} Riot API key expired or invalid")
        elif kind is FetchErrorKind.UNKNOWN:
            logger.warning(f"HTTP {status} for {url}")

        return _ERRORS_BY_KIND[kind](f"Riot API: {status} for {url}", status_code=status)

    # ── Match API ──────────────────────────────────────────────────────

    async def get_match_ids_by_puuid(
        self,
        region: Region,
        puuid: str,
        start_time: Optional[int] = None,
        start: int = 0,
        count: int = 20,
    ) -> List[str]:
        base = self._get_regional_url(region)
        params: dict[str, Any] = {"start": start, "count": min(count, 100)}
        if start_time:
            params["startTime"] = start_time
        result = await self._make_request(
            f"{base}/lol/match/v5/matches/by-puuid/{puuid}/ids", params
        )
        if not isinstance(result, list):
            raise UnknownSourceError(f"Expected a list of match ids for {puuid}")
        return [str(m) for m in result]

    async def get_match_by_id(self, region: Region, match_id: str) -> dict:
        base = self._get_regional_url(region)
        result = await self._make_request(f"{base}/lol/match/v5/matches/{match_id}")
        if not isinstance(result, dict):
            raise UnknownSourceError(f"Expected a match object for {match_id}")
        return result
