"""
League API Adapter

aiohttp client for a league backend that exposes teams, contestants and
rosters over REST. Implements the three collaborator ports the draft engine
consumes.

Failures are translated into draft errors: timeouts, connection problems and
5xx responses become TransientStorageError (retried by the application
service), 404 becomes NotFoundError and any other 4xx a ValidationError.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ..application.interfaces import IContestantDirectory, ITeamDirectory, ITeamRosterStore
from ..domain.exceptions import NotFoundError, TransientStorageError, ValidationError

logger = logging.getLogger(__name__)

JsonDict = Dict[str, Any]

DEFAULT_TIMEOUT = 10  # seconds


class LeagueAPIClient(ITeamDirectory, IContestantDirectory, ITeamRosterStore):
    """REST client for the league backend"""

    def __init__(self, base_url: str, api_key: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        """Get current aiohttp session."""
        return self._session

    async def initialize(self) -> None:
        """Initialize API client"""
        if self._session and not self._session.closed:
            return
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else None
        self._session = aiohttp.ClientSession(
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )
        logger.debug(f"{self.__class__.__name__} session initialized for {self.base_url}")

    async def close(self) -> None:
        """Close API client"""
        if self._session:
            try:
                if not self._session.closed:
                    await self._session.close()
            except Exception as e:
                logger.error(f"Error closing {self.__class__.__name__} session: {e}")
            finally:
                self._session = None

    async def __aenter__(self) -> "LeagueAPIClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # ITeamDirectory

    async def list_teams(self, league_id: str) -> List[str]:
        path = f"/leagues/{league_id}/teams"
        data = self._expect_list(await self._make_request("GET", path), path)
        return [str(team["id"]) for team in data]

    # IContestantDirectory

    async def belongs_to_league(self, contestant_id: str, league_id: str) -> bool:
        data = await self._make_request(
            "GET", f"/contestants/{contestant_id}", resource="Contestant", resource_id=contestant_id
        )
        if not isinstance(data, dict):
            raise NotFoundError("Contestant", contestant_id)
        return str(data.get("leagueId")) == league_id

    async def list_contestants(self, league_id: str) -> List[str]:
        path = f"/leagues/{league_id}/contestants"
        data = self._expect_list(await self._make_request("GET", path), path)
        return [str(contestant["id"]) for contestant in data]

    # ITeamRosterStore

    async def append_contestant(self, team_id: str, contestant_id: str) -> None:
        await self._make_request(
            "POST",
            f"/teams/{team_id}/roster",
            payload={"contestantId": contestant_id},
            resource="Team",
            resource_id=team_id,
        )

    async def reset_roster(self, team_id: str) -> None:
        await self._make_request("DELETE", f"/teams/{team_id}/roster", resource="Team", resource_id=team_id)

    async def _make_request(
        self,
        method: str,
        path: str,
        payload: Optional[JsonDict] = None,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
    ) -> Any:
        """Make HTTP request

        Args:
            method: HTTP method
            path: Path below base_url
            payload: JSON body
            resource: Name used in NotFoundError messages
            resource_id: Id used in NotFoundError messages

        Returns:
            Any: Decoded JSON body for GET requests, otherwise None

        Raises:
            TransientStorageError: On timeouts, connection errors and 5xx
            NotFoundError: On 404
            ValidationError: On any other 4xx
        """
        await self.initialize()
        url = f"{self.base_url}{path}"

        try:
            async with self._session.request(method, url, json=payload) as response:
                if response.status == 404:
                    raise NotFoundError(resource, resource_id)
                if response.status >= 500:
                    raise TransientStorageError(f"League API {method} {path} failed: {response.status}")
                if response.status >= 400:
                    raise ValidationError(f"League API rejected {method} {path}: {response.status}")
                if method != "GET" or response.status == 204:
                    return None
                return await response.json()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"League API {method} {path} failed: {e!r}")
            raise TransientStorageError(f"League API {method} {path} unavailable") from e

    @staticmethod
    def _expect_list(data: Any, path: str) -> List[JsonDict]:
        """An empty body is an empty collection; anything else must be a list of objects"""
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(item, dict) and "id" in item for item in data):
            raise ValidationError(f"League API returned an unexpected body for {path}")
        return data
