import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from gitroast.errors import DegradedDataWarning, NotFoundError, UpstreamError

from .activity import summarize_events
from .models import ActivitySummary, Profile, Repository

logger = logging.getLogger(__name__)

REPOS_PER_PAGE = 20
EVENTS_PER_PAGE = 50


class GithubClient:
    """GitHub REST API client (anonymous, single attempt per call)"""

    ENDPOINT = "https://api.github.com"
    API_VERSION = "2022-11-28"

    def __init__(self, options: Optional[Dict[str, Any]] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        options = options or {}
        self.client = httpx.AsyncClient(
            base_url=options.get("base_url") or self.ENDPOINT,
            timeout=options.get("timeout", 30),
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": self.API_VERSION,
            },
            transport=transport,
        )

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            return await self.client.get(path, params=params)
        except httpx.HTTPError as e:
            reason = str(e) or e.__class__.__name__
            logger.debug(f"Github request failed: {path}: {reason}")
            raise UpstreamError(f"GitHub API Error: {reason}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        status_text = response.reason_phrase or str(response.status_code)
        logger.debug(f"Github request failed: {response.request.url} -> {response.status_code} {status_text}")
        raise UpstreamError(f"GitHub API Error: {status_text}", status_code=response.status_code)

    @staticmethod
    def _json(response: httpx.Response, expected: type) -> Any:
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("GitHub API Error: malformed JSON response", status_code=response.status_code) from e
        if not isinstance(data, expected):
            raise UpstreamError("GitHub API Error: unexpected response shape", status_code=response.status_code)
        return data

    async def profile(self, login: str) -> Profile:
        """Fetch the user profile; a 404 becomes NotFoundError."""
        logger.info("Querying profile ...")
        response = await self._get(f"/users/{quote(login, safe='')}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(login)
        self._raise_for_status(response)
        data = self._json(response, dict)
        try:
            return Profile.from_api(data)
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"GitHub API Error: malformed profile ({e})") from e

    async def repositories(self, login: str) -> List[Repository]:
        """Fetch one page of the most recently updated repositories."""
        logger.info("Querying repositories ...")
        response = await self._get(
            f"/users/{quote(login, safe='')}/repos",
            params={"sort": "updated", "per_page": REPOS_PER_PAGE},
        )
        self._raise_for_status(response)
        data = self._json(response, list)
        try:
            return [Repository.from_api(item) for item in data[:REPOS_PER_PAGE]]
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"GitHub API Error: malformed repository list ({e})") from e

    async def events(self, login: str) -> List[Dict[str, Any]]:
        """Fetch the raw public event stream, newest first."""
        logger.info("Querying events ...")
        try:
            response = await self._get(f"/users/{quote(login, safe='')}/events", params={"per_page": EVENTS_PER_PAGE})
            self._raise_for_status(response)
            data = self._json(response, list)
        except UpstreamError as e:
            raise DegradedDataWarning(f"Could not fetch activity events: {e.message}") from e
        return data[:EVENTS_PER_PAGE]

    async def activity(self, login: str) -> ActivitySummary:
        """
        Summarize recent activity; never raises.

        Event visibility can be restricted independently of the account, so any
        failure here yields a zeroed summary instead of failing the roast.
        """
        try:
            events = await self.events(login)
            return summarize_events(events)
        except DegradedDataWarning as e:
            logger.warning(e.message)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Could not summarize activity events: {e}")
        return ActivitySummary.zeroed()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
