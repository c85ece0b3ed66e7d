from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from gitroast.github.github_client import GithubClient
from gitroast.github.models import Repository

PROFILE_JSON: Dict[str, Any] = {
    "login": "torvalds",
    "id": 1024025,
    "avatar_url": "https://avatars.githubusercontent.com/u/1024025?v=4",
    "html_url": "https://github.com/torvalds",
    "name": "Linus Torvalds",
    "company": "Linux Foundation",
    "blog": "",
    "location": "Portland, OR",
    "email": None,
    "bio": None,
    "public_repos": 7,
    "public_gists": 0,
    "followers": 230000,
    "following": 0,
    "created_at": "2011-09-03T15:26:22Z",
    "site_admin": False,
}

REPOS_JSON: List[Dict[str, Any]] = [
    {"id": 1, "name": "linux", "full_name": "torvalds/linux", "language": "C", "stargazers_count": 180000,
     "forks_count": 55000, "fork": False, "updated_at": "2026-10-18T10:00:00Z", "description": "Linux kernel source tree"},
    {"id": 2, "name": "subsurface", "full_name": "torvalds/subsurface", "language": "C++", "stargazers_count": 2500,
     "forks_count": 600, "fork": True, "updated_at": "2026-09-01T10:00:00Z", "description": None},
    {"id": 3, "name": "test-tlb", "full_name": "torvalds/test-tlb", "language": "C", "stargazers_count": 800,
     "forks_count": 100, "fork": False, "updated_at": "2026-01-01T10:00:00Z", "description": "Stupid memory test"},
    {"id": 4, "name": "notes", "full_name": "torvalds/notes", "language": None, "stargazers_count": 1,
     "forks_count": 0, "fork": False, "updated_at": "2025-01-01T10:00:00Z", "description": None},
]

ROAST_JSON = {
    "roast": "First paragraph of pure hate.\n\nSecond paragraph, even worse.",
    "score": 87,
    "titles": ["Kernel Goblin", "Email Patch Caveman", "Tab Zealot"],
}


class StubChat:
    """Stands in for ChatClient: returns canned text or raises."""

    def __init__(self, text: Optional[str] = None, exc: Optional[BaseException] = None):
        self.text = text
        self.exc = exc
        self.prompts: List[str] = []

    async def structured_chat(self, message: str, schema: Dict[str, Any], schema_name: str = "result") -> str:
        self.prompts.append(message)
        if self.exc is not None:
            raise self.exc
        return self.text


def github_routes(
    profile: Any = None,
    repos: Any = None,
    events: Any = None,
    *,
    profile_status: int = 200,
    repos_status: int = 200,
    events_status: int = 200,
    seen: Optional[List[httpx.Request]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """MockTransport handler serving one user's /users endpoints."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        parts = request.url.path.strip("/").split("/")
        if len(parts) == 2:
            return httpx.Response(profile_status, json=profile if profile is not None else PROFILE_JSON)
        if parts[-1] == "repos":
            return httpx.Response(repos_status, json=repos if repos is not None else REPOS_JSON)
        if parts[-1] == "events":
            return httpx.Response(events_status, json=events if events is not None else [])
        return httpx.Response(404, json={"message": "Not Found"})

    return handler


@pytest.fixture
def make_github() -> Callable[..., GithubClient]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> GithubClient:
        return GithubClient({"base_url": "https://api.github.test"}, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def repositories() -> List[Repository]:
    return [Repository.from_api(item) for item in REPOS_JSON]


@pytest.fixture
def roast_text() -> str:
    return json.dumps(ROAST_JSON)


@pytest.fixture
def github_api(make_github) -> Callable[..., GithubClient]:
    """GithubClient served by `github_routes(**overrides)`."""

    def factory(**overrides: Any) -> GithubClient:
        return make_github(github_routes(**overrides))

    return factory


@pytest.fixture
def make_chat() -> Callable[..., StubChat]:
    def factory(text: Optional[str] = None, exc: Optional[BaseException] = None) -> StubChat:
        return StubChat(text=text, exc=exc)

    return factory


@pytest.fixture
def profile_json() -> Dict[str, Any]:
    return dict(PROFILE_JSON)
