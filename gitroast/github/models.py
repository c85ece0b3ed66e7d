"""Typed records for the GitHub REST payloads the roast pipeline consumes."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# language name -> number of repositories whose primary language it is
LanguageHistogram = Dict[str, int]


def parse_github_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    parsed = isoparse(str(value).strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_github_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class Profile:
    login: str
    id: int
    avatar_url: str
    html_url: str
    public_repos: int = 0
    public_gists: int = 0
    followers: int = 0
    following: int = 0
    created_at: Optional[datetime] = None
    name: Optional[str] = None
    company: Optional[str] = None
    blog: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            login=data["login"],
            id=int(data.get("id") or 0),
            avatar_url=data.get("avatar_url") or "",
            html_url=data.get("html_url") or "",
            public_repos=int(data.get("public_repos") or 0),
            public_gists=int(data.get("public_gists") or 0),
            followers=int(data.get("followers") or 0),
            following=int(data.get("following") or 0),
            created_at=parse_github_datetime(data.get("created_at")),
            name=data.get("name"),
            company=data.get("company"),
            blog=data.get("blog"),
            location=data.get("location"),
            email=data.get("email"),
            bio=data.get("bio"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "login": self.login,
            "id": self.id,
            "avatar_url": self.avatar_url,
            "html_url": self.html_url,
            "name": self.name,
            "company": self.company,
            "blog": self.blog,
            "location": self.location,
            "email": self.email,
            "bio": self.bio,
            "public_repos": self.public_repos,
            "public_gists": self.public_gists,
            "followers": self.followers,
            "following": self.following,
            "created_at": format_github_datetime(self.created_at),
        }


@dataclass(frozen=True)
class Repository:
    id: int
    name: str
    full_name: str = ""
    html_url: str = ""
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    fork: bool = False
    updated_at: Optional[datetime] = None
    topics: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Repository":
        return cls(
            id=int(data.get("id") or 0),
            name=data["name"],
            full_name=data.get("full_name") or "",
            html_url=data.get("html_url") or "",
            description=data.get("description"),
            language=data.get("language") or None,
            stargazers_count=int(data.get("stargazers_count") or 0),
            forks_count=int(data.get("forks_count") or 0),
            fork=bool(data.get("fork")),
            updated_at=parse_github_datetime(data.get("updated_at")),
            topics=list(data.get("topics") or []),
        )

    def to_prompt_dict(self) -> Dict[str, Any]:
        """Trimmed projection embedded in the roast prompt."""
        return {
            "name": self.name,
            "desc": self.description,
            "lang": self.language,
            "stars": self.stargazers_count,
            "forks": self.forks_count,
            "updated": format_github_datetime(self.updated_at),
            "isFork": self.fork,
        }


@dataclass(frozen=True)
class ActivitySummary:
    """Fixed-shape fold of the recent public event stream; never partially filled."""

    total_events: int = 0
    push_events: int = 0
    pr_opened: int = 0
    pr_merged: int = 0
    issues_opened: int = 0
    last_active: datetime = EPOCH

    @classmethod
    def zeroed(cls) -> "ActivitySummary":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalEvents": self.total_events,
            "pushEvents": self.push_events,
            "prOpened": self.pr_opened,
            "prMerged": self.pr_merged,
            "issuesOpened": self.issues_opened,
            "lastActive": format_github_datetime(self.last_active),
        }
