"""
GitHub data access for the roast pipeline.
"""

from .activity import summarize_events
from .github_client import GithubClient
from .languages import aggregate_languages
from .models import ActivitySummary, LanguageHistogram, Profile, Repository

__all__ = [
    "GithubClient",
    "summarize_events",
    "aggregate_languages",
    "ActivitySummary",
    "LanguageHistogram",
    "Profile",
    "Repository",
]
