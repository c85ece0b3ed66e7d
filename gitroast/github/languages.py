from __future__ import annotations

from typing import Iterable

from .models import LanguageHistogram, Repository


def aggregate_languages(repositories: Iterable[Repository]) -> LanguageHistogram:
    """Count repositories per primary language, skipping repositories without one."""
    histogram: LanguageHistogram = {}
    for repo in repositories:
        if repo.language:
            histogram[repo.language] = histogram.get(repo.language, 0) + 1
    return histogram
