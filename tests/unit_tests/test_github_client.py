from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

import httpx
import pytest

from gitroast.errors import NotFoundError, UpstreamError
from gitroast.github.models import ActivitySummary


def test_profile_parses_fields(github_api) -> None:
    client = github_api()
    profile = asyncio.run(client.profile("torvalds"))
    assert profile.login == "torvalds"
    assert profile.public_repos == 7
    assert profile.followers == 230000
    assert profile.created_at is not None and profile.created_at.year == 2011
    assert profile.to_dict()["created_at"] == "2011-09-03T15:26:22Z"


def test_profile_404_raises_not_found(github_api) -> None:
    client = github_api(profile={"message": "Not Found"}, profile_status=404)
    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(client.profile("ghost-user-9999"))
    assert "not found" in excinfo.value.message.lower()
    assert "ghost-user-9999" in excinfo.value.message
    assert "404" not in excinfo.value.message


def test_profile_other_status_raises_upstream_with_status_text(github_api) -> None:
    client = github_api(profile={"message": "boom"}, profile_status=503)
    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.profile("torvalds"))
    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "GitHub API Error: Service Unavailable"


def test_transport_error_raises_upstream(make_github) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_github(handler)
    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.profile("torvalds"))
    assert excinfo.value.status_code is None


def test_repositories_requests_recent_page(github_api) -> None:
    seen = []
    client = github_api(seen=seen)
    repos = asyncio.run(client.repositories("torvalds"))
    assert [r.name for r in repos] == ["linux", "subsurface", "test-tlb", "notes"]
    assert repos[1].fork is True
    assert repos[3].language is None
    request = seen[-1]
    assert request.url.path == "/users/torvalds/repos"
    assert request.url.params["sort"] == "updated"
    assert request.url.params["per_page"] == "20"


def test_repositories_may_be_empty(github_api) -> None:
    client = github_api(repos=[])
    assert asyncio.run(client.repositories("torvalds")) == []


def test_repositories_failure_raises_upstream(github_api) -> None:
    client = github_api(repos={"message": "rate limited"}, repos_status=403)
    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.repositories("torvalds"))
    assert excinfo.value.status_code == 403
    assert "Forbidden" in excinfo.value.message


def test_activity_summarizes_events(github_api) -> None:
    seen = []
    events = [
        {"type": "PushEvent", "created_at": "2026-10-18T00:00:00Z", "payload": {}},
        {"type": "IssuesEvent", "created_at": "2026-10-17T00:00:00Z", "payload": {"action": "opened"}},
    ]
    client = github_api(events=events, seen=seen)
    summary = asyncio.run(client.activity("torvalds"))
    assert summary.total_events == 2
    assert summary.push_events == 1
    assert summary.issues_opened == 1
    assert seen[-1].url.params["per_page"] == "50"


def test_activity_non_success_returns_zeroed_summary(github_api, caplog) -> None:
    client = github_api(events={"message": "Forbidden"}, events_status=403)
    with caplog.at_level(logging.WARNING):
        summary = asyncio.run(client.activity("torvalds"))
    assert summary == ActivitySummary.zeroed()
    assert any("Could not fetch activity events" in r.getMessage() for r in caplog.records)


def test_activity_transport_error_returns_zeroed_summary(make_github) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_github(handler)
    assert asyncio.run(client.activity("torvalds")) == ActivitySummary.zeroed()


def test_activity_malformed_body_returns_zeroed_summary(make_github) -> None:
    client = make_github(lambda request: httpx.Response(200, content=b"<html>nope</html>"))
    assert asyncio.run(client.activity("torvalds")) == ActivitySummary.zeroed()


def test_repositories_capped_at_one_page(github_api) -> None:
    repos = [{"id": i, "name": f"repo{i}", "language": "Go", "updated_at": "2026-10-01T00:00:00Z"} for i in range(25)]
    client = github_api(repos=repos)
    result = asyncio.run(client.repositories("torvalds"))
    assert len(result) == 20
    assert [r.name for r in result][:2] == ["repo0", "repo1"]


def test_activity_counts_only_first_fifty_events(github_api) -> None:
    events = [
        {"type": "PushEvent", "created_at": f"2026-10-{18 - i // 5:02d}T00:00:00Z", "payload": {}}
        for i in range(60)
    ]
    client = github_api(events=events)
    summary = asyncio.run(client.activity("torvalds"))
    assert summary.total_events == 50
    assert summary.push_events == 50
    assert summary.last_active == datetime(2026, 10, 18, tzinfo=timezone.utc)
