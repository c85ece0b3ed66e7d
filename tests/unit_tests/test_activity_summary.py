from __future__ import annotations

from datetime import datetime, timezone

from gitroast.github.activity import summarize_events
from gitroast.github.models import EPOCH, ActivitySummary


def _event(event_type: str, created_at: str = "2026-10-01T00:00:00Z", **payload):
    return {"type": event_type, "created_at": created_at, "payload": payload}


def test_empty_stream_is_zeroed_default() -> None:
    summary = summarize_events([])
    assert summary == ActivitySummary.zeroed()
    assert summary.total_events == 0
    assert summary.last_active == EPOCH
    assert summary.to_dict()["lastActive"] == "1970-01-01T00:00:00Z"


def test_classifies_events() -> None:
    events = [
        _event("PushEvent", "2026-10-18T12:30:00Z"),
        _event("PushEvent"),
        _event("PullRequestEvent", action="opened", pull_request={"merged": False}),
        _event("PullRequestEvent", action="closed", pull_request={"merged": True}),
        _event("PullRequestEvent", action="closed", pull_request={"merged": False}),
        _event("IssuesEvent", action="opened"),
        _event("IssuesEvent", action="closed"),
        _event("WatchEvent", action="started"),
        _event("CreateEvent"),
    ]
    summary = summarize_events(events)
    assert summary.total_events == len(events)
    assert summary.push_events == 2
    assert summary.pr_opened == 1
    assert summary.pr_merged == 1
    assert summary.issues_opened == 1
    assert summary.last_active == datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc)


def test_counters_non_negative_and_total_matches_length() -> None:
    kinds = ["PushEvent", "IssuesEvent", "ForkEvent", "PullRequestEvent", "DeleteEvent"]
    for n in range(0, 50, 7):
        events = [_event(kinds[i % len(kinds)], action="opened") for i in range(n)]
        summary = summarize_events(events)
        assert summary.total_events == n
        for value in (summary.push_events, summary.pr_opened, summary.pr_merged, summary.issues_opened):
            assert isinstance(value, int)
            assert value >= 0


def test_missing_payload_is_tolerated() -> None:
    summary = summarize_events([{"type": "PullRequestEvent", "created_at": "2026-10-01T00:00:00Z"}])
    assert summary.total_events == 1
    assert summary.pr_opened == 0
    assert summary.pr_merged == 0
