from __future__ import annotations

from typing import Any, Dict, Iterable, List

from .models import ActivitySummary, parse_github_datetime

PUSH_EVENT = "PushEvent"
PULL_REQUEST_EVENT = "PullRequestEvent"
ISSUES_EVENT = "IssuesEvent"


def summarize_events(events: Iterable[Dict[str, Any]]) -> ActivitySummary:
    """
    Fold a newest-first event list into an ActivitySummary in one pass.

    A merged pull request shows up in the events API as a "closed" action whose
    embedded pull_request has merged=true.
    """
    items: List[Dict[str, Any]] = list(events)
    if not items:
        return ActivitySummary.zeroed()

    push_events = pr_opened = pr_merged = issues_opened = 0
    for event in items:
        event_type = event.get("type")
        payload = event.get("payload") or {}
        action = payload.get("action")
        if event_type == PUSH_EVENT:
            push_events += 1
        elif event_type == PULL_REQUEST_EVENT:
            if action == "opened":
                pr_opened += 1
            elif action == "closed" and (payload.get("pull_request") or {}).get("merged"):
                pr_merged += 1
        elif event_type == ISSUES_EVENT and action == "opened":
            issues_opened += 1

    last_active = parse_github_datetime(items[0].get("created_at"))
    return ActivitySummary(
        total_events=len(items),
        push_events=push_events,
        pr_opened=pr_opened,
        pr_merged=pr_merged,
        issues_opened=issues_opened,
        last_active=last_active or ActivitySummary.zeroed().last_active,
    )
