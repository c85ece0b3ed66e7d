"""
Application wiring: builds a ready-to-use RoastPipeline from configuration.

The presentation layer owns the pipeline, subscribes to `on_state` /
`on_history_changed` and renders whatever it receives.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from gitroast.config import load_config
from gitroast.github.github_client import GithubClient
from gitroast.history import HistoryStore, SqliteKeyValueStore
from gitroast.pipeline import HistoryListener, RoastPipeline, StateListener, WorkflowState
from gitroast.roast.ai_client import ChatClient
from gitroast.roast.roast_service import RoastService


def create_pipeline(
    config: Optional[Dict[str, Any]] = None,
    on_state: Optional[StateListener] = None,
    on_history_changed: Optional[HistoryListener] = None,
) -> RoastPipeline:
    config = config or load_config()
    history = HistoryStore(
        SqliteKeyValueStore(config["history"]["path"]),
        limit=config["history"]["limit"],
    )
    return RoastPipeline(
        github=GithubClient(config["github"]),
        roaster=RoastService(ChatClient(config["openrouter"])),
        history=history,
        on_state=on_state,
        on_history_changed=on_history_changed,
    )


async def roast(login: str, config: Optional[Dict[str, Any]] = None) -> WorkflowState:
    """One-shot helper: build a pipeline, roast `login`, release the HTTP clients."""
    pipeline = create_pipeline(config)
    try:
        return await pipeline.run(login)
    finally:
        await pipeline.close()
