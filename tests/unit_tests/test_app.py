from __future__ import annotations

import asyncio

from gitroast.app import create_pipeline
from gitroast.github.github_client import GithubClient
from gitroast.history import SqliteKeyValueStore
from gitroast.pipeline import Idle
from gitroast.roast.ai_client import ChatClient


def test_create_pipeline_wires_collaborators(tmp_path) -> None:
    config = {
        "github": {"base_url": "https://api.github.test", "timeout": 5.0},
        "openrouter": {"api_key": "sk-test", "base_url": "https://openrouter.test/api/v1", "model": "m", "timeout": 5.0},
        "history": {"path": str(tmp_path / "history.sqlite3"), "limit": 3},
    }
    pipeline = create_pipeline(config)
    try:
        assert isinstance(pipeline.state, Idle)
        assert isinstance(pipeline.github, GithubClient)
        assert isinstance(pipeline.roaster.ai, ChatClient)
        assert pipeline.roaster.ai.model == "m"
        assert isinstance(pipeline.history.store, SqliteKeyValueStore)
        assert pipeline.history.limit == 3
        assert pipeline.read_history() == []
    finally:
        asyncio.run(pipeline.close())
