"""
LLM model selection helpers.

The generative backend is reached through OpenRouter; the model is picked from
env vars so deployments can switch models without code changes.

Priority (highest -> lowest):
1) Caller passes `model=...` explicitly
2) Per-task override: `GITROAST_LLM_TASK_MODEL_<TASK_KEY>`
3) Global: `GITROAST_LLM_MODEL`
4) Legacy global: `OPENROUTER_MODEL`
5) Built-in default
"""

from __future__ import annotations

import os
import re
from typing import Optional


DEFAULT_MODEL = "google/gemini-3-flash-preview"
ROAST_TASK = "github_roast"


def _task_key(task: str) -> str:
    raw = str(task or "").strip()
    if not raw:
        return ""
    return re.sub(r"[^A-Za-z0-9]+", "_", raw).strip("_").upper()


def task_override_env(task: str) -> str:
    """
    Env var name used to override a single task's model.

    Example:
      task="github_roast" -> GITROAST_LLM_TASK_MODEL_GITHUB_ROAST
    """

    return f"GITROAST_LLM_TASK_MODEL_{_task_key(task)}"


def _first_set(*values: Optional[str]) -> str:
    for v in values:
        if v and str(v).strip():
            return str(v).strip()
    return ""


def get_model(model: Optional[str] = None, *, task: Optional[str] = ROAST_TASK) -> str:
    return _first_set(
        model,
        os.getenv(task_override_env(task)) if task else None,
        os.getenv("GITROAST_LLM_MODEL"),
        os.getenv("OPENROUTER_MODEL"),
        DEFAULT_MODEL,
    )
