"""
Environment Variable Loader

Loads .env files into the process environment with python-dotenv.
"""

from __future__ import annotations

import os
import logging
from typing import List, Set
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _get_runtime_env() -> str:
    """
    Determine runtime environment name used for env file selection.

    Priority:
    - GITROAST_ENV
    - development
    """
    raw = os.environ.get("GITROAST_ENV") or "development"
    return str(raw).strip().lower() or "development"


def _candidate_env_files(project_root: str, runtime_env: str) -> list[str]:
    """
    Build env file candidate list ordered from highest to lowest precedence.

    load_dotenv(..., override=False) is used, so earlier files win and the
    real process environment always wins over any file.
    """
    names: List[str] = [
        f".env.{runtime_env}.local",
        ".env.local",
        f".env.{runtime_env}",
        ".env",
    ]

    candidates: List[str] = []
    for filename in names:
        candidates.append(os.path.join(project_root, filename))
        candidates.append(os.path.join(os.getcwd(), filename))
    seen: Set[str] = set()
    ordered: List[str] = []
    for p in candidates:
        p = os.path.abspath(p)
        if p in seen:
            continue
        seen.add(p)
        ordered.append(p)
    return ordered


def load_environment_variables() -> bool:
    """
    Load every existing .env candidate file (see `_candidate_env_files`).

    Returns:
        bool: whether any .env file was loaded
    """
    loaded = False
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '../..'))
    runtime_env = _get_runtime_env()
    logger.debug("Resolved runtime env: %s", runtime_env)

    for path in _candidate_env_files(project_root, runtime_env):
        if not os.path.exists(path):
            continue
        load_dotenv(dotenv_path=path, override=False)
        logger.info("Loaded env file: %s", path)
        loaded = True
    return loaded
