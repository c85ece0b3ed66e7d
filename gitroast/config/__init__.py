import os
from typing import Any

from gitroast.config.api_keys import get_openrouter_api_key
from gitroast.config.env_loader import load_environment_variables
from gitroast.config.llm_models import get_model

DEFAULT_GITHUB_API_BASE_URL = "https://api.github.com"
DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_HISTORY_LIMIT = 10
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0


def _default_history_path() -> str:
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
    return os.path.join(project_root, ".local", "gitroast.sqlite3")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return float(default)
    try:
        return float(raw)
    except ValueError:
        return float(default)


def load_config(load_env: bool = True) -> dict[str, Any]:
    """
    Build the application configuration from environment variables.

    Raises:
        ValueError: when a required variable (the generative backend key) is missing.
    """
    if load_env:
        load_environment_variables()

    timeout = _float_env("GITROAST_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)
    config = {
        "github": {
            "base_url": os.getenv("GITHUB_API_BASE_URL", DEFAULT_GITHUB_API_BASE_URL),
            "timeout": timeout,
        },
        "openrouter": {
            "api_key": get_openrouter_api_key(),
            "base_url": os.getenv("OPENROUTER_BASE_URL", DEFAULT_OPENROUTER_BASE_URL),
            "model": get_model(),
            "timeout": timeout,
        },
        "history": {
            "path": os.getenv("GITROAST_HISTORY_PATH") or _default_history_path(),
            "limit": max(1, _int_env("GITROAST_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)),
        },
    }

    missing_configs = []
    if not config["openrouter"]["api_key"]:
        missing_configs.append("OPENROUTER_API_KEY")

    if missing_configs:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing_configs)}. "
            f"Set them in the environment or in a .env.local file."
        )

    return config


__all__ = ["load_config", "get_model", "get_openrouter_api_key", "load_environment_variables"]
