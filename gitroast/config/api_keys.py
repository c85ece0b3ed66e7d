"""
Centralized API key lookup.

No real key ever has a default here; keys come from the environment or from
a gitignored `.env.local` / `.env.<env>.local` file.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable


_ALIASES: Dict[str, Iterable[str]] = {
    # Legacy names kept for backward compatibility.
    "OPENROUTER_API_KEY": ("OPENROUTER_KEY", "API_KEY"),
}


def _lookup(name: str) -> str:
    value = os.getenv(name) or ""
    if value:
        return value
    for alias in _ALIASES.get(name, ()):
        value = os.getenv(alias) or ""
        if value:
            return value
    return ""


def get_api_key(name: str, default: str = "") -> str:
    return _lookup(name) or default


def get_openrouter_api_key() -> str:
    return get_api_key("OPENROUTER_API_KEY")
