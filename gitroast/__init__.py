"""
gitroast: fetches a GitHub profile, summarizes it and asks an LLM to roast it.

Imports are lazy so that importing the package does not pull in the HTTP and
LLM client stacks.
"""

from __future__ import annotations

from typing import Any

__version__ = "1.0.0"


def __getattr__(name: str) -> Any:
    if name == "RoastPipeline":
        from .pipeline import RoastPipeline

        return RoastPipeline
    if name == "create_pipeline":
        from .app import create_pipeline

        return create_pipeline
    if name == "load_config":
        from .config import load_config

        return load_config
    raise AttributeError(name)


__all__ = ["RoastPipeline", "create_pipeline", "load_config"]
