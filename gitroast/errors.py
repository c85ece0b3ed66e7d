"""
Error kinds raised inside the roast pipeline.

Only NotFoundError and UpstreamError ever reach the pipeline caller; the other
two are absorbed by the component that raises them (activity fetcher and
critique generator) and only show up in the logs.
"""

from __future__ import annotations

from typing import Optional


class RoastError(Exception):
    """Base class; `message` is safe to show to the end user."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(RoastError):
    """The identifier does not resolve to a profile."""

    def __init__(self, login: str):
        super().__init__(f"User '{login}' not found. Are you sure they exist?")
        self.login = login


class UpstreamError(RoastError):
    """A required data source answered with a non-2xx status or not at all."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DegradedDataWarning(RoastError):
    """Optional data (the event stream) could not be fetched."""


class GenerationFailure(RoastError):
    """The generative backend failed or returned output violating the schema."""
