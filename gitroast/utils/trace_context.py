"""
Run tracing context

Every pipeline run gets a short run id stored in a ContextVar, so log lines
emitted by the fetchers and the critique generator during one run can be
correlated. ContextVar values follow asyncio tasks automatically.
"""

import uuid
from contextvars import ContextVar, Token
from typing import Optional

trace_id_context: ContextVar[Optional[str]] = ContextVar('trace_id', default=None)


class TraceContext:
    """Generate, set and read the current run id."""

    @staticmethod
    def generate_trace_id() -> str:
        return str(uuid.uuid4())[:8]  # first 8 chars are enough to tell runs apart

    @staticmethod
    def set_trace_id(trace_id: str) -> Token:
        """
        Set the run id for the current context.

        Returns:
            The ContextVar token, to be handed back to `reset_trace_id`.
        """
        return trace_id_context.set(trace_id)

    @staticmethod
    def get_trace_id() -> Optional[str]:
        return trace_id_context.get()

    @staticmethod
    def reset_trace_id(token: Token) -> None:
        trace_id_context.reset(token)
