"""Query handlers."""

from src.application.queries.handlers.list_sessions_handler import (
    ListUserSessionsHandler,
    SessionListItem,
    SessionListResult,
)

__all__ = [
    "ListUserSessionsHandler",
    "SessionListItem",
    "SessionListResult",
]
