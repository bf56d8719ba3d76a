"""Queries - Read operations that never change state."""

from src.application.queries.session_queries import ListUserSessions

__all__ = ["ListUserSessions"]
