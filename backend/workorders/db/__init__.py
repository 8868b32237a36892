"""Database package with engine and session management."""

from workorders.db.session import async_session_maker, dispose_engine, engine, get_session

__all__ = [
    "async_session_maker",
    "dispose_engine",
    "engine",
    "get_session",
]
