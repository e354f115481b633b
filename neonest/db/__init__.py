"""Database package: engine, session, base."""

from neonest.db.session import async_session_maker, engine

__all__ = ["async_session_maker", "engine"]
