"""SQL-backed record store: one row per key in the record_store table."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from neonest.core.exceptions import StorageError
from neonest.models.record import StoredRecord

logger = logging.getLogger(__name__)


def upsert_statement(key: str, value: str) -> Insert:
    """INSERT ... ON CONFLICT (key) DO UPDATE, so concurrent first writes cannot collide."""
    stmt = insert(StoredRecord).values(key=key, value=value, updated_at=datetime.now(timezone.utc))
    return stmt.on_conflict_do_update(
        index_elements=[StoredRecord.key],
        set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
    )


class DatabaseRecordStore:
    """LocalRecordStore over SQLAlchemy async sessions.

    Each call runs in its own session and transaction. Driver failures are
    re-raised as StorageError with the original exception chained.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_maker() as session:
                result = await session.execute(
                    select(StoredRecord.value).where(StoredRecord.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read {key!r}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with self._session_maker() as session, session.begin():
                await session.execute(upsert_statement(key, value))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write {key!r}") from e
        logger.debug("Stored %d bytes under %s", len(value), key)

    async def remove(self, key: str) -> None:
        try:
            async with self._session_maker() as session, session.begin():
                await session.execute(delete(StoredRecord).where(StoredRecord.key == key))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to remove {key!r}") from e

    async def count(self) -> int:
        """Number of stored keys (used by maintenance tooling)."""
        try:
            async with self._session_maker() as session:
                result = await session.execute(select(func.count()).select_from(StoredRecord))
                return int(result.scalar() or 0)
        except SQLAlchemyError as e:
            raise StorageError("Failed to count stored keys") from e
