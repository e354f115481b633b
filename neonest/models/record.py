"""StoredRecord model: one row per record store key."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from neonest.db.base import Base


class StoredRecord(Base):
    """A serialized collection kept under a single key.

    value holds the JSON payload exactly as the record store received it;
    the store never parses it.
    """

    __tablename__ = "record_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
