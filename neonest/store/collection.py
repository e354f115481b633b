"""JSON list collections kept under a single record store key."""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from neonest.store.base import LocalRecordStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonCollection(Generic[ModelT]):
    """Reads and writes a list of pydantic models as one JSON array.

    A payload that is not valid JSON, or does not match the model schema, is
    read as an empty list. Store failures (StorageError) are not caught.
    """

    def __init__(self, store: LocalRecordStore, key: str, model: type[ModelT]):
        self.store = store
        self.key = key
        self._adapter = TypeAdapter(list[model])

    async def load(self) -> list[ModelT]:
        raw = await self.store.get(self.key)
        if raw is None:
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Discarding unreadable payload under %s (%d errors)", self.key, e.error_count()
            )
            return []

    async def save(self, items: list[ModelT]) -> None:
        # An empty collection is stored as an absent key
        if not items:
            await self.store.remove(self.key)
            return
        await self.store.set(self.key, self._adapter.dump_json(items).decode("utf-8"))
