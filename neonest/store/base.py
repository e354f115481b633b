"""Local record store contract.

The store is an asynchronous key/value interface over strings. It knows
nothing about the payloads; serialization happens in JsonCollection.
Every method may raise StorageError.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LocalRecordStore(Protocol):
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value (last writer wins)."""
        ...

    async def remove(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""
        ...
