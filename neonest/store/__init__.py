"""Record store package: contract, adapters, key layout and JSON collections."""

from neonest.store.base import LocalRecordStore
from neonest.store.collection import JsonCollection
from neonest.store.keys import milestone_records_key, record_owner_key
from neonest.store.memory import InMemoryRecordStore

__all__ = [
    "InMemoryRecordStore",
    "JsonCollection",
    "LocalRecordStore",
    "milestone_records_key",
    "record_owner_key",
]
