"""Shared fixtures: record store doubles, a fixed clock and a preterm baby."""

import asyncio
from datetime import date

import pytest

from neonest.core.exceptions import StorageError
from neonest.schemas.baby import BabyProfileCreate
from neonest.services.baby_profiles import BabyProfileService
from neonest.services.catalog import get_default_catalog
from neonest.services.milestone_progress import MilestoneProgressEngine
from neonest.store.memory import InMemoryRecordStore

FIXED_TODAY = date(2026, 7, 1)

# Born 47 days before the due date (about 6.5 weeks early)
BIRTH_DATE = date(2024, 8, 15)
DUE_DATE = date(2024, 10, 1)


class RecordingStore(InMemoryRecordStore):
    """In-memory store that remembers every call."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.get_calls: list[str] = []
        self.set_calls: list[str] = []
        self.remove_calls: list[str] = []

    async def get(self, key):
        self.get_calls.append(key)
        return await super().get(key)

    async def set(self, key, value):
        self.set_calls.append(key)
        await super().set(key, value)

    async def remove(self, key):
        self.remove_calls.append(key)
        await super().remove(key)


class YieldingStore(RecordingStore):
    """Suspends before every call, the way a networked store does."""

    async def get(self, key):
        await asyncio.sleep(0)
        return await super().get(key)

    async def set(self, key, value):
        await asyncio.sleep(0)
        await super().set(key, value)


class FailingStore(InMemoryRecordStore):
    """Raises StorageError for the listed operations, behaves normally otherwise."""

    def __init__(self, fail_on=("get", "set", "remove"), initial=None):
        super().__init__(initial)
        self.fail_on = set(fail_on)

    async def get(self, key):
        if "get" in self.fail_on:
            raise StorageError("store offline")
        return await super().get(key)

    async def set(self, key, value):
        if "set" in self.fail_on:
            raise StorageError("write rejected")
        await super().set(key, value)

    async def remove(self, key):
        if "remove" in self.fail_on:
            raise StorageError("write rejected")
        await super().remove(key)


def fixed_today() -> date:
    return FIXED_TODAY


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def catalog():
    return get_default_catalog()


@pytest.fixture
def profiles(store):
    return BabyProfileService(store, today=fixed_today)


@pytest.fixture
def engine(store, catalog):
    return MilestoneProgressEngine(store, catalog, today=fixed_today)


@pytest.fixture
def baby(profiles):
    return asyncio.run(
        profiles.create_baby_profile(
            BabyProfileCreate(name="Test Baby", birth_date=BIRTH_DATE, due_date=DUE_DATE, gender="male")
        )
    )
