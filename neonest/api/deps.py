"""Request dependencies: record store, catalog and services."""

from fastapi import Depends, Request

from neonest.services.baby_profiles import BabyProfileService
from neonest.services.catalog import MilestoneCatalog, get_default_catalog
from neonest.services.milestone_progress import MilestoneProgressEngine
from neonest.store.base import LocalRecordStore


def get_store(request: Request) -> LocalRecordStore:
    """Record store created by the application lifespan."""
    return request.app.state.record_store


def get_catalog() -> MilestoneCatalog:
    return get_default_catalog()


def get_profile_service(store: LocalRecordStore = Depends(get_store)) -> BabyProfileService:
    return BabyProfileService(store)


def get_milestone_engine(
    store: LocalRecordStore = Depends(get_store),
    catalog: MilestoneCatalog = Depends(get_catalog),
) -> MilestoneProgressEngine:
    return MilestoneProgressEngine(store, catalog)
