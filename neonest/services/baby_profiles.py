"""Baby profile CRUD over the local record store."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import date, datetime, timezone

from neonest.core.constants import BABY_PROFILES_KEY
from neonest.core.exceptions import NotFoundError
from neonest.schemas.age import CorrectedAgeRead
from neonest.schemas.baby import BabyProfile, BabyProfileCreate, BabyProfileUpdate
from neonest.schemas.milestone import MilestoneRecord
from neonest.services.corrected_age import (
    corrected_age,
    describe_age,
    format_age_for_display,
    gestational_age_at_birth,
    should_use_corrected_age,
    utc_today,
)
from neonest.store.base import LocalRecordStore
from neonest.store.collection import JsonCollection
from neonest.store.keys import milestone_records_key, record_owner_key

logger = logging.getLogger(__name__)


class BabyProfileService:
    """
    Profiles live as one JSON list under BABY_PROFILES_KEY, so profile writes
    are last-writer-wins: callers serialize creating and deleting profiles.
    Milestone records are kept under a separate key per baby and never touch
    the profiles list. Deleting a profile also deletes its records.
    """

    def __init__(self, store: LocalRecordStore, today: Callable[[], date] = utc_today):
        self.store = store
        self.profiles = JsonCollection(store, BABY_PROFILES_KEY, BabyProfile)
        self._today = today

    def records_for(self, baby_id: str) -> JsonCollection[MilestoneRecord]:
        return JsonCollection(self.store, milestone_records_key(baby_id), MilestoneRecord)

    async def create_baby_profile(self, data: BabyProfileCreate) -> BabyProfile:
        now = datetime.now(timezone.utc)
        profile = BabyProfile(
            id=uuid.uuid4().hex,
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        profiles = await self.profiles.load()
        profiles.append(profile)
        await self.profiles.save(profiles)
        logger.info("Created baby profile %s", profile.id)
        return profile

    async def get_baby_profiles(self) -> list[BabyProfile]:
        """All profiles in creation order. Unreadable stored data yields []."""
        return await self.profiles.load()

    async def get_baby_profile(self, baby_id: str) -> BabyProfile:
        for profile in await self.profiles.load():
            if profile.id == baby_id:
                return profile
        raise NotFoundError("Baby profile", baby_id)

    async def get_primary_baby_profile(self) -> BabyProfile | None:
        """First profile created, or None when there are none."""
        profiles = await self.profiles.load()
        return profiles[0] if profiles else None

    async def update_baby_profile(self, baby_id: str, patch: BabyProfileUpdate) -> BabyProfile:
        profiles = await self.profiles.load()
        for i, profile in enumerate(profiles):
            if profile.id == baby_id:
                break
        else:
            raise NotFoundError("Baby profile", baby_id)

        updated = profile.model_copy(update={**patch.changes(), "updated_at": datetime.now(timezone.utc)})
        profiles[i] = updated
        await self.profiles.save(profiles)
        return updated

    async def delete_baby_profile(self, baby_id: str) -> bool:
        profiles = await self.profiles.load()
        remaining = [p for p in profiles if p.id != baby_id]
        if len(remaining) == len(profiles):
            raise NotFoundError("Baby profile", baby_id)
        await self.profiles.save(remaining)

        # Cascade: records belong to exactly one profile
        records = self.records_for(baby_id)
        removed = await records.load()
        await records.save([])
        for record in removed:
            await self.store.remove(record_owner_key(record.id))
        logger.info("Deleted baby profile %s and %d milestone records", baby_id, len(removed))
        return True

    async def get_corrected_age(
        self, baby_id: str, reference_date: date | None = None
    ) -> CorrectedAgeRead:
        """Corrected age of a stored baby with display text and gestational age at birth."""
        profile = await self.get_baby_profile(baby_id)
        reference = reference_date or self._today()
        age = corrected_age(profile.birth_date, profile.due_date, reference)
        return CorrectedAgeRead(
            **age.model_dump(),
            baby_id=baby_id,
            reference_date=reference,
            display_text=describe_age(age.corrected_days),
            formatted=format_age_for_display(age),
            gestational_age_weeks=gestational_age_at_birth(profile.birth_date, profile.due_date),
            should_use_corrected_age=should_use_corrected_age(profile.birth_date, profile.due_date, reference),
        )
