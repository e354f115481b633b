"""Tests for baby profile persistence."""

import asyncio
from datetime import date

import pytest

from conftest import BIRTH_DATE, DUE_DATE, FailingStore, RecordingStore, fixed_today
from neonest.core.constants import BABY_PROFILES_KEY
from neonest.core.enums import Gender
from neonest.core.exceptions import NotFoundError, StorageError
from neonest.schemas.baby import BabyProfileCreate, BabyProfileUpdate
from neonest.schemas.milestone import MilestoneRecordCreate
from neonest.services.baby_profiles import BabyProfileService
from neonest.store.keys import milestone_records_key, record_owner_key


def test_create_assigns_id_and_persists(profiles, store):
    profile = asyncio.run(
        profiles.create_baby_profile(
            BabyProfileCreate(name="Ada", birth_date=BIRTH_DATE, due_date=DUE_DATE)
        )
    )
    assert profile.id
    assert profile.gender == Gender.UNSPECIFIED
    assert profile.created_at == profile.updated_at
    assert store.set_calls == [BABY_PROFILES_KEY]
    assert asyncio.run(profiles.get_baby_profiles()) == [profile]


def test_empty_store_has_no_profiles(profiles):
    assert asyncio.run(profiles.get_baby_profiles()) == []
    assert asyncio.run(profiles.get_primary_baby_profile()) is None


@pytest.mark.parametrize("payload", ["{not json", "null", '[{"id": 1}]', '{"name": "x"}'])
def test_unreadable_profiles_payload_reads_as_empty(payload):
    service = BabyProfileService(RecordingStore({BABY_PROFILES_KEY: payload}), today=fixed_today)
    assert asyncio.run(service.get_baby_profiles()) == []


def test_primary_profile_is_first_created(profiles, baby):
    asyncio.run(
        profiles.create_baby_profile(
            BabyProfileCreate(name="Second", birth_date=date(2025, 1, 1), due_date=date(2025, 1, 1))
        )
    )
    assert asyncio.run(profiles.get_primary_baby_profile()).id == baby.id


def test_get_unknown_profile(profiles):
    with pytest.raises(NotFoundError):
        asyncio.run(profiles.get_baby_profile("nope"))


def test_update_changes_only_given_fields(profiles, baby):
    updated = asyncio.run(
        profiles.update_baby_profile(baby.id, BabyProfileUpdate(name="Updated Baby"))
    )
    assert updated.id == baby.id
    assert updated.name == "Updated Baby"
    assert updated.birth_date == BIRTH_DATE
    assert updated.due_date == DUE_DATE
    assert updated.updated_at >= baby.updated_at
    assert asyncio.run(profiles.get_baby_profile(baby.id)).name == "Updated Baby"


def test_update_can_clear_birth_weight_only(profiles):
    profile = asyncio.run(
        profiles.create_baby_profile(
            BabyProfileCreate(name="Ada", birth_date=BIRTH_DATE, due_date=DUE_DATE, birth_weight_grams=1850)
        )
    )
    # Required fields ignore an explicit null, birth weight is cleared by it
    patch = BabyProfileUpdate(name=None, birth_date=None, birth_weight_grams=None)
    updated = asyncio.run(profiles.update_baby_profile(profile.id, patch))
    assert updated.birth_weight_grams is None
    assert updated.name == "Ada"
    assert updated.birth_date == BIRTH_DATE

    untouched = asyncio.run(profiles.update_baby_profile(profile.id, BabyProfileUpdate(name="Ada L.")))
    assert untouched.birth_weight_grams is None


def test_update_keeps_birth_weight_when_not_sent(profiles):
    profile = asyncio.run(
        profiles.create_baby_profile(
            BabyProfileCreate(name="Ada", birth_date=BIRTH_DATE, due_date=DUE_DATE, birth_weight_grams=1850)
        )
    )
    updated = asyncio.run(profiles.update_baby_profile(profile.id, BabyProfileUpdate(name="Ada L.")))
    assert updated.birth_weight_grams == 1850


def test_update_unknown_profile(profiles):
    with pytest.raises(NotFoundError):
        asyncio.run(profiles.update_baby_profile("nope", BabyProfileUpdate(name="x")))


def test_delete_cascades_to_milestone_records(profiles, engine, baby, store):
    other = asyncio.run(
        profiles.create_baby_profile(
            BabyProfileCreate(name="Sibling", birth_date=BIRTH_DATE, due_date=DUE_DATE)
        )
    )
    logged = {}
    for baby_id in (baby.id, other.id):
        logged[baby_id] = asyncio.run(
            engine.log_milestone(
                MilestoneRecordCreate(baby_id=baby_id, milestone_id="social-smile", achieved_date=date(2024, 12, 10))
            )
        )

    assert asyncio.run(profiles.delete_baby_profile(baby.id)) is True

    assert [p.id for p in asyncio.run(profiles.get_baby_profiles())] == [other.id]
    assert asyncio.run(engine.list_milestone_records(baby.id)) == []
    assert len(asyncio.run(engine.list_milestone_records(other.id))) == 1
    assert record_owner_key(logged[baby.id].id) not in store.keys()
    assert record_owner_key(logged[other.id].id) in store.keys()


def test_deleting_last_profile_removes_key(profiles, baby, store):
    asyncio.run(profiles.delete_baby_profile(baby.id))
    assert store.remove_calls == [BABY_PROFILES_KEY, milestone_records_key(baby.id)]
    assert store.keys() == []


def test_delete_unknown_profile(profiles):
    with pytest.raises(NotFoundError):
        asyncio.run(profiles.delete_baby_profile("nope"))


def test_get_corrected_age(profiles, baby):
    age = asyncio.run(profiles.get_corrected_age(baby.id, date(2024, 10, 15)))
    assert age.corrected_days == 14
    assert age.baby_id == baby.id
    assert age.reference_date == date(2024, 10, 15)
    assert age.display_text == "2 weeks"
    assert age.formatted == "Corrected: 2 weeks (Actual: 8 weeks)"
    assert age.gestational_age_weeks == 33
    assert age.should_use_corrected_age is True
    assert asyncio.run(profiles.get_corrected_age(baby.id)).chronological_days == (fixed_today() - BIRTH_DATE).days


def test_storage_errors_propagate():
    service = BabyProfileService(FailingStore(fail_on={"get"}))
    with pytest.raises(StorageError):
        asyncio.run(service.get_baby_profiles())

    service = BabyProfileService(FailingStore(fail_on={"set"}))
    with pytest.raises(StorageError):
        asyncio.run(
            service.create_baby_profile(
                BabyProfileCreate(name="Ada", birth_date=BIRTH_DATE, due_date=DUE_DATE)
            )
        )
