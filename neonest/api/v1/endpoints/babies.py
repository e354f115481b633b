"""Baby profile endpoints: CRUD + corrected age."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from neonest.api.deps import get_profile_service
from neonest.schemas.age import CorrectedAgeRead
from neonest.schemas.baby import BabyProfile, BabyProfileCreate, BabyProfileUpdate
from neonest.services.baby_profiles import BabyProfileService

router = APIRouter()


@router.post("", response_model=BabyProfile, status_code=201)
async def create_baby(
    payload: BabyProfileCreate,
    service: BabyProfileService = Depends(get_profile_service),
):
    return await service.create_baby_profile(payload)


@router.get("", response_model=list[BabyProfile])
async def list_babies(service: BabyProfileService = Depends(get_profile_service)):
    return await service.get_baby_profiles()


@router.get("/primary", response_model=Optional[BabyProfile])
async def get_primary_baby(service: BabyProfileService = Depends(get_profile_service)):
    """First profile created, or null when none exist."""
    return await service.get_primary_baby_profile()


@router.get("/{baby_id}", response_model=BabyProfile)
async def get_baby(baby_id: str, service: BabyProfileService = Depends(get_profile_service)):
    return await service.get_baby_profile(baby_id)


@router.patch("/{baby_id}", response_model=BabyProfile)
async def update_baby(
    baby_id: str,
    payload: BabyProfileUpdate,
    service: BabyProfileService = Depends(get_profile_service),
):
    return await service.update_baby_profile(baby_id, payload)


@router.delete("/{baby_id}", status_code=204)
async def delete_baby(baby_id: str, service: BabyProfileService = Depends(get_profile_service)):
    """Delete a profile and all of its milestone records."""
    await service.delete_baby_profile(baby_id)


@router.get("/{baby_id}/corrected-age", response_model=CorrectedAgeRead)
async def get_corrected_age(
    baby_id: str,
    reference_date: Optional[date] = Query(None, description="Defaults to today (UTC)"),
    service: BabyProfileService = Depends(get_profile_service),
):
    return await service.get_corrected_age(baby_id, reference_date)
