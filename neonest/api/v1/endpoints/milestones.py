"""Milestone endpoints: catalog, record logging, progress and reports."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from neonest.api.deps import get_catalog, get_milestone_engine
from neonest.core.enums import MilestoneCategory
from neonest.schemas.milestone import (
    MilestoneDefinition,
    MilestoneExport,
    MilestoneProgress,
    MilestoneRecord,
    MilestoneRecordCreate,
    MilestoneRecordUpdate,
    MilestoneReport,
)
from neonest.services.catalog import MilestoneCatalog
from neonest.services.milestone_progress import MilestoneProgressEngine

router = APIRouter()


@router.get("/catalog", response_model=list[MilestoneDefinition])
async def list_catalog(
    category: Optional[MilestoneCategory] = None,
    corrected_age_months: Optional[int] = Query(None, ge=0, description="Only milestones relevant at this corrected age"),
    include_upcoming: bool = True,
    catalog: MilestoneCatalog = Depends(get_catalog),
):
    if corrected_age_months is not None:
        items = catalog.for_age(corrected_age_months, include_upcoming=include_upcoming)
    else:
        items = list(catalog)
    if category is not None:
        items = [m for m in items if m.category == category]
    return items


# ── Records ──────────────────────────────────────────────────────────────

@router.post("/records", response_model=MilestoneRecord, status_code=201)
async def log_milestone(
    payload: MilestoneRecordCreate,
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    """Log (or re-log) a milestone. Re-logging the same milestone updates the existing record."""
    return await engine.log_milestone(payload)


@router.get("/records", response_model=list[MilestoneRecord])
async def list_records(
    baby_id: str,
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    return await engine.list_milestone_records(baby_id)


@router.patch("/records/{record_id}")
async def update_record(
    record_id: str,
    payload: MilestoneRecordUpdate,
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    return {"updated": await engine.update_milestone(record_id, payload)}


@router.delete("/records/{record_id}", status_code=204)
async def delete_record(
    record_id: str,
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    await engine.delete_milestone(record_id)


# ── Progress and reports ─────────────────────────────────────────────────

@router.get("/progress/{baby_id}", response_model=MilestoneProgress)
async def get_progress(
    baby_id: str,
    reference_date: Optional[date] = Query(None, description="Defaults to today (UTC)"),
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    return await engine.get_milestone_progress(baby_id, reference_date)


@router.get("/report/{baby_id}", response_model=MilestoneReport)
async def get_report(
    baby_id: str,
    reference_date: Optional[date] = None,
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    return await engine.generate_milestone_report(baby_id, reference_date)


@router.get("/summary/{baby_id}", response_class=PlainTextResponse)
async def get_summary(
    baby_id: str,
    reference_date: Optional[date] = None,
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    """Plain-text summary for pediatric visits."""
    return await engine.generate_milestone_summary(baby_id, reference_date)


@router.get("/export/{baby_id}", response_model=MilestoneExport)
async def export_data(
    baby_id: str,
    reference_date: Optional[date] = None,
    engine: MilestoneProgressEngine = Depends(get_milestone_engine),
):
    return await engine.export_milestone_data(baby_id, reference_date)
