"""Milestone catalog, record, progress and report schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from neonest.core.enums import MilestoneCategory, ProgressStatus
from neonest.schemas.age import CorrectedAge
from neonest.schemas.patch import PartialUpdate


# ── Catalog ──────────────────────────────────────────────────────────────

class MilestoneWindow(BaseModel):
    """Corrected-age months in which a milestone is typically achieved."""

    model_config = ConfigDict(frozen=True)

    earliest_months: int = Field(..., ge=0)
    typical_months: int = Field(..., ge=0)
    latest_months: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "MilestoneWindow":
        if not self.earliest_months <= self.typical_months <= self.latest_months:
            raise ValueError("window must satisfy earliest <= typical <= latest")
        return self


class MilestoneDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: MilestoneCategory
    window: MilestoneWindow
    description: str = ""
    clinical_notes: Optional[str] = None
    preterm_specific: bool = False  # Commonly later in preterm babies


# ── Records ──────────────────────────────────────────────────────────────

class MilestoneRecordCreate(BaseModel):
    baby_id: str
    milestone_id: str
    achieved_date: date = Field(..., description="Day the milestone was observed")
    notes: Optional[str] = Field(None, max_length=2000)
    media: list[str] = Field(default_factory=list, description="Ordered attachment references")


class MilestoneRecordUpdate(PartialUpdate):
    clearable_fields: ClassVar[frozenset[str]] = frozenset({"notes"})

    achieved_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)
    media: Optional[list[str]] = None


class MilestoneRecord(MilestoneRecordCreate):
    """Stored record. At most one per (baby_id, milestone_id)."""

    id: str
    created_at: datetime
    updated_at: datetime


# ── Progress ─────────────────────────────────────────────────────────────

class ProgressEntry(BaseModel):
    milestone_id: str
    title: str
    category: MilestoneCategory
    window: MilestoneWindow
    status: ProgressStatus
    within_expected_window: bool = False
    corrected_age_months: int  # At the reference date
    record_id: Optional[str] = None
    achieved_date: Optional[date] = None
    notes: Optional[str] = None
    media: list[str] = Field(default_factory=list)
    corrected_age_at_achievement: Optional[CorrectedAge] = None


class MilestoneProgress(BaseModel):
    baby_id: str
    reference_date: date
    corrected_age: CorrectedAge
    achieved: list[ProgressEntry] = Field(default_factory=list)
    pending: list[ProgressEntry] = Field(default_factory=list)
    delayed: list[ProgressEntry] = Field(default_factory=list)


# ── Report ───────────────────────────────────────────────────────────────

class ReportEntry(BaseModel):
    milestone_id: str
    title: str
    category: MilestoneCategory
    achieved_date: Optional[date] = None
    corrected_age_months: int  # At evaluation
    corrected_age_months_at_achievement: Optional[int] = None
    within_expected_window: bool = False
    notes: Optional[str] = None


class MilestoneReport(BaseModel):
    baby_id: str
    baby_name: str
    reference_date: date
    corrected_age: CorrectedAge
    achieved_milestones: list[ReportEntry] = Field(default_factory=list)
    pending_milestones: list[ReportEntry] = Field(default_factory=list)
    delayed_milestones: list[ReportEntry] = Field(default_factory=list)
    generated_at: datetime


class MilestoneExport(BaseModel):
    """Bundle shared with healthcare providers."""

    summary: str
    detailed_logs: list[MilestoneRecord]
    progress: MilestoneProgress
