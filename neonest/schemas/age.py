"""Corrected age result schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class CorrectedAge(BaseModel):
    model_config = ConfigDict(frozen=True)

    chronological_days: int
    corrected_days: int
    chronological_months: int
    corrected_months: int
    prematurity_days: int
    is_preterm: bool


class CorrectedAgeRead(CorrectedAge):
    """Corrected age plus display helpers for a stored baby profile."""

    baby_id: str
    reference_date: date
    display_text: str
    formatted: str
    gestational_age_weeks: int
    should_use_corrected_age: bool
