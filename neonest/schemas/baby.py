"""Baby profile schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from neonest.core.enums import Gender
from neonest.schemas.patch import PartialUpdate


class BabyProfileCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    birth_date: date = Field(..., description="Actual date of birth")
    due_date: date = Field(..., description="Expected full-term due date")
    gender: Gender = Gender.UNSPECIFIED
    birth_weight_grams: Optional[float] = Field(None, gt=0, lt=10000, description="Informational only")


class BabyProfileUpdate(PartialUpdate):
    clearable_fields: ClassVar[frozenset[str]] = frozenset({"birth_weight_grams"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    birth_date: Optional[date] = None
    due_date: Optional[date] = None
    gender: Optional[Gender] = None
    birth_weight_grams: Optional[float] = Field(None, gt=0, lt=10000)


class BabyProfile(BabyProfileCreate):
    """Stored profile. id is assigned once at creation and never changes."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime
