"""Corrected age calculation for preterm babies.

Corrected age subtracts the days a baby was born before the due date from
the chronological age. Term and post-term babies are never adjusted, and
corrected age is floored at zero.

Everything here is pure: no state, no I/O. Dates are calendar dates; a
datetime argument is reduced to its UTC calendar date first.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from neonest.core.constants import (
    CORRECTED_AGE_CUTOFF_MONTHS,
    DAYS_PER_MONTH_DENOMINATOR,
    DAYS_PER_MONTH_NUMERATOR,
    DAYS_PER_WEEK,
    FULL_TERM_WEEKS,
    WEEKS_DISPLAY_THRESHOLD,
)
from neonest.core.exceptions import InvalidDateError
from neonest.schemas.age import CorrectedAge


def utc_today() -> date:
    """Today's calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def as_calendar_date(value: date | datetime) -> date:
    """Drop time-of-day. Aware datetimes are converted to UTC first."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def days_to_months(days: int) -> int:
    """floor(days / 30.4375), computed on integers so results never depend on float rounding."""
    return (days * DAYS_PER_MONTH_DENOMINATOR) // DAYS_PER_MONTH_NUMERATOR


def prematurity_days(birth_date: date | datetime, due_date: date | datetime) -> int:
    """Days born before the due date; 0 for term and post-term births."""
    return max(0, (as_calendar_date(due_date) - as_calendar_date(birth_date)).days)


def corrected_age(
    birth_date: date | datetime,
    due_date: date | datetime,
    reference_date: date | datetime,
) -> CorrectedAge:
    """
    Chronological and corrected age at reference_date, in days and whole months.
    Raises InvalidDateError when reference_date is before birth_date.
    """
    birth = as_calendar_date(birth_date)
    reference = as_calendar_date(reference_date)
    if reference < birth:
        raise InvalidDateError(
            f"Reference date {reference.isoformat()} is before birth date {birth.isoformat()}"
        )

    chronological = (reference - birth).days
    early_by = prematurity_days(birth, due_date)
    corrected = max(0, chronological - early_by) if early_by > 0 else chronological

    return CorrectedAge(
        chronological_days=chronological,
        corrected_days=corrected,
        chronological_months=days_to_months(chronological),
        corrected_months=days_to_months(corrected),
        prematurity_days=early_by,
        is_preterm=early_by > 0,
    )


def should_use_corrected_age(
    birth_date: date | datetime,
    due_date: date | datetime,
    reference_date: date | datetime,
) -> bool:
    """Corrected age is used for developmental comparisons until 24 months corrected."""
    age = corrected_age(birth_date, due_date, reference_date)
    return age.corrected_months < CORRECTED_AGE_CUTOFF_MONTHS


def gestational_age_at_birth(birth_date: date | datetime, due_date: date | datetime) -> int:
    """Gestational age at birth in whole weeks (40 for term and post-term births)."""
    return round(FULL_TERM_WEEKS - prematurity_days(birth_date, due_date) / DAYS_PER_WEEK)


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def describe_age(days: int) -> str:
    """
    Human display of an age in days.
    Weeks for the first 12 weeks, then months (with leftover weeks when 2 or more)
    until 24 months, then years and months.
    """
    weeks = days // DAYS_PER_WEEK
    if weeks < WEEKS_DISPLAY_THRESHOLD:
        return _plural(weeks, "week")

    months = days_to_months(days)
    if months < CORRECTED_AGE_CUTOFF_MONTHS:
        month_start = (months * DAYS_PER_MONTH_NUMERATOR) // DAYS_PER_MONTH_DENOMINATOR
        remaining_weeks = (days - month_start) // DAYS_PER_WEEK
        if remaining_weeks >= 2:
            return f"{_plural(months, 'month')}, {_plural(remaining_weeks, 'week')}"
        return _plural(months, "month")

    years, leftover = divmod(months, 12)
    if leftover:
        return f"{_plural(years, 'year')}, {_plural(leftover, 'month')}"
    return _plural(years, "year")


def format_age_for_display(age: CorrectedAge) -> str:
    """One-line corrected/actual age for milestone screens."""
    actual_weeks = age.chronological_days // DAYS_PER_WEEK
    return f"Corrected: {describe_age(age.corrected_days)} (Actual: {_plural(actual_weeks, 'week')})"
