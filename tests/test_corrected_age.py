"""Tests for corrected age calculation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from neonest.core.exceptions import InvalidDateError
from neonest.services.corrected_age import (
    as_calendar_date,
    corrected_age,
    days_to_months,
    describe_age,
    format_age_for_display,
    gestational_age_at_birth,
    should_use_corrected_age,
)


def test_preterm_baby_six_and_a_half_weeks_early():
    age = corrected_age(date(2024, 8, 15), date(2024, 10, 1), date(2024, 10, 15))
    assert age.chronological_days == 61
    assert age.prematurity_days == 47
    assert age.corrected_days == 14
    assert age.is_preterm is True
    assert age.chronological_months == 2
    assert age.corrected_months == 0


def test_leap_year_span():
    # 2024-01-15 to 2024-03-01 crosses Feb 29
    age = corrected_age(date(2024, 1, 15), date(2024, 3, 1), date(2024, 6, 1))
    assert age.prematurity_days == 46
    assert age.chronological_days == 138
    assert age.corrected_days == 92
    assert age.corrected_months == 3


@pytest.mark.parametrize("offset", [0, 1, 30, 365, 1000])
def test_term_birth_is_not_adjusted(offset):
    birth = date(2024, 3, 1)
    age = corrected_age(birth, birth, birth + timedelta(days=offset))
    assert age.is_preterm is False
    assert age.corrected_days == age.chronological_days == offset
    assert age.corrected_months == age.chronological_months


def test_post_term_birth_is_never_negatively_adjusted():
    age = corrected_age(date(2024, 3, 10), date(2024, 3, 1), date(2024, 4, 10))
    assert age.is_preterm is False
    assert age.prematurity_days == 0
    assert age.corrected_days == age.chronological_days == 31


@pytest.mark.parametrize("offset", [0, 1, 20, 46])
def test_corrected_age_floors_at_zero_before_due_date(offset):
    birth, due = date(2024, 8, 15), date(2024, 10, 1)
    age = corrected_age(birth, due, birth + timedelta(days=offset))
    assert age.corrected_days == 0
    assert age.corrected_months == 0
    assert age.chronological_days == offset


def test_reference_before_birth_is_rejected():
    with pytest.raises(InvalidDateError):
        corrected_age(date(2024, 8, 15), date(2024, 10, 1), date(2024, 8, 14))


@pytest.mark.parametrize(
    "days,months",
    [(0, 0), (30, 0), (31, 1), (60, 1), (61, 2), (365, 11), (366, 12), (731, 24)],
)
def test_month_conversion_uses_average_month(days, months):
    assert days_to_months(days) == months


def test_aware_datetime_is_reduced_to_utc_date():
    # 23:30 in UTC-5 is already the next day in UTC
    local = datetime(2024, 10, 14, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert as_calendar_date(local) == date(2024, 10, 15)
    age = corrected_age(datetime(2024, 8, 15, 9, 0), date(2024, 10, 1), local)
    assert age.chronological_days == 61


def test_as_calendar_date_rejects_strings():
    with pytest.raises(TypeError):
        as_calendar_date("2024-10-15")


def test_should_use_corrected_age_until_two_years():
    birth, due = date(2024, 1, 15), date(2024, 3, 1)
    assert should_use_corrected_age(birth, due, date(2024, 6, 1)) is True
    assert should_use_corrected_age(birth, due, date(2026, 6, 1)) is False


def test_gestational_age_at_birth():
    assert gestational_age_at_birth(date(2024, 8, 15), date(2024, 10, 1)) == 33
    assert gestational_age_at_birth(date(2024, 3, 1), date(2024, 3, 1)) == 40
    assert gestational_age_at_birth(date(2024, 3, 10), date(2024, 3, 1)) == 40


@pytest.mark.parametrize(
    "days,text",
    [
        (7, "1 week"),
        (20, "2 weeks"),
        (70, "10 weeks"),
        (84, "2 months, 3 weeks"),
        (100, "3 months"),
        (731, "2 years"),
        (800, "2 years, 2 months"),
    ],
)
def test_describe_age(days, text):
    assert describe_age(days) == text


def test_format_age_for_display():
    age = corrected_age(date(2024, 8, 15), date(2024, 10, 1), date(2024, 10, 15))
    assert format_age_for_display(age) == "Corrected: 2 weeks (Actual: 8 weeks)"
