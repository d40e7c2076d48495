# shared/utils/academic_calendar.py
"""
Academic calendar helpers. The only place that maps a calendar date onto a
school year or semester.
"""
from datetime import date
from typing import Optional

from django.utils import timezone

from shared.constants.scheduling import get_scheduling_setting


def _today() -> date:
    return timezone.localdate()


def semester_for_date(on: Optional[date] = None) -> str:
    """
    Return the semester code ('1' or '2') a date falls in.

    Semester 1 starts in SEMESTER_ONE_START_MONTH and wraps over new year,
    semester 2 starts in SEMESTER_TWO_START_MONTH.
    """
    on = on or _today()
    first_start = get_scheduling_setting('SEMESTER_ONE_START_MONTH')
    second_start = get_scheduling_setting('SEMESTER_TWO_START_MONTH')

    if second_start <= on.month < first_start:
        return '2'
    return '1'


def school_year_for_date(on: Optional[date] = None) -> str:
    """Return the school year code (e.g. '2025-2026') a date falls in."""
    on = on or _today()
    start_month = get_scheduling_setting('SCHOOL_YEAR_START_MONTH')
    start = on.year if on.month >= start_month else on.year - 1
    return f"{start}-{start + 1}"
