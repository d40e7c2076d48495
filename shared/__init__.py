# shared/__init__.py
"""
Shared package - central access to scheduling constants and utilities.
Avoids importing services or models to prevent circular dependencies.
"""

# Constants
from .constants import (
    GRADE_CHOICES,
    SEMESTER_CHOICES,
    get_scheduling_setting,
)

# Utilities
from .utils.academic_calendar import semester_for_date, school_year_for_date
from .utils.locking import lock_scope, scheduling_lock

__all__ = [
    # Constants
    'GRADE_CHOICES',
    'SEMESTER_CHOICES',
    'get_scheduling_setting',

    # Utilities
    'semester_for_date',
    'school_year_for_date',
    'lock_scope',
    'scheduling_lock',
]
