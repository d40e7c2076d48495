from .scheduling import (
    GRADE_CHOICES,
    SEMESTER_CHOICES,
    STUDENT_STATUS_CHOICES,
    SLOT_KIND_TEACHER,
    SLOT_KIND_SHARED,
    SLOT_KIND_EMPTY,
    SLOT_KIND_CHOICES,
    ALLOCATION_LOCK_SCOPE,
    TIMETABLE_LOCK_SCOPE,
    get_scheduling_setting,
)

__all__ = [
    'GRADE_CHOICES',
    'SEMESTER_CHOICES',
    'STUDENT_STATUS_CHOICES',
    'SLOT_KIND_TEACHER',
    'SLOT_KIND_SHARED',
    'SLOT_KIND_EMPTY',
    'SLOT_KIND_CHOICES',
    'ALLOCATION_LOCK_SCOPE',
    'TIMETABLE_LOCK_SCOPE',
    'get_scheduling_setting',
]
