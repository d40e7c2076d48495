# shared/constants/scheduling.py

"""
Scheduling constants shared by allocation, workload estimation and timetables.
Every value can be overridden through the SCHEDULING dict in settings.
"""
from django.conf import settings

GRADE_CHOICES = (
    ('10', 'Grade 10'),
    ('11', 'Grade 11'),
    ('12', 'Grade 12'),
)

SEMESTER_CHOICES = (
    ('1', 'Semester 1'),
    ('2', 'Semester 2'),
)

STUDENT_STATUS_CHOICES = (
    ('active', 'Active'),
    ('inactive', 'Inactive'),
)

# Slot occupant tags stored on each timetable period
SLOT_KIND_TEACHER = 'teacher'
SLOT_KIND_SHARED = 'shared_activity'
SLOT_KIND_EMPTY = 'empty'
SLOT_KIND_CHOICES = (SLOT_KIND_TEACHER, SLOT_KIND_SHARED, SLOT_KIND_EMPTY)

# Lock scope prefixes
ALLOCATION_LOCK_SCOPE = 'allocate'
TIMETABLE_LOCK_SCOPE = 'timetable'

SCHEDULING_DEFAULTS = {
    'GRADES': [code for code, _ in GRADE_CHOICES],
    'SEMESTERS': [code for code, _ in SEMESTER_CHOICES],
    'WEEKLY_LOAD': 17,
    'HOMEROOM_REDUCTION': 3,
    'DEPT_HEAD_REDUCTION': 3,
    'MIN_CLASSES_PER_TEACHER': 2,
    'MAX_CLASSES_PER_TEACHER': 8,
    'SHARED_ACTIVITY_LABELS': [
        'Activity',
        'Flag ceremony',
        'Class meeting',
        'School-wide PE',
        'Assembly',
    ],
    'WEEKDAYS': ['mon', 'tue', 'wed', 'thu', 'fri', 'sat'],
    'SCHOOL_YEAR_START_MONTH': 9,
    'SEMESTER_ONE_START_MONTH': 8,
    'SEMESTER_TWO_START_MONTH': 2,
    'DEFAULT_CLASS_CAPACITY': 45,
    'DEFAULT_CLASS_COUNT': 8,
}


def get_scheduling_setting(key):
    """Read a scheduling setting, falling back to the built-in default."""
    overrides = getattr(settings, 'SCHEDULING', {}) or {}
    if key in overrides:
        return overrides[key]
    return SCHEDULING_DEFAULTS[key]
