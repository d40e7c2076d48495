# timetables/services.py
"""
TIMETABLE SERVICES - Conflict-checked create-or-replace of class timetables
NO circular imports, PROPER error handling, WELL LOGGED
"""
import logging
from dataclasses import dataclass
from typing import List, Dict, Any, Iterable, Optional

from django.apps import apps
from django.db import DatabaseError, transaction

# SHARED IMPORTS
from shared.constants import TIMETABLE_LOCK_SCOPE, get_scheduling_setting
from shared.utils.locking import lock_scope, scheduling_lock

from core.exceptions import (
    InvalidArgument,
    NotFound,
    TimetableConflictError,
    TimetableLocked,
    TransactionFailed,
)
from .slots import Teacher, TimetableSlot, parse_timetable, serialize_timetable

logger = logging.getLogger(__name__)


# ============ HELPER FUNCTIONS ============

def _get_model(model_name: str, app_label: str = 'timetables'):
    """Get model lazily to avoid circular imports."""
    try:
        return apps.get_model(app_label, model_name)
    except LookupError as e:
        logger.error(f"Model not found: {app_label}.{model_name} - {e}")
        raise


@dataclass(frozen=True)
class TimetableConflict:
    teacher: str
    day: str
    period: int
    class_name: str

    def as_dict(self):
        return {
            'teacher': self.teacher,
            'day': self.day,
            'period': self.period,
            'className': self.class_name,
        }

    def __str__(self):
        return f"{self.teacher} already teaches {self.class_name} in period {self.period} ({self.day})"


def find_conflicts(slots: Iterable[TimetableSlot], other_timetables) -> List[TimetableConflict]:
    """
    Every incoming teacher slot that another class already uses for the same
    teacher at the same (day, period). Shared activities never conflict.
    """
    booked: Dict[tuple, List[str]] = {}
    for other in other_timetables:
        class_name = other.school_class.name
        for slot in other.parsed_slots():
            if isinstance(slot.occupant, Teacher):
                booked.setdefault((slot.day, slot.period, slot.occupant.name), []).append(class_name)

    conflicts = []
    for slot in slots:
        if not isinstance(slot.occupant, Teacher):
            continue
        for class_name in sorted(booked.get((slot.day, slot.period, slot.occupant.name), [])):
            conflicts.append(TimetableConflict(
                teacher=slot.occupant.name,
                day=slot.day,
                period=slot.period,
                class_name=class_name,
            ))
    return conflicts


# ============ TIMETABLE SERVICE ============

class TimetableService:
    """
    Service for saving and reading class timetables.
    """

    find_conflicts = staticmethod(find_conflicts)

    @staticmethod
    def _validate_period_key(year, semester):
        year = str(year or '').strip()
        semester = str(semester or '').strip()
        if not year:
            raise InvalidArgument("year is required")
        if semester not in get_scheduling_setting('SEMESTERS'):
            raise InvalidArgument(f"Invalid semester: {semester!r}", details={'semester': semester})
        return year, semester

    @staticmethod
    def _validate_days(days) -> List[TimetableSlot]:
        if not isinstance(days, list):
            raise InvalidArgument("timetable must be a list of days")

        weekdays = get_scheduling_setting('WEEKDAYS')
        seen_days = set()
        for day_entry in days:
            day = day_entry.get('day') if isinstance(day_entry, dict) else None
            if day not in weekdays:
                raise InvalidArgument(f"Invalid day: {day!r}", details={'day': day})
            if day in seen_days:
                raise InvalidArgument(f"Day {day} appears more than once", details={'day': day})
            seen_days.add(day)

            seen_periods = set()
            for period in day_entry.get('periods') or []:
                try:
                    number = int(period.get('period'))
                except (AttributeError, TypeError, ValueError):
                    raise InvalidArgument(f"Invalid period on {day}", details={'day': day})
                if number < 1:
                    raise InvalidArgument(f"Period numbers start at 1 ({day})", details={'day': day})
                if number in seen_periods:
                    raise InvalidArgument(
                        f"Period {number} appears more than once on {day}",
                        details={'day': day, 'period': number},
                    )
                seen_periods.add(number)

        return parse_timetable(days)

    @staticmethod
    def _get_class(class_id):
        Class = _get_model('Class', 'core')
        try:
            return Class.objects.get(pk=class_id)
        except (Class.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Class with id {class_id} not found", details={'classId': class_id})

    @staticmethod
    def save_timetable(class_id, year, semester, days) -> Any:
        """
        Create or fully replace a class timetable after checking every other
        class's timetable for teacher double-bookings.

        Args:
            class_id: Class primary key
            year: School year code
            semester: Semester code
            days: [{'day': 'mon', 'periods': [{'period', 'subject', 'teacher', 'kind'}]}]

        Returns:
            The saved Timetable

        Raises:
            InvalidArgument: Malformed grid or period key
            NotFound: Unknown class
            TimetableLocked: Existing timetable is locked
            TimetableConflictError: One or more teachers double-booked (all listed)
            TransactionFailed: The write could not be committed
        """
        Timetable = _get_model('Timetable')

        year, semester = TimetableService._validate_period_key(year, semester)
        slots = TimetableService._validate_days(days)
        school_class = TimetableService._get_class(class_id)

        try:
            with transaction.atomic():
                with scheduling_lock(lock_scope(TIMETABLE_LOCK_SCOPE, year, semester)):
                    existing = (
                        Timetable.objects.select_for_update()
                        .filter(school_class=school_class, year=year, semester=semester)
                        .first()
                    )
                    if existing and existing.is_locked:
                        raise TimetableLocked(details={'classId': school_class.pk})

                    others = (
                        Timetable.objects.filter(year=year, semester=semester)
                        .exclude(school_class=school_class)
                        .select_related('school_class')
                    )
                    conflicts = find_conflicts(slots, others)
                    if conflicts:
                        logger.warning(
                            f"Timetable save for {school_class.name} ({year} S{semester}) "
                            f"rejected: {len(conflicts)} conflict(s)"
                        )
                        raise TimetableConflictError(conflicts)

                    timetable, created = Timetable.objects.update_or_create(
                        school_class=school_class,
                        year=year,
                        semester=semester,
                        defaults={'slots': serialize_timetable(slots)},
                    )
        except DatabaseError as e:
            logger.error(f"Timetable save for class {class_id} failed: {e}", exc_info=True)
            raise TransactionFailed(details={'classId': class_id}) from e

        logger.info(
            f"Timetable {'created' if created else 'replaced'} for "
            f"{school_class.name} ({year} S{semester})"
        )
        return timetable

    @staticmethod
    def get_timetable(class_id, year, semester) -> Any:
        Timetable = _get_model('Timetable')
        year, semester = TimetableService._validate_period_key(year, semester)

        timetable = (
            Timetable.objects.select_related('school_class')
            .filter(school_class_id=class_id, year=year, semester=semester)
            .first()
        )
        if timetable is None:
            raise NotFound(
                "Timetable not found",
                details={'classId': class_id, 'year': year, 'semester': semester},
            )
        return timetable

    @staticmethod
    def list_timetables(year, semester, grade: Optional[str] = None):
        Timetable = _get_model('Timetable')
        year, semester = TimetableService._validate_period_key(year, semester)

        queryset = Timetable.objects.select_related('school_class').filter(year=year, semester=semester)
        if grade:
            queryset = queryset.filter(school_class__grade=grade)
        return list(queryset)

    @staticmethod
    def teacher_schedule(teacher_name: str, year, semester) -> List[Dict[str, Any]]:
        """All periods a teacher occupies across the school for (year, semester)."""
        teacher_name = (teacher_name or '').strip()
        if not teacher_name:
            raise InvalidArgument("teacher name is required")

        wanted = teacher_name.casefold()
        weekdays = get_scheduling_setting('WEEKDAYS')
        entries = []
        for timetable in TimetableService.list_timetables(year, semester):
            for slot in timetable.parsed_slots():
                name = slot.teacher_name
                if name and name.casefold() == wanted:
                    entries.append({
                        'classId': timetable.school_class_id,
                        'className': timetable.school_class.name,
                        'day': slot.day,
                        'period': slot.period,
                        'subject': slot.subject,
                    })

        order = {day: index for index, day in enumerate(weekdays)}
        entries.sort(key=lambda e: (order.get(e['day'], len(order)), e['period'], e['className']))
        return entries

    @staticmethod
    def set_locked(class_id, year, semester, locked: bool = True) -> Any:
        timetable = TimetableService.get_timetable(class_id, year, semester)
        timetable.is_locked = bool(locked)
        timetable.save(update_fields=['is_locked', 'updated_at'])
        logger.info(f"Timetable {timetable} {'locked' if locked else 'unlocked'}")
        return timetable

    @staticmethod
    def lock_all(year, semester, locked: bool = True) -> int:
        Timetable = _get_model('Timetable')
        year, semester = TimetableService._validate_period_key(year, semester)

        updated = Timetable.objects.filter(year=year, semester=semester).update(is_locked=bool(locked))
        logger.info(f"{'Locked' if locked else 'Unlocked'} {updated} timetables for {year} S{semester}")
        return updated
