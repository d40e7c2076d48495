# timetables/slots.py
"""
Timetable slot grid.

Each occupied period carries a tagged occupant: a Teacher, or a SharedActivity
(flag ceremony, assembly, school-wide PE) that recurs across many classes and
never counts as a double-booking. Free-text labels are classified once, when a
grid is parsed; conflict detection only looks at the tag.
"""
from dataclasses import dataclass
from typing import List, Optional, Union, Iterable, Dict, Any

from shared.constants import (
    SLOT_KIND_TEACHER,
    SLOT_KIND_SHARED,
    SLOT_KIND_EMPTY,
    get_scheduling_setting,
)


@dataclass(frozen=True)
class Teacher:
    name: str
    kind = SLOT_KIND_TEACHER


@dataclass(frozen=True)
class SharedActivity:
    label: str
    kind = SLOT_KIND_SHARED


Occupant = Union[Teacher, SharedActivity]


@dataclass(frozen=True)
class TimetableSlot:
    day: str
    period: int
    subject: str = ''
    occupant: Optional[Occupant] = None

    @property
    def teacher_name(self) -> Optional[str]:
        if isinstance(self.occupant, Teacher):
            return self.occupant.name
        return None

    @property
    def kind(self) -> str:
        return self.occupant.kind if self.occupant else SLOT_KIND_EMPTY


def _shared_labels():
    return [label.casefold() for label in get_scheduling_setting('SHARED_ACTIVITY_LABELS')]


def is_shared_activity_label(text: str) -> bool:
    text = (text or '').casefold()
    return bool(text) and any(label in text for label in _shared_labels())


def classify_occupant(subject: str, teacher: str, kind: Optional[str] = None) -> Optional[Occupant]:
    """
    Build the occupant of a slot.

    An explicit kind wins. Without one, a teacher name matching a
    shared-activity label makes the slot a SharedActivity. The subject is
    never consulted.
    """
    subject = (subject or '').strip()
    teacher = (teacher or '').strip()

    if kind == SLOT_KIND_EMPTY:
        return None
    if kind == SLOT_KIND_SHARED:
        return SharedActivity(label=teacher or subject)
    if kind == SLOT_KIND_TEACHER:
        return Teacher(name=teacher) if teacher else None

    if is_shared_activity_label(teacher):
        return SharedActivity(label=teacher)
    if teacher:
        return Teacher(name=teacher)
    return None


def parse_timetable(days: Iterable[Dict[str, Any]]) -> List[TimetableSlot]:
    """Flatten [{'day', 'periods': [{'period', 'subject', 'teacher', 'kind'}]}] into slots."""
    slots = []
    for day_entry in days or []:
        day = day_entry.get('day')
        for period in day_entry.get('periods') or []:
            subject = (period.get('subject') or '').strip()
            occupant = classify_occupant(subject, period.get('teacher'), period.get('kind'))
            slots.append(TimetableSlot(
                day=day,
                period=int(period['period']),
                subject=subject,
                occupant=occupant,
            ))
    return slots


def serialize_timetable(slots: Iterable[TimetableSlot]) -> List[Dict[str, Any]]:
    """Group slots back into per-day arrays, weekday order then period order."""
    weekdays = get_scheduling_setting('WEEKDAYS')
    order = {day: index for index, day in enumerate(weekdays)}

    by_day: Dict[str, List[TimetableSlot]] = {}
    for slot in slots:
        by_day.setdefault(slot.day, []).append(slot)

    result = []
    for day in sorted(by_day, key=lambda d: order.get(d, len(order))):
        periods = sorted(by_day[day], key=lambda s: s.period)
        result.append({
            'day': day,
            'periods': [
                {
                    'period': slot.period,
                    'subject': slot.subject,
                    'teacher': _occupant_label(slot.occupant),
                    'kind': slot.kind,
                }
                for slot in periods
            ],
        })
    return result


def _occupant_label(occupant: Optional[Occupant]) -> str:
    if isinstance(occupant, Teacher):
        return occupant.name
    if isinstance(occupant, SharedActivity):
        return occupant.label
    return ''
