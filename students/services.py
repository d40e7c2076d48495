# students/services.py
"""
STUDENT SERVICES - Roster reads and capacity-aware class allocation
NO circular imports, PROPER error handling, WELL LOGGED
"""
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Tuple, Any

from django.apps import apps
from django.db import DatabaseError, transaction

# SHARED IMPORTS
from shared.constants import ALLOCATION_LOCK_SCOPE, get_scheduling_setting
from shared.utils.locking import lock_scope, scheduling_lock

from core.exceptions import InvalidArgument, NoClassesConfigured, TransactionFailed
from .signals import students_allocated

logger = logging.getLogger(__name__)


# ============ HELPER FUNCTIONS ============

def _get_model(model_name: str, app_label: str = 'students'):
    """Get model lazily to avoid circular imports."""
    try:
        return apps.get_model(app_label, model_name)
    except LookupError as e:
        logger.error(f"Model not found: {app_label}.{model_name} - {e}")
        raise


# ============ RESULT TYPES ============

@dataclass
class ClassCapacity:
    class_id: int
    name: str
    remaining: int

    def as_dict(self):
        return {'name': self.name, 'remaining': self.remaining}


@dataclass
class AllocationResult:
    year: str
    grade: str
    assigned_count: int = 0
    unassigned_count: int = 0
    classes: List[ClassCapacity] = field(default_factory=list)
    assignments: List[Tuple[int, int]] = field(default_factory=list)

    def as_dict(self):
        return {
            'year': self.year,
            'grade': self.grade,
            'assignedCount': self.assigned_count,
            'unassignedCount': self.unassigned_count,
            'classes': [c.as_dict() for c in self.classes],
            'assignments': [
                {'studentId': student_id, 'classId': class_id}
                for student_id, class_id in self.assignments
            ],
        }


# ============ ROSTER STORE ============

class RosterStore:
    """
    Read-only view over Student and Class records for one (year, grade).
    """

    @staticmethod
    def classes(year: str, grade: str, for_update: bool = False) -> List[Any]:
        """Classes for (year, grade) in creation order."""
        Class = _get_model('Class', 'core')
        queryset = Class.objects.filter(year=year, grade=grade).order_by('pk')
        if for_update:
            queryset = queryset.select_for_update()
        return list(queryset)

    @staticmethod
    def eligible_students(year: str, grade: str, min_score: Decimal):
        """Unassigned active students of the intake, best entrance score first."""
        Student = _get_model('Student')
        return (
            Student.objects.active()
            .unassigned()
            .filter(grade=grade, admission_year=year, entrance_score__gte=min_score)
            .ranked()
        )

    @staticmethod
    def remaining_capacity(classes) -> List[ClassCapacity]:
        return [
            ClassCapacity(class_id=c.pk, name=c.name, remaining=c.capacity - c.current_size)
            for c in classes
        ]


# ============ CLASS ALLOCATION SERVICE ============

class ClassAllocationService:
    """
    Assigns an intake of students to the classes of their grade.
    """

    @staticmethod
    def allocate_grade(year: str, grade: str, min_score=0) -> AllocationResult:
        """
        Allocate unassigned students of (year, grade) to classes by fair round-robin.

        Args:
            year: School year code; also the students' admission year
            grade: Grade code
            min_score: Inclusive floor on entrance score

        Returns:
            AllocationResult with counts and the remaining capacity per class

        Raises:
            InvalidArgument: Bad year, grade or score
            NoClassesConfigured: No classes exist for (year, grade)
            TransactionFailed: The batch could not be committed
        """
        year, grade, min_score = ClassAllocationService._validate(year, grade, min_score)

        try:
            with transaction.atomic():
                with scheduling_lock(lock_scope(ALLOCATION_LOCK_SCOPE, year, grade)):
                    classes = RosterStore.classes(year, grade, for_update=True)
                    if not classes:
                        raise NoClassesConfigured(year, grade)

                    capacities = RosterStore.remaining_capacity(classes)
                    students = list(RosterStore.eligible_students(year, grade, min_score))
                    placements = round_robin(capacities, students)

                    ClassAllocationService._persist(placements, classes)

                    assignments = [(s.pk, c.class_id) for s, c in placements]
                    transaction.on_commit(
                        lambda: students_allocated.send(
                            sender=ClassAllocationService,
                            year=year,
                            grade=grade,
                            assignments=assignments,
                        )
                    )
        except DatabaseError as e:
            logger.error(f"Allocation for grade {grade} ({year}) failed: {e}", exc_info=True)
            raise TransactionFailed(details={'year': year, 'grade': grade}) from e

        result = AllocationResult(
            year=year,
            grade=grade,
            assigned_count=len(assignments),
            unassigned_count=len(students) - len(assignments),
            classes=capacities,
            assignments=assignments,
        )
        logger.info(
            f"Allocated grade {grade} ({year}): {result.assigned_count} assigned, "
            f"{result.unassigned_count} unassigned"
        )
        return result

    @staticmethod
    def _validate(year, grade, min_score):
        year = str(year or '').strip()
        grade = str(grade or '').strip()

        if not year:
            raise InvalidArgument("year is required")

        if grade not in get_scheduling_setting('GRADES'):
            raise InvalidArgument(f"Invalid grade: {grade!r}", details={'grade': grade})

        try:
            min_score = Decimal(str(min_score if min_score is not None else 0))
        except InvalidOperation:
            raise InvalidArgument(f"Invalid minScore: {min_score!r}")

        if not min_score.is_finite() or min_score < 0:
            raise InvalidArgument("minScore must be a number >= 0")

        return year, grade, min_score

    @staticmethod
    def _persist(placements, classes):
        """Write student assignments and class sizes. Caller owns the transaction."""
        Student = _get_model('Student')

        by_class = OrderedDict()
        for student, capacity in placements:
            by_class.setdefault(capacity.class_id, []).append(student.pk)

        classes_by_id = {c.pk: c for c in classes}
        for class_id, student_ids in by_class.items():
            updated = (
                Student.objects.filter(pk__in=student_ids, current_class__isnull=True)
                .update(current_class_id=class_id)
            )
            if updated != len(student_ids):
                # Someone assigned these students outside the lock
                raise DatabaseError(
                    f"Expected to assign {len(student_ids)} students to class {class_id}, "
                    f"updated {updated}"
                )

            school_class = classes_by_id[class_id]
            school_class.current_size += len(student_ids)
            school_class.save(update_fields=['current_size', 'updated_at'])


def round_robin(capacities: List[ClassCapacity], students) -> List[Tuple[Any, ClassCapacity]]:
    """
    Place students in order, rotating a cursor over the classes.

    Each student goes to the next class in rotation that still has room; the
    cursor then moves past that class. Stops when every class is full.
    Mutates the `remaining` counters in place.
    """
    placements = []
    if not capacities:
        return placements

    cursor = 0
    count = len(capacities)
    for student in students:
        spin = 0
        while capacities[cursor].remaining <= 0 and spin < count:
            cursor = (cursor + 1) % count
            spin += 1
        if spin >= count:
            break

        target = capacities[cursor]
        placements.append((student, target))
        target.remaining -= 1
        cursor = (cursor + 1) % count

    return placements
