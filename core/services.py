# core/services.py
"""
CORE SERVICES - Class setup, period demand and teacher workload estimation
NO circular imports, PROPER error handling, WELL LOGGED
"""
import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Dict, Any, Tuple

from django.apps import apps
from django.db import transaction

# SHARED IMPORTS
from shared.constants import get_scheduling_setting

from .exceptions import InvalidArgument, NotFound

logger = logging.getLogger(__name__)


# ============ HELPER FUNCTIONS ============

def _get_model(model_name: str, app_label: str = 'core'):
    """Get model lazily to avoid circular imports."""
    try:
        return apps.get_model(app_label, model_name)
    except LookupError as e:
        logger.error(f"Model not found: {app_label}.{model_name} - {e}")
        raise


def _validate_grade(grade) -> str:
    grade = str(grade or '').strip()
    if grade not in get_scheduling_setting('GRADES'):
        raise InvalidArgument(f"Invalid grade: {grade!r}", details={'grade': grade})
    return grade


def _validate_semester(semester) -> str:
    semester = str(semester or '').strip()
    if semester not in get_scheduling_setting('SEMESTERS'):
        raise InvalidArgument(f"Invalid semester: {semester!r}", details={'semester': semester})
    return semester


def _validate_year(year) -> str:
    year = str(year or '').strip()
    if not year:
        raise InvalidArgument("year is required")
    return year


def _as_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be an integer", details={name: value})


# ============ CLASS SETUP SERVICE ============

class ClassSetupService:
    """
    Creates the classes of a grade for a school year.
    """

    @staticmethod
    @transaction.atomic
    def setup_year_classes(year: str, grade: str, count=None, capacity=None) -> List[Any]:
        """
        Create classes <grade>A1..<grade>A<count>, skipping names that exist.

        Returns:
            List of newly created classes
        """
        Class = _get_model('Class')

        year = _validate_year(year)
        grade = _validate_grade(grade)
        count = _as_int(count if count is not None else get_scheduling_setting('DEFAULT_CLASS_COUNT'), 'count')
        capacity = _as_int(
            capacity if capacity is not None else get_scheduling_setting('DEFAULT_CLASS_CAPACITY'),
            'capacity'
        )

        if count <= 0 or capacity <= 0:
            raise InvalidArgument("count and capacity must be greater than 0")

        existing = set(Class.objects.filter(year=year).values_list('name', flat=True))
        created = []
        for index in range(1, count + 1):
            name = f"{grade}A{index}"
            if name in existing:
                continue
            created.append(Class.objects.create(name=name, year=year, grade=grade, capacity=capacity))

        logger.info(f"Created {len(created)} classes for grade {grade} ({year})")
        return created

    @staticmethod
    def classes_by_grade(year: str) -> List[Dict[str, Any]]:
        """Classes of a year grouped by grade, for overview screens."""
        Class = _get_model('Class')
        year = _validate_year(year)

        grouped: Dict[str, List[Any]] = {}
        for school_class in Class.objects.filter(year=year).order_by('grade', 'name'):
            grouped.setdefault(school_class.grade, []).append(school_class)

        return [{'grade': grade, 'classes': classes} for grade, classes in grouped.items()]


# ============ PERIOD DEMAND SERVICE ============

class PeriodDemandService:
    """
    Staff input of periods per week per subject and activity, per class.
    """

    @staticmethod
    def _clean_periods(periods, name: str) -> Dict[str, int]:
        if periods is None:
            return {}
        if not isinstance(periods, dict):
            raise InvalidArgument(f"{name} must be an object mapping ids to periods")

        cleaned = {}
        for key, value in periods.items():
            cleaned[str(key)] = max(0, _as_int(value, f"{name}[{key}]"))
        return cleaned

    @staticmethod
    def upsert(year, semester, grade, class_id, subject_periods=None,
               activity_periods=None) -> Tuple[Any, bool]:
        """
        Create or fully replace the period demand of one class for one semester.

        Returns:
            Tuple: (period_demand, created)
        """
        Class = _get_model('Class')
        PeriodDemand = _get_model('PeriodDemand')

        year = _validate_year(year)
        semester = _validate_semester(semester)
        grade = _validate_grade(grade)
        subject_periods = PeriodDemandService._clean_periods(subject_periods, 'subjectPeriods')
        activity_periods = PeriodDemandService._clean_periods(activity_periods, 'activityPeriods')

        try:
            school_class = Class.objects.get(pk=class_id)
        except (Class.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Class with id {class_id} not found", details={'classId': class_id})

        demand, created = PeriodDemand.objects.update_or_create(
            year=year,
            semester=semester,
            school_class=school_class,
            defaults={
                'grade': grade,
                'subject_periods': subject_periods,
                'activity_periods': activity_periods,
            },
        )

        logger.info(
            f"Period demand {'created' if created else 'updated'} for "
            f"{school_class.name} ({year} S{semester})"
        )
        return demand, created

    @staticmethod
    def bulk_upsert(year, semester, grade, items) -> Dict[str, Any]:
        """Upsert several classes; a failing item is reported, the rest still apply."""
        if not isinstance(items, list):
            raise InvalidArgument("classPeriodsList must be a list")

        results = []
        errors = []
        for item in items:
            class_id = item.get('classId') if isinstance(item, dict) else None
            if class_id is None:
                errors.append({'classId': None, 'error': 'classId is required'})
                continue
            try:
                with transaction.atomic():
                    _, created = PeriodDemandService.upsert(
                        year, semester, grade, class_id,
                        item.get('subjectPeriods'), item.get('activityPeriods'),
                    )
                results.append({'classId': class_id, 'status': 'created' if created else 'updated'})
            except (InvalidArgument, NotFound) as e:
                logger.warning(f"Period demand upsert failed for class {class_id}: {e}")
                errors.append({'classId': class_id, 'error': e.message})

        return {'results': results, 'errors': errors}


# ============ WORKLOAD ESTIMATION SERVICE ============

@dataclass
class SubjectWorkload:
    subject_id: str
    subject_name: str
    subject_code: str
    total_periods: int
    periods_per_class_per_week: float
    class_count: int
    max_classes_per_teacher: int
    teachers_by_load: int
    teachers_by_classes: int
    teachers_needed: int

    def as_dict(self):
        return {
            'subjectId': self.subject_id,
            'subjectName': self.subject_name,
            'subjectCode': self.subject_code,
            'totalPeriods': self.total_periods,
            'periodsPerClassPerWeek': self.periods_per_class_per_week,
            'classCount': self.class_count,
            'maxClassesPerTeacher': self.max_classes_per_teacher,
            'teachersByLoad': self.teachers_by_load,
            'teachersByClasses': self.teachers_by_classes,
            'teachersNeeded': self.teachers_needed,
        }


@dataclass
class TeacherEstimate:
    year: str
    weekly_load: int
    homeroom_reduction: int
    dept_head_reduction: int
    subjects: List[SubjectWorkload] = field(default_factory=list)
    homeroom_teachers_needed: int = 0
    dept_heads_needed: int = 0

    @property
    def total_teachers_needed(self) -> int:
        return sum(s.teachers_needed for s in self.subjects)

    @property
    def total_periods(self) -> int:
        return sum(s.total_periods for s in self.subjects)

    @property
    def homeroom_weekly_load(self) -> int:
        return max(0, self.weekly_load - self.homeroom_reduction)

    @property
    def dept_head_weekly_load(self) -> int:
        return max(0, self.weekly_load - self.dept_head_reduction)

    def as_dict(self):
        return {
            'year': self.year,
            'weeklyLoad': self.weekly_load,
            'totalTeachersNeeded': self.total_teachers_needed,
            'subjects': [s.as_dict() for s in self.subjects],
            'homeroomTeachersNeeded': self.homeroom_teachers_needed,
            'deptHeadsNeeded': self.dept_heads_needed,
            'roles': {
                'homeroomTeachers': {
                    'count': self.homeroom_teachers_needed,
                    'weeklyLoad': self.homeroom_weekly_load,
                    'reduction': self.homeroom_reduction,
                },
                'departmentHeads': {
                    'count': self.dept_heads_needed,
                    'weeklyLoad': self.dept_head_weekly_load,
                    'reduction': self.dept_head_reduction,
                },
            },
            'summary': {
                'totalSubjects': len(self.subjects),
                'totalPeriods': self.total_periods,
                'totalClasses': self.homeroom_teachers_needed,
            },
        }


def round_one_decimal(value: Decimal) -> float:
    """Round half-up to one decimal place."""
    return float(value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def max_classes_per_teacher(weekly_load: int, periods_per_class: float) -> int:
    """floor(weekly_load / periods per class), clamped to the configured range."""
    lower = get_scheduling_setting('MIN_CLASSES_PER_TEACHER')
    upper = get_scheduling_setting('MAX_CLASSES_PER_TEACHER')
    if periods_per_class <= 0:
        return upper
    return max(lower, min(upper, math.floor(weekly_load / periods_per_class)))


class WorkloadEstimationService:
    """
    Derives how many teachers a school year needs from declared period demand.
    Read-only; takes no locks.
    """

    @staticmethod
    def estimate_teachers(year, weekly_load=None, homeroom_reduction=None,
                          dept_head_reduction=None) -> TeacherEstimate:
        """
        Estimate required teachers per subject for a school year.

        Args:
            year: School year code
            weekly_load: Periods per week of a full-time subject teacher
            homeroom_reduction: Periods waived for homeroom teachers
            dept_head_reduction: Periods waived for department heads

        Raises:
            InvalidArgument: Blank year, non-positive load or negative reduction
        """
        PeriodDemand = _get_model('PeriodDemand')
        Subject = _get_model('Subject')
        Class = _get_model('Class')
        Department = _get_model('Department')

        year = _validate_year(year)
        weekly_load = _as_int(
            weekly_load if weekly_load is not None else get_scheduling_setting('WEEKLY_LOAD'),
            'weeklyLoad'
        )
        homeroom_reduction = _as_int(
            homeroom_reduction if homeroom_reduction is not None
            else get_scheduling_setting('HOMEROOM_REDUCTION'),
            'homeroomReduction'
        )
        dept_head_reduction = _as_int(
            dept_head_reduction if dept_head_reduction is not None
            else get_scheduling_setting('DEPT_HEAD_REDUCTION'),
            'deptHeadReduction'
        )

        if weekly_load <= 0:
            raise InvalidArgument("weeklyLoad must be a positive integer")
        if homeroom_reduction < 0 or dept_head_reduction < 0:
            raise InvalidArgument("Reductions must be integers >= 0")

        demands = PeriodDemand.objects.filter(
            year=year,
            semester__in=get_scheduling_setting('SEMESTERS'),
        )

        totals: Dict[str, int] = {}
        declarations: Dict[str, int] = {}
        classes: Dict[str, set] = {}
        for demand in demands:
            for subject_id, periods in demand.positive_subject_periods():
                totals[subject_id] = totals.get(subject_id, 0) + periods
                declarations[subject_id] = declarations.get(subject_id, 0) + 1
                classes.setdefault(subject_id, set()).add(demand.school_class_id)

        subjects = {
            str(s.pk): s for s in Subject.objects.filter(is_active=True)
        }

        estimate = TeacherEstimate(
            year=year,
            weekly_load=weekly_load,
            homeroom_reduction=homeroom_reduction,
            dept_head_reduction=dept_head_reduction,
        )

        for subject_id, total_periods in totals.items():
            subject = subjects.get(subject_id)
            if subject is None:
                logger.warning(f"Period demand references unknown or inactive subject {subject_id}")
                continue

            per_class = round_one_decimal(Decimal(total_periods) / Decimal(declarations[subject_id]))
            class_count = len(classes[subject_id])
            max_classes = max_classes_per_teacher(weekly_load, per_class)
            by_load = math.ceil(total_periods / weekly_load)
            by_classes = math.ceil(class_count / max_classes)

            estimate.subjects.append(SubjectWorkload(
                subject_id=subject_id,
                subject_name=subject.name,
                subject_code=subject.code,
                total_periods=total_periods,
                periods_per_class_per_week=per_class,
                class_count=class_count,
                max_classes_per_teacher=max_classes,
                teachers_by_load=by_load,
                teachers_by_classes=by_classes,
                teachers_needed=max(by_load, by_classes),
            ))

        estimate.subjects.sort(key=lambda s: (s.subject_name, s.subject_code))
        estimate.homeroom_teachers_needed = Class.objects.filter(year=year).count()
        estimate.dept_heads_needed = Department.objects.count()

        logger.info(
            f"Teacher estimate for {year}: {estimate.total_teachers_needed} subject teachers, "
            f"{estimate.homeroom_teachers_needed} homeroom, {estimate.dept_heads_needed} department heads"
        )
        return estimate
