# core/tests/test_services.py
from django.test import TestCase

from core.exceptions import InvalidArgument, NotFound
from core.models import Class, Department, PeriodDemand, Subject
from core.services import (
    ClassSetupService,
    PeriodDemandService,
    WorkloadEstimationService,
    max_classes_per_teacher,
    round_one_decimal,
)

YEAR = '2025-2026'


class ClassSetupServiceTest(TestCase):
    def test_creates_default_classes(self):
        created = ClassSetupService.setup_year_classes(YEAR, '10')

        self.assertEqual([c.name for c in created], [f"10A{i}" for i in range(1, 9)])
        self.assertTrue(all(c.capacity == 45 for c in created))

    def test_skips_existing_names(self):
        Class.objects.create(name='10A1', year=YEAR, grade='10', capacity=30)

        created = ClassSetupService.setup_year_classes(YEAR, '10', count=3, capacity=40)

        self.assertEqual([c.name for c in created], ['10A2', '10A3'])
        self.assertEqual(Class.objects.get(name='10A1', year=YEAR).capacity, 30)
        self.assertEqual(ClassSetupService.setup_year_classes(YEAR, '10', count=3), [])

    def test_rejects_bad_input(self):
        with self.assertRaises(InvalidArgument):
            ClassSetupService.setup_year_classes(YEAR, '9')
        with self.assertRaises(InvalidArgument):
            ClassSetupService.setup_year_classes(YEAR, '10', count=0)
        with self.assertRaises(InvalidArgument):
            ClassSetupService.setup_year_classes('', '10')

    def test_classes_by_grade(self):
        ClassSetupService.setup_year_classes(YEAR, '11', count=2)
        ClassSetupService.setup_year_classes(YEAR, '10', count=1)

        groups = ClassSetupService.classes_by_grade(YEAR)

        self.assertEqual([g['grade'] for g in groups], ['10', '11'])
        self.assertEqual([c.name for c in groups[1]['classes']], ['11A1', '11A2'])


class PeriodDemandServiceTest(TestCase):
    def setUp(self):
        self.school_class = Class.objects.create(name='10A1', year=YEAR, grade='10')
        self.subject = Subject.objects.create(name='Math', code='MATH')

    def test_upsert_creates_then_replaces(self):
        demand, created = PeriodDemandService.upsert(
            YEAR, '1', '10', self.school_class.pk, {self.subject.pk: 4}, {'7': 1}
        )
        self.assertTrue(created)
        self.assertEqual(demand.subject_periods, {str(self.subject.pk): 4})

        demand, created = PeriodDemandService.upsert(
            YEAR, '1', '10', self.school_class.pk, {self.subject.pk: 5}
        )
        self.assertFalse(created)
        self.assertEqual(demand.subject_periods, {str(self.subject.pk): 5})
        self.assertEqual(demand.activity_periods, {})
        self.assertEqual(PeriodDemand.objects.count(), 1)

    def test_negative_periods_clamped(self):
        demand, _ = PeriodDemandService.upsert(YEAR, '2', '10', self.school_class.pk, {'1': -3, '2': 2})
        self.assertEqual(demand.subject_periods, {'1': 0, '2': 2})

    def test_unknown_class(self):
        with self.assertRaises(NotFound):
            PeriodDemandService.upsert(YEAR, '1', '10', 99999, {})

    def test_invalid_semester(self):
        with self.assertRaises(InvalidArgument):
            PeriodDemandService.upsert(YEAR, '3', '10', self.school_class.pk, {})

    def test_bulk_reports_each_item(self):
        outcome = PeriodDemandService.bulk_upsert(YEAR, '1', '10', [
            {'classId': self.school_class.pk, 'subjectPeriods': {'1': 3}},
            {'classId': 99999, 'subjectPeriods': {'1': 3}},
            {'subjectPeriods': {'1': 3}},
        ])

        self.assertEqual(outcome['results'], [{'classId': self.school_class.pk, 'status': 'created'}])
        self.assertEqual([e['classId'] for e in outcome['errors']], [99999, None])
        self.assertEqual(PeriodDemand.objects.count(), 1)


class WorkloadHelpersTest(TestCase):
    def test_round_one_decimal_half_up(self):
        from decimal import Decimal
        self.assertEqual(round_one_decimal(Decimal('5.25')), 5.3)
        self.assertEqual(round_one_decimal(Decimal(16) / Decimal(3)), 5.3)

    def test_max_classes_is_clamped(self):
        self.assertEqual(max_classes_per_teacher(17, 6), 2)
        self.assertEqual(max_classes_per_teacher(17, 10), 2)
        self.assertEqual(max_classes_per_teacher(17, 1), 8)
        self.assertEqual(max_classes_per_teacher(17, 4), 4)


class WorkloadEstimationServiceTest(TestCase):
    def setUp(self):
        self.math = Subject.objects.create(name='Math', code='MATH')
        self.classes = [
            Class.objects.create(name=f"10A{i}", year=YEAR, grade='10') for i in range(1, 11)
        ]

    def declare(self, school_class, periods, semester='1', activities=None):
        return PeriodDemand.objects.update_or_create(
            year=YEAR,
            semester=semester,
            school_class=school_class,
            defaults={
                'grade': school_class.grade,
                'subject_periods': periods,
                'activity_periods': activities or {},
            },
        )[0]

    def test_math_example(self):
        for school_class in self.classes:
            self.declare(school_class, {str(self.math.pk): 6})

        estimate = WorkloadEstimationService.estimate_teachers(YEAR)
        math = estimate.subjects[0]

        self.assertEqual(math.total_periods, 60)
        self.assertEqual(math.periods_per_class_per_week, 6.0)
        self.assertEqual(math.class_count, 10)
        self.assertEqual(math.teachers_by_load, 4)
        self.assertEqual(math.max_classes_per_teacher, 2)
        self.assertEqual(math.teachers_by_classes, 5)
        self.assertEqual(math.teachers_needed, 5)
        self.assertEqual(estimate.total_teachers_needed, 5)

    def test_mean_rounded_to_one_decimal(self):
        for school_class, periods in zip(self.classes[:3], [5, 5, 6]):
            self.declare(school_class, {str(self.math.pk): periods})

        math = WorkloadEstimationService.estimate_teachers(YEAR).subjects[0]

        self.assertEqual(math.total_periods, 16)
        self.assertEqual(math.periods_per_class_per_week, 5.3)
        self.assertEqual(math.max_classes_per_teacher, 3)
        self.assertEqual(math.teachers_needed, 1)

    def test_both_semesters_count_each_class_once(self):
        self.declare(self.classes[0], {str(self.math.pk): 4}, semester='1')
        self.declare(self.classes[0], {str(self.math.pk): 4}, semester='2')

        math = WorkloadEstimationService.estimate_teachers(YEAR).subjects[0]

        self.assertEqual(math.total_periods, 8)
        self.assertEqual(math.periods_per_class_per_week, 4.0)
        self.assertEqual(math.class_count, 1)

    def test_more_demand_never_needs_fewer_teachers(self):
        for school_class in self.classes[:4]:
            self.declare(school_class, {str(self.math.pk): 3})
        before = WorkloadEstimationService.estimate_teachers(YEAR).total_teachers_needed

        for school_class in self.classes[4:]:
            self.declare(school_class, {str(self.math.pk): 3})
        self.declare(self.classes[0], {str(self.math.pk): 9})
        after = WorkloadEstimationService.estimate_teachers(YEAR).total_teachers_needed

        self.assertGreaterEqual(after, before)

    def test_ignores_activities_unknown_and_inactive_subjects(self):
        retired = Subject.objects.create(name='Latin', code='LAT', is_active=False)
        self.declare(
            self.classes[0],
            {str(self.math.pk): 0, str(retired.pk): 3, '99999': 4},
            activities={'1': 2},
        )

        estimate = WorkloadEstimationService.estimate_teachers(YEAR)

        self.assertEqual(estimate.subjects, [])
        self.assertEqual(estimate.total_teachers_needed, 0)

    def test_subjects_sorted_by_name(self):
        physics = Subject.objects.create(name='Physics', code='PHY')
        biology = Subject.objects.create(name='Biology', code='BIO')
        self.declare(self.classes[0], {str(physics.pk): 2, str(self.math.pk): 4, str(biology.pk): 1})

        estimate = WorkloadEstimationService.estimate_teachers(YEAR)

        self.assertEqual([s.subject_name for s in estimate.subjects], ['Biology', 'Math', 'Physics'])

    def test_roles(self):
        Department.objects.create(name='Science')
        Department.objects.create(name='Languages')
        Class.objects.create(name='10A1', year='2026-2027', grade='10')

        estimate = WorkloadEstimationService.estimate_teachers(YEAR, homeroom_reduction=4)

        self.assertEqual(estimate.homeroom_teachers_needed, 10)
        self.assertEqual(estimate.dept_heads_needed, 2)
        self.assertEqual(estimate.homeroom_weekly_load, 13)
        self.assertEqual(estimate.dept_head_weekly_load, 14)

    def test_role_load_never_negative(self):
        estimate = WorkloadEstimationService.estimate_teachers(YEAR, weekly_load=2, dept_head_reduction=5)
        self.assertEqual(estimate.dept_head_weekly_load, 0)

    def test_as_dict(self):
        self.declare(self.classes[0], {str(self.math.pk): 4})

        data = WorkloadEstimationService.estimate_teachers(YEAR).as_dict()

        self.assertEqual(data['totalTeachersNeeded'], 1)
        self.assertEqual(data['subjects'][0]['subjectName'], 'Math')
        self.assertEqual(data['subjects'][0]['teachersNeeded'], 1)
        self.assertEqual(data['roles']['homeroomTeachers']['weeklyLoad'], 14)
        self.assertEqual(data['summary'], {'totalSubjects': 1, 'totalPeriods': 4, 'totalClasses': 10})

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidArgument):
            WorkloadEstimationService.estimate_teachers('')
        with self.assertRaises(InvalidArgument):
            WorkloadEstimationService.estimate_teachers(YEAR, weekly_load=0)
        with self.assertRaises(InvalidArgument):
            WorkloadEstimationService.estimate_teachers(YEAR, homeroom_reduction=-1)
