# students/tests/test_services.py
from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from core.exceptions import InvalidArgument, NoClassesConfigured, TransactionFailed
from core.models import Class
from students.models import Student
from students.services import ClassAllocationService, ClassCapacity, RosterStore, round_robin
from students.signals import students_allocated

YEAR = '2025-2026'


def make_student(name, score, grade='10', year=YEAR, **extra):
    return Student.objects.create(
        full_name=name,
        student_code=f"{year}-{grade}-{name}",
        grade=grade,
        admission_year=year,
        entrance_score=Decimal(str(score)),
        **extra
    )


class RoundRobinTest(TestCase):
    def test_rotates_over_classes_with_room(self):
        capacities = [
            ClassCapacity(class_id=1, name='10A1', remaining=2),
            ClassCapacity(class_id=2, name='10A2', remaining=40),
        ]
        placements = round_robin(capacities, ['s1', 's2', 's3', 's4', 's5'])

        self.assertEqual(
            [(student, c.name) for student, c in placements],
            [('s1', '10A1'), ('s2', '10A2'), ('s3', '10A1'), ('s4', '10A2'), ('s5', '10A2')],
        )
        self.assertEqual([c.remaining for c in capacities], [0, 37])

    def test_stops_when_every_class_is_full(self):
        capacities = [
            ClassCapacity(class_id=1, name='10A1', remaining=1),
            ClassCapacity(class_id=2, name='10A2', remaining=1),
        ]
        placements = round_robin(capacities, ['a', 'b', 'c', 'd'])

        self.assertEqual([s for s, _ in placements], ['a', 'b'])
        self.assertEqual([c.remaining for c in capacities], [0, 0])

    def test_same_input_same_output(self):
        def run():
            capacities = [ClassCapacity(i, f"10A{i}", 3) for i in range(1, 4)]
            return [(s, c.class_id) for s, c in round_robin(capacities, list(range(8)))]

        self.assertEqual(run(), run())

    def test_no_classes_places_nobody(self):
        self.assertEqual(round_robin([], ['a']), [])


class RosterStoreTest(TestCase):
    def setUp(self):
        self.class_b = Class.objects.create(name='10A2', year=YEAR, grade='10', capacity=10)
        self.class_a = Class.objects.create(name='10A1', year=YEAR, grade='10', capacity=10)
        Class.objects.create(name='11A1', year=YEAR, grade='11', capacity=10)

    def test_classes_in_creation_order(self):
        Class.objects.create(name='10A10', year=YEAR, grade='10', capacity=10)

        classes = RosterStore.classes(YEAR, '10')
        self.assertEqual([c.name for c in classes], ['10A2', '10A1', '10A10'])

    def test_eligible_students_ranked_with_name_tiebreak(self):
        make_student('Carol', 8)
        make_student('Bob', 9)
        make_student('Alice', 9)
        make_student('Dan', 4)
        make_student('Erin', 9, status='inactive')
        make_student('Frank', 9, current_class=self.class_a)
        make_student('Gina', 9, grade='11')

        students = RosterStore.eligible_students(YEAR, '10', Decimal('5'))
        self.assertEqual([s.full_name for s in students], ['Alice', 'Bob', 'Carol'])

    def test_remaining_capacity(self):
        self.class_a.current_size = 7
        self.class_a.save()

        capacities = RosterStore.remaining_capacity(RosterStore.classes(YEAR, '10'))
        self.assertEqual([(c.name, c.remaining) for c in capacities], [('10A2', 10), ('10A1', 3)])


class ClassAllocationServiceTest(TestCase):
    def setUp(self):
        self.class_1 = Class.objects.create(name='10A1', year=YEAR, grade='10', capacity=40, current_size=38)
        self.class_2 = Class.objects.create(name='10A2', year=YEAR, grade='10', capacity=40)
        self.students = [
            make_student('Anh', 9.5),
            make_student('Binh', 9.0),
            make_student('Chi', 8.5),
            make_student('Dung', 8.0),
            make_student('Giang', 7.5),
        ]

    def test_fills_next_class_in_rotation(self):
        result = ClassAllocationService.allocate_grade(YEAR, '10')

        self.assertEqual(result.assigned_count, 5)
        self.assertEqual(result.unassigned_count, 0)
        self.assertEqual(
            [c.as_dict() for c in result.classes],
            [{'name': '10A1', 'remaining': 0}, {'name': '10A2', 'remaining': 37}],
        )

        class_of = {s.full_name: s.current_class.name for s in Student.objects.select_related('current_class')}
        self.assertEqual(class_of, {
            'Anh': '10A1', 'Binh': '10A2', 'Chi': '10A1', 'Dung': '10A2', 'Giang': '10A2',
        })

        self.class_1.refresh_from_db()
        self.class_2.refresh_from_db()
        self.assertEqual(self.class_1.current_size, 40)
        self.assertEqual(self.class_2.current_size, 3)

    def test_capacity_is_never_exceeded(self):
        for index in range(50):
            make_student(f"Extra{index:02d}", 5)

        result = ClassAllocationService.allocate_grade(YEAR, '10')

        self.assertEqual(result.assigned_count, 42)
        self.assertEqual(result.unassigned_count, 13)
        for school_class in Class.objects.filter(year=YEAR, grade='10'):
            self.assertLessEqual(school_class.current_size, school_class.capacity)
        self.assertEqual(Student.objects.filter(current_class=self.class_2).count(), 40)

    def test_equal_classes_differ_by_at_most_one(self):
        Class.objects.filter(pk=self.class_1.pk).update(current_size=0)
        Class.objects.create(name='10A3', year=YEAR, grade='10', capacity=40)
        for index in range(6):
            make_student(f"More{index}", 6)

        ClassAllocationService.allocate_grade(YEAR, '10')

        sizes = [c.current_size for c in Class.objects.filter(year=YEAR, grade='10')]
        self.assertEqual(sum(sizes), 11)
        self.assertLessEqual(max(sizes) - min(sizes), 1)

    def test_second_run_finds_nobody(self):
        ClassAllocationService.allocate_grade(YEAR, '10')
        result = ClassAllocationService.allocate_grade(YEAR, '10')

        self.assertEqual(result.assigned_count, 0)
        self.assertEqual(result.unassigned_count, 0)
        self.assertEqual([c.remaining for c in result.classes], [0, 37])

    def test_min_score_filters_students(self):
        result = ClassAllocationService.allocate_grade(YEAR, '10', min_score='8.5')

        self.assertEqual(result.assigned_count, 3)
        self.assertEqual(
            set(Student.objects.filter(current_class__isnull=True).values_list('full_name', flat=True)),
            {'Dung', 'Giang'},
        )

    def test_no_classes_configured(self):
        with self.assertRaises(NoClassesConfigured) as ctx:
            ClassAllocationService.allocate_grade(YEAR, '12')

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.error_code, 'NO_CLASSES_CONFIGURED')

    def test_invalid_arguments(self):
        for year, grade, min_score in [
            ('', '10', 0),
            (YEAR, '9', 0),
            (YEAR, '10', -1),
            (YEAR, '10', 'abc'),
        ]:
            with self.assertRaises(InvalidArgument):
                ClassAllocationService.allocate_grade(year, grade, min_score)

        self.assertFalse(Student.objects.filter(current_class__isnull=False).exists())

    def test_failed_write_rolls_back_everything(self):
        with patch('core.models.Class.save', side_effect=DatabaseError('disk full')):
            with self.assertRaises(TransactionFailed) as ctx:
                ClassAllocationService.allocate_grade(YEAR, '10')

        self.assertEqual(ctx.exception.status_code, 503)
        self.assertFalse(Student.objects.filter(current_class__isnull=False).exists())
        self.class_2.refresh_from_db()
        self.assertEqual(self.class_2.current_size, 0)

    def test_signal_sent_after_commit(self):
        received = []

        def on_allocated(sender, **kwargs):
            received.append(kwargs)

        students_allocated.connect(on_allocated, weak=False)
        self.addCleanup(students_allocated.disconnect, on_allocated)

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            result = ClassAllocationService.allocate_grade(YEAR, '10')
            self.assertEqual(received, [])

        self.assertEqual(len(callbacks), 1)
        self.assertEqual(len(received), 1)
        self.assertEqual(received[0]['grade'], '10')
        self.assertEqual(received[0]['assignments'], result.assignments)

    def test_signal_not_sent_when_rolled_back(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with patch('core.models.Class.save', side_effect=DatabaseError('boom')):
                with self.assertRaises(TransactionFailed):
                    ClassAllocationService.allocate_grade(YEAR, '10')

        self.assertEqual(callbacks, [])

    def test_result_as_dict_uses_wire_keys(self):
        data = ClassAllocationService.allocate_grade(YEAR, '10').as_dict()

        self.assertEqual(data['assignedCount'], 5)
        self.assertEqual(data['unassignedCount'], 0)
        self.assertEqual(data['classes'][0], {'name': '10A1', 'remaining': 0})
        self.assertEqual(len(data['assignments']), 5)
