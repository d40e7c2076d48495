# students/tests/test_api.py
from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command, CommandError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from core.models import Class
from students.models import Student

User = get_user_model()

YEAR = '2025-2026'


class AllocateGradeAPITest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username='registrar', password='testpass123')
        self.client.force_authenticate(user=self.user)
        self.url = reverse('students:allocate_grade')

        Class.objects.create(name='10A1', year=YEAR, grade='10', capacity=2)
        Class.objects.create(name='10A2', year=YEAR, grade='10', capacity=2)
        for index, score in enumerate([9, 8, 7, 6, 5]):
            Student.objects.create(
                full_name=f"Student {index}",
                student_code=f"S{index}",
                grade='10',
                admission_year=YEAR,
                entrance_score=Decimal(score),
            )

    def test_allocate_grade(self):
        response = self.client.post(self.url, {'year': YEAR, 'grade': '10'}, format='json')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['assignedCount'], 4)
        self.assertEqual(data['unassignedCount'], 1)
        self.assertEqual(data['classes'], [
            {'name': '10A1', 'remaining': 0},
            {'name': '10A2', 'remaining': 0},
        ])

    def test_min_score(self):
        response = self.client.post(self.url, {'year': YEAR, 'grade': '10', 'minScore': 7}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['assignedCount'], 3)

    def test_invalid_grade(self):
        response = self.client.post(self.url, {'year': YEAR, 'grade': '13'}, format='json')

        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertFalse(data['success'])
        self.assertEqual(data['error'], 'INVALID_ARGUMENT')
        self.assertIn('grade', data['details']['fields'])

    def test_negative_min_score(self):
        response = self.client.post(self.url, {'year': YEAR, 'grade': '10', 'minScore': -1}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_no_classes_configured(self):
        response = self.client.post(self.url, {'year': '2030-2031', 'grade': '10'}, format='json')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], 'NO_CLASSES_CONFIGURED')

    def test_requires_authentication(self):
        client = APIClient()
        response = client.post(self.url, {'year': YEAR, 'grade': '10'}, format='json')

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['error'], 'NOT_AUTHENTICATED')
        self.assertFalse(Student.objects.filter(current_class__isnull=False).exists())


class AllocateGradeCommandTest(TestCase):
    def setUp(self):
        Class.objects.create(name='11A1', year=YEAR, grade='11', capacity=1)
        Student.objects.create(
            full_name='Lan', student_code='L1', grade='11', admission_year=YEAR, entrance_score=Decimal('8'),
        )
        Student.objects.create(
            full_name='Minh', student_code='M1', grade='11', admission_year=YEAR, entrance_score=Decimal('7'),
        )

    def test_allocates_and_reports(self):
        out = StringIO()
        call_command('allocate_grade', '11', year=YEAR, stdout=out)

        output = out.getvalue()
        self.assertIn('1 assigned, 1 unassigned', output)
        self.assertIn('11A1: 0 seats left', output)
        self.assertEqual(Student.objects.get(student_code='L1').current_class.name, '11A1')

    def test_unknown_grade_fails(self):
        with self.assertRaises(CommandError):
            call_command('allocate_grade', '12', year=YEAR, stdout=StringIO())
