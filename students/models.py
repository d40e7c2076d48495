# students/models.py
"""
STUDENT MODELS
Student holds a back-reference to core.Class; the class owns the roster.
"""
import logging

from django.db import models
from django.core.exceptions import ValidationError

# SHARED IMPORTS
from shared.constants import GRADE_CHOICES, STUDENT_STATUS_CHOICES

logger = logging.getLogger(__name__)


class StudentQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status='active')

    def unassigned(self):
        return self.filter(current_class__isnull=True)

    def ranked(self):
        """Entrance score descending, ties broken by name then id."""
        return self.order_by('-entrance_score', 'full_name', 'pk')


class Student(models.Model):
    """
    Represents a student enrolled in the school.
    current_class is null until the student is allocated to a class.
    """
    full_name = models.CharField(max_length=255)
    student_code = models.CharField(max_length=50, unique=True)
    grade = models.CharField(max_length=2, choices=GRADE_CHOICES)
    admission_year = models.CharField(max_length=20, help_text="School year code of admission")
    entrance_score = models.DecimalField(max_digits=6, decimal_places=2, default=0)

    current_class = models.ForeignKey(
        'core.Class',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='students'
    )
    status = models.CharField(max_length=10, choices=STUDENT_STATUS_CHOICES, default='active')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StudentQuerySet.as_manager()

    class Meta:
        db_table = 'students_student'
        ordering = ['full_name']
        indexes = [
            models.Index(fields=['grade', 'admission_year']),
            models.Index(fields=['current_class']),
            models.Index(fields=['entrance_score']),
        ]
        verbose_name = 'Student'
        verbose_name_plural = 'Students'

    def __str__(self):
        return f"{self.full_name} ({self.student_code})"

    def clean(self):
        if self.entrance_score is not None and self.entrance_score < 0:
            raise ValidationError({'entrance_score': 'Entrance score cannot be negative.'})
