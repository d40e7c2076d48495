# core/models.py
"""
CORE MODELS - Classes, subjects and the period demand that drives scheduling
Consistent field naming, proper relationships, well documented
"""
import logging

from django.db import models
from django.utils import timezone
from django.core.exceptions import ValidationError

# SHARED IMPORTS
from shared.constants import GRADE_CHOICES, SEMESTER_CHOICES

logger = logging.getLogger(__name__)


# ============ DEPARTMENT MODEL ============

class Department(models.Model):
    """Subject department. Each department has one head."""
    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=20, blank=True)
    description = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_department'
        ordering = ['name']
        verbose_name = 'Department'
        verbose_name_plural = 'Departments'

    def __str__(self):
        return self.name


# ============ SUBJECT MODEL ============

class Subject(models.Model):
    """Academic subject taught by subject teachers."""
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=20, unique=True, help_text="Subject code, e.g., MATH, LIT, ENG")
    grades = models.JSONField(default=list, blank=True, help_text="Grades this subject applies to")
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='subjects'
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_subject'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active']),
        ]
        verbose_name = 'Subject'
        verbose_name_plural = 'Subjects'

    def __str__(self):
        return f"{self.name} ({self.code})"


# ============ ACTIVITY MODEL ============

class Activity(models.Model):
    """Non-subject activity (flag ceremony, class meeting, clubs)."""
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=20, unique=True)
    grades = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'core_activity'
        ordering = ['name']
        verbose_name = 'Activity'
        verbose_name_plural = 'Activities'

    def __str__(self):
        return self.name


# ============ CLASS MODEL (MAIN) ============

class Class(models.Model):
    """
    Academic class for one school year and grade.
    current_size caches the number of students whose current_class is this class.
    """
    name = models.CharField(max_length=100)
    year = models.CharField(max_length=20, help_text="School year code, e.g. 2025-2026")
    grade = models.CharField(max_length=2, choices=GRADE_CHOICES)
    capacity = models.PositiveIntegerField(default=45)
    current_size = models.PositiveIntegerField(default=0, editable=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_class'
        unique_together = ('year', 'name')
        ordering = ['grade', 'name']
        indexes = [
            models.Index(fields=['year', 'grade']),
            models.Index(fields=['name']),
        ]
        verbose_name = "Class"
        verbose_name_plural = "Classes"

    def __str__(self):
        return f"{self.name} - {self.year}"

    @property
    def remaining_capacity(self) -> int:
        """Seats still free in this class."""
        return max(0, self.capacity - self.current_size)

    def clean(self):
        """Validate class data."""
        if self.capacity <= 0:
            raise ValidationError({
                'capacity': 'Capacity must be greater than 0.'
            })

        if self.current_size > self.capacity:
            raise ValidationError({
                'current_size': f'Current size ({self.current_size}) exceeds capacity ({self.capacity}).'
            })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


# ============ PERIOD DEMAND MODEL ============

class PeriodDemand(models.Model):
    """
    Periods per week each subject and activity needs in one class,
    for one semester. Keys of both maps are Subject / Activity primary keys.
    """
    year = models.CharField(max_length=20)
    semester = models.CharField(max_length=1, choices=SEMESTER_CHOICES)
    grade = models.CharField(max_length=2, choices=GRADE_CHOICES)
    school_class = models.ForeignKey(
        Class,
        on_delete=models.CASCADE,
        related_name='period_demands'
    )
    subject_periods = models.JSONField(default=dict, blank=True)
    activity_periods = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_period_demand'
        unique_together = ('year', 'semester', 'school_class')
        ordering = ['year', 'semester', 'school_class__name']
        indexes = [
            models.Index(fields=['year', 'semester', 'grade']),
        ]
        verbose_name = 'Period Demand'
        verbose_name_plural = 'Period Demands'

    def __str__(self):
        return f"{self.school_class.name} - {self.year} S{self.semester}"

    def positive_subject_periods(self):
        """Yield (subject_id, periods) pairs with a positive weekly load."""
        for subject_id, periods in (self.subject_periods or {}).items():
            if isinstance(periods, bool) or not isinstance(periods, (int, float)):
                continue
            if periods > 0:
                yield str(subject_id), periods


# ============ SCHEDULING LOCK MODEL ============

class SchedulingLock(models.Model):
    """Row locked FOR UPDATE to serialize scheduling work within one scope."""
    scope = models.CharField(max_length=100, unique=True)
    acquired_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'core_scheduling_lock'
        verbose_name = 'Scheduling Lock'
        verbose_name_plural = 'Scheduling Locks'

    def __str__(self):
        return self.scope

    def touch(self):
        self.acquired_at = timezone.now()
        self.save(update_fields=['acquired_at'])
