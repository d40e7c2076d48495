# timetables/models.py
import logging

from django.db import models

from shared.constants import SEMESTER_CHOICES
from .slots import parse_timetable

logger = logging.getLogger(__name__)


class Timetable(models.Model):
    """
    Weekly timetable of one class for one (year, semester).
    `slots` is always replaced in full on save, never patched.
    """
    school_class = models.ForeignKey(
        'core.Class',
        on_delete=models.CASCADE,
        related_name='timetables'
    )
    year = models.CharField(max_length=20)
    semester = models.CharField(max_length=1, choices=SEMESTER_CHOICES)
    slots = models.JSONField(default=list, blank=True, help_text="Per-day period arrays")
    is_locked = models.BooleanField(default=False, help_text="Published timetables are locked")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'timetables_timetable'
        unique_together = ('school_class', 'year', 'semester')
        ordering = ['school_class__grade', 'school_class__name']
        indexes = [
            models.Index(fields=['year', 'semester']),
        ]
        verbose_name = 'Timetable'
        verbose_name_plural = 'Timetables'

    def __str__(self):
        return f"{self.school_class.name} - {self.year} S{self.semester}"

    def parsed_slots(self):
        return parse_timetable(self.slots)

    def as_dict(self):
        return {
            'id': self.pk,
            'classId': self.school_class_id,
            'className': self.school_class.name,
            'year': self.year,
            'semester': self.semester,
            'isLocked': self.is_locked,
            'slots': self.slots,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
