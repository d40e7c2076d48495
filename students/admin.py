# students/admin.py
from django.contrib import admin

from .models import Student


# ===== STUDENT ADMIN =====
@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = [
        'student_code',
        'full_name',
        'grade',
        'admission_year',
        'entrance_score',
        'current_class',
        'status',
    ]

    list_filter = [
        'status',
        'grade',
        'admission_year',
        'current_class__year',
    ]

    search_fields = [
        'full_name',
        'student_code',
    ]

    raw_id_fields = ['current_class']

    readonly_fields = [
        'created_at',
        'updated_at',
    ]

    ordering = ['grade', '-entrance_score', 'full_name']
