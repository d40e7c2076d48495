# core/admin.py
from django.contrib import admin
from .models import Department, Subject, Activity, Class, PeriodDemand, SchedulingLock

@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'department', 'is_active']
    list_filter = ['department', 'is_active']
    search_fields = ['name', 'code']
    list_editable = ['is_active']

@admin.register(Class)
class ClassAdmin(admin.ModelAdmin):
    list_display = ['name', 'year', 'grade', 'capacity', 'current_size', 'is_active']
    list_filter = ['year', 'grade', 'is_active']
    search_fields = ['name']
    readonly_fields = ['current_size', 'created_at', 'updated_at']

@admin.register(PeriodDemand)
class PeriodDemandAdmin(admin.ModelAdmin):
    list_display = ['school_class', 'year', 'semester', 'grade', 'updated_at']
    list_filter = ['year', 'semester', 'grade']
    list_select_related = ['school_class']

# Register other core models
admin.site.register(Department)
admin.site.register(Activity)
admin.site.register(SchedulingLock)
