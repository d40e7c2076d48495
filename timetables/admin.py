# timetables/admin.py
from django.contrib import admin

from .models import Timetable


@admin.register(Timetable)
class TimetableAdmin(admin.ModelAdmin):
    list_display = ['school_class', 'year', 'semester', 'is_locked', 'updated_at']
    list_filter = ['year', 'semester', 'is_locked', 'school_class__grade']
    search_fields = ['school_class__name']
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['school_class']
    actions = ['lock_timetables', 'unlock_timetables']

    def lock_timetables(self, request, queryset):
        updated = queryset.update(is_locked=True)
        self.message_user(request, f"{updated} timetable(s) locked.")
    lock_timetables.short_description = "Lock selected timetables"

    def unlock_timetables(self, request, queryset):
        updated = queryset.update(is_locked=False)
        self.message_user(request, f"{updated} timetable(s) unlocked.")
    unlock_timetables.short_description = "Unlock selected timetables"
