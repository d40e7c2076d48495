# timetables/serializers.py
from rest_framework import serializers

from shared.constants import SEMESTER_CHOICES, SLOT_KIND_CHOICES


class PeriodSerializer(serializers.Serializer):
    period = serializers.IntegerField(min_value=1)
    subject = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    teacher = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    kind = serializers.ChoiceField(choices=SLOT_KIND_CHOICES, required=False, allow_null=True)


class DaySerializer(serializers.Serializer):
    day = serializers.CharField()
    periods = PeriodSerializer(many=True)


class SaveTimetableSerializer(serializers.Serializer):
    classId = serializers.IntegerField()
    year = serializers.CharField()
    semester = serializers.ChoiceField(choices=SEMESTER_CHOICES)
    slots = DaySerializer(many=True, required=False)
    timetable = DaySerializer(many=True, required=False)

    def validate(self, attrs):
        # 'timetable' is accepted as an older name for 'slots'
        days = attrs.pop('slots', None)
        legacy = attrs.pop('timetable', None)
        if days is None:
            days = legacy
        if days is None:
            raise serializers.ValidationError({'slots': 'This field is required.'})
        attrs['slots'] = days
        return attrs


class LockSerializer(serializers.Serializer):
    isLocked = serializers.BooleanField(default=True)


class LockAllSerializer(serializers.Serializer):
    year = serializers.CharField()
    semester = serializers.ChoiceField(choices=SEMESTER_CHOICES)
    isLocked = serializers.BooleanField(default=True)
