# core/serializers.py
from rest_framework import serializers

from shared.constants import GRADE_CHOICES, SEMESTER_CHOICES
from .models import Class


class ClassSerializer(serializers.ModelSerializer):
    currentSize = serializers.IntegerField(source='current_size', read_only=True)
    remaining = serializers.IntegerField(source='remaining_capacity', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)

    class Meta:
        model = Class
        fields = ['id', 'name', 'year', 'grade', 'capacity', 'currentSize', 'remaining', 'isActive']


class SetupYearSerializer(serializers.Serializer):
    year = serializers.CharField()
    grade = serializers.ChoiceField(choices=GRADE_CHOICES)
    count = serializers.IntegerField(min_value=1, required=False)
    capacity = serializers.IntegerField(min_value=1, required=False)


class PeriodDemandSerializer(serializers.Serializer):
    year = serializers.CharField()
    semester = serializers.ChoiceField(choices=SEMESTER_CHOICES)
    grade = serializers.ChoiceField(choices=GRADE_CHOICES)
    classId = serializers.IntegerField()
    subjectPeriods = serializers.DictField(child=serializers.IntegerField(), required=False)
    activityPeriods = serializers.DictField(child=serializers.IntegerField(), required=False)


class BulkPeriodDemandSerializer(serializers.Serializer):
    year = serializers.CharField()
    semester = serializers.ChoiceField(choices=SEMESTER_CHOICES)
    grade = serializers.ChoiceField(choices=GRADE_CHOICES)
    classPeriodsList = serializers.ListField(child=serializers.DictField(), allow_empty=False)


class EstimateTeachersQuerySerializer(serializers.Serializer):
    year = serializers.CharField()
    weeklyLoad = serializers.IntegerField(min_value=1, required=False)
    homeroomReduction = serializers.IntegerField(min_value=0, required=False)
    deptHeadReduction = serializers.IntegerField(min_value=0, required=False)
