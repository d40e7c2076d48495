# students/serializers.py
from rest_framework import serializers

from shared.constants import GRADE_CHOICES


class AllocateGradeSerializer(serializers.Serializer):
    year = serializers.CharField()
    grade = serializers.ChoiceField(choices=GRADE_CHOICES)
    minScore = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=0, required=False, default=0)
