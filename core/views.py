# core/views.py
"""
Class setup, period demand and workload estimation API views.
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .serializers import (
    ClassSerializer,
    SetupYearSerializer,
    PeriodDemandSerializer,
    BulkPeriodDemandSerializer,
    EstimateTeachersQuerySerializer,
)
from .services import ClassSetupService, PeriodDemandService, WorkloadEstimationService
from .exceptions import InvalidArgument

logger = logging.getLogger(__name__)


# ============ CLASSES ============

@api_view(['POST'])
def setup_year_classes_view(request):
    serializer = SetupYearSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    created = ClassSetupService.setup_year_classes(
        data['year'], data['grade'], count=data.get('count'), capacity=data.get('capacity')
    )
    return Response({
        'success': True,
        'createdCount': len(created),
        'classes': ClassSerializer(created, many=True).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def classes_by_year_view(request):
    year = request.query_params.get('year')
    if not year:
        raise InvalidArgument("year query parameter is required")

    groups = ClassSetupService.classes_by_grade(year)
    return Response({
        'success': True,
        'year': year,
        'grades': [
            {'grade': group['grade'], 'classes': ClassSerializer(group['classes'], many=True).data}
            for group in groups
        ],
    })


# ============ PERIOD DEMAND ============

@api_view(['POST'])
def upsert_class_periods_view(request):
    serializer = PeriodDemandSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    demand, created = PeriodDemandService.upsert(
        data['year'], data['semester'], data['grade'], data['classId'],
        data.get('subjectPeriods'), data.get('activityPeriods'),
    )
    return Response({
        'success': True,
        'created': created,
        'classPeriods': {
            'id': demand.pk,
            'classId': demand.school_class_id,
            'year': demand.year,
            'semester': demand.semester,
            'grade': demand.grade,
            'subjectPeriods': demand.subject_periods,
            'activityPeriods': demand.activity_periods,
        },
    }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@api_view(['POST'])
def bulk_upsert_class_periods_view(request):
    serializer = BulkPeriodDemandSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    outcome = PeriodDemandService.bulk_upsert(
        data['year'], data['semester'], data['grade'], data['classPeriodsList']
    )
    return Response({
        'success': not outcome['errors'],
        'successCount': len(outcome['results']),
        'errorCount': len(outcome['errors']),
        **outcome,
    })


@api_view(['GET'])
def estimate_teachers_view(request):
    serializer = EstimateTeachersQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    estimate = WorkloadEstimationService.estimate_teachers(
        data['year'],
        weekly_load=data.get('weeklyLoad'),
        homeroom_reduction=data.get('homeroomReduction'),
        dept_head_reduction=data.get('deptHeadReduction'),
    )
    return Response({'success': True, **estimate.as_dict()})
