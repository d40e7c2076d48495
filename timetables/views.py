# timetables/views.py
"""
Timetable API views. Thin wrappers over TimetableService; errors are rendered
by core.handlers.api_exception_handler.
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .serializers import SaveTimetableSerializer, LockSerializer, LockAllSerializer
from .services import TimetableService

logger = logging.getLogger(__name__)


@api_view(['PUT'])
def save_timetable_view(request):
    """Create or replace one class timetable; 409 lists every double-booking."""
    serializer = SaveTimetableSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    timetable = TimetableService.save_timetable(
        class_id=data['classId'],
        year=data['year'],
        semester=data['semester'],
        days=[dict(day, periods=[dict(p) for p in day['periods']]) for day in data['slots']],
    )
    return Response({'success': True, 'timetable': timetable.as_dict()}, status=status.HTTP_200_OK)


@api_view(['GET'])
def timetable_detail_view(request, class_id, year, semester):
    timetable = TimetableService.get_timetable(class_id, year, semester)
    return Response({'success': True, 'timetable': timetable.as_dict()})


@api_view(['GET'])
def timetables_by_year_view(request, year, semester):
    grade = request.query_params.get('grade')
    timetables = TimetableService.list_timetables(year, semester, grade=grade)
    return Response({
        'success': True,
        'count': len(timetables),
        'timetables': [t.as_dict() for t in timetables],
    })


@api_view(['GET'])
def teacher_schedule_view(request, teacher_name, year, semester):
    entries = TimetableService.teacher_schedule(teacher_name, year, semester)
    return Response({
        'success': True,
        'teacher': teacher_name,
        'totalPeriods': len(entries),
        'schedule': entries,
    })


@api_view(['PATCH'])
def lock_timetable_view(request, class_id, year, semester):
    serializer = LockSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    timetable = TimetableService.set_locked(
        class_id, year, semester, locked=serializer.validated_data['isLocked']
    )
    return Response({'success': True, 'timetable': timetable.as_dict()})


@api_view(['POST'])
def lock_all_view(request):
    serializer = LockAllSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    updated = TimetableService.lock_all(data['year'], data['semester'], locked=data['isLocked'])
    return Response({'success': True, 'updatedCount': updated, 'isLocked': data['isLocked']})
