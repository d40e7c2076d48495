# students/views.py
import logging

from rest_framework.decorators import api_view
from rest_framework.response import Response

from .serializers import AllocateGradeSerializer
from .services import ClassAllocationService

logger = logging.getLogger(__name__)


@api_view(['POST'])
def allocate_grade_view(request):
    """Allocate the unassigned intake of a grade to its classes."""
    serializer = AllocateGradeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = ClassAllocationService.allocate_grade(data['year'], data['grade'], data['minScore'])
    return Response({'success': True, **result.as_dict()})
