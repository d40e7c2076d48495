# core/handlers.py
"""
DRF exception handler: renders SchoolManagementException subclasses and
serializer validation errors as {"success": false, "error", "message", "details"}.
"""
import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import SchoolManagementException, TimetableConflictError

logger = logging.getLogger(__name__)


def _error_body(error_code, message, details=None):
    return {
        'success': False,
        'error': error_code,
        'message': message,
        'details': details or {},
    }


def api_exception_handler(exc, context):
    """Map domain errors to their HTTP status; defer everything else to DRF."""
    if isinstance(exc, SchoolManagementException):
        body = _error_body(exc.error_code, exc.message, exc.details)
        if isinstance(exc, TimetableConflictError):
            body['conflicts'] = body['details'].get('conflicts', [])

        view = context.get('view')
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{exc.error_code} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}")
        return Response(body, status=exc.status_code)

    if isinstance(exc, drf_exceptions.ValidationError):
        return Response(
            _error_body('INVALID_ARGUMENT', 'Invalid request data', {'fields': exc.detail}),
            status=400,
        )

    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, drf_exceptions.APIException):
        code = exc.get_codes()
        response.data = _error_body(code.upper() if isinstance(code, str) else 'ERROR', str(exc.detail))
    return response
