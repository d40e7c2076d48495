# core/middleware.py
"""
Request logging middleware.
"""
import logging

from django.conf import settings

logger = logging.getLogger(__name__)


# ============ REQUEST LOGGING MIDDLEWARE ============

class RequestLoggingMiddleware:
    """Debug-level structured request/response logging."""

    skip_paths = ('/static/', '/media/', '/favicon.ico', '/health/')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        # Skip logging for static files and health checks
        if self._should_skip_logging(request) or not settings.DEBUG:
            return self.get_response(request)

        logger.debug("Request", extra={
            "method": request.method,
            "path": request.path,
            "ip": self._get_client_ip(request),
            "user": self._get_user_id(request),
        })

        response = self.get_response(request)

        logger.debug("Response", extra={
            "path": request.path,
            "status": getattr(response, "status_code", None),
            "user": self._get_user_id(request),
        })
        return response

    def _should_skip_logging(self, request) -> bool:
        return request.path.startswith(self.skip_paths)

    def _get_user_id(self, request):
        user = getattr(request, 'user', None)
        return getattr(user, 'id', None)

    def _get_client_ip(self, request) -> str:
        xff = request.META.get("HTTP_X_FORWARDED_FOR")
        return xff.split(",")[0] if xff else request.META.get("REMOTE_ADDR", "unknown")
