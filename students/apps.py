# students/apps.py
from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)

class StudentsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'students'
    verbose_name = 'Students & Allocation'

    def ready(self):
        """Connect allocation signal receivers."""
        from . import signals  # noqa: F401
        logger.debug("Students app initialized")
