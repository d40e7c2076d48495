"""
ASGI config for config project.

It exposes the ASGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/5.0/howto/deployment/asgi/
"""

import os

from django.core.asgi import get_asgi_application

# Use DJANGO_SETTINGS_MODULE environment variable when provided, otherwise default to settings.development
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'settings.development')

application = get_asgi_application()
