# settings/__init__.py
"""
Settings package. Select a module with DJANGO_SETTINGS_MODULE:
settings.development, settings.production or settings.test.
"""
