# config/urls.py

from django.contrib import admin
from django.urls import path, include

from . import views

# -------------------------------------------------------------------
# URL CONFIGURATION
# -------------------------------------------------------------------

urlpatterns = [
    # ----------------------------------------------------------------
    # Health & diagnostics
    # ----------------------------------------------------------------
    path("health/", views.health_check_view, name="health_check"),

    # ----------------------------------------------------------------
    # Scheduling API
    # ----------------------------------------------------------------
    path("api/", include(("core.urls", "core"), namespace="core")),
    path("api/", include(("students.urls", "students"), namespace="students")),
    path("api/timetables/", include(("timetables.urls", "timetables"), namespace="timetables")),

    # ----------------------------------------------------------------
    # Admin
    # ----------------------------------------------------------------
    path("admin/", admin.site.urls),
]

# -------------------------------------------------------------------
# Error handlers
# -------------------------------------------------------------------

handler404 = "config.views.handler404"
handler500 = "config.views.handler500"
