# core/urls.py
from django.urls import path

from . import views

app_name = 'core'

urlpatterns = [
    # Classes
    path('classes/setup-year/', views.setup_year_classes_view, name='setup_year_classes'),
    path('classes/by-year/', views.classes_by_year_view, name='classes_by_year'),

    # Period demand & workload
    path('class-periods/', views.upsert_class_periods_view, name='class_periods'),
    path('class-periods/bulk/', views.bulk_upsert_class_periods_view, name='class_periods_bulk'),
    path('class-periods/estimate-teachers/', views.estimate_teachers_view, name='estimate_teachers'),
]
