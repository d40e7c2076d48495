# students/urls.py
from django.urls import path

from . import views

app_name = 'students'

urlpatterns = [
    path('classes/allocate-grade/', views.allocate_grade_view, name='allocate_grade'),
]
