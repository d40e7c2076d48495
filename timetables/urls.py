# timetables/urls.py
from django.urls import path

from . import views

app_name = 'timetables'

urlpatterns = [
    path('', views.save_timetable_view, name='save_timetable'),
    path('lock-all/', views.lock_all_view, name='lock_all'),
    path('year/<str:year>/<str:semester>/', views.timetables_by_year_view, name='by_year'),
    path(
        'teacher/<str:teacher_name>/<str:year>/<str:semester>/',
        views.teacher_schedule_view,
        name='teacher_schedule',
    ),
    path('<int:class_id>/<str:year>/<str:semester>/', views.timetable_detail_view, name='detail'),
    path('<int:class_id>/<str:year>/<str:semester>/lock/', views.lock_timetable_view, name='lock'),
]
