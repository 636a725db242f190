"""
URL configuration for assignments app (mounted at /api/assignments/).
"""

from django.urls import path
from . import views

app_name = 'assignments'

urlpatterns = [
    path('', views.assignment_collection, name='assignment_list'),
    path('stats/', views.assignment_stats_view, name='assignment_stats'),
    path('<int:pk>/', views.assignment_detail, name='assignment_detail'),
]
