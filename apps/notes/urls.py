"""
URL configuration for notes app (mounted at /api/notes/).
"""

from django.urls import path
from . import views

app_name = 'notes'

urlpatterns = [
    path('', views.note_collection, name='note_list'),
    path('search/', views.note_search_view, name='note_search'),
    path('stats/', views.note_stats_view, name='note_stats'),
    path('<int:pk>/', views.note_detail, name='note_detail'),
]
