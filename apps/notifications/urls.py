"""
URL patterns for notifications app.
"""

from django.urls import path

from . import views

app_name = 'notifications'

urlpatterns = [
    path('trigger-reminders/', views.trigger_reminders, name='trigger_reminders'),
    path('reminders/status/', views.reminder_status, name='reminder_status'),
    path('reminders/test/', views.send_test_reminder, name='send_test_reminder'),
]
