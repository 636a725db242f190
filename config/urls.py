"""
URL configuration for academic_organizer project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings

from apps.core import views as core_views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', core_views.health_check, name='health'),

    # API
    path('api/auth/', include('apps.accounts.urls', namespace='accounts')),
    path('api/assignments/', include('apps.assignments.urls', namespace='assignments')),
    path('api/notes/', include('apps.notes.urls', namespace='notes')),
    path('api/', include('apps.notifications.urls', namespace='notifications')),
]

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns

# JSON error responses for the API
handler404 = 'apps.core.views.not_found'
handler500 = 'apps.core.views.server_error'

# Admin site customization
admin.site.site_header = 'Academic Organizer Administration'
admin.site.site_title = 'Academic Organizer Admin'
admin.site.index_title = 'Welcome to Academic Organizer Admin'
