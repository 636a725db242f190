"""
Settings package for academic_organizer project.

By default, imports development settings.
For production, set DJANGO_SETTINGS_MODULE=config.settings.production
For tests, DJANGO_SETTINGS_MODULE=config.settings.test
"""

# Default to development settings when importing from config.settings
from .development import *
