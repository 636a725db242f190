"""
Admin configuration for assignments app.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import Assignment


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    """Admin for Assignment model."""

    list_display = (
        'title', 'user', 'status', 'deadline',
        'is_overdue_display', 'reminder_sent', 'created_at'
    )
    list_filter = ('status', 'reminder_sent', 'deadline', 'created_at')
    search_fields = ('title', 'description', 'user__email')
    ordering = ('-created_at',)
    date_hierarchy = 'deadline'
    list_select_related = ('user',)

    readonly_fields = ('created_at', 'updated_at', 'reminder_sent', 'reminder_sent_at')

    fieldsets = (
        (None, {
            'fields': ('user', 'title', 'description')
        }),
        ('Status & Deadline', {
            'fields': ('status', 'deadline')
        }),
        ('Reminder Tracking', {
            'fields': ('reminder_sent', 'reminder_sent_at'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def is_overdue_display(self, obj):
        if obj.is_overdue:
            return format_html('<span style="color: #DC2626;">{}</span>', 'Overdue')
        return '-'
    is_overdue_display.short_description = 'Overdue'
