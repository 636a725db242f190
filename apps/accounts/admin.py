"""
Admin configuration for accounts app.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    User admin keyed on email, with lockout visibility and unlock action.
    """

    list_display = (
        'email', 'is_active', 'is_staff', 'is_locked_display',
        'assignment_count', 'created_at'
    )
    list_filter = ('is_active', 'is_staff')
    search_fields = ('email',)
    ordering = ('email',)
    list_per_page = 25

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Security'), {
            'fields': ('failed_login_attempts', 'locked_until'),
        }),
        (_('Important dates'), {
            'fields': ('last_login', 'created_at', 'updated_at'),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('created_at', 'updated_at', 'last_login')

    actions = ['unlock_accounts']

    def is_locked_display(self, obj):
        """Display whether the account is locked."""
        if obj.is_locked():
            return format_html('<span style="color: #DC2626;">{}</span>', 'Locked')
        return '-'
    is_locked_display.short_description = 'Lock'

    def assignment_count(self, obj):
        return obj.assignments.count()
    assignment_count.short_description = 'Assignments'

    def unlock_accounts(self, request, queryset):
        """Unlock selected accounts."""
        count = 0
        for user in queryset:
            if user.is_locked():
                user.unlock_account()
                count += 1
        self.message_user(request, f'{count} account(s) unlocked.')
    unlock_accounts.short_description = 'Unlock selected accounts'
