"""
Admin configuration for notes app.
"""

from django.contrib import admin

from .models import Note


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'tag', 'created_at')
    list_filter = ('tag', 'created_at')
    search_fields = ('title', 'content', 'tag', 'user__email')
    ordering = ('-created_at',)
    list_select_related = ('user',)
    readonly_fields = ('created_at', 'updated_at')
