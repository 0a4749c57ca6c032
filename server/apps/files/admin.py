"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import File


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model."""

    list_display = [
        'name',
        'type',
        'user',
        'parent_display',
        'is_public',
        'created_at',
    ]

    list_filter = [
        'type',
        'is_public',
        'created_at',
        'user',
    ]

    search_fields = [
        'name',
        'local_path',
    ]

    # Type, owner and content reference never change after creation
    readonly_fields = [
        'id',
        'user',
        'type',
        'parent',
        'local_path',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('id', 'name', 'type', 'user', 'parent'),
        }),
        ('Visibility', {
            'fields': ('is_public',),
        }),
        ('Storage', {
            'fields': ('local_path',),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def parent_display(self, obj: File) -> str:
        """Display the containing folder.

        Args:
            obj: File instance.

        Returns:
            Parent folder name, or '/' for root records.
        """
        if obj.parent is None:
            return '/'
        return obj.parent.name
    parent_display.short_description = 'Folder'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user', 'parent')
