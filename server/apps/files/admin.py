"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import FileEntry


@admin.register(FileEntry)
class FileEntryAdmin(admin.ModelAdmin):
    """Admin interface for FileEntry model.

    Storage-derived fields are read-only: ``path`` and the URLs are
    fixed at upload time and editing them would detach the row from its
    blob.
    """

    list_display = [
        'name',
        'owner',
        'is_folder',
        'size_display',
        'type',
        'created_at',
    ]

    list_filter = [
        'is_folder',
        'is_starred',
        'is_trashed',
        'created_at',
    ]

    search_fields = [
        'name',
        'path',
    ]

    readonly_fields = [
        'id',
        'path',
        'size',
        'type',
        'file_url',
        'thumbnail_url',
        'is_folder',
        'created_at',
        'updated_at',
    ]

    fieldsets = (
        ('Entry', {
            'fields': ('id', 'name', 'owner', 'parent', 'is_folder'),
        }),
        ('Storage', {
            'fields': ('path', 'size', 'type', 'file_url', 'thumbnail_url'),
        }),
        ('Flags', {
            'fields': ('is_starred', 'is_trashed'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
        }),
    )

    raw_id_fields = ['owner', 'parent']

    @admin.display(description='Size')
    def size_display(self, obj: FileEntry) -> str:
        """Display file size in human-readable format.

        Args:
            obj: FileEntry instance.

        Returns:
            Formatted size string (e.g., '1.5 MB'), '-' for folders.
        """
        if obj.is_folder:
            return '-'

        size_bytes = obj.size
        if size_bytes < 1024:
            return f'{size_bytes} B'
        if size_bytes < 1024 * 1024:  # noqa: WPS531
            return f'{size_bytes / 1024:.1f} KB'
        return f'{size_bytes / (1024 * 1024):.1f} MB'

    def get_queryset(self, request: HttpRequest) -> QuerySet[FileEntry]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('owner')
