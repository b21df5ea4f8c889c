"""Database models for files app."""

import uuid
from typing import Any, Final, final

from typing_extensions import override

from django.conf import settings
from django.db import models

# Marker stored in ``type`` for folder entries
FOLDER_TYPE: Final = 'folder'

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_PATH_MAX_LENGTH: Final = 1024
_TYPE_MAX_LENGTH: Final = 255
_URL_MAX_LENGTH: Final = 2048


@final
class FileEntry(models.Model):
    """Node of a user's virtual file tree.

    A single table holds both folders and files. Folders carry no bytes
    (``size`` is 0 and ``file_url`` is empty); files point at a blob in
    S3-compatible storage through ``path`` and ``file_url``.

    ``path`` is the canonical storage location computed once at creation
    and never recomputed afterwards, so renaming an entry does not move
    its blob.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    # Owner relationship
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='file_entries',
        db_index=True,
    )

    # Parent folder, NULL for root-level entries
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        related_name='children',
        null=True,
        blank=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Display name chosen by the owner',
    )

    path = models.CharField(
        max_length=_PATH_MAX_LENGTH,
        help_text='Storage path: {namespace}/{owner_id}/...',
    )

    size = models.BigIntegerField(
        default=0,
        help_text='File size in bytes, 0 for folders',
    )

    type = models.CharField(
        max_length=_TYPE_MAX_LENGTH,
        help_text='Media type of the payload or "folder"',
    )

    file_url = models.CharField(
        max_length=_URL_MAX_LENGTH,
        blank=True,
        default='',
    )

    thumbnail_url = models.CharField(
        max_length=_URL_MAX_LENGTH,
        null=True,
        blank=True,
    )

    is_folder = models.BooleanField(default=False)
    is_starred = models.BooleanField(default=False)
    is_trashed = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File entry'  # type: ignore[mutable-override]
        verbose_name_plural = 'File entries'  # type: ignore[mutable-override]
        ordering = ['-is_folder', 'name']

        indexes = [
            # Optimize folder listing queries
            models.Index(
                fields=['owner', 'parent'],
                name='files_owner_parent_idx',
            ),
        ]

        constraints = [
            # Storage paths never collide inside one owner's namespace
            models.UniqueConstraint(
                fields=['owner', 'path'],
                name='files_owner_path_unique',
            ),
            models.CheckConstraint(
                condition=models.Q(size__gte=0),
                name='files_size_non_negative',
            ),
            # Files always point at a stored blob
            models.CheckConstraint(
                condition=models.Q(is_folder=True) | ~models.Q(file_url=''),
                name='files_file_url_required',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner_id}:{self.path}'

    def as_dict(self) -> dict[str, Any]:
        """Render the entry the way upload responses expose it.

        Returns:
            JSON-serializable dictionary with camelCase keys.
        """
        return {
            'id': str(self.id),
            'name': self.name,
            'path': self.path,
            'size': self.size,
            'type': self.type,
            'fileUrl': self.file_url,
            'thumbnailUrl': self.thumbnail_url,
            'userId': str(self.owner_id),
            'parentId': str(self.parent_id) if self.parent_id else None,
            'isFolder': self.is_folder,
            'isStarred': self.is_starred,
            'isTrash': self.is_trashed,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }
