"""Metadata catalog over the ``FileEntry`` table."""

import logging
import uuid
from typing import Any, final

from django.db import transaction

from server.apps.files.models import FileEntry

logger = logging.getLogger(__name__)


@final
class FileCatalog:
    """Reads and writes ``FileEntry`` rows for the upload pipeline.

    Every insert runs in its own atomic block, so a failed write (e.g. a
    path collision) rolls back only itself and never the caller's
    enclosing transaction.
    """

    def insert(self, **fields: Any) -> FileEntry:
        """Create one entry.

        Args:
            fields: ``FileEntry`` field values.

        Returns:
            Created FileEntry instance.

        Raises:
            DatabaseError: If the insert fails.
        """
        with transaction.atomic():
            entry = FileEntry.objects.create(**fields)
        logger.info(
            'File entry created in database: %s (ID: %s)',
            entry.path,
            entry.id,
        )
        return entry

    def find_one(self, **filters: Any) -> FileEntry | None:
        """Return the first entry matching ``filters``, if any."""
        return FileEntry.objects.filter(**filters).first()

    def find_folder(self, owner: Any, folder_id: object) -> FileEntry | None:
        """Look up a folder that belongs to ``owner``.

        Args:
            owner: Expected owner of the folder.
            folder_id: Folder ID, as a UUID or its string form.

        Returns:
            The folder, or None if it is missing, malformed, owned by
            someone else or not a folder at all.
        """
        try:
            folder_uuid = uuid.UUID(str(folder_id))
        except ValueError:
            return None
        return self.find_one(id=folder_uuid, owner=owner, is_folder=True)
