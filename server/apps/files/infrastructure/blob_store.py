"""Blob store capability used by the upload pipeline.

The ingestors only see ``BlobStore.put``. Production code wraps the
configured Django storage in ``S3BlobStore``; tests pass an in-memory
fake instead.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, final

from django.core.files.base import File as DjangoFile
from django.core.files.storage import Storage, default_storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredBlob:
    """What the blob store reports back after a successful put."""

    stored_path: str
    url: str
    thumbnail_url: str | None = None


class BlobStore(Protocol):
    """Durable storage for payload bytes."""

    def put(
        self,
        content: DjangoFile,
        folder: str,
        file_name: str,
    ) -> StoredBlob:
        """Store ``content`` as ``folder/file_name``.

        Implementations may raise any exception on provider failure and
        must not be assumed idempotent.
        """


@final
class S3BlobStore:
    """Blob store backed by a Django storage (S3/MinIO/R2 in practice)."""

    def __init__(self, storage: Storage) -> None:
        """Initialize S3BlobStore.

        Args:
            storage: Storage backend that receives the bytes.
        """
        self._storage = storage

    def put(
        self,
        content: DjangoFile,
        folder: str,
        file_name: str,
    ) -> StoredBlob:
        """Upload content and describe where it ended up.

        Args:
            content: Payload to upload.
            folder: Destination folder (storage key prefix).
            file_name: Desired blob name inside the folder.

        Returns:
            Stored path as reported by the storage plus its URL.
        """
        content.seek(0)
        stored_path = self._storage.save(f'{folder}/{file_name}', content)
        logger.info('Blob stored: %s', stored_path)
        return StoredBlob(
            stored_path=stored_path,
            url=self._storage.url(stored_path),
        )


def get_blob_store() -> S3BlobStore:
    """Build the blob store for the configured default storage.

    Returns:
        S3BlobStore over ``STORAGES['default']``.
    """
    return S3BlobStore(default_storage)
