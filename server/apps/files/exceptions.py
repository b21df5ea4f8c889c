"""Exceptions for files app.

Every upload failure is an ``IngestionError`` with a stable ``kind``
that clients can branch on and a message that is safe to show to them.
"""

from typing import TYPE_CHECKING, Any, ClassVar, Final

if TYPE_CHECKING:
    from server.apps.files.logic.ingestion import FolderUpload

_MEGABYTE: Final = 1024 * 1024


def _format_limit(limit: int) -> str:
    if limit < _MEGABYTE:
        return f'{limit} bytes'
    return f'{limit // _MEGABYTE}MB'


class IngestionError(Exception):
    """Base class for errors raised while ingesting uploads."""

    kind: ClassVar[str] = 'ingestion_error'

    def __init__(self, message: str) -> None:
        """Initialize IngestionError.

        Args:
            message: Human-readable description.
        """
        self.message = message
        super().__init__(message)

    def as_dict(self) -> dict[str, Any]:
        """Machine-readable representation for API responses.

        Returns:
            Dictionary with ``kind``, ``message`` and error details.
        """
        return {'kind': self.kind, 'message': self.message}


class UnauthorizedError(IngestionError):
    """Raised when the claimed owner is not the authenticated principal."""

    kind = 'unauthorized'

    def __init__(self, message: str = 'Unauthorized') -> None:
        super().__init__(message)


class InvalidInputError(IngestionError):
    """Raised when the request misses a name, a payload or the files."""

    kind = 'invalid_input'


class SizeLimitExceededError(IngestionError):
    """Raised when a payload is larger than the upload limit."""

    kind = 'size_limit_exceeded'

    def __init__(self, file_name: str, size: int, limit: int) -> None:
        """Initialize SizeLimitExceededError.

        Args:
            file_name: Name of the offending payload.
            size: Payload size in bytes.
            limit: Maximum allowed size in bytes.
        """
        self.file_name = file_name
        self.size = size
        self.limit = limit
        super().__init__(
            f'File {file_name} exceeds {_format_limit(limit)} limit',
        )

    def as_dict(self) -> dict[str, Any]:
        return {**super().as_dict(), 'fileName': self.file_name}


class ForbiddenFileTypeError(IngestionError):
    """Raised for executable-style extensions."""

    kind = 'forbidden_file_type'

    def __init__(self, file_name: str, extension: str) -> None:
        self.file_name = file_name
        self.extension = extension
        super().__init__(
            f'File type .{extension} is not allowed for security reasons',
        )

    def as_dict(self) -> dict[str, Any]:
        return {**super().as_dict(), 'extension': self.extension}


class ParentNotFoundError(IngestionError):
    """Raised when the parent is missing, foreign or not a folder."""

    kind = 'parent_not_found'

    def __init__(self, parent_id: object) -> None:
        self.parent_id = parent_id
        super().__init__('Parent folder not found')


class UploadFailedError(IngestionError):
    """Raised when the blob store rejects a put.

    Nothing has been written to the catalog when this is raised.
    """

    kind = 'upload_failed'

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f'Failed to upload file {file_name}')


class CatalogWriteFailedError(IngestionError):
    """Raised when the metadata insert fails.

    For files this happens after the blob was stored, so ``stored_path``
    points at an orphaned blob that a reconciliation job has to sweep.
    It is ``None`` when no blob was written (folder records).
    """

    kind = 'catalog_write_failed'

    def __init__(self, name: str, stored_path: str | None = None) -> None:
        self.name = name
        self.stored_path = stored_path
        super().__init__(f'Failed to record {name}')


class PartialBatchFailureError(IngestionError):
    """Raised when a folder upload stops after some files succeeded.

    The folder and the files stored before the failure are kept and
    returned in ``result``; the caller decides whether to retry the tail.
    """

    kind = 'partial_batch_failure'

    def __init__(
        self,
        succeeded: int,
        total: int,
        failed_file_name: str,
        result: 'FolderUpload',
    ) -> None:
        """Initialize PartialBatchFailureError.

        Args:
            succeeded: Number of files stored and recorded.
            total: Number of files in the request.
            failed_file_name: Name of the file that failed.
            result: Folder and the files created before the failure.
        """
        self.succeeded = succeeded
        self.total = total
        self.failed_file_name = failed_file_name
        self.result = result
        super().__init__(
            f'Uploaded {succeeded} of {total} files, '
            f'failed on {failed_file_name}',
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            **super().as_dict(),
            'succeeded': self.succeeded,
            'total': self.total,
            'failedFileName': self.failed_file_name,
        }
