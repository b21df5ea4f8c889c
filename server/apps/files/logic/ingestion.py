"""Business logic for ingesting uploads.

Each stored file touches two independent systems: the blob store first,
then the catalog. No transaction spans both, so the outcomes are:

- validation fails: nothing is written anywhere
- blob put fails: ``UploadFailedError``, nothing in the catalog
- catalog insert fails: ``CatalogWriteFailedError``, the blob is orphaned

Folder uploads write the folder row first and then the files one at a
time in input order. A failure on one file keeps everything written
before it and reports the prefix through ``PartialBatchFailureError``.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from django.conf import settings
from django.core.files.base import File as DjangoFile

from server.apps.files.exceptions import (
    CatalogWriteFailedError,
    ForbiddenFileTypeError,
    InvalidInputError,
    ParentNotFoundError,
    PartialBatchFailureError,
    SizeLimitExceededError,
    UnauthorizedError,
    UploadFailedError,
)
from server.apps.files.infrastructure.blob_store import BlobStore
from server.apps.files.infrastructure.catalog import FileCatalog
from server.apps.files.infrastructure.metadata import (
    detect_media_type,
    extract_filename,
    extract_folder_path,
    get_file_extension,
    get_payload_size,
)
from server.apps.files.infrastructure.naming import (
    NameGenerator,
    generate_blob_name,
)
from server.apps.files.logic.paths import build_storage_path
from server.apps.files.models import FOLDER_TYPE, FileEntry

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


@dataclass
class FolderUpload:
    """Folder created by an upload and its files, in input order."""

    folder: FileEntry
    files: list[FileEntry] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """Render the folder upload response body."""
        return {
            'folder': self.folder.as_dict(),
            'files': [entry.as_dict() for entry in self.files],
        }


def check_owner(principal: _User | None, owner_id: object) -> None:
    """Ensure the claimed owner is the authenticated principal.

    Args:
        principal: Authenticated user.
        owner_id: Owner ID sent by the client.

    Raises:
        UnauthorizedError: If the IDs differ or either is missing.
    """
    if principal is None or owner_id is None:
        raise UnauthorizedError()
    if str(principal.pk) != str(owner_id):
        logger.warning(
            'Owner mismatch: principal %s claimed owner %s',
            principal.pk,
            owner_id,
        )
        raise UnauthorizedError()


def validate_payload(payload: DjangoFile | None) -> None:
    """Run the per-file checks that must pass before any write.

    Args:
        payload: Uploaded file.

    Raises:
        InvalidInputError: If the payload is missing, nameless or empty.
        SizeLimitExceededError: If the payload is over the size limit.
        ForbiddenFileTypeError: If the extension is denylisted.
    """
    if payload is None or not payload.name:
        raise InvalidInputError('No file provided')

    size = get_payload_size(payload)
    if size == 0:
        raise InvalidInputError(f'File {payload.name} is empty')

    limit = settings.FILES_MAX_UPLOAD_SIZE
    if size > limit:
        logger.warning(
            'Rejected %s: %d bytes over the %d byte limit',
            payload.name,
            size,
            limit,
        )
        raise SizeLimitExceededError(payload.name, size, limit)

    extension = get_file_extension(payload.name)
    if extension in settings.FILES_FORBIDDEN_EXTENSIONS:
        logger.warning('Rejected %s: forbidden file type', payload.name)
        raise ForbiddenFileTypeError(payload.name, extension)


def ingest_file(  # noqa: WPS211
    principal: _User,
    owner_id: object,
    payload: DjangoFile | None,
    parent_id: object | None = None,
    *,
    blob_store: BlobStore,
    catalog: FileCatalog | None = None,
    name_generator: NameGenerator = generate_blob_name,
) -> FileEntry:
    """Upload one file and record it in the catalog.

    Args:
        principal: Authenticated user.
        owner_id: Owner ID claimed by the request.
        payload: Uploaded file.
        parent_id: Optional folder to upload into.
        blob_store: Where the payload bytes go.
        catalog: Metadata catalog, defaults to ``FileCatalog()``.
        name_generator: Produces the synthetic blob name.

    Returns:
        Created FileEntry instance.

    Raises:
        UnauthorizedError: If the claimed owner is not the principal.
        InvalidInputError: If no usable payload was sent.
        SizeLimitExceededError: If the payload is too large.
        ForbiddenFileTypeError: If the extension is denylisted.
        ParentNotFoundError: If the parent is not a folder of the owner.
        UploadFailedError: If the blob store fails.
        CatalogWriteFailedError: If the catalog insert fails.
    """
    check_owner(principal, owner_id)
    validate_payload(payload)
    catalog = catalog or FileCatalog()
    parent = _resolve_parent(catalog, principal, parent_id)

    blob_path = build_storage_path(
        principal.pk,
        parent.id if parent else None,
        name_generator(payload.name),
    )
    return _store_file(
        principal,
        payload,
        blob_path,
        parent,
        blob_store=blob_store,
        catalog=catalog,
    )


def ingest_folder(  # noqa: WPS211
    principal: _User,
    owner_id: object,
    folder_name: str | None,
    payloads: Sequence[DjangoFile],
    parent_id: object | None = None,
    *,
    blob_store: BlobStore,
    catalog: FileCatalog | None = None,
    name_generator: NameGenerator = generate_blob_name,
) -> FolderUpload:
    """Create a folder and upload every payload into it.

    The whole batch is validated before the folder row is written, so a
    late rejection never leaves an empty folder behind. After that each
    file is stored independently: a failure stops the sequence but does
    not undo the folder or earlier files.

    Args:
        principal: Authenticated user.
        owner_id: Owner ID claimed by the request.
        folder_name: Display name of the new folder.
        payloads: Files to upload, in order.
        parent_id: Optional folder to create the new folder in.
        blob_store: Where the payload bytes go.
        catalog: Metadata catalog, defaults to ``FileCatalog()``.
        name_generator: Produces the synthetic blob names.

    Returns:
        The folder and its files in input order.

    Raises:
        UnauthorizedError: If the claimed owner is not the principal.
        InvalidInputError: If the name or the files are missing, or the
            name is not a single path segment.
        SizeLimitExceededError: If any payload is too large.
        ForbiddenFileTypeError: If any extension is denylisted.
        ParentNotFoundError: If the parent is not a folder of the owner.
        CatalogWriteFailedError: If the folder row cannot be written.
        PartialBatchFailureError: If a file fails after the folder exists.
    """
    check_owner(principal, owner_id)
    folder_name = (folder_name or '').strip()
    payloads = list(payloads or ())
    if not folder_name or not payloads:
        raise InvalidInputError('Folder name and files are required')
    # The name becomes a single storage path segment
    if folder_name in {'.', '..'} or any(
        separator in folder_name for separator in ('/', '\\')
    ):
        raise InvalidInputError(f'Invalid folder name: {folder_name}')

    for payload in payloads:
        validate_payload(payload)

    catalog = catalog or FileCatalog()
    parent = _resolve_parent(catalog, principal, parent_id)
    folder = _create_folder(principal, folder_name, parent, catalog)

    result = FolderUpload(folder=folder)
    for payload in payloads:
        blob_path = f'{folder.path}/{name_generator(payload.name)}'
        try:
            entry = _store_file(
                principal,
                payload,
                blob_path,
                folder,
                blob_store=blob_store,
                catalog=catalog,
            )
        except (UploadFailedError, CatalogWriteFailedError) as exc:
            logger.error(
                'Folder upload %s stopped after %d of %d files: %s',
                folder.id,
                len(result.files),
                len(payloads),
                payload.name,
            )
            raise PartialBatchFailureError(
                succeeded=len(result.files),
                total=len(payloads),
                failed_file_name=payload.name,
                result=result,
            ) from exc
        result.files.append(entry)

    logger.info(
        'Folder upload finished: %s (%d files)',
        folder.path,
        len(result.files),
    )
    return result


def _resolve_parent(
    catalog: FileCatalog,
    owner: _User,
    parent_id: object | None,
) -> FileEntry | None:
    """Load the parent folder, if one was requested.

    Args:
        catalog: Metadata catalog.
        owner: Owner the folder must belong to.
        parent_id: Requested parent ID, empty values mean root.

    Returns:
        Parent folder, or None for root-level uploads.

    Raises:
        ParentNotFoundError: If the folder cannot be found for the owner.
    """
    if parent_id is None or parent_id == '':
        return None

    parent = catalog.find_folder(owner, parent_id)
    if parent is None:
        logger.warning(
            'Parent folder not found: %s (owner %s)',
            parent_id,
            owner.pk,
        )
        raise ParentNotFoundError(parent_id)
    return parent


def _create_folder(
    owner: _User,
    folder_name: str,
    parent: FileEntry | None,
    catalog: FileCatalog,
) -> FileEntry:
    """Write the folder row of a folder upload.

    Raises:
        CatalogWriteFailedError: If the insert fails.
    """
    folder_path = build_storage_path(
        owner.pk,
        parent.id if parent else None,
        folder_name,
    )
    try:
        return catalog.insert(
            owner=owner,
            parent=parent,
            name=folder_name,
            path=folder_path,
            size=0,
            type=FOLDER_TYPE,
            file_url='',
            thumbnail_url=None,
            is_folder=True,
        )
    except Exception as exc:
        logger.exception('Failed to create folder record: %s', folder_path)
        raise CatalogWriteFailedError(folder_name) from exc


def _store_file(
    owner: _User,
    payload: DjangoFile,
    blob_path: str,
    parent: FileEntry | None,
    *,
    blob_store: BlobStore,
    catalog: FileCatalog,
) -> FileEntry:
    """Put one payload into the blob store, then record it.

    Args:
        owner: Owner of the new entry.
        payload: Validated payload.
        blob_path: Canonical path of the blob (folder plus blob name).
        parent: Folder the entry goes into, if any.
        blob_store: Where the payload bytes go.
        catalog: Metadata catalog.

    Returns:
        Created FileEntry instance.

    Raises:
        UploadFailedError: If the blob store fails or returns no URL.
        CatalogWriteFailedError: If the insert fails after the put.
    """
    # Step 1: Upload to storage first
    try:
        blob = blob_store.put(
            payload,
            extract_folder_path(blob_path),
            extract_filename(blob_path),
        )
    except Exception as exc:
        logger.exception('Failed to upload file to storage: %s', blob_path)
        raise UploadFailedError(payload.name) from exc

    if not blob.url:
        logger.error('Blob store returned no URL for %s', blob.stored_path)
        raise UploadFailedError(payload.name)

    # Step 2: Record it, the stored path reported by the store wins
    try:
        return catalog.insert(
            owner=owner,
            parent=parent,
            name=payload.name,
            path=blob.stored_path,
            size=get_payload_size(payload),
            type=detect_media_type(
                payload.name,
                getattr(payload, 'content_type', None),
            ),
            file_url=blob.url,
            thumbnail_url=blob.thumbnail_url,
            is_folder=False,
        )
    except Exception as exc:
        logger.exception(
            'Database insert failed, orphaned blob: %s',
            blob.stored_path,
        )
        raise CatalogWriteFailedError(
            payload.name,
            blob.stored_path,
        ) from exc
