"""Metadata extraction utilities for uploaded payloads."""

import mimetypes
from pathlib import PurePosixPath
from typing import Final

from django.core.files.base import File as DjangoFile

_DEFAULT_MEDIA_TYPE: Final = 'application/octet-stream'


def detect_media_type(filename: str, declared: str | None = None) -> str:
    """Pick the media type recorded for a payload.

    The type declared by the client wins; otherwise it is guessed from
    the filename extension with Python's built-in mimetypes module.

    Args:
        filename: Filename with extension.
        declared: Content type sent along with the upload, if any.

    Returns:
        Media type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    if declared:
        return declared
    media_type, _ = mimetypes.guess_type(filename)
    if media_type is None:
        return _DEFAULT_MEDIA_TYPE
    return media_type


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Everything after the last dot counts, so dotfiles such as '.js'
    report 'js'.

    Args:
        filename: Filename (e.g., 'document.PDF').

    Returns:
        Extension without dot, lowercase (e.g., 'pdf').
        Returns empty string if no extension.
    """
    _, dot, extension = filename.rpartition('.')
    if not dot:
        return ''
    return extension.lower()


def get_payload_size(payload: DjangoFile) -> int:
    """Get payload size in bytes.

    Args:
        payload: Uploaded file.

    Returns:
        Size reported by the upload, or measured by reading it.
    """
    size = getattr(payload, 'size', None)
    if size is not None:
        return size
    payload_size = len(payload.read())
    payload.seek(0)
    return payload_size


def extract_filename(storage_path: str) -> str:
    """Extract filename from storage path.

    Args:
        storage_path: Full path (e.g., 'zippybox/123/file.pdf').

    Returns:
        Filename (e.g., 'file.pdf').
    """
    return PurePosixPath(storage_path).name


def extract_folder_path(storage_path: str) -> str:
    """Extract folder path from storage path.

    Args:
        storage_path: Full path (e.g., 'zippybox/123/docs/file.pdf').

    Returns:
        Folder path (e.g., 'zippybox/123/docs').
    """
    return str(PurePosixPath(storage_path).parent)
