"""Canonical storage paths."""

from django.conf import settings

from server.apps.files.exceptions import InvalidInputError


def build_storage_path(
    owner_id: object,
    parent_id: object | None,
    name: str,
) -> str:
    """Build the canonical storage path for an entry.

    Root-level entries live at ``{namespace}/{owner_id}/{name}``; entries
    inside a folder live at ``{namespace}/{owner_id}/folders/{parent_id}/{name}``.

    Args:
        owner_id: Owner's user ID.
        parent_id: Parent folder ID, or None for root-level entries.
        name: Last path segment (blob name or folder name).

    Returns:
        Storage path string.

    Raises:
        InvalidInputError: If owner ID or name is empty.
    """
    owner_segment = str(owner_id) if owner_id is not None else ''
    if not owner_segment:
        raise InvalidInputError('Owner is required to build a storage path')
    if not name:
        raise InvalidInputError('Name is required to build a storage path')

    namespace = settings.FILES_STORAGE_NAMESPACE
    if parent_id is None:
        return f'{namespace}/{owner_segment}/{name}'
    return f'{namespace}/{owner_segment}/folders/{parent_id}/{name}'
