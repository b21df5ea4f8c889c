"""Synthetic blob names.

Blobs are stored under generated names rather than the display name so
two uploads of 'photo.jpg' never fight over the same key.
"""

import uuid
from collections.abc import Callable

from server.apps.files.infrastructure.metadata import get_file_extension

NameGenerator = Callable[[str], str]


def generate_blob_name(display_name: str) -> str:
    """Generate a collision-resistant blob filename.

    Args:
        display_name: Name chosen by the owner (e.g., 'Report.PDF').

    Returns:
        Random name keeping the extension (e.g., '3f2b...c1.pdf').
    """
    extension = get_file_extension(display_name)
    if extension:
        return f'{uuid.uuid4()}.{extension}'
    return str(uuid.uuid4())
