"""Settings for the files app upload pipeline."""

from typing import Final

from server.settings.components import config

# Hard per-payload limit: 50 MiB
FILES_MAX_UPLOAD_SIZE: Final = config(
    'FILES_MAX_UPLOAD_SIZE',
    cast=int,
    default=50 * 1024 * 1024,
)

# First segment of every canonical storage path
FILES_STORAGE_NAMESPACE: Final = config(
    'FILES_STORAGE_NAMESPACE',
    default='zippybox',
)

# Executable-style extensions rejected regardless of declared media type
FILES_FORBIDDEN_EXTENSIONS: Final = frozenset((
    'exe',
    'bat',
    'cmd',
    'com',
    'pif',
    'scr',
    'vbs',
    'js',
))

# Anything above this is streamed to a temporary file instead of memory
FILE_UPLOAD_MAX_MEMORY_SIZE: Final = 5 * 1024 * 1024
