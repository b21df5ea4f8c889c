"""Shared fixtures for files app tests."""

import boto3
import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from moto import mock_aws

from server.apps.files.infrastructure.blob_store import StoredBlob
from server.apps.files.infrastructure.catalog import FileCatalog
from server.apps.files.models import FOLDER_TYPE, FileEntry

User = get_user_model()


class FakeBlobStore:
    """In-memory blob store that can fail on chosen puts.

    ``fail_on`` holds 1-based call numbers that raise instead of storing.
    """

    def __init__(self, fail_on: frozenset[int] = frozenset()) -> None:
        self.fail_on = fail_on
        self.calls = 0
        self.blobs: dict[str, bytes] = {}

    def put(self, content, folder: str, file_name: str) -> StoredBlob:
        self.calls += 1
        if self.calls in self.fail_on:
            raise ConnectionError('storage unavailable')

        stored_path = f'{folder}/{file_name}'
        content.seek(0)
        self.blobs[stored_path] = content.read()

        thumbnail_url = None
        if getattr(content, 'content_type', '').startswith('image/'):
            thumbnail_url = f'https://cdn.example.com/tr:n-thumb/{stored_path}'
        return StoredBlob(
            stored_path=stored_path,
            url=f'https://cdn.example.com/{stored_path}',
            thumbnail_url=thumbnail_url,
        )


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with zippybox bucket.

    Yields:
        boto3 S3 resource with zippybox bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket='zippybox')

        yield conn


@pytest.fixture
def blob_store():
    """Blob store that accepts every put.

    Returns:
        FakeBlobStore instance.
    """
    return FakeBlobStore()


@pytest.fixture
def failing_blob_store():
    """Factory for blob stores that fail on the given put numbers.

    Returns:
        Callable building a FakeBlobStore.
    """
    def factory(*fail_on: int) -> FakeBlobStore:
        return FakeBlobStore(frozenset(fail_on))
    return factory


@pytest.fixture
def catalog():
    """Catalog over the test database.

    Returns:
        FileCatalog instance.
    """
    return FileCatalog()


@pytest.fixture
def sample_file():
    """Small text payload.

    Returns:
        SimpleUploadedFile with test data.
    """
    return SimpleUploadedFile(
        'notes.txt',
        b'test file content',
        content_type='text/plain',
    )


@pytest.fixture
def folder(user):
    """Existing root-level folder owned by ``user``.

    Returns:
        FileEntry folder.
    """
    return FileEntry.objects.create(
        owner=user,
        name='Documents',
        path=f'zippybox/{user.pk}/Documents',
        type=FOLDER_TYPE,
        is_folder=True,
    )
