"""Tests for the upload endpoints."""

from http import HTTPStatus

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.urls import reverse

from server.apps.files.infrastructure.catalog import FileCatalog
from server.apps.files.models import FileEntry


@pytest.fixture
def logged_client(client, user):
    """Test client with ``user`` logged in.

    Returns:
        Django test client.
    """
    client.force_login(user)
    return client


@pytest.fixture
def use_blob_store(monkeypatch):
    """Route the views to a given blob store.

    Returns:
        Callable installing the blob store.
    """
    def install(blob_store):
        monkeypatch.setattr(
            'server.apps.files.views.get_blob_store',
            lambda: blob_store,
        )
        return blob_store
    return install


@pytest.mark.django_db
def test_upload_file(logged_client, user, blob_store, use_blob_store):
    """Test single upload returns the created entry."""
    use_blob_store(blob_store)

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(user.pk),
    })

    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert body['name'] == 'notes.txt'
    assert body['isFolder'] is False
    assert body['parentId'] is None
    assert body['fileUrl']
    assert FileEntry.objects.filter(id=body['id']).exists()


@pytest.mark.django_db
def test_upload_file_into_folder(
    logged_client,
    user,
    folder,
    blob_store,
    use_blob_store,
):
    """Test parentId form field is honored."""
    use_blob_store(blob_store)

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(user.pk),
        'parentId': str(folder.id),
    })

    assert response.status_code == HTTPStatus.OK
    assert response.json()['parentId'] == str(folder.id)


@pytest.mark.django_db
def test_upload_file_anonymous(client, user, blob_store, use_blob_store):
    """Test unauthenticated requests never reach the pipeline."""
    use_blob_store(blob_store)

    response = client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(user.pk),
    })

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json()['error']['kind'] == 'unauthorized'
    assert blob_store.calls == 0


@pytest.mark.django_db
def test_upload_file_owner_mismatch(
    logged_client,
    other_user,
    blob_store,
    use_blob_store,
):
    """Test uploading into another account is unauthorized."""
    use_blob_store(blob_store)

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(other_user.pk),
    })

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert FileEntry.objects.count() == 0


@pytest.mark.django_db
def test_upload_file_missing_file(logged_client, user, use_blob_store):
    """Test missing file is a bad request."""
    use_blob_store(None)

    response = logged_client.post(reverse('files:upload'), {
        'userId': str(user.pk),
    })

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()['error'] == {
        'kind': 'invalid_input',
        'message': 'No file provided',
    }


@pytest.mark.django_db
def test_upload_file_too_large(
    logged_client,
    user,
    blob_store,
    use_blob_store,
    settings,
):
    """Test oversized payload maps to 413."""
    use_blob_store(blob_store)
    settings.FILES_MAX_UPLOAD_SIZE = 4

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(user.pk),
    })

    assert response.status_code == HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    error = response.json()['error']
    assert error['kind'] == 'size_limit_exceeded'
    assert error['fileName'] == 'notes.txt'


@pytest.mark.django_db
def test_upload_file_forbidden_type(
    logged_client,
    user,
    blob_store,
    use_blob_store,
):
    """Test denylisted extension maps to 400."""
    use_blob_store(blob_store)

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('payload.exe', b'MZ'),
        'userId': str(user.pk),
    })

    assert response.status_code == HTTPStatus.BAD_REQUEST
    error = response.json()['error']
    assert error['kind'] == 'forbidden_file_type'
    assert error['extension'] == 'exe'


@pytest.mark.django_db
def test_upload_file_parent_not_found(
    logged_client,
    user,
    blob_store,
    use_blob_store,
):
    """Test unknown parent maps to 404."""
    use_blob_store(blob_store)

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(user.pk),
        'parentId': 'missing',
    })

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json()['error']['kind'] == 'parent_not_found'


@pytest.mark.django_db
def test_upload_file_storage_down(
    logged_client,
    user,
    failing_blob_store,
    use_blob_store,
):
    """Test provider failure maps to 502 without leaking details."""
    use_blob_store(failing_blob_store(1))

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(user.pk),
    })

    assert response.status_code == HTTPStatus.BAD_GATEWAY
    error = response.json()['error']
    assert error['kind'] == 'upload_failed'
    assert 'storage unavailable' not in error['message']


@pytest.mark.django_db
def test_upload_file_unexpected_error(
    logged_client,
    user,
    folder,
    blob_store,
    use_blob_store,
    monkeypatch,
):
    """Test unexpected failures still answer with a JSON error body."""
    use_blob_store(blob_store)

    def broken_lookup(*args, **kwargs):
        raise DatabaseError('connection lost')

    monkeypatch.setattr(FileCatalog, 'find_folder', broken_lookup)

    response = logged_client.post(reverse('files:upload'), {
        'file': SimpleUploadedFile('notes.txt', b'hello'),
        'userId': str(user.pk),
        'parentId': str(folder.id),
    })

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response['Content-Type'] == 'application/json'
    assert response.json()['error'] == {
        'kind': 'ingestion_error',
        'message': 'Internal server error',
    }
    assert blob_store.calls == 0


@pytest.mark.django_db
def test_upload_file_requires_post(logged_client):
    """Test other methods are refused."""
    response = logged_client.get(reverse('files:upload'))

    assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED


@pytest.mark.django_db
def test_upload_folder(logged_client, user, blob_store, use_blob_store):
    """Test folder upload returns folder and files in order."""
    use_blob_store(blob_store)

    response = logged_client.post(reverse('files:upload-folder'), {
        'folderName': 'Trip',
        'userId': str(user.pk),
        'files': [
            SimpleUploadedFile('day1.jpg', b'one', content_type='image/jpeg'),
            SimpleUploadedFile('day2.jpg', b'two', content_type='image/jpeg'),
        ],
    })

    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert body['folder']['name'] == 'Trip'
    assert body['folder']['isFolder'] is True
    assert [item['name'] for item in body['files']] == ['day1.jpg', 'day2.jpg']
    assert all(
        item['parentId'] == body['folder']['id']
        for item in body['files']
    )
    assert all(item['thumbnailUrl'] for item in body['files'])


@pytest.mark.django_db
def test_upload_folder_missing_name(
    logged_client,
    user,
    blob_store,
    use_blob_store,
):
    """Test folder name is required."""
    use_blob_store(blob_store)

    response = logged_client.post(reverse('files:upload-folder'), {
        'userId': str(user.pk),
        'files': [SimpleUploadedFile('a.txt', b'a')],
    })

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()['error']['kind'] == 'invalid_input'
    assert FileEntry.objects.count() == 0


@pytest.mark.django_db
def test_upload_folder_partial_failure(
    logged_client,
    user,
    failing_blob_store,
    use_blob_store,
):
    """Test partial failure returns the stored prefix and the error."""
    use_blob_store(failing_blob_store(2))

    response = logged_client.post(reverse('files:upload-folder'), {
        'folderName': 'Trip',
        'userId': str(user.pk),
        'files': [
            SimpleUploadedFile('a.txt', b'a'),
            SimpleUploadedFile('b.txt', b'b'),
            SimpleUploadedFile('c.txt', b'c'),
        ],
    })

    assert response.status_code == HTTPStatus.MULTI_STATUS
    body = response.json()
    assert body['folder']['name'] == 'Trip'
    assert [item['name'] for item in body['files']] == ['a.txt']
    assert body['error'] == {
        'kind': 'partial_batch_failure',
        'message': 'Uploaded 1 of 3 files, failed on b.txt',
        'succeeded': 1,
        'total': 3,
        'failedFileName': 'b.txt',
    }
