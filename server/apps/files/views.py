"""JSON upload endpoints for files app."""

import logging
from http import HTTPStatus
from typing import Final

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from server.apps.files.exceptions import (
    CatalogWriteFailedError,
    ForbiddenFileTypeError,
    IngestionError,
    InvalidInputError,
    ParentNotFoundError,
    PartialBatchFailureError,
    SizeLimitExceededError,
    UnauthorizedError,
    UploadFailedError,
)
from server.apps.files.infrastructure.blob_store import get_blob_store
from server.apps.files.logic.ingestion import ingest_file, ingest_folder

logger = logging.getLogger(__name__)

_ERROR_STATUS: Final = {
    UnauthorizedError: HTTPStatus.UNAUTHORIZED,
    InvalidInputError: HTTPStatus.BAD_REQUEST,
    SizeLimitExceededError: HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
    ForbiddenFileTypeError: HTTPStatus.BAD_REQUEST,
    ParentNotFoundError: HTTPStatus.NOT_FOUND,
    UploadFailedError: HTTPStatus.BAD_GATEWAY,
    CatalogWriteFailedError: HTTPStatus.INTERNAL_SERVER_ERROR,
    PartialBatchFailureError: HTTPStatus.MULTI_STATUS,
}


def _error_response(error: IngestionError) -> JsonResponse:
    status = _ERROR_STATUS.get(type(error), HTTPStatus.INTERNAL_SERVER_ERROR)
    return JsonResponse({'error': error.as_dict()}, status=status)


def _unexpected_error_response(request: HttpRequest) -> JsonResponse:
    logger.exception('Unexpected error while handling %s', request.path)
    return _error_response(IngestionError('Internal server error'))


@require_POST
def upload_file(request: HttpRequest) -> JsonResponse:
    """Upload a single file.

    Form fields: ``file``, ``userId`` and an optional ``parentId``.
    """
    if not request.user.is_authenticated:
        return _error_response(UnauthorizedError())

    try:
        entry = ingest_file(
            request.user,
            request.POST.get('userId'),
            request.FILES.get('file'),
            request.POST.get('parentId') or None,
            blob_store=get_blob_store(),
        )
    except IngestionError as error:
        return _error_response(error)
    except Exception:
        return _unexpected_error_response(request)
    return JsonResponse(entry.as_dict())


@require_POST
def upload_folder(request: HttpRequest) -> JsonResponse:
    """Upload a folder of files.

    Form fields: ``folderName``, ``userId``, an optional ``parentId`` and
    one ``files`` field per file. A partial failure still returns the
    folder and the files stored before it, next to the error.
    """
    if not request.user.is_authenticated:
        return _error_response(UnauthorizedError())

    try:
        upload = ingest_folder(
            request.user,
            request.POST.get('userId'),
            request.POST.get('folderName'),
            request.FILES.getlist('files'),
            request.POST.get('parentId') or None,
            blob_store=get_blob_store(),
        )
    except PartialBatchFailureError as error:
        return JsonResponse(
            {**error.result.as_dict(), 'error': error.as_dict()},
            status=HTTPStatus.MULTI_STATUS,
        )
    except IngestionError as error:
        return _error_response(error)
    except Exception:
        return _unexpected_error_response(request)
    return JsonResponse(upload.as_dict())
