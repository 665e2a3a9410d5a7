"""
ButtonUp Backend — File Storage Route Handlers
================================================

What:  /api/files endpoints: list, delete, upload (multipart), upload from URLs.
Why:   Backs the admin file manager page of the site.
How:   Each handler checks that its inputs are present, makes one gateway call
       (or one per uploaded item), and reshapes the result into JSON.
       Errors are raised as exceptions and formatted by the global handlers.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from app.dependencies import get_storage_gateway, get_upload_service
from app.exceptions import ClientInputError
from app.schemas.common import ErrorResponse
from app.schemas.files import (
    FileDeleteResponse,
    FileEntry,
    FileListResponse,
    UploadFromUrlsRequest,
    UploadResponse,
)
from app.services.storage_base import StorageGateway
from app.services.upload_service import IncomingFile, UploadService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["Files"])


@router.get(
    "/list",
    response_model=FileListResponse,
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List files in the storage bucket",
)
async def list_files(
    gateway: StorageGateway = Depends(get_storage_gateway),
) -> FileListResponse:
    """
    List up to 100 files, newest first, each with its public URL.

    `count` is computed from the returned list, so it always equals len(files).
    """
    entries = await gateway.list_files()
    files = [
        FileEntry(**{**entry, "publicUrl": gateway.get_file_url(entry["name"])})
        for entry in entries
    ]
    return FileListResponse(files=files, count=len(files))


@router.delete(
    "/delete",
    response_model=FileDeleteResponse,
    responses={
        400: {"description": "fileName missing", "model": ErrorResponse},
        404: {"description": "No such file", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a file from the storage bucket",
)
async def delete_file(
    file_name: Optional[str] = Query(default=None, alias="fileName"),
    gateway: StorageGateway = Depends(get_storage_gateway),
) -> FileDeleteResponse:
    """
    Delete one file by name.

    Why Optional + manual check:
        A required Query would answer a missing parameter with 422; this
        endpoint answers 400 {"error": "File name is required"}.
    """
    if not file_name:
        raise ClientInputError(message="File name is required", field="fileName")

    await gateway.delete_file(file_name)
    return FileDeleteResponse(file_name=file_name)


@router.post(
    "/upload",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "No files provided", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Upload one or more files",
)
async def upload_files(
    files: Optional[List[UploadFile]] = File(default=None),
    gateway: StorageGateway = Depends(get_storage_gateway),
    uploader: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Upload the multipart `files` parts. Failed items are reported, not raised."""
    if not files:
        raise ClientInputError(message="No files provided", field="files")

    incoming = []
    try:
        for upload in files:
            incoming.append(
                IncomingFile(
                    filename=upload.filename or "",
                    content=await upload.read(),
                    content_type=upload.content_type,
                )
            )
    finally:
        for upload in files:
            await upload.close()

    results = await uploader.upload_files(gateway, incoming)
    succeeded = sum(1 for r in results if not r.error)
    logger.info("Multipart upload: %d of %d files stored", succeeded, len(files))
    return UploadResponse(
        message=f"Uploaded {succeeded} of {len(files)} files",
        results=results,
    )


@router.post(
    "/upload-url",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "No URLs provided", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Import files from remote URLs",
)
async def upload_from_urls(
    body: UploadFromUrlsRequest,
    gateway: StorageGateway = Depends(get_storage_gateway),
    uploader: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Fetch each URL and store it in the bucket. Failed items are reported, not raised."""
    if not body.urls:
        raise ClientInputError(message="No URLs provided", field="urls")

    results = await uploader.upload_from_urls(gateway, body.urls)
    succeeded = sum(1 for r in results if not r.error)
    return UploadResponse(
        message=f"Uploaded {succeeded} of {len(body.urls)} files from URLs",
        results=results,
    )
