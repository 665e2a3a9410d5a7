"""
ButtonUp Backend — File Storage Schemas
=========================================

What:  Pydantic models for the /api/files endpoints.
Why:   The frontend file manager was written against camelCase JSON
       (`publicUrl`, `fileName`), so fields use snake_case in Python and
       camelCase aliases on the wire.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileEntry(BaseModel):
    """
    What:  One object in the storage bucket plus its public URL.

    Extra fields (id, created_at, updated_at, last_accessed_at, metadata) are
    whatever Supabase returns for the object and are passed through untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(min_length=1, description="Object name within the bucket")
    public_url: str = Field(alias="publicUrl", description="Public download URL")


class FileListResponse(BaseModel):
    """Returned by GET /api/files/list. `count` always equals len(files)."""
    files: List[FileEntry]
    count: int


class FileDeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="File deleted successfully")
    file_name: str = Field(alias="fileName")


class UploadResult(BaseModel):
    """
    What:  Outcome of one item in a batch upload.

    A successful item carries the stored object's location; a failed item
    carries only its identity (`originalName` or `url`) and `error`. Routes
    serialize with exclude_none so each item only shows the fields it has.
    """
    model_config = ConfigDict(populate_by_name=True)

    url: Any = Field(default=None, description="URL item exactly as submitted")
    original_name: Optional[str] = Field(default=None, alias="originalName")
    file_name: Optional[str] = Field(default=None, alias="fileName")
    size: Optional[int] = None
    type: Optional[str] = None
    path: Optional[str] = None
    full_path: Optional[str] = Field(default=None, alias="fullPath")
    public_url: Optional[str] = Field(default=None, alias="publicUrl")
    error: Optional[str] = None


class UploadResponse(BaseModel):
    message: str
    results: List[UploadResult]


class UploadFromUrlsRequest(BaseModel):
    """
    Body of POST /api/files/upload-url. Presence of `urls` is checked by the route;
    items are validated one by one by the upload service, so a bad item never
    rejects the whole batch.
    """
    urls: Optional[List[Any]] = None
