"""
ButtonUp Backend — IndexNow Schemas
=====================================
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionType(str, Enum):
    """Preset page groups that can be resubmitted without listing URLs."""
    CONTENT = "content"
    NEWS = "news"
    ALL = "all"


class IndexNowSubmitRequest(BaseModel):
    """
    Body of POST /api/indexnow. Exactly one of the fields is used, in order
    of precedence: `urls`, then `url`, then `type`.

    `type` stays a plain string so an unknown value can be answered with 400
    and a readable message rather than FastAPI's 422.
    """
    urls: Optional[List[str]] = None
    url: Optional[str] = None
    type: Optional[str] = None


class IndexNowSubmission(BaseModel):
    """Wire payload posted to every IndexNow endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    host: str
    key: str
    key_location: str = Field(alias="keyLocation")
    url_list: List[str] = Field(alias="urlList")


class IndexNowResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    engine: str
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    error: Optional[str] = None


class SubmissionStats(BaseModel):
    submitted: int
    engines: int
    successful: int
    failed: int


class IndexNowSubmitResponse(BaseModel):
    success: bool = True
    message: str = "IndexNow submission completed"
    stats: SubmissionStats
    urls: List[str]
    results: List[IndexNowResult]


class IndexNowStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    configured: bool
    key_file_url: str = Field(alias="keyFileUrl")
    endpoints: List[str]
