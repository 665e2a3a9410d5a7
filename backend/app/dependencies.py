"""
ButtonUp Backend — FastAPI Dependencies
=========================================

What:  Providers for the gateways and services routes depend on.
Why:   Routes declare `gateway: StorageGateway = Depends(get_storage_gateway)`
       instead of importing SDK-backed singletons. Tests replace any of these
       with fakes through `app.dependency_overrides[get_storage_gateway]`.
"""

from app.services.content_base import ContentGateway
from app.services.indexnow_service import IndexNowService, indexnow_service
from app.services.notion_content import content_gateway
from app.services.storage_base import StorageGateway
from app.services.supabase_storage import storage_gateway
from app.services.upload_service import UploadService, upload_service


def get_storage_gateway() -> StorageGateway:
    return storage_gateway


def get_content_gateway() -> ContentGateway:
    return content_gateway


def get_upload_service() -> UploadService:
    return upload_service


def get_indexnow_service() -> IndexNowService:
    return indexnow_service
