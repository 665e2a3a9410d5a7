"""
ButtonUp Backend — Services Layer
===================================

What:  Adapters between the routes and the hosted services.

Service Inventory:
    - StorageGateway (abstract) / SupabaseStorageGateway: bucket list, delete, upload
    - ContentGateway (abstract) / NotionContentGateway: tag aggregation
    - UploadService: batch upload naming, size limits, remote URL fetching
    - IndexNowService: search engine change notifications

Routes receive these through app.dependencies, never by importing the
singletons directly, so tests can substitute fakes.
"""
