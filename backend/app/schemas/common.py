"""
ButtonUp Backend — Shared Response Schemas
============================================

What:  Error and health response models used across every router.
Why:   One error shape for the whole API; OpenAPI docs reference it per route.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Fields:
        error:      Human-readable description (upstream message when available)
        details:    Optional secondary description (e.g. the Notion error behind
                    "Failed to fetch tags")
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {"error": "File name is required", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Error description")
    details: Optional[str] = Field(default=None, description="Additional error detail")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing which integrations are configured.
    Who:   Returned by GET /health for Docker and load balancer probes.

    Why configuration (not connectivity):
        Probing Supabase and Notion on every health check would spend API quota
        every 10-30 seconds. The service is "degraded" when an integration has
        no credentials, since the matching endpoints will answer 500.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    storage: str = Field(description="Supabase storage: configured, not_configured")
    content: str = Field(description="Notion content database: configured, not_configured")
    indexnow: str = Field(description="IndexNow key: configured, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
