"""
ButtonUp Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked for gaps during app startup.

Design Decision:
    Missing credentials do NOT stop the server. Each integration (Supabase,
    Notion, IndexNow) is independent: an unconfigured storage bucket should
    not take the tags endpoint down with it. Gaps are reported as warnings at
    startup and surface as 500 responses on the affected endpoints only.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by the external service they configure.
    """

    # ── Supabase Storage ──────────────────────────────────────────────────
    # What: Project URL and service-role key for the storage bucket
    # Security: The service-role key bypasses row level security. It must only
    # ever live on the server.
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_service_role_key: str = Field(default="", description="Supabase service-role key")
    supabase_bucket: str = Field(default="files", description="Storage bucket name")

    # ── Notion ────────────────────────────────────────────────────────────
    notion_api_key: str = Field(default="", description="Notion integration token")
    notion_database_id: str = Field(default="", description="Notion content database ID")

    # ── IndexNow / SEO ────────────────────────────────────────────────────
    # What: Verification key served at /api/indexnow/{key}
    indexnow_api_key: str = Field(default="")
    # What: Optional bearer secret required to trigger submissions
    indexnow_api_secret: str = Field(default="")
    site_url: str = Field(default="https://buttonup.cloud")

    # ── Uploads ───────────────────────────────────────────────────────────
    # Default: 50MB, the largest remote file the URL importer will fetch
    max_upload_size: int = Field(default=52_428_800, ge=1_048_576, le=524_288_000)

    # ── Caching ───────────────────────────────────────────────────────────
    # What: Revalidation interval advertised on GET /api/tags
    tags_revalidate_seconds: int = Field(default=600, ge=0, le=86400)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("site_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    @property
    def content_configured(self) -> bool:
        return bool(self.notion_api_key and self.notion_database_id)

    def report_missing(self) -> List[str]:
        """
        What:  Lists integrations whose credentials are missing.
        When:  Called during app startup (lifespan); each entry is logged as a warning.
        """
        missing = []
        if not self.storage_configured:
            missing.append(
                "Supabase is not configured. Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY."
            )
        if not self.content_configured:
            missing.append(
                "Notion is not configured. Set NOTION_API_KEY and NOTION_DATABASE_ID."
            )
        if not self.indexnow_api_key:
            missing.append("IndexNow is not configured. Set INDEXNOW_API_KEY.")
        return missing


# Singleton instance, imported throughout the application
settings = Settings()
