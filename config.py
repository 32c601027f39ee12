"""
Configuration management for the FACT-G Scoring Service.

All environment variables are loaded here with their default values.
Required vs optional status is documented for each.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment Variable Reference:
    - STORE_BASE_URL: Base URL of the study REST backend (optional; the
      scoring endpoints work without it, store-backed sessions do not)
    - STORE_API_TOKEN: Bearer token forwarded to the backend (optional)

    Everything else has a working default.
    """

    # Application settings
    app_name: str = "FACT-G Scoring Service"
    app_version: str = "1.0.0"
    debug: bool = False

    # Study backend (persistence collaborator)
    store_base_url: Optional[str] = None
    store_api_token: Optional[str] = None
    request_timeout_seconds: int = 30

    # Catalog cache settings
    cache_ttl_seconds: int = 21600  # 6 hours default
    cache_max_size: int = 1000

    # Submission defaults (mirrors what the data-entry screens send)
    default_study_id: str = "CS-0001"
    default_created_by: str = "UID-1"
    default_session_no: str = "SessionNo-1"
    default_category_id: str = "FGC_0001"

    # Key carrying the upsert correlation id in store requests/responses
    record_id_field: str = "RecordId"

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_service_status() -> dict:
    """
    Returns the configuration status of external services.
    Used by the health endpoint.
    """
    return {
        "store": "configured" if settings.store_base_url else "unconfigured",
    }
