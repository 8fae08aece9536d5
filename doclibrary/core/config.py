"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SUPABASE_URL, SUPABASE_ANON_KEY) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (supabase_url and supabase_anon_key when the
    Supabase backend is enabled).
    """

    # App
    app_name: str = "doclibrary"
    app_version: str = "1.0.0"
    debug: bool = False

    # Supabase (auth, storage, table API)
    supabase_enabled: bool = True
    supabase_url: str = ""
    supabase_anon_key: SecretStr = SecretStr("")
    # Optional service-role key for server-side writes; falls back to the anon key.
    supabase_service_key: SecretStr | None = None
    http_timeout_seconds: float = 30.0

    # Payments: backend exposing /api/create-payment-intent and /api/mobile-money/initiate
    payment_api_base_url: str = "http://localhost:3000"
    payment_public_key: str = ""
    payment_currency: str = "USD"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Uploads
    max_upload_size: int = 50 * 1024 * 1024  # 50MB
    # Uploads follow the same admin-only policy as update/delete unless disabled here.
    upload_requires_admin: bool = True

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env.

        - Supabase enabled: SUPABASE_URL and SUPABASE_ANON_KEY required.
        - Upload size must be positive.
        """
        if self.supabase_enabled:
            if not self.supabase_url:
                raise ValueError(
                    "SUPABASE_URL is required when supabase_enabled is true. "
                    "Set in environment or .env file."
                )
            if not self.supabase_anon_key.get_secret_value():
                raise ValueError(
                    "SUPABASE_ANON_KEY is required when supabase_enabled is true. "
                    "Find it under Project Settings → API in the Supabase dashboard."
                )
        if self.max_upload_size <= 0:
            raise ValueError("MAX_UPLOAD_SIZE must be a positive number of bytes")
        return self

    @property
    def supabase_api_key(self) -> str:
        """Key used for server-side requests (service key if set, else anon key)."""
        if self.supabase_service_key and self.supabase_service_key.get_secret_value():
            return self.supabase_service_key.get_secret_value()
        return self.supabase_anon_key.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
