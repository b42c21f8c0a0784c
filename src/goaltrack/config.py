"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Supabase project
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = "local-anon-key"
    supabase_schema: str = "public"

    # Local development mode (set GOALTRACK_LOCAL_MODE=1 for console logs)
    local_mode: bool = False

    # Auth flows
    oauth_redirect_url: str = "http://localhost:3000/auth/callback"
    password_reset_redirect_url: str = "http://localhost:3000/auth/reset-password"
    min_password_length: int = 8
    session_refresh_retries: int = 3
    session_refresh_backoff_seconds: float = 1.0

    # Resource uploads
    max_upload_bytes: int = 50 * 1024 * 1024

    # CORS
    cors_allowed_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GOALTRACK_",
    }


settings = Settings()
