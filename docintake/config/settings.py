from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docintake"
    db_username: str = "docintake"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    document_store: str = "postgres"
    blob_store: str = "local"
    files_root: Path = Path("/app/files")

    max_upload_bytes: int = 10 * 1024 * 1024

    pdf_engine: str = "stream"

    extraction_provider: str = "openai"
    extraction_api_key: str = ""
    extraction_model_name: str = "gpt-4o-mini"
    extraction_base_url: str = ""
    extraction_timeout_seconds: int = 30
    extraction_temperature: float = 0.0
    extraction_max_tokens: int = 4000
    extraction_max_input_chars: int = 4000
    extraction_fallback_excerpt_chars: int = 1000

    persist_processing_state: bool = False
    status_poll_interval_seconds: float = 2.0

    api_host: str = "0.0.0.0"
    api_port: int = 8000
