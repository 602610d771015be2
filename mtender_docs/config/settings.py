from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    server_name: str = "mtender-docs"

    document_store_url: str = "https://storage.mtender.gov.md"
    document_fetch_timeout_seconds: float = 30.0
    document_download_deadline_seconds: float = 300.0
    http_user_agent: str = "mtender-docs/0.1"

    pdf_engine: str = "pdfplumber"
