from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docscan"
    db_username: str = "docscan"
    db_password: str = "secret"

    job_poll_interval_seconds: int = 5
    stale_job_timeout_seconds: int = 900
    files_root: str = "/app/files"

    pdf_engine: str = "pdfplumber"
    abnormal_compression_min_bytes_per_page: int = 1000

    max_upload_size_bytes: int = 10 * 1024 * 1024
    allowed_mime_types: list[str] = ["application/pdf"]

    content_provider: str = "openai"
    content_openai_api_key: str = ""
    content_openai_model_name: str = "gpt-4o-mini"
    content_openai_timeout_seconds: int = 30
    content_openai_temperature: float = 0.0
    content_openai_compatible_base_url: str = ""
    content_openai_compatible_api_key: str = ""
    content_openai_compatible_model_name: str = ""
    content_openai_compatible_timeout_seconds: int = 30
    content_openrouter_api_key: str = ""
    content_openrouter_model_name: str = ""
    content_groq_api_key: str = ""
    content_groq_model_name: str = ""
    content_together_api_key: str = ""
    content_together_model_name: str = ""
    content_deepseek_api_key: str = ""
    content_deepseek_model_name: str = ""
    content_ollama_api_key: str = "ollama"
    content_ollama_model_name: str = ""

    scan_api_base_url: str = "http://localhost:8000"
    poll_max_attempts: int = 15
    poll_interval_ms: int = 2000
