from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    app_env: str = "dev"
    log_level: str = "INFO"

    max_upload_bytes: int = 5 * 1024 * 1024

    ocr_engine: str = "tesseract"
    ocr_default_language: str = "en"
    tesseract_cmd: str = ""

    translation_mode: str = "direct"
    translation_service_url: str = "http://localhost:8000"

    deepseek_base_url: str = "https://api.deepseek.com"
    deepseek_text_model: str = "deepseek-chat"
    deepseek_vision_model: str = "deepseek-vl2"
    deepseek_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("DEEPSEEK", "DEEPSEEK_API_KEY"),
    )
    deepseek_timeout_seconds: int = 60

    extract_mode: str = "disabled"

    server_host: str = "0.0.0.0"
    server_port: int = 8000
