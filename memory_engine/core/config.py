from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    app_name: str = "Memory Engine"
    environment: str = "dev"
    api_version: str = "v1"
    log_level: str = "INFO"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000

    # LLM provider (OpenAI-compatible endpoint)
    openrouter_api_key: str = ""  # no validation at startup
    openrouter_base_url: str = "https://openrouter.ai/api/v1"

    # Database
    database_url: str = "sqlite:///./memory_engine.db"

    # Security
    allowed_origins: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars not yet modeled
    )

@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore
