# app/core/config.py
from pathlib import Path
from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    env: str = "dev"
    log_level: str = "INFO"

    # LLM
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "OPENAI_API_KEY_ENV_VAR"),
    )
    openai_model: str = "gpt-4o"
    chat_max_tokens: int = 500
    chat_temperature: float = 0.7

    # Object storage (sidecar que firma URLs de GCS)
    private_object_dir: Optional[str] = None
    storage_sidecar_url: str = "http://127.0.0.1:1106"
    upload_url_ttl_sec: int = 900

    # Ingesta
    ingest_workers: int = 4
    ingest_delay_scale: float = 1.0

    default_username: str = "default"

    # Busca primero en variables de entorno y luego en .env
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

settings = Settings()
