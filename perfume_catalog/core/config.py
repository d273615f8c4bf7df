"""Application configuration loaded from environment variables."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central place for strongly typed application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="Perfume Catalog API")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_prefix: str = Field(default="/api")
    log_level: str = Field(default="INFO")

    database_url: str = Field(default="sqlite:///./perfumes.db", validation_alias="DATABASE_URL")
    create_tables_on_startup: bool = Field(default=True)

    upload_dir: str = Field(default="uploads")
    uploads_url_prefix: str = Field(default="/uploads")
    max_image_size_mb: int = Field(default=5)
    max_images_per_request: int = Field(default=5)

    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:3001"])

    @model_validator(mode="after")
    def convert_database_url(self) -> "Settings":
        """Normalize postgres:// and postgresql+psycopg:// to the psycopg2 dialect name."""
        if self.database_url.startswith("postgresql+psycopg://"):
            self.database_url = self.database_url.replace("postgresql+psycopg://", "postgresql://", 1)
        elif self.database_url.startswith("postgres://"):
            self.database_url = self.database_url.replace("postgres://", "postgresql://", 1)
        return self

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance so downstream code can import directly."""

    return Settings()
