"""Configuration settings loaded from the environment and `.env`."""

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

SUPPORTED_ORMS = ("peewee", "sqlalchemy")


class Settings(BaseSettings):
    """Application settings; every field can be overridden by an env var."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Server
    environment: str = Field(
        default="development",
        validation_alias="APP_ENV",
        description="development, test or production",
    )
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=3000, description="Bind port")
    reload: bool = Field(default=False, description="Enable uvicorn auto-reload")
    log_level: str = Field(default="info", description="Root logging level")

    # Storage
    database_url: str = Field(
        default="sqlite:///database.sqlite", description="Database URL"
    )
    orm: str = Field(default="peewee", description="peewee or sqlalchemy")

    # HTTP
    api_prefix: str = Field(default="/api", description="Mount path of the task API")
    cors_origins: Annotated[list[str], NoDecode] = Field(default=["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: Annotated[list[str], NoDecode] = Field(default=["*"])
    cors_allow_headers: Annotated[list[str], NoDecode] = Field(default=["*"])

    @field_validator("orm")
    @classmethod
    def _check_orm(cls, value: str) -> str:
        value = value.lower()
        if value not in SUPPORTED_ORMS:
            raise ValueError(
                f"Unsupported ORM '{value}', expected one of {SUPPORTED_ORMS}"
            )
        return value

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        prefix = value.strip("/")
        return f"/{prefix}" if prefix else ""

    @field_validator(
        "cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before"
    )
    @classmethod
    def _split_list(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def load_settings() -> Settings:
    return Settings()
