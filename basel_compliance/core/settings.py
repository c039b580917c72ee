from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="Basel Compliance API", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    redact_contact_details: bool = Field(default=True, alias="REDACT_CONTACT_DETAILS")
    database_url: str = Field(
        default="sqlite+pysqlite:///./database/dev.db",
        alias="DATABASE_URL",
    )
    cors_origins: list[str] = Field(default=["http://localhost:5173"], alias="CORS_ORIGINS")

    jwt_secret: str = Field(default="change-this-secret-in-production", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expiration_minutes: int = Field(default=60 * 24 * 7, alias="JWT_EXPIRATION_MINUTES")
    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS")

    pdf_template_path: str = Field(
        default="templates/pdf/basel_notification_form.pdf",
        alias="PDF_TEMPLATE_PATH",
    )
    pdf_field_overrides_path: str = Field(
        default="config/pdf_field_overrides.yaml",
        alias="PDF_FIELD_OVERRIDES_PATH",
    )
    pdf_renderer_backend: Literal["chromium", "weasyprint"] = Field(
        default="chromium",
        alias="PDF_RENDERER_BACKEND",
    )
    renderer_launch_timeout_seconds: float = Field(default=30.0, alias="RENDERER_LAUNCH_TIMEOUT_SECONDS")
    test_data_path: str = Field(
        default="config/test_data/basel_test_data.yaml",
        alias="TEST_DATA_PATH",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
