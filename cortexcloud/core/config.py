"""Application configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed settings object shared by the API and the analysis services."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")
    service_name: str = Field(default="cortexcloud", alias="SERVICE_NAME")
    environment: str = Field(default="local", alias="ENVIRONMENT")

    jwt_secret: str = Field(
        default="cortexcloud-secret-key-change-in-production", alias="JWT_SECRET"
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=7 * 24 * 60, alias="JWT_EXPIRES_MINUTES")

    password_salt: str = Field(default="cortexcloud-salt", alias="PASSWORD_SALT")
    password_min_length: int = Field(default=6, alias="PASSWORD_MIN_LENGTH")

    chat_history_limit: int = Field(default=50, alias="CHAT_HISTORY_LIMIT")
    chart_points: int = Field(default=12, alias="CHART_POINTS")


settings = Settings()
