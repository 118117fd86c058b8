"""Application settings and configuration.

This module defines all configuration options for the Z-Code Stage application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files, or by
    passing an explicit instance to ``create_app``.
    """

    # Application metadata
    app_name: str = Field(default="Z-Code Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Mount point for every router; empty serves the API at the root.
    api_prefix: str = Field(default="", alias="API_PREFIX")

    # Operator account. The secret is fixed and never rotated.
    admin_username: str = Field(default="admin", alias="ADMIN_USERNAME")
    admin_secret: str = Field(default="admin123", alias="ADMIN_SECRET")

    # Identity defaults
    default_avatar: str = Field(default="default", alias="DEFAULT_AVATAR")
    auto_register_on_login: bool = Field(default=False, alias="AUTO_REGISTER_ON_LOGIN")

    # Activity points
    submission_reward: int = Field(default=1, ge=0, alias="SUBMISSION_REWARD")
    approval_reward: int = Field(default=1, ge=0, alias="APPROVAL_REWARD")
    message_reward: int = Field(default=1, ge=0, alias="MESSAGE_REWARD")

    # Content limits
    max_media_payload_bytes: int = Field(
        default=8 * 1024 * 1024,
        gt=0,
        alias="MAX_MEDIA_PAYLOAD_BYTES",
    )
    max_caption_length: int = Field(default=2200, gt=0, alias="MAX_CAPTION_LENGTH")
    max_message_length: int = Field(default=2000, gt=0, alias="MAX_MESSAGE_LENGTH")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
