"""Application configuration."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = "sqlite:///./authcore.db"

    # Credentials
    password_hash_scheme: Literal["bcrypt", "sha1"] = "bcrypt"  # sha1 only for legacy stores
    bcrypt_rounds: int = 12
    temp_password_length: int = 8
    temp_password_expire_minutes: int = 60
    min_password_length: int = 8

    # Sessions
    session_sliding_window_minutes: int = 10

    # Application
    log_level: str = "INFO"
    debug: bool = False
    host: str = "localhost"
    port: int = 3000

    # CORS
    allowed_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


settings = Settings()
