import json
import logging
from typing import Annotated

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_CHAT_ENDPOINTS = ["/api/v1/chat", "/chat", "/api/chat", "/api/v1/ai/chat"]


class Settings(BaseSettings):
    """
    Client configuration using Pydantic BaseSettings.
    Values are loaded from environment variables and the .env file.
    """

    API_V1_STR: str = "/api/v1"

    # Backend connection
    CLINIC_API_BASE_URL: str = Field("http://localhost:8080", description="Base URL of the clinic backend")
    CLINIC_API_TIMEOUT: float = Field(15.0, description="Request timeout in seconds")
    CLINIC_API_USER_AGENT: str = Field("Clinic-Client/0.1", description="User-Agent header sent to the backend")

    # Authentication
    CLINIC_API_ACCESS_TOKEN: str | None = Field(None, description="Initial bearer access token")
    CLINIC_API_REFRESH_TOKEN: str | None = Field(None, description="Initial refresh token")

    # Chat assistant endpoints, tried in order until one answers
    CHAT_ENDPOINTS: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_CHAT_ENDPOINTS),
        description="Candidate chat endpoints (JSON array or comma-separated)",
    )

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Root log level")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("CLINIC_API_BASE_URL")
    @classmethod
    def strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("CLINIC_API_BASE_URL must not be empty")
        return value

    @field_validator("CLINIC_API_TIMEOUT")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("CLINIC_API_TIMEOUT must be greater than zero")
        return value

    @field_validator("CHAT_ENDPOINTS", mode="before")
    @classmethod
    def parse_chat_endpoints(cls, value):
        """Parse CHAT_ENDPOINTS from .env (JSON array or comma-separated string)"""
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("[") and value.endswith("]"):
                try:
                    parsed = json.loads(value)
                    if isinstance(parsed, list):
                        return [str(endpoint).strip() for endpoint in parsed if endpoint]
                except json.JSONDecodeError:
                    pass
            return [endpoint.strip() for endpoint in value.split(",") if endpoint.strip()]
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level

    @computed_field
    @property
    def auth_base_path(self) -> str:
        return f"{self.API_V1_STR}/auth"


_settings_instance = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.
    Avoids re-reading the environment on every call.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
