"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class RepositorySettings(BaseSettings):
    """Remote DCR graph repository configuration."""

    model_config = SettingsConfigDict(env_prefix="DCR_REPOSITORY_")

    base_url: str = "https://repository.dcrgraphs.net"
    username: str = ""
    password: SecretStr = SecretStr("")
    timeout_seconds: float = 30.0
    max_retries: int = 3
    retry_min_wait_seconds: float = 1.0
    retry_max_wait_seconds: float = 10.0
    simulation_header: str = "x-dcr-simulation-id"

    # Optional JSON file holding {"username", "password"}
    credentials_file: str = ""

    @property
    def has_credentials(self) -> bool:
        """Check if basic auth credentials are configured."""
        return bool(self.username and self.password.get_secret_value())

    @classmethod
    def from_json_file(cls, path: str | Path) -> "RepositorySettings":
        """
        Load credentials from a JSON file.

        The file holds an object with ``username`` and ``password`` keys.
        Remaining fields keep their environment/default values.

        Args:
            path: Path to the credentials file

        Returns:
            RepositorySettings with the file's credentials applied
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(
            username=data.get("username", ""),
            password=SecretStr(data.get("password", "")),
        )


class GraphSettings(BaseSettings):
    """DCR graph parsing configuration."""

    model_config = SettingsConfigDict(env_prefix="DCR_GRAPH_")

    # Upper bound for an uploaded constraint document
    max_payload_bytes: int = 5 * 1024 * 1024


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class ServicePorts(BaseSettings):
    """Service port configuration."""

    subscriptions: int = Field(default=8080, alias="SUBSCRIPTIONS_PORT")
    dcr_graph: int = Field(default=8081, alias="DCR_GRAPH_PORT")


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO

    # Service ports
    ports: ServicePorts = Field(default_factory=ServicePorts)

    # Remote repository
    repository: RepositorySettings = Field(default_factory=RepositorySettings)

    # Graph parsing
    graph: GraphSettings = Field(default_factory=GraphSettings)

    # Security
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
