"""Application settings and configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Package Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, description="Port to listen on")
    localhost: bool = Field(default=False, description="Only listen on 127.0.0.1")

    # TLS, enabled only when both are set
    cert_file: Optional[Path] = Field(default=None, description="Path to a certificate for HTTPS")
    key_file: Optional[Path] = Field(default=None, description="Path to the certificate's private key")

    # Package database
    db_file: Path = Field(default=Path("db.json"), description="JSON or YAML package snapshot")

    # Logging
    log_level: str = Field(default="INFO")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )

    @property
    def bind_host(self) -> str:
        """Address the server binds to."""
        return "127.0.0.1" if self.localhost else self.host

    @property
    def tls_enabled(self) -> bool:
        return self.cert_file is not None and self.key_file is not None


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def current_settings(app: Any) -> Settings:
    """Settings chosen by the runner for an app, or the environment defaults."""
    return getattr(app.state, "settings", None) or get_settings()
