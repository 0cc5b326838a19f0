"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./users.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def connection_string(self) -> str:
        """Construct the database connection string, injecting the password if configured."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if self.is_sqlite or not self.password_env_var:
            return self.url

        password = os.getenv(self.password_env_var)
        if not password:
            raise ValueError(f"Environment variable {self.password_env_var} not set")

        if base_url.password and base_url.password != password:
            logger.warning(
                "Database password in URL does not match {}; using the environment variable",
                self.password_env_var,
            )
        return base_url.set(password=password).render_as_string(hide_password=False)


class PasswordHashingConfig(BaseModel):
    """PBKDF2 parameters used to transform user passwords before storage."""

    algorithm: Literal["sha256", "sha512"] = Field(
        default="sha256", description="HMAC digest used by PBKDF2"
    )
    iterations: int = Field(default=100_000, ge=1, description="PBKDF2 iteration count")
    salt_bytes: int = Field(default=16, ge=8, description="Random salt length in bytes")


class SecurityConfig(BaseModel):
    """Security configuration."""

    password_hashing: PasswordHashingConfig = Field(
        default_factory=PasswordHashingConfig,
        description="Password hashing parameters",
    )


class EmailProviderConfig(BaseModel):
    """HTTP email provider settings."""

    api_url: str | None = Field(default=None, description="Provider send endpoint")
    api_key: str | None = Field(default=None, description="Provider secret")
    sender: str = Field(default="no-reply@example.com", description="From address")
    timeout: float = Field(default=10.0, description="HTTP timeout in seconds")


class MessageTemplateConfig(BaseModel):
    """Subject and body of a notification, with ``{field}`` placeholders."""

    subject: str = Field(default="Welcome, {name}!")
    body: str = Field(
        default="Hi {name}, your account ({email}) has been created."
    )


class NotificationConfig(BaseModel):
    """Notification configuration model."""

    enabled: bool = Field(default=True, description="Send notifications on user creation")
    backend: Literal["log", "email"] = Field(
        default="log", description="Notification delivery backend"
    )
    email: EmailProviderConfig = Field(
        default_factory=EmailProviderConfig, description="Email provider configuration"
    )
    welcome: MessageTemplateConfig = Field(
        default_factory=MessageTemplateConfig,
        description="Template sent to newly created users",
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="Security configuration"
    )
    notifications: NotificationConfig = Field(
        default_factory=NotificationConfig, description="Notification configuration"
    )
