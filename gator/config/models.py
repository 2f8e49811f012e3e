"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .duration import parse_duration


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("gator", description="Database name")
    user: str = Field("gator", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class PollerConfig(BaseModel):
    """Feed poller settings."""

    interval: str = Field("1m", description="Time between poll cycles (e.g. 30s, 1m, 1h30m)")
    fetch_timeout: float = Field(30.0, description="Feed request timeout in seconds", gt=0)
    user_agent: str = Field("gator", description="User-Agent header sent with feed requests")

    @field_validator("interval")
    @classmethod
    def validate_interval(cls, v: str) -> str:
        """Reject intervals that do not parse as a positive duration."""
        parse_duration(v)
        return v


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field("INFO", description="Root log level")


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    current_user_name: Optional[str] = Field(None, description="Currently logged in user")
    poller: PollerConfig = Field(default_factory=PollerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
