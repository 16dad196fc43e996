"""Pydantic models for tenprint service configuration."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """API server configuration."""

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1)


class CacheConfig(BaseModel):
    """Cache-Control lifetimes for ``/svg`` responses, in seconds."""

    svg_max_age: int = Field(default=3600, ge=0)
    permanent_redirect_max_age: int = Field(default=3600, ge=0)
    temporary_redirect_max_age: int = Field(default=60, ge=0)


class CORSConfig(BaseModel):
    """Cross-origin headers added to every ``/svg`` response."""

    allow_origin: str = "*"
    allow_methods: list[str] = Field(default_factory=lambda: ["GET", "HEAD", "OPTIONS"])
    expose_headers: list[str] = Field(default_factory=lambda: ["location"])
    max_age: int = Field(default=86400, ge=0)

    @field_validator("allow_methods")
    @classmethod
    def normalise_methods(cls, v: list[str]) -> list[str]:
        """Upper-case methods and require at least one."""
        if not v:
            raise ValueError("allow_methods must not be empty")
        return [method.upper() for method in v]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: Literal["json", "text"] = "json"
    output: Literal["stdout", "stderr"] = "stdout"


class TenPrintServiceConfig(BaseModel):
    """Complete tenprint service configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    cors: CORSConfig = Field(default_factory=CORSConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
