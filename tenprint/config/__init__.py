"""Configuration management for tenprint."""

from tenprint.config.loader import load_config
from tenprint.config.models import (
    APIConfig,
    CacheConfig,
    CORSConfig,
    LoggingConfig,
    TenPrintServiceConfig,
)

__all__ = [
    "load_config",
    "TenPrintServiceConfig",
    "APIConfig",
    "CacheConfig",
    "CORSConfig",
    "LoggingConfig",
]
