"""Configuration management module."""

from .config_manager import ConfigManager
from .models import CacheConfig, CollectorConfig, Config, LoggingConfig, OMDbConfig

__all__ = [
    "ConfigManager",
    "Config",
    "OMDbConfig",
    "CollectorConfig",
    "CacheConfig",
    "LoggingConfig",
]
