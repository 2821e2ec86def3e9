"""
Configuration System

Centralized configuration for pair resolution, caching and search.
"""

import os
from dataclasses import dataclass, field
from typing import Optional
import yaml
import logging

logger = logging.getLogger(__name__)


@dataclass
class DirectoryConfig:
    """Pair directory parameters"""
    source: str = "coinbase"              # "coinbase", "kraken" or "mock"
    quote_currency: str = "USD"
    snapshot_path: str = "tokens.json"    # Local path or http(s) URL
    cache_version: str = "v3"             # Bump when the record shape changes
    cache_ttl_hours: float = 24.0
    request_timeout: float = 30.0

    @property
    def cache_ttl_ms(self) -> int:
        return int(self.cache_ttl_hours * 60 * 60 * 1000)

    @classmethod
    def from_env(cls) -> "DirectoryConfig":
        return cls(
            source=os.getenv("PAIR_SOURCE", "coinbase").lower(),
            quote_currency=os.getenv("QUOTE_CURRENCY", "USD").upper(),
            snapshot_path=os.getenv("SNAPSHOT_PATH", "tokens.json"),
            cache_version=os.getenv("CACHE_VERSION", "v3"),
            cache_ttl_hours=float(os.getenv("CACHE_TTL_HOURS", "24")),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        )


@dataclass
class CacheConfig:
    """Cache store backend"""
    backend: str = "file"                 # "file", "memory" or "redis"
    file_path: str = ".pair_cache.json"
    redis_url: str = "redis://localhost:6379/0"

    @classmethod
    def from_env(cls) -> "CacheConfig":
        return cls(
            backend=os.getenv("CACHE_BACKEND", "file").lower(),
            file_path=os.getenv("CACHE_FILE", ".pair_cache.json"),
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        )


@dataclass
class SearchConfig:
    """Search parameters"""
    max_results: int = 50


@dataclass
class Settings:
    """
    Master settings object.
    Combines all configuration into one place.
    """
    directory: DirectoryConfig = field(default_factory=DirectoryConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    search: SearchConfig = field(default_factory=SearchConfig)

    # Logging
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables"""
        return cls(
            directory=DirectoryConfig.from_env(),
            cache=CacheConfig.from_env(),
            search=SearchConfig(),
            log_level=os.getenv("LOG_LEVEL", "INFO")
        )

    @classmethod
    def from_yaml(cls, path: str) -> "Settings":
        """Load settings from YAML file"""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        cache_data = data.get("cache", {})
        cache = CacheConfig(**cache_data)
        # Redis credentials stay out of config files
        cache.redis_url = os.getenv("REDIS_URL", cache.redis_url)

        return cls(
            directory=DirectoryConfig(**data.get("directory", {})),
            cache=cache,
            search=SearchConfig(**data.get("search", {})),
            log_level=data.get("log_level", os.getenv("LOG_LEVEL", "INFO"))
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings"""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def init_settings(config_path: str = None) -> Settings:
    """Initialize settings from a config file, or from the environment"""
    global _settings
    if config_path:
        logger.info(f"Loading config from {config_path}")
        _settings = Settings.from_yaml(config_path)
    else:
        _settings = Settings.load()
    return _settings
