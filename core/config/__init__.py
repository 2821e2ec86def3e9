from core.config.settings import (
    CacheConfig,
    DirectoryConfig,
    SearchConfig,
    Settings,
    get_settings,
    init_settings,
)

__all__ = [
    "CacheConfig",
    "DirectoryConfig",
    "SearchConfig",
    "Settings",
    "get_settings",
    "init_settings",
]
