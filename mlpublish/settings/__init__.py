"""Settings package exports."""

from .loader import (
    AppConfig,
    ChannelSettings,
    HttpSettings,
    PathSettings,
    SecuritySettings,
    load_config,
)

__all__ = [
    "AppConfig",
    "ChannelSettings",
    "HttpSettings",
    "PathSettings",
    "SecuritySettings",
    "load_config",
]
