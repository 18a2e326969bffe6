"""
Runtime Configuration Module

Provides configuration loading and management for a sale deployment.
"""

from .runtime import (
    DEFAULT_OWNER,
    MetadataConfig,
    RuntimeConfig,
    ServerConfig,
    default_sale,
    get_default_config,
    parse_price,
    set_default_config,
)

__all__ = [
    "DEFAULT_OWNER",
    "MetadataConfig",
    "RuntimeConfig",
    "ServerConfig",
    "default_sale",
    "get_default_config",
    "parse_price",
    "set_default_config",
]
