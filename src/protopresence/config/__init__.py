"""Configuration loading, schema, and defaults."""

from protopresence.config.loader import ConfigError, load_config
from protopresence.config.schema import ProtoPresenceConfig, Scope

__all__ = [
    "ConfigError",
    "ProtoPresenceConfig",
    "Scope",
    "load_config",
]
