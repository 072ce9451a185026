"""Config module exports."""

from scriptnav.config.loader import load_config
from scriptnav.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ResolverConfig,
    ScriptNavConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "ResolverConfig",
    "ScriptNavConfig",
]
