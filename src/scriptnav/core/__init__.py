"""Core module exports."""

from scriptnav.core.errors import (
    ConfigError,
    ErrorCode,
    ResolverError,
    ScriptNavError,
)
from scriptnav.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ScriptNavError",
    "ConfigError",
    "ErrorCode",
    "ResolverError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
