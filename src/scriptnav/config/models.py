"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SCRIPTNAV__SECTION__KEY)
3. Repo YAML (.scriptnav/config.yaml)
4. Global YAML (~/.config/scriptnav/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SCRIPTNAV__<SECTION>__<KEY>=<VALUE>

Examples:
    SCRIPTNAV__LOGGING__LEVEL=DEBUG
    SCRIPTNAV__RESOLVER__NARROW_PROPERTY_SPANS=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SCRIPTNAV__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every definition lookup.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ResolverConfig(BaseModel):
    """Declaration resolver behaviour.

    Env vars:
        SCRIPTNAV__RESOLVER__NARROW_PROPERTY_SPANS: Report only the property name
        SCRIPTNAV__RESOLVER__COMMAND_VARIABLE_DECLARATIONS: Treat Set-Variable/New-Variable
            invocations as variable declarations
    """

    narrow_property_spans: bool = Field(
        default=False,
        description="Narrow property declarations to the property name. "
        "Off by default: properties are reported with their full extent.",
    )
    command_variable_declarations: bool = Field(
        default=False,
        description="Also resolve variables declared with Set-Variable/New-Variable.",
    )


class ScriptNavConfig(BaseModel):
    """Root configuration for ScriptNav.

    All settings can be configured via:
    1. Environment variables: SCRIPTNAV__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
