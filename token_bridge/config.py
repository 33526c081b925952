"""Configuration for token-bridge operations.

Call-boundary defaults (contrast level, Tailwind dialect, Liquid Glass
flag, alias depth) live here instead of in function signatures, so the
contract is visible in one place. Values are merged in increasing
priority: model defaults, a JSON config file, TOKEN_BRIDGE_* environment
variables, explicit overrides.
"""

import json
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from .bridge_logging import get_logger
from .errors import ConfigurationError

logger = get_logger()

ENV_PREFIX = "TOKEN_BRIDGE_"

ContrastLevel = Literal["AA", "AAA"]
TailwindFormat = Literal["esm", "cjs"]


class BridgeConfig(BaseModel):
    """Operation defaults and ambient settings."""

    contrast_level: ContrastLevel = Field(
        default="AA", description="WCAG level used by validate_contrast"
    )
    tailwind_format: TailwindFormat = Field(
        default="esm", description="Module dialect for generate_tailwind_config"
    )
    liquid_glass: bool = Field(
        default=False, description="Emit iOS 26 Liquid Glass helpers in SwiftUI output"
    )
    max_alias_depth: int = Field(
        default=10, ge=1, le=100, description="Hop limit when following aliases"
    )
    kotlin_package: str = Field(
        default="com.example.ui.theme",
        description="Package declaration for the Material 3 theme file",
    )
    log_level: str = Field(default="INFO")
    log_format: Literal["text", "json"] = Field(default="text")
    log_file: Path | None = Field(
        default=None, description="Also write logs here, rotated by size"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure log level is one the logging module understands."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("kotlin_package")
    @classmethod
    def validate_kotlin_package(cls, value: str) -> str:
        """Package must be a dotted identifier path."""
        parts = value.split(".")
        if not all(part.isidentifier() for part in parts):
            raise ValueError(f"Not a valid Kotlin package name: {value}")
        return value


_ENV_FIELDS = {
    "CONTRAST_LEVEL": "contrast_level",
    "TAILWIND_FORMAT": "tailwind_format",
    "LIQUID_GLASS": "liquid_glass",
    "MAX_ALIAS_DEPTH": "max_alias_depth",
    "KOTLIN_PACKAGE": "kotlin_package",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
    "LOG_FILE": "log_file",
}


def _env_overrides(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Collect TOKEN_BRIDGE_* environment variables as config fields."""
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        raw = env.get(f"{ENV_PREFIX}{suffix}")
        if raw is None or raw == "":
            continue
        if field_name == "liquid_glass":
            values[field_name] = raw.strip().lower() in ("1", "true", "yes", "on")
        else:
            values[field_name] = raw.strip()
    return values


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    environ: dict[str, str] | None = None,
) -> BridgeConfig:
    """Load configuration from file, environment, and explicit overrides.

    Args:
        config_path: Optional JSON config file.
        overrides: Highest-priority values, e.g. from CLI flags. None
            values are ignored so unset flags don't mask lower layers.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Validated BridgeConfig.

    Raises:
        ConfigurationError: If the file can't be read or values are invalid.
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        try:
            file_data = json.loads(Path(config_path).read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Config file not found: {config_path}", config_file=str(config_path)
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Config file is not valid JSON: {e}", config_file=str(config_path)
            ) from e
        if not isinstance(file_data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object", config_file=str(config_path)
            )
        data.update(file_data)
        logger.debug(f"Loaded config file {config_path}")

    data.update(_env_overrides(environ))

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return BridgeConfig(**data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(problems),
            config_file=str(config_path) if config_path else None,
        ) from e
