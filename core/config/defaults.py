# ============================================================================
# GENERATOR CONFIGURATION
# ============================================================================
# STATUS: Core - Generator configuration values
# PURPOSE: Defaults, environment overrides and config-file loading
# CREATED: 09 OCT 2026
# ============================================================================
"""
Generator Configuration

One immutable GeneratorConfig drives a generation run. Values are layered
lowest to highest precedence:

    defaults  <  environment (SCHEMA_TYPEGEN_*)  <  config file  <  CLI flags

Design:
- Immutable dataclass for configuration
- Environment variable overrides
- JSON config file with snake_case or camelCase keys
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "SCHEMA_TYPEGEN_"
DEFAULT_URL = "env(DATABASE_URL)"
DEFAULT_LOG_LEVEL = "info"
LOG_LEVELS = ("debug", "info", "warning", "error", "silent")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


class ConfigError(Exception):
    """Raised for unreadable config files or invalid config values."""
    pass


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: '{value}'")


def _parse_mapping(name: str, value: str) -> Dict[str, str]:
    try:
        parsed = json.loads(value)
    except ValueError as e:
        raise ConfigError(f"Invalid JSON for {name}: {e}") from e
    if not isinstance(parsed, dict):
        raise ConfigError(f"{name} must be a JSON object")
    return {str(k): str(v) for k, v in parsed.items()}


_STRING_FIELDS = (
    "url", "dialect", "env_file", "out_file", "include_pattern", "exclude_pattern", "log_level",
)
_BOOL_FIELDS = ("camel_case", "type_only_imports", "verify", "print_output", "include_views", "partitions")
_MAPPING_FIELDS = ("type_mapping", "overrides", "custom_imports")
_REQUIRED_FIELDS = ("url", "log_level")


def _check_value(name: str, value: Any, label: Optional[str] = None) -> None:
    """Raise ConfigError if ``value`` is not the kind the ``name`` field holds."""
    label = label or name
    if value is None:
        if name in _REQUIRED_FIELDS or name not in _STRING_FIELDS:
            raise ConfigError(f"Config value '{label}' must not be null")
    elif name in _STRING_FIELDS:
        if not isinstance(value, str):
            raise ConfigError(f"Config value '{label}' must be a string, got {type(value).__name__}")
    elif name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigError(f"Config value '{label}' must be a boolean, got {type(value).__name__}")
    elif name in _MAPPING_FIELDS:
        if not isinstance(value, dict):
            raise ConfigError(f"Config value '{label}' must be an object, got {type(value).__name__}")
        for key, item in value.items():
            if not isinstance(key, str) or not isinstance(item, str):
                raise ConfigError(f"Config value '{label}' must map strings to strings (bad entry '{key}')")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# ============================================================================
# GENERATOR CONFIG
# ============================================================================

@dataclass(frozen=True)
class GeneratorConfig:
    """
    Settings for one generation run.

    ``overrides`` maps ``"table.column"`` to a type expression written
    verbatim; ``custom_imports`` maps a local name to ``"module"`` or
    ``"module#Export"``.
    """
    # Connection
    url: str = DEFAULT_URL
    dialect: Optional[str] = None
    env_file: Optional[str] = None

    # Output
    out_file: Optional[str] = None
    camel_case: bool = False
    type_only_imports: bool = True
    verify: bool = False
    print_output: bool = False

    # Type resolution
    type_mapping: Dict[str, str] = field(default_factory=dict)
    overrides: Dict[str, str] = field(default_factory=dict)
    custom_imports: Dict[str, str] = field(default_factory=dict)

    # Table filtering
    include_pattern: Optional[str] = None
    exclude_pattern: Optional[str] = None
    include_views: bool = True
    partitions: bool = False

    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        for f in fields(self):
            _check_value(f.name, getattr(self, f.name))
        if self.log_level.lower() not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level '{self.log_level}'. Expected one of: {', '.join(LOG_LEVELS)}"
            )

    def merged(self, **kwargs: Any) -> "GeneratorConfig":
        """Copy with every non-None keyword applied."""
        updates = {key: value for key, value in kwargs.items() if value is not None}
        unknown = set(updates) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        for key, value in updates.items():
            _check_value(key, value)
        return replace(self, **updates)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "GeneratorConfig":
        """Create from SCHEMA_TYPEGEN_* environment variables."""
        env = os.environ if environ is None else environ

        def get(key: str) -> Optional[str]:
            return env.get(ENV_PREFIX + key)

        values: Dict[str, Any] = {}
        for key in ("url", "dialect", "env_file", "out_file", "include_pattern",
                    "exclude_pattern", "log_level"):
            raw = get(key.upper())
            if raw:
                values[key] = raw
        for key in ("camel_case", "type_only_imports", "verify", "include_views", "partitions"):
            raw = get(key.upper())
            if raw is not None:
                values[key] = _parse_bool(ENV_PREFIX + key.upper(), raw)
        for key in ("type_mapping", "overrides", "custom_imports"):
            raw = get(key.upper())
            if raw:
                values[key] = _parse_mapping(ENV_PREFIX + key.upper(), raw)

        return cls(**values)

    @classmethod
    def from_file(cls, path: str, base: Optional["GeneratorConfig"] = None) -> "GeneratorConfig":
        """
        Layer a JSON config file over ``base`` (defaults when omitted).

        Keys may be snake_case (``out_file``) or camelCase (``outFile``).

        Raises:
            ConfigError: if the file is missing or malformed, or has unknown
                keys or values of the wrong type
        """
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file '{path}' could not be found")
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise ConfigError(f"Config file '{path}' is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file '{path}' must contain a JSON object")

        names = {f.name: f.name for f in fields(cls)}
        names.update({_camel(name): name for name in list(names)})

        values: Dict[str, Any] = {}
        unknown = []
        for key, value in data.items():
            name = names.get(key)
            if name is None:
                unknown.append(key)
            else:
                _check_value(name, value, label=key)
                values[name] = value
        if unknown:
            raise ConfigError(f"Unknown keys in config file '{path}': {', '.join(sorted(unknown))}")

        logger.debug(f"Loaded config file {path} ({len(values)} keys)")
        return (base or cls()).merged(**values)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ConfigError",
    "GeneratorConfig",
    "ENV_PREFIX",
    "DEFAULT_URL",
    "LOG_LEVELS",
]
