# ============================================================================
# CONNECTION STRING RESOLUTION
# ============================================================================
# STATUS: Introspection - Connection string parsing
# PURPOSE: Resolve env(KEY) connection strings and infer the dialect
# CREATED: 08 OCT 2026
# EXPORTS: ConnectionStringParser, ConnectionStringError (+ subclasses)
# DEPENDENCIES: python-dotenv
# ============================================================================
"""
Connection String Resolution

A connection string is either used literally or written as a call
expression ``env(DATABASE_URL)`` / ``env("DATABASE_URL")``, in which case it
is read from the environment after loading an env file.

Env file handling:
- no file given: ``./.env`` is loaded when present, otherwise ignored
- file given: it must exist
- variables already set in the process environment are not overridden
  and ``${VAR}`` references inside the file are expanded

Every failure names the symbol that could not be resolved; nothing
silently resolves to an empty string.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CALL_EXPRESSION = re.compile(r"^\s*([a-z]+)\s*\(\s*(.*?)\s*\)\s*$")
DEFAULT_ENV_FILE = ".env"
DEFAULT_URL = "env(DATABASE_URL)"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ConnectionStringError(Exception):
    """Base exception for connection string resolution."""

    def __init__(self, message: str, symbol: Optional[str] = None):
        self.symbol = symbol
        super().__init__(message)


class UndefinedFunctionError(ConnectionStringError):
    """Raised for call expressions other than ``env(...)``."""
    def __init__(self, name: str):
        super().__init__(f"Function '{name}' is not defined.", symbol=name)


class InvalidConnectionStringError(ConnectionStringError):
    """Raised when the ``env(...)`` argument is not a valid key."""
    def __init__(self, connection_string: str):
        super().__init__(f"Invalid connection string: '{connection_string}'", symbol=connection_string)


class EnvFileNotFoundError(ConnectionStringError):
    """Raised when an explicitly requested env file does not exist."""
    def __init__(self, connection_string: str, env_file: str):
        self.env_file = env_file
        super().__init__(
            f"Could not resolve connection string '{connection_string}'. "
            f"Environment file '{env_file}' could not be found. "
            "Use '--env-file' to specify a different file.",
            symbol=env_file,
        )


class MissingEnvironmentVariableError(ConnectionStringError):
    """Raised when the referenced variable is unset or empty."""
    def __init__(self, key: str):
        super().__init__(f"Environment variable '{key}' could not be found.", symbol=key)


# ============================================================================
# PARSER
# ============================================================================

class ConnectionStringParser:
    """
    Resolve connection strings.

    Usage:
        parser = ConnectionStringParser()
        url = parser.parse("env(DATABASE_URL)", env_file=".env.local")
    """

    def parse(self, connection_string: str, env_file: Optional[str] = None) -> str:
        match = CALL_EXPRESSION.match(connection_string)
        if not match:
            return connection_string

        name, key_token = match.group(1), match.group(2)
        if name != "env":
            raise UndefinedFunctionError(name)

        key = self._parse_key(connection_string, key_token)
        self._load_env_file(connection_string, env_file)

        value = os.environ.get(key)
        if not value:
            raise MissingEnvironmentVariableError(key)
        return value

    @staticmethod
    def _parse_key(connection_string: str, key_token: str) -> str:
        if '"' in key_token:
            try:
                key = json.loads(key_token)
            except ValueError as e:
                raise InvalidConnectionStringError(connection_string) from e
        else:
            key = key_token

        if not isinstance(key, str) or not key:
            raise InvalidConnectionStringError(connection_string)
        return key

    @staticmethod
    def _load_env_file(connection_string: str, env_file: Optional[str]) -> None:
        path = Path(env_file) if env_file is not None else Path.cwd() / DEFAULT_ENV_FILE
        if not path.is_file():
            if env_file is not None:
                raise EnvFileNotFoundError(connection_string, env_file)
            return

        load_dotenv(dotenv_path=path, override=False, interpolate=True)
        logger.info(f"Loaded environment variables from '{env_file or DEFAULT_ENV_FILE}'.")


def infer_dialect(connection_string: str) -> str:
    """``postgres://`` and ``postgresql://`` URLs are PostgreSQL, anything else SQLite."""
    lowered = connection_string.strip().lower()
    if lowered.startswith(("postgres://", "postgresql://")):
        return "postgres"
    return "sqlite"


__all__ = [
    "ConnectionStringParser",
    "ConnectionStringError",
    "UndefinedFunctionError",
    "InvalidConnectionStringError",
    "EnvFileNotFoundError",
    "MissingEnvironmentVariableError",
    "infer_dialect",
    "DEFAULT_URL",
]
