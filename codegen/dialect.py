# ============================================================================
# DIALECTS
# ============================================================================
# STATUS: Codegen - Database glue
# PURPOSE: Pair a codegen adapter with an introspector and a connector
# CREATED: 08 OCT 2026
# EXPORTS: Dialect, DialectError, UnknownDialectError, get_dialect, DIALECTS
# ============================================================================
"""
Dialects

A dialect is the glue between codegen and one database engine: how to
connect, how to read the catalog and which default types apply.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, ContextManager, Mapping

from codegen.adapter import POSTGRES_ADAPTER, SQLITE_ADAPTER, Adapter
from introspection.dialects.postgres import PostgresIntrospector, connect_postgres
from introspection.dialects.sqlite import SqliteIntrospector, connect_sqlite
from introspection.introspector import Introspector


class DialectError(Exception):
    """Base exception for dialect lookup."""
    pass


class UnknownDialectError(DialectError):
    """Raised when no dialect is registered under a name."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown dialect: '{name}'. Supported: {', '.join(sorted(DIALECTS))}")


@dataclass(frozen=True)
class Dialect:
    name: str
    adapter: Adapter
    introspector: Introspector
    connect: Callable[[str], ContextManager[Any]]


DIALECTS: Mapping[str, Dialect] = MappingProxyType({
    "sqlite": Dialect(
        name="sqlite",
        adapter=SQLITE_ADAPTER,
        introspector=SqliteIntrospector(),
        connect=connect_sqlite,
    ),
    "postgres": Dialect(
        name="postgres",
        adapter=POSTGRES_ADAPTER,
        introspector=PostgresIntrospector(),
        connect=connect_postgres,
    ),
})

_ALIASES = {"postgresql": "postgres", "pg": "postgres", "sqlite3": "sqlite"}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name (case-insensitive, common aliases accepted)."""
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    dialect = DIALECTS.get(key)
    if dialect is None:
        raise UnknownDialectError(name)
    return dialect


__all__ = ["Dialect", "DialectError", "UnknownDialectError", "get_dialect", "DIALECTS"]
