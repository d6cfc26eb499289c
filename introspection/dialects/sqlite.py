# ============================================================================
# SQLITE INTROSPECTOR
# ============================================================================
# STATUS: Introspection - SQLite catalog reader
# PURPOSE: Build DatabaseMetadata from sqlite_master and PRAGMA table_info
# CREATED: 07 OCT 2026
# EXPORTS: SqliteIntrospector, connect_sqlite
# ============================================================================
"""
SQLite Introspector

Reads tables and views from ``sqlite_master`` (internal ``sqlite_%`` objects
excluded) and their columns from ``PRAGMA table_info``.

Column flags:
- nullable          not ``notnull``
- has default       ``dflt_value`` is not NULL
- auto-incrementing the column declared with AUTOINCREMENT in the DDL

CHECK (col IN (...)) constraints found in the stored DDL are attached to
their columns as enum values.
"""

import logging
import re
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from core.logging import log_context
from introspection.check_constraints import enrich_table, parse_check_constraints
from introspection.introspector import IntrospectionError, Introspector, IntrospectOptions
from introspection.metadata import ColumnMetadata, DatabaseMetadata, EnumCollection, TableMetadata

logger = logging.getLogger(__name__)

_DDL_SEPARATORS = re.compile(r"[(),]")

_OBJECTS_QUERY = """
    SELECT name, type, sql FROM sqlite_master
    WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%'
    ORDER BY name
"""


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def find_autoincrement_column(ddl: Optional[str]) -> Optional[str]:
    """Name of the column whose definition contains AUTOINCREMENT, if any."""
    if not ddl:
        return None
    for segment in _DDL_SEPARATORS.split(ddl):
        if "autoincrement" in segment.lower():
            words = segment.split()
            if words:
                return words[0].strip('"`[]')
    return None


@contextmanager
def connect_sqlite(connection_string: str) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite database from a path, ``:memory:`` or ``sqlite://path``.

    Usage:
        with connect_sqlite("./app.db") as conn:
            metadata = SqliteIntrospector().introspect(conn)
    """
    path = connection_string
    if path.startswith("sqlite://"):
        path = path[len("sqlite://"):]
    conn = None
    try:
        logger.debug(f"Opening SQLite database {path}")
        conn = sqlite3.connect(path)
        yield conn
    except sqlite3.Error as e:
        logger.error(f"SQLite connection error: {e}")
        raise IntrospectionError(f"Could not open SQLite database '{path}': {e}", dialect="sqlite") from e
    finally:
        if conn:
            conn.close()


class SqliteIntrospector(Introspector):
    """Catalog reader for SQLite."""

    dialect_name = "sqlite"

    def introspect(
        self,
        connection: sqlite3.Connection,
        options: Optional[IntrospectOptions] = None,
    ) -> DatabaseMetadata:
        tables = []
        for name, kind, ddl in connection.execute(_OBJECTS_QUERY).fetchall():
            with log_context(table=name):
                table = self._read_table(connection, name, kind == "view", ddl)
                if ddl and kind == "table":
                    table = enrich_table(table, parse_check_constraints(ddl))
            tables.append(table)

        tables = self.filter_tables(tables, options)
        logger.info(f"Introspected {len(tables)} SQLite tables")
        return DatabaseMetadata(tables=tables, enums=EnumCollection())

    @staticmethod
    def _read_table(
        connection: sqlite3.Connection,
        name: str,
        is_view: bool,
        ddl: Optional[str],
    ) -> TableMetadata:
        autoincrement_column = find_autoincrement_column(ddl)
        rows = connection.execute(f"PRAGMA table_info({_quote_identifier(name)})").fetchall()

        columns = [
            ColumnMetadata(
                name=column_name,
                data_type=declared_type or "any",
                is_nullable=not notnull,
                has_default_value=default_value is not None,
                is_auto_incrementing=column_name == autoincrement_column,
            )
            for _cid, column_name, declared_type, notnull, default_value, _pk in rows
        ]
        return TableMetadata(name=name, is_view=is_view, columns=columns)


__all__ = ["SqliteIntrospector", "connect_sqlite", "find_autoincrement_column"]
