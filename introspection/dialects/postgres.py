# ============================================================================
# POSTGRESQL INTROSPECTOR
# ============================================================================
# STATUS: Introspection - PostgreSQL catalog reader
# PURPOSE: Build DatabaseMetadata from information_schema and pg_catalog
# CREATED: 08 OCT 2026
# EXPORTS: PostgresIntrospector, connect_postgres
# DEPENDENCIES: psycopg
# ============================================================================
"""
PostgreSQL Introspector

Reads columns of every user table, view and partition in one query, and
enum types from ``pg_enum`` into the EnumCollection. Rows are fetched with
psycopg's ``dict_row`` factory.

Column flags:
- array             ``data_type = 'ARRAY'``; the element type is ``udt_name``
                    without its leading underscore
- auto-incrementing identity columns and ``nextval(...)`` defaults
- comment           ``col_description``
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import psycopg
from psycopg.rows import dict_row

from introspection.introspector import IntrospectionError, Introspector, IntrospectOptions
from introspection.metadata import ColumnMetadata, DatabaseMetadata, EnumCollection, TableMetadata

logger = logging.getLogger(__name__)

COLUMNS_QUERY = """
    SELECT
        c.table_schema,
        c.table_name,
        t.table_type,
        cls.relispartition AS is_partition,
        c.column_name,
        c.data_type,
        c.udt_schema,
        c.udt_name,
        c.is_nullable,
        c.column_default,
        c.is_identity,
        col_description(cls.oid, c.ordinal_position::int) AS column_comment
    FROM information_schema.columns c
    JOIN information_schema.tables t
        ON t.table_schema = c.table_schema AND t.table_name = c.table_name
    JOIN pg_catalog.pg_namespace ns
        ON ns.nspname = c.table_schema
    JOIN pg_catalog.pg_class cls
        ON cls.relnamespace = ns.oid AND cls.relname = c.table_name
    WHERE c.table_schema NOT IN ('pg_catalog', 'information_schema')
        AND c.table_schema NOT LIKE 'pg_toast%'
    ORDER BY c.table_schema, c.table_name, c.ordinal_position
"""

ENUMS_QUERY = """
    SELECT n.nspname AS schema_name, t.typname AS enum_name, e.enumlabel AS enum_value
    FROM pg_catalog.pg_type t
    JOIN pg_catalog.pg_enum e ON e.enumtypid = t.oid
    JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
    ORDER BY n.nspname, t.typname, e.enumsortorder
"""


@contextmanager
def connect_postgres(connection_string: str) -> Iterator[psycopg.Connection]:
    """
    Context manager for a read-only catalog connection.

    Yields:
        psycopg connection with dict_row factory
    """
    conn = None
    try:
        logger.debug("Connecting to PostgreSQL...")
        conn = psycopg.connect(connection_string, row_factory=dict_row)
        logger.debug("PostgreSQL connection established")
        yield conn
    except psycopg.Error as e:
        logger.error(f"PostgreSQL connection error: {e}")
        raise IntrospectionError(f"PostgreSQL introspection failed: {e}", dialect="postgres") from e
    finally:
        if conn:
            conn.close()


class PostgresIntrospector(Introspector):
    """Catalog reader for PostgreSQL."""

    dialect_name = "postgres"

    def introspect(
        self,
        connection: Any,
        options: Optional[IntrospectOptions] = None,
    ) -> DatabaseMetadata:
        with connection.cursor() as cur:
            cur.execute(ENUMS_QUERY)
            enum_rows = cur.fetchall()
            cur.execute(COLUMNS_QUERY)
            column_rows = cur.fetchall()

        enums = EnumCollection.from_rows(
            (row["schema_name"], row["enum_name"], row["enum_value"]) for row in enum_rows
        )
        tables = self.filter_tables(self._build_tables(column_rows), options)

        logger.info(f"Introspected {len(tables)} PostgreSQL tables and {len(enums)} enum types")
        return DatabaseMetadata(tables=tables, enums=enums)

    @classmethod
    def _build_tables(cls, rows: List[Dict[str, Any]]) -> List[TableMetadata]:
        grouped: Dict[tuple, Dict[str, Any]] = {}
        for row in rows:
            key = (row["table_schema"], row["table_name"])
            entry = grouped.get(key)
            if entry is None:
                entry = grouped[key] = {
                    "name": row["table_name"],
                    "schema_name": row["table_schema"],
                    "is_view": row["table_type"] == "VIEW",
                    "is_partition": bool(row.get("is_partition")),
                    "columns": [],
                }
            entry["columns"].append(cls._build_column(row))

        return [TableMetadata(**entry) for entry in grouped.values()]

    @staticmethod
    def _build_column(row: Dict[str, Any]) -> ColumnMetadata:
        is_array = row["data_type"] == "ARRAY"
        udt_name = row["udt_name"]
        if is_array and udt_name.startswith("_"):
            udt_name = udt_name[1:]

        default = row["column_default"]
        is_identity = row.get("is_identity") == "YES"
        is_serial = isinstance(default, str) and default.startswith("nextval(")

        return ColumnMetadata(
            name=row["column_name"],
            data_type=udt_name,
            data_type_schema=row["udt_schema"],
            is_array=is_array,
            is_auto_incrementing=is_identity or is_serial,
            is_nullable=row["is_nullable"] == "YES",
            has_default_value=default is not None or is_identity,
            comment=row["column_comment"],
        )


__all__ = ["PostgresIntrospector", "connect_postgres", "COLUMNS_QUERY", "ENUMS_QUERY"]
