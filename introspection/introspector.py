# ============================================================================
# INTROSPECTOR BASE
# ============================================================================
# STATUS: Introspection - Dialect-independent contract
# PURPOSE: Base class and filtering options for catalog introspection
# CREATED: 07 OCT 2026
# EXPORTS: Introspector, IntrospectOptions, IntrospectionError
# ============================================================================
"""
Introspector Base

Dialect introspectors read a live catalog and return a complete,
immutable DatabaseMetadata. Filtering by table pattern, views and
partitions is shared here.

Patterns are shell-style globs (fnmatch) matched against ``schema.table``
when the table has a schema and against the bare table name otherwise.
"""

import fnmatch
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from introspection.metadata import DatabaseMetadata, TableMetadata

logger = logging.getLogger(__name__)


class IntrospectionError(Exception):
    """Raised when the catalog cannot be read."""

    def __init__(self, message: str, dialect: Optional[str] = None):
        self.dialect = dialect
        super().__init__(message)


@dataclass(frozen=True)
class IntrospectOptions:
    """Which catalog objects to include."""
    include_pattern: Optional[str] = None
    exclude_pattern: Optional[str] = None
    include_views: bool = True
    partitions: bool = False

    def accepts(self, table: TableMetadata) -> bool:
        if table.is_view and not self.include_views:
            return False
        if table.is_partition and not self.partitions:
            return False
        candidates = [table.name, table.qualified_name]
        if self.include_pattern and not any(
            fnmatch.fnmatchcase(candidate, self.include_pattern) for candidate in candidates
        ):
            return False
        if self.exclude_pattern and any(
            fnmatch.fnmatchcase(candidate, self.exclude_pattern) for candidate in candidates
        ):
            return False
        return True


class Introspector(ABC):
    """
    Base class for dialect introspectors.

    Subclasses implement ``introspect`` against a DB-API connection.
    """

    dialect_name: str = ""

    @abstractmethod
    def introspect(
        self,
        connection: Any,
        options: Optional[IntrospectOptions] = None,
    ) -> DatabaseMetadata:
        """Read the catalog through ``connection``."""

    @staticmethod
    def filter_tables(
        tables: Iterable[TableMetadata],
        options: Optional[IntrospectOptions],
    ) -> List[TableMetadata]:
        options = options or IntrospectOptions()
        kept = []
        for table in tables:
            if options.accepts(table):
                kept.append(table)
            else:
                logger.debug(f"Skipping {table.qualified_name}")
        return kept


__all__ = ["Introspector", "IntrospectOptions", "IntrospectionError"]
