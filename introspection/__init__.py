# ============================================================================
# INTROSPECTION MODULE
# ============================================================================
# STATUS: Introspection module initialization
# PURPOSE: Export schema metadata models and introspection contracts
# CREATED: 04 OCT 2026
# ============================================================================

from introspection.metadata import (
    ColumnMetadata,
    DatabaseMetadata,
    EnumCollection,
    TableMetadata,
)
from introspection.introspector import IntrospectionError, Introspector, IntrospectOptions

__all__ = [
    # Metadata
    "ColumnMetadata",
    "DatabaseMetadata",
    "EnumCollection",
    "TableMetadata",
    # Introspection
    "IntrospectionError",
    "Introspector",
    "IntrospectOptions",
]
