# ============================================================================
# SCHEMA METADATA MODEL
# ============================================================================
# STATUS: Introspection - Immutable schema description
# PURPOSE: Database, table, column and enum metadata handed to the transformer
# CREATED: 02 OCT 2026
# EXPORTS: ColumnMetadata, TableMetadata, DatabaseMetadata, EnumCollection
# DEPENDENCIES: pydantic
# ============================================================================
"""
Metadata Model

Frozen Pydantic models describing an introspected database. Introspectors
build them; the transformer only reads them. Enrichment (CHECK-derived enum
values) always produces copies via ``model_copy``.

Two kinds of enum knowledge exist:
- ``ColumnMetadata.enum_values``: literals parsed from a CHECK constraint,
  attached to one column
- ``EnumCollection``: named enum types declared in the database catalog
  (PostgreSQL ``CREATE TYPE ... AS ENUM``), keyed by ``schema.name``
"""

from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field


class ColumnMetadata(BaseModel):
    """One column as reported by the catalog."""

    name: str
    data_type: str = Field(..., description="Raw dialect type, e.g. 'TEXT', 'int4'")
    data_type_schema: Optional[str] = None
    is_array: bool = False
    is_auto_incrementing: bool = False
    is_nullable: bool = False
    has_default_value: bool = False
    comment: Optional[str] = None
    enum_values: Optional[Tuple[str, ...]] = None

    model_config = {"frozen": True}

    def with_enum_values(self, values: Iterable[str]) -> "ColumnMetadata":
        """Copy of this column carrying CHECK-derived enum values."""
        return self.model_copy(update={"enum_values": tuple(values)})


class TableMetadata(BaseModel):
    """A table or view with its columns in catalog order."""

    name: str
    schema_name: Optional[str] = None
    is_view: bool = False
    is_partition: bool = False
    columns: Tuple[ColumnMetadata, ...] = ()

    model_config = {"frozen": True}

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.name}" if self.schema_name else self.name


class EnumCollection(BaseModel):
    """
    Named enum types keyed by lowercased ``schema.name`` (or ``name``).

    Usage:
        enums = EnumCollection.from_rows([("public", "mood", "happy"), ("public", "mood", "sad")])
        enums.get("mood", "public")  # ("happy", "sad")
    """

    enums: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @staticmethod
    def make_key(name: str, schema_name: Optional[str] = None) -> str:
        key = f"{schema_name}.{name}" if schema_name else name
        return key.lower()

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[Optional[str], str, str]]) -> "EnumCollection":
        """Build from ``(schema, enum name, value)`` rows in declaration order."""
        collected: Dict[str, List[str]] = {}
        for schema_name, name, value in rows:
            collected.setdefault(cls.make_key(name, schema_name), []).append(value)
        return cls(enums={key: tuple(values) for key, values in collected.items()})

    def get(self, name: str, schema_name: Optional[str] = None) -> Optional[Tuple[str, ...]]:
        values = self.enums.get(self.make_key(name, schema_name))
        if values is None and schema_name:
            values = self.enums.get(self.make_key(name))
        return values

    def __len__(self) -> int:
        return len(self.enums)


class DatabaseMetadata(BaseModel):
    """Everything the transformer needs to know about one database."""

    tables: Tuple[TableMetadata, ...] = ()
    enums: EnumCollection = Field(default_factory=EnumCollection)

    model_config = {"frozen": True}


__all__ = ["ColumnMetadata", "TableMetadata", "EnumCollection", "DatabaseMetadata"]
