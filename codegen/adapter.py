# ============================================================================
# DIALECT ADAPTERS
# ============================================================================
# STATUS: Codegen - Per-dialect type defaults
# PURPOSE: Default scalar mapping, helper definitions and base imports
# CREATED: 03 OCT 2026
# EXPORTS: Adapter, SQLITE_ADAPTER, POSTGRES_ADAPTER
# ============================================================================
"""
Dialect Adapters

An adapter is the codegen half of a dialect: it knows which TypeScript type
a raw column type maps to by default, which helper aliases exist and which
names can be imported from the query builder package.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from codegen.definitions import GLOBAL_DEFINITIONS, POSTGRES_DEFINITIONS, Definition
from codegen.imports import ImportSpecifier

_TYPE_MODIFIER = re.compile(r"\s*\(.*\)\s*$")

BASE_MODULE = "kysely"

BASE_IMPORTS: Mapping[str, ImportSpecifier] = MappingProxyType({
    "ColumnType": ImportSpecifier(BASE_MODULE, "ColumnType"),
    "JSONColumnType": ImportSpecifier(BASE_MODULE, "JSONColumnType"),
})

JSON_DATA_TYPES = frozenset({"json", "jsonb"})


@dataclass(frozen=True)
class Adapter:
    """Default type knowledge for one dialect."""
    name: str
    scalars: Mapping[str, str]
    definitions: Mapping[str, Definition] = field(default_factory=lambda: GLOBAL_DEFINITIONS)
    imports: Mapping[str, ImportSpecifier] = field(default_factory=lambda: BASE_IMPORTS)
    default_scalar: str = "unknown"
    # Schemas whose tables are not prefixed in generated names
    default_schemas: Tuple[str, ...] = ()

    def scalar_for(self, data_type: str) -> Optional[str]:
        """
        Default type name for a raw column type, or None if unknown.

        Tries the lowercased type, then the type without a trailing
        modifier (``varchar(50)`` -> ``varchar``).
        """
        key = data_type.strip().lower()
        if key in self.scalars:
            return self.scalars[key]
        base = _TYPE_MODIFIER.sub("", key)
        return self.scalars.get(base)

    def qualifies_schema(self, schema_name: Optional[str]) -> bool:
        """True if tables in this schema get a schema-prefixed name."""
        return bool(self.default_schemas) and bool(schema_name) and schema_name not in self.default_schemas


SQLITE_ADAPTER = Adapter(
    name="sqlite",
    scalars=MappingProxyType({
        "any": "unknown",
        "blob": "Buffer",
        "boolean": "number",
        "integer": "number",
        "numeric": "number",
        "real": "number",
        "text": "string",
    }),
)

POSTGRES_ADAPTER = Adapter(
    name="postgres",
    scalars=MappingProxyType({
        "bool": "boolean",
        "bpchar": "string",
        "bytea": "Buffer",
        "char": "string",
        "cidr": "string",
        "citext": "string",
        "date": "Timestamp",
        "float4": "number",
        "float8": "number",
        "inet": "string",
        "int2": "number",
        "int4": "number",
        "int8": "Int8",
        "json": "Json",
        "jsonb": "Json",
        "money": "string",
        "name": "string",
        "numeric": "Numeric",
        "oid": "number",
        "text": "string",
        "time": "string",
        "timetz": "string",
        "timestamp": "Timestamp",
        "timestamptz": "Timestamp",
        "uuid": "string",
        "varchar": "string",
        "xml": "string",
    }),
    definitions=POSTGRES_DEFINITIONS,
    default_schemas=("public",),
)


__all__ = [
    "Adapter",
    "BASE_MODULE",
    "BASE_IMPORTS",
    "JSON_DATA_TYPES",
    "SQLITE_ADAPTER",
    "POSTGRES_ADAPTER",
]
