# ============================================================================
# TYPE MAPPER
# ============================================================================
# STATUS: Codegen - Column type resolution
# PURPOSE: Resolve the type expression of one column and record its imports
# CREATED: 05 OCT 2026
# EXPORTS: TransformOptions, ColumnOverrides, TransformContext, TypeMapper
# DEPENDENCIES: pydantic
# ============================================================================
"""
Type Mapper

Resolution order for one column (first match wins):

1. Column override   - ``overrides.columns["table.column"]``; node used
                       verbatim, string wrapped as a raw expression.
                       No further wrapping.
2. Enum values       - CHECK-derived ``enum_values``, else a catalog enum
                       type from the EnumCollection -> union of literals
3. Type mapping      - ``type_mapping[data_type.lower()]``
4. Dialect default   - adapter scalar, else the adapter's default scalar

Results of steps 2-4 are wrapped, innermost first:
    array      T[]            if is_array
    nullable   T | null       if is_nullable
    generated  Generated<T>   if has_default_value or is_auto_incrementing

Every resolved node is walked for referenced names; names that are helper
definitions are marked used, names that are importable are registered with
the ImportRegistry.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

from codegen.adapter import JSON_DATA_TYPES, SQLITE_ADAPTER, Adapter
from codegen.ast import (
    ArrayExpressionNode,
    ExpressionNode,
    GenericExpressionNode,
    IdentifierNode,
    JsonColumnTypeNode,
    LiteralNode,
    Node,
    RawExpressionNode,
    UnionExpressionNode,
    iter_references,
)
from codegen.definitions import Definition
from codegen.imports import ImportRegistry, parse_custom_imports
from core.logging import log_context
from introspection.metadata import ColumnMetadata, EnumCollection, TableMetadata

logger = logging.getLogger(__name__)

GENERATED_WRAPPER = "Generated"


# ============================================================================
# OPTIONS
# ============================================================================

class ColumnOverrides(BaseModel):
    """Explicit per-column types keyed by ``"table.column"``."""

    columns: Dict[str, Union[ExpressionNode, str]] = Field(default_factory=dict)

    model_config = {"frozen": True}


class TransformOptions(BaseModel):
    """
    Options consumed by the transformer.

    ``type_mapping`` keys are lowercased on validation so lookups by the
    lowercased raw data type always hit.
    """

    camel_case: bool = False
    type_mapping: Dict[str, str] = Field(default_factory=dict)
    overrides: ColumnOverrides = Field(default_factory=ColumnOverrides)
    custom_imports: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("type_mapping")
    @classmethod
    def lowercase_type_mapping(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {key.lower(): value for key, value in v.items()}


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass
class TransformContext:
    """
    Mutable state local to one transformation call.

    Holds the import registry and the helper definitions used so far
    (insertion-ordered).
    """
    adapter: Adapter
    options: TransformOptions
    enums: EnumCollection = field(default_factory=EnumCollection)
    registry: Optional[ImportRegistry] = None
    used_definitions: Dict[str, Definition] = field(default_factory=dict)

    def __post_init__(self):
        if self.registry is None:
            self.registry = ImportRegistry(
                base_imports=self.adapter.imports,
                custom_imports=parse_custom_imports(self.options.custom_imports),
            )

    def collect(self, node: Node) -> None:
        """Register imports and definitions referenced by ``node``."""
        for name in iter_references(node):
            self.use(name)

    def use(self, name: str) -> None:
        """
        Mark a referenced name; imports win over definitions of the same name.

        Namespaced names (``Temporal.Instant``) import their first segment.
        """
        if self.registry.register(name):
            return
        if "." in name:
            self.registry.register(name.split(".", 1)[0])
            return
        definition = self.adapter.definitions.get(name)
        if definition is None or name in self.used_definitions:
            return
        self.used_definitions[name] = definition
        for dependency in definition.dependencies():
            self.use(dependency)

    @property
    def generated_used(self) -> bool:
        return GENERATED_WRAPPER in self.used_definitions


# ============================================================================
# MAPPER
# ============================================================================

class TypeMapper:
    """Resolve column type expressions within one TransformContext."""

    def __init__(self, context: TransformContext):
        self.context = context

    @property
    def options(self) -> TransformOptions:
        return self.context.options

    def map_column(self, table: TableMetadata, column: ColumnMetadata) -> ExpressionNode:
        """
        Resolve the type expression for ``table.column``.

        Never raises on unknown data types.
        """
        with log_context(column=column.name):
            override = self._override_for(table, column)
            if override is not None:
                node = override
            else:
                node = self._wrap(column, self._base_type(column))

        self.context.collect(node)
        return node

    # ------------------------------------------------------------------
    # Resolution steps
    # ------------------------------------------------------------------

    def _override_for(self, table: TableMetadata, column: ColumnMetadata) -> Optional[ExpressionNode]:
        columns = self.options.overrides.columns
        value = columns.get(f"{table.name}.{column.name}")
        if value is None and table.schema_name:
            value = columns.get(f"{table.qualified_name}.{column.name}")
        if value is None:
            return None
        logger.debug(f"Using override for {table.name}.{column.name}")
        if isinstance(value, str):
            return RawExpressionNode(expression=value)
        return value

    def _base_type(self, column: ColumnMetadata) -> ExpressionNode:
        enum_values = column.enum_values
        if enum_values is None:
            enum_values = self.context.enums.get(column.data_type, column.data_type_schema)
        if enum_values is not None:
            return self._enum_union(enum_values)

        data_type = column.data_type.lower()
        mapped = self.options.type_mapping.get(data_type)
        if mapped is not None:
            return self._mapped_type(data_type, mapped)

        scalar = self.context.adapter.scalar_for(column.data_type)
        if scalar is None:
            logger.debug(f"No scalar for data type '{column.data_type}', using default")
            scalar = self.context.adapter.default_scalar
        return IdentifierNode(name=scalar)

    @staticmethod
    def _enum_union(values) -> ExpressionNode:
        literals = [LiteralNode(value=value) for value in values]
        if len(literals) == 1:
            return literals[0]
        return UnionExpressionNode(args=literals)

    @staticmethod
    def _mapped_type(data_type: str, mapped: str) -> ExpressionNode:
        text = mapped.strip()
        if text.startswith(("{", "[")):
            raw = RawExpressionNode(expression=text)
            if data_type in JSON_DATA_TYPES:
                return JsonColumnTypeNode(value=raw)
            return raw
        return IdentifierNode(name=text)

    @staticmethod
    def _wrap(column: ColumnMetadata, node: ExpressionNode) -> ExpressionNode:
        if column.is_array:
            node = ArrayExpressionNode(values=node)
        if column.is_nullable:
            null = IdentifierNode(name="null")
            if isinstance(node, UnionExpressionNode):
                node = UnionExpressionNode(args=[*node.args, null])
            else:
                node = UnionExpressionNode(args=[node, null])
        if column.has_default_value or column.is_auto_incrementing:
            node = GenericExpressionNode(name=GENERATED_WRAPPER, args=[node])
        return node


def make_context(
    adapter: Adapter = SQLITE_ADAPTER,
    options: Optional[TransformOptions] = None,
    enums: Optional[EnumCollection] = None,
) -> TransformContext:
    """Fresh per-call context."""
    return TransformContext(
        adapter=adapter,
        options=options or TransformOptions(),
        enums=enums or EnumCollection(),
    )


__all__ = [
    "ColumnOverrides",
    "TransformOptions",
    "TransformContext",
    "TypeMapper",
    "make_context",
    "GENERATED_WRAPPER",
]
