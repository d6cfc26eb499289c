# ============================================================================
# TRANSFORMER
# ============================================================================
# STATUS: Codegen - Metadata to declaration orchestration
# PURPOSE: Turn DatabaseMetadata + options into ordered declaration nodes
# CREATED: 05 OCT 2026
# EXPORTS: transform, Transformer
# ============================================================================
"""
Transformer

Single pass, no I/O, no shared state: identical inputs give identical output.

Output order:
    1. merged import statements (ImportRegistry)
    2. helper aliases that were referenced (Generated, ...), sorted by name
    3. one exported interface per table, sorted by generated type name
    4. the aggregate ``DB`` interface mapping table keys to table types

Tables are sorted case-sensitively by their generated PascalCase name, so the
input order and the raw table names do not affect output order.

Usage:
    from codegen.transformer import transform

    nodes = transform(metadata, TransformOptions(camel_case=True))
"""

import logging
from typing import List, Optional, Tuple

from codegen.adapter import SQLITE_ADAPTER, Adapter
from codegen.ast import (
    ExportStatementNode,
    IdentifierNode,
    InterfaceDeclarationNode,
    ObjectExpressionNode,
    PropertyNode,
    StatementNode,
    TableIdentifierNode,
)
from codegen.naming import to_pascal_case, to_property_key
from codegen.type_mapper import TransformContext, TransformOptions, TypeMapper, make_context
from core.logging import log_context
from introspection.metadata import DatabaseMetadata, TableMetadata

logger = logging.getLogger(__name__)

DATABASE_INTERFACE_NAME = "DB"


class Transformer:
    """
    Build declaration nodes for one database.

    A Transformer holds no state between calls; each ``transform`` creates a
    fresh TransformContext.
    """

    def __init__(self, adapter: Adapter = SQLITE_ADAPTER):
        self.adapter = adapter

    def transform(
        self,
        metadata: DatabaseMetadata,
        options: Optional[TransformOptions] = None,
    ) -> List[StatementNode]:
        options = options or TransformOptions()
        context = make_context(self.adapter, options, metadata.enums)
        mapper = TypeMapper(context)

        tables = self._sorted_tables(metadata.tables)

        interfaces = [
            ExportStatementNode(argument=self._table_interface(mapper, identifier, table))
            for identifier, table in tables
        ]
        database = ExportStatementNode(argument=self._database_interface(tables, options))

        nodes: List[StatementNode] = []
        nodes.extend(context.registry.statements())
        nodes.extend(self._definition_exports(context))
        nodes.extend(interfaces)
        nodes.append(database)

        logger.debug(
            f"Transformed {len(tables)} tables into {len(nodes)} nodes "
            f"({len(context.registry)} import modules, {len(context.used_definitions)} definitions)"
        )
        return nodes

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _symbol_source(self, table: TableMetadata) -> str:
        """Name the type is derived from; non-default schemas are prefixed."""
        if self.adapter.qualifies_schema(table.schema_name):
            return table.qualified_name
        return table.name

    def _sorted_tables(self, tables) -> List[Tuple[TableIdentifierNode, TableMetadata]]:
        named = [
            (TableIdentifierNode(name=to_pascal_case(self._symbol_source(table))), table)
            for table in tables
        ]
        return sorted(named, key=lambda item: item[0].name)

    @staticmethod
    def _table_interface(
        mapper: TypeMapper,
        identifier: TableIdentifierNode,
        table: TableMetadata,
    ) -> InterfaceDeclarationNode:
        camel_case = mapper.options.camel_case
        with log_context(table=table.qualified_name):
            properties = [
                PropertyNode(
                    key=to_property_key(column.name, camel_case),
                    value=mapper.map_column(table, column),
                    comment=column.comment,
                )
                for column in table.columns
            ]
        return InterfaceDeclarationNode(
            id=identifier,
            body=ObjectExpressionNode(properties=properties),
        )

    def _database_interface(
        self,
        tables: List[Tuple[TableIdentifierNode, TableMetadata]],
        options: TransformOptions,
    ) -> InterfaceDeclarationNode:
        properties = [
            PropertyNode(
                key=self._table_key(table, options.camel_case),
                value=identifier,
            )
            for identifier, table in tables
        ]
        return InterfaceDeclarationNode(
            id=IdentifierNode(name=DATABASE_INTERFACE_NAME),
            body=ObjectExpressionNode(properties=properties),
        )

    def _table_key(self, table: TableMetadata, camel_case: bool) -> str:
        key = to_property_key(table.name, camel_case)
        if self.adapter.qualifies_schema(table.schema_name):
            return f"{to_property_key(table.schema_name, camel_case)}.{key}"
        return key

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    @staticmethod
    def _definition_exports(context: TransformContext) -> List[ExportStatementNode]:
        return [
            ExportStatementNode(argument=context.used_definitions[name].node)
            for name in sorted(context.used_definitions)
        ]


def transform(
    metadata: DatabaseMetadata,
    options: Optional[TransformOptions] = None,
    adapter: Adapter = SQLITE_ADAPTER,
) -> List[StatementNode]:
    """Convenience wrapper around ``Transformer(adapter).transform``."""
    return Transformer(adapter).transform(metadata, options)


__all__ = ["Transformer", "transform", "DATABASE_INTERFACE_NAME"]
