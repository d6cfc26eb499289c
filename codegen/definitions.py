# ============================================================================
# GLOBAL DEFINITIONS
# ============================================================================
# STATUS: Codegen - Constant helper type table
# PURPOSE: Helper type aliases emitted once when referenced
# CREATED: 02 OCT 2026
# EXPORTS: Definition, GLOBAL_DEFINITIONS, POSTGRES_DEFINITIONS
# ============================================================================
"""
Helper type definitions.

A definition is an exported alias (``export type Generated<T> = ...``)
emitted at most once per file, and only when some column refers to it.
The tables here are built at import time and exposed read-only.

Raw bodies cannot be traversed for references, so a definition lists the
names its body needs in ``requires``; structured bodies are traversed.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

from codegen.ast import (
    AliasDeclarationNode,
    ArrayExpressionNode,
    GenericExpressionNode,
    IdentifierNode,
    RawExpressionNode,
    UnionExpressionNode,
    iter_references,
)


@dataclass(frozen=True)
class Definition:
    """A helper alias plus the names it depends on."""
    node: AliasDeclarationNode
    requires: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.node.name

    def dependencies(self) -> Iterator[str]:
        """Names this definition needs, explicit requirements first."""
        yield from self.requires
        yield from iter_references(self.node)


def _identifier(name: str) -> IdentifierNode:
    return IdentifierNode(name=name)


def _union(*names: str) -> UnionExpressionNode:
    return UnionExpressionNode(args=[_identifier(name) for name in names])


def _column_type(select: str, *writes: str) -> GenericExpressionNode:
    """``ColumnType<select, insert, update>`` with insert and update identical."""
    write = _union(*writes)
    return GenericExpressionNode(name="ColumnType", args=[_identifier(select), write, write])


GENERATED = Definition(
    node=AliasDeclarationNode(
        name="Generated",
        args=["T"],
        body=RawExpressionNode(
            expression=(
                "T extends ColumnType<infer S, infer I, infer U>\n"
                "  ? ColumnType<S, I | undefined, U>\n"
                "  : ColumnType<T, T | undefined, T>"
            ),
        ),
    ),
    requires=("ColumnType",),
)

GLOBAL_DEFINITIONS: Mapping[str, Definition] = MappingProxyType({
    GENERATED.name: GENERATED,
})


# ============================================================================
# POSTGRESQL
# ============================================================================

_POSTGRES = [
    Definition(node=AliasDeclarationNode(
        name="Int8", body=_column_type("string", "bigint", "number", "string"),
    )),
    Definition(node=AliasDeclarationNode(
        name="Numeric", body=_column_type("string", "number", "string"),
    )),
    Definition(node=AliasDeclarationNode(
        name="Timestamp", body=_column_type("Date", "Date", "string"),
    )),
    Definition(node=AliasDeclarationNode(
        name="Json",
        body=GenericExpressionNode(
            name="ColumnType",
            args=[_identifier("JsonValue"), _identifier("string"), _identifier("string")],
        ),
    )),
    Definition(node=AliasDeclarationNode(
        name="JsonArray", body=ArrayExpressionNode(values=_identifier("JsonValue")),
    )),
    Definition(
        node=AliasDeclarationNode(
            name="JsonObject",
            body=RawExpressionNode(expression="{\n  [x: string]: JsonValue | undefined;\n}"),
        ),
        requires=("JsonValue",),
    ),
    Definition(node=AliasDeclarationNode(
        name="JsonPrimitive", body=_union("boolean", "number", "string", "null"),
    )),
    Definition(node=AliasDeclarationNode(
        name="JsonValue", body=_union("JsonArray", "JsonObject", "JsonPrimitive"),
    )),
]

POSTGRES_DEFINITIONS: Mapping[str, Definition] = MappingProxyType({
    **GLOBAL_DEFINITIONS,
    **{definition.name: definition for definition in _POSTGRES},
})


__all__ = ["Definition", "GENERATED", "GLOBAL_DEFINITIONS", "POSTGRES_DEFINITIONS"]
