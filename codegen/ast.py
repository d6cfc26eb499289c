# ============================================================================
# DECLARATION AST
# ============================================================================
# STATUS: Codegen - Output node model
# PURPOSE: Immutable declaration nodes produced by the transformer
# CREATED: 02 OCT 2026
# EXPORTS: IdentifierNode ... ExportStatementNode, ExpressionNode, StatementNode
# DEPENDENCIES: pydantic
# ============================================================================
"""
Declaration AST.

A closed set of frozen Pydantic models describing the generated type
declarations. Every node carries a ``type`` discriminator so unions of
nodes validate (and serialize) through Pydantic's discriminated unions,
and the serializer can dispatch exhaustively on ``node.type``.

Equality is structural: two nodes built from the same values compare equal.

Usage:
    from codegen.ast import GenericExpressionNode, IdentifierNode

    node = GenericExpressionNode(name="Generated", args=[IdentifierNode(name="string")])
"""

from typing import Annotated, Iterator, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field


class Node(BaseModel):
    """Base class for all declaration nodes."""

    model_config = {"frozen": True}


# ============================================================================
# EXPRESSIONS
# ============================================================================

class IdentifierNode(Node):
    """Reference to a named type (``string``, ``Generated``, a custom import)."""
    type: Literal["Identifier"] = "Identifier"
    name: str


class TableIdentifierNode(Node):
    """Type name generated from a table name (``FooBar`` for ``foo_bar``)."""
    type: Literal["TableIdentifier"] = "TableIdentifier"
    name: str


class LiteralNode(Node):
    """String literal type, used for enum members."""
    type: Literal["Literal"] = "Literal"
    value: str


class RawExpressionNode(Node):
    """Opaque type text emitted verbatim."""
    type: Literal["RawExpression"] = "RawExpression"
    expression: str


class GenericExpressionNode(Node):
    type: Literal["GenericExpression"] = "GenericExpression"
    name: str
    args: Tuple["ExpressionNode", ...] = ()


class UnionExpressionNode(Node):
    type: Literal["UnionExpression"] = "UnionExpression"
    args: Tuple["ExpressionNode", ...]


class ArrayExpressionNode(Node):
    type: Literal["ArrayExpression"] = "ArrayExpression"
    values: "ExpressionNode"


class JsonColumnTypeNode(Node):
    """JSON column wrapper, rendered as ``JSONColumnType<...>``."""
    type: Literal["JsonColumnType"] = "JsonColumnType"
    value: RawExpressionNode


class PropertyNode(Node):
    type: Literal["Property"] = "Property"
    key: str
    value: "ExpressionNode"
    comment: Optional[str] = None


class ObjectExpressionNode(Node):
    type: Literal["ObjectExpression"] = "ObjectExpression"
    properties: Tuple[PropertyNode, ...] = ()


ExpressionNode = Annotated[
    Union[
        IdentifierNode,
        TableIdentifierNode,
        LiteralNode,
        RawExpressionNode,
        GenericExpressionNode,
        UnionExpressionNode,
        ArrayExpressionNode,
        JsonColumnTypeNode,
        ObjectExpressionNode,
    ],
    Field(discriminator="type"),
]


# ============================================================================
# DECLARATIONS AND STATEMENTS
# ============================================================================

class AliasDeclarationNode(Node):
    """``type Name<args> = body``."""
    type: Literal["AliasDeclaration"] = "AliasDeclaration"
    name: str
    body: ExpressionNode
    args: Tuple[str, ...] = ()


class InterfaceDeclarationNode(Node):
    type: Literal["InterfaceDeclaration"] = "InterfaceDeclaration"
    id: Annotated[Union[IdentifierNode, TableIdentifierNode], Field(discriminator="type")]
    body: ObjectExpressionNode


DeclarationNode = Annotated[
    Union[AliasDeclarationNode, InterfaceDeclarationNode],
    Field(discriminator="type"),
]


class ImportClauseNode(Node):
    """Named import; ``alias`` is set only when the local name differs."""
    type: Literal["ImportClause"] = "ImportClause"
    name: str
    alias: Optional[str] = None


class ImportStatementNode(Node):
    type: Literal["ImportStatement"] = "ImportStatement"
    module_name: str
    clauses: Tuple[ImportClauseNode, ...]


class ExportStatementNode(Node):
    type: Literal["ExportStatement"] = "ExportStatement"
    argument: DeclarationNode


StatementNode = Annotated[
    Union[ImportStatementNode, ExportStatementNode],
    Field(discriminator="type"),
]


for _model in (
    GenericExpressionNode,
    UnionExpressionNode,
    ArrayExpressionNode,
    PropertyNode,
    ObjectExpressionNode,
    AliasDeclarationNode,
    InterfaceDeclarationNode,
    ExportStatementNode,
):
    _model.model_rebuild()


# ============================================================================
# TRAVERSAL
# ============================================================================

def iter_references(node: Node) -> Iterator[str]:
    """
    Yield the type names a node refers to, depth-first in source order.

    Table identifiers are local to the generated file and are not yielded.
    Names may repeat; callers deduplicate.
    """
    if isinstance(node, IdentifierNode):
        yield node.name
    elif isinstance(node, GenericExpressionNode):
        yield node.name
        for arg in node.args:
            yield from iter_references(arg)
    elif isinstance(node, UnionExpressionNode):
        for arg in node.args:
            yield from iter_references(arg)
    elif isinstance(node, ArrayExpressionNode):
        yield from iter_references(node.values)
    elif isinstance(node, JsonColumnTypeNode):
        yield "JSONColumnType"
    elif isinstance(node, ObjectExpressionNode):
        for prop in node.properties:
            yield from iter_references(prop.value)
    elif isinstance(node, PropertyNode):
        yield from iter_references(node.value)
    elif isinstance(node, AliasDeclarationNode):
        for name in iter_references(node.body):
            if name not in node.args:
                yield name
    elif isinstance(node, InterfaceDeclarationNode):
        yield from iter_references(node.body)
    elif isinstance(node, ExportStatementNode):
        yield from iter_references(node.argument)


__all__ = [
    "Node",
    "IdentifierNode",
    "TableIdentifierNode",
    "LiteralNode",
    "RawExpressionNode",
    "GenericExpressionNode",
    "UnionExpressionNode",
    "ArrayExpressionNode",
    "JsonColumnTypeNode",
    "PropertyNode",
    "ObjectExpressionNode",
    "AliasDeclarationNode",
    "InterfaceDeclarationNode",
    "ImportClauseNode",
    "ImportStatementNode",
    "ExportStatementNode",
    "ExpressionNode",
    "DeclarationNode",
    "StatementNode",
    "iter_references",
]
