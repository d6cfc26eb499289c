# ============================================================================
# TYPESCRIPT SERIALIZER
# ============================================================================
# STATUS: Codegen - Output rendering
# PURPOSE: Render declaration nodes as TypeScript source text
# CREATED: 06 OCT 2026
# EXPORTS: Serializer
# ============================================================================
"""
TypeScript Serializer

Renders the transformer's node sequence. Dispatch is a table keyed by the
node ``type`` discriminator; a node type missing from the table is a
programming error and raises TypeError.

Layout:
    header comment
    import statements (one per line)
    blank line
    declarations separated by blank lines
    trailing newline
"""

import json
import re
from typing import Callable, Dict, Iterable, List

from codegen.ast import (
    AliasDeclarationNode,
    ArrayExpressionNode,
    ExportStatementNode,
    GenericExpressionNode,
    IdentifierNode,
    ImportClauseNode,
    ImportStatementNode,
    InterfaceDeclarationNode,
    JsonColumnTypeNode,
    LiteralNode,
    Node,
    ObjectExpressionNode,
    PropertyNode,
    RawExpressionNode,
    UnionExpressionNode,
)

HEADER = (
    "/**\n"
    " * This file was generated by schema-typegen.\n"
    " * Please do not edit it manually.\n"
    " */\n"
)

INDENT = "  "
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class Serializer:
    """
    Render declaration nodes to TypeScript.

    Args:
        type_only_imports: Emit ``import type { ... }`` (default) instead of
            value imports
        header: Banner placed at the top of the file; empty to omit
    """

    def __init__(self, type_only_imports: bool = True, header: str = HEADER):
        self.type_only_imports = type_only_imports
        self.header = header
        self._renderers: Dict[str, Callable[[Node, int], str]] = {
            "Identifier": self._identifier,
            "TableIdentifier": self._identifier,
            "Literal": self._literal,
            "RawExpression": self._raw,
            "GenericExpression": self._generic,
            "UnionExpression": self._union,
            "ArrayExpression": self._array,
            "JsonColumnType": self._json_column_type,
            "ObjectExpression": self._object,
            "Property": self._property,
            "AliasDeclaration": self._alias,
            "InterfaceDeclaration": self._interface,
            "ImportClause": self._import_clause,
            "ImportStatement": self._import_statement,
            "ExportStatement": self._export_statement,
        }

    def serialize(self, nodes: Iterable[Node]) -> str:
        imports: List[str] = []
        declarations: List[str] = []
        for node in nodes:
            rendered = self.render(node)
            if isinstance(node, ImportStatementNode):
                imports.append(rendered)
            else:
                declarations.append(rendered)

        blocks = []
        if imports:
            blocks.append("\n".join(imports))
        blocks.extend(declarations)

        body = "\n\n".join(blocks)
        if self.header:
            return f"{self.header}\n{body}\n" if body else self.header
        return f"{body}\n"

    def render(self, node: Node, depth: int = 0) -> str:
        renderer = self._renderers.get(node.type)
        if renderer is None:
            raise TypeError(f"Cannot serialize node of type {node.type!r}")
        return renderer(node, depth)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    @staticmethod
    def _identifier(node: IdentifierNode, depth: int) -> str:
        return node.name

    @staticmethod
    def _literal(node: LiteralNode, depth: int) -> str:
        return json.dumps(node.value, ensure_ascii=False)

    @staticmethod
    def _raw(node: RawExpressionNode, depth: int) -> str:
        return node.expression

    def _generic(self, node: GenericExpressionNode, depth: int) -> str:
        if not node.args:
            return node.name
        args = ", ".join(self.render(arg, depth) for arg in node.args)
        return f"{node.name}<{args}>"

    def _union(self, node: UnionExpressionNode, depth: int) -> str:
        if not node.args:
            return "never"
        return " | ".join(self.render(arg, depth) for arg in node.args)

    def _array(self, node: ArrayExpressionNode, depth: int) -> str:
        inner = self.render(node.values, depth)
        if isinstance(node.values, UnionExpressionNode) and len(node.values.args) > 1:
            inner = f"({inner})"
        return f"{inner}[]"

    def _json_column_type(self, node: JsonColumnTypeNode, depth: int) -> str:
        return f"JSONColumnType<{self.render(node.value, depth)}>"

    def _object(self, node: ObjectExpressionNode, depth: int) -> str:
        if not node.properties:
            return "{}"
        lines = [self.render(prop, depth + 1) for prop in node.properties]
        return "{\n" + "\n".join(lines) + "\n" + INDENT * depth + "}"

    def _property(self, node: PropertyNode, depth: int) -> str:
        indent = INDENT * depth
        key = node.key if _IDENTIFIER.match(node.key) else json.dumps(node.key)
        line = f"{indent}{key}: {self.render(node.value, depth)};"
        if node.comment:
            return f"{self._doc_comment(node.comment, indent)}\n{line}"
        return line

    @staticmethod
    def _doc_comment(comment: str, indent: str) -> str:
        lines = comment.replace("*/", "*\\/").splitlines() or [""]
        if len(lines) == 1:
            return f"{indent}/** {lines[0]} */"
        body = "\n".join(f"{indent} * {line}".rstrip() for line in lines)
        return f"{indent}/**\n{body}\n{indent} */"

    # ------------------------------------------------------------------
    # Declarations and statements
    # ------------------------------------------------------------------

    def _alias(self, node: AliasDeclarationNode, depth: int) -> str:
        args = f"<{', '.join(node.args)}>" if node.args else ""
        return f"type {node.name}{args} = {self.render(node.body, depth)};"

    def _interface(self, node: InterfaceDeclarationNode, depth: int) -> str:
        return f"interface {self.render(node.id, depth)} {self.render(node.body, depth)}"

    @staticmethod
    def _import_clause(node: ImportClauseNode, depth: int) -> str:
        if node.alias:
            return f"{node.name} as {node.alias}"
        return node.name

    def _import_statement(self, node: ImportStatementNode, depth: int) -> str:
        clauses = ", ".join(self.render(clause, depth) for clause in node.clauses)
        keyword = "import type" if self.type_only_imports else "import"
        return f"{keyword} {{ {clauses} }} from {json.dumps(node.module_name)};"

    def _export_statement(self, node: ExportStatementNode, depth: int) -> str:
        return f"export {self.render(node.argument, depth)}"


__all__ = ["Serializer", "HEADER"]
