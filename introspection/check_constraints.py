# ============================================================================
# CHECK CONSTRAINT ENUM EXTRACTOR
# ============================================================================
# STATUS: Introspection - DDL enrichment
# PURPOSE: Pull enum-like literal lists out of CHECK (col IN (...)) constraints
# CREATED: 04 OCT 2026
# EXPORTS: parse_check_constraints, enrich_table
# ============================================================================
"""
CHECK Constraint Enum Extractor

SQLite has no enum type; schemas emulate one with
``CHECK (status IN ('active', 'inactive'))``. This module finds those
constraints in the stored CREATE TABLE text and returns the permitted
literals per column.

Recognised shape (and nothing else):
    [quote]column[quote] IN ( 'literal' [, 'literal' ...] )

- column may be bare or wrapped in ", ' or `
- literals may use ' or "; a doubled quote is an escaped quote
- keywords are case-insensitive; whitespace and newlines are free
- unquoted tokens in the list are never captured

Anything else (NOT IN, subqueries, AND/OR chains, comparisons) produces no
entry. Column keys are lowercased.

Usage:
    parse_check_constraints("CREATE TABLE t (s TEXT CHECK (s IN ('a', 'b')))")
    -> {"s": ["a", "b"]}
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from introspection.metadata import TableMetadata

logger = logging.getLogger(__name__)

CheckConstraintEnums = Dict[str, List[str]]

_CHECK_KEYWORD = re.compile(r"\bcheck\s*\(", re.IGNORECASE)
_IN_CONSTRAINT = re.compile(
    r"^[\"'`]?(\w+)[\"'`]?\s+in\s*\(\s*([\s\S]+?)\s*\)$",
    re.IGNORECASE | re.ASCII,
)
_QUOTES = ("'", '"')


# ============================================================================
# CONSTRAINT BODIES
# ============================================================================

def extract_check_bodies(sql: str) -> List[str]:
    """
    Return the text inside every ``CHECK ( ... )`` in source order.

    The closing parenthesis is found by depth counting; parentheses inside
    quoted literals do not count. An unterminated CHECK is skipped.
    """
    bodies = []
    for match in _CHECK_KEYWORD.finditer(sql):
        start = match.end()
        end = _find_closing_paren(sql, start)
        if end is not None:
            bodies.append(sql[start:end].strip())
    return bodies


def _find_closing_paren(text: str, start: int) -> Optional[int]:
    depth = 1
    quote = None
    index = start
    while index < len(text):
        char = text[index]
        if quote:
            if char == quote:
                if text[index + 1:index + 2] == quote:
                    index += 1
                else:
                    quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return None


# ============================================================================
# IN-LIST PARSING
# ============================================================================

def parse_in_constraint(expression: str) -> Optional[Tuple[str, List[str]]]:
    """
    Parse one constraint body of the form ``column IN (...)``.

    Returns:
        (column, values) or None if the body has any other shape
    """
    match = _IN_CONSTRAINT.match(expression.strip())
    if not match:
        return None

    column, values_text = match.group(1), match.group(2)
    values = _split_literals(values_text)
    if not values:
        return None
    return column, values


def _split_literals(text: str) -> Optional[List[str]]:
    """
    Quote-aware split of an IN list.

    Returns None if the list closes early, which means the regex matched
    across a trailing condition such as ``IN ('a') AND f(x)``.
    """
    values: List[str] = []
    current: List[str] = []
    quote = None
    has_literal = False
    depth = 0
    index = 0

    while index < len(text):
        char = text[index]
        if quote:
            if char == quote:
                if text[index + 1:index + 2] == quote:
                    current.append(char)
                    index += 1
                else:
                    quote = None
            else:
                current.append(char)
        elif char in _QUOTES:
            quote = char
            has_literal = True
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return None
        elif char == "," and depth == 0:
            if has_literal:
                values.append("".join(current))
            current = []
            has_literal = False
        index += 1

    if has_literal:
        values.append("".join(current))
    return values


def parse_check_constraints(sql: Optional[str]) -> CheckConstraintEnums:
    """
    Map lowercased column name -> permitted literals for a CREATE TABLE text.

    Later constraints on the same column replace earlier ones.
    """
    result: CheckConstraintEnums = {}
    if not sql:
        return result

    for body in extract_check_bodies(sql):
        parsed = parse_in_constraint(body)
        if parsed is None:
            logger.debug(f"Skipping CHECK constraint without IN list: {body[:60]}")
            continue
        column, values = parsed
        result[column.lower()] = values

    return result


# ============================================================================
# ENRICHMENT
# ============================================================================

def enrich_table(table: TableMetadata, constraints: CheckConstraintEnums) -> TableMetadata:
    """
    Attach CHECK-derived enum values to matching columns.

    Returns the same table object when nothing matches; otherwise a copy
    whose matched columns are copies and whose other columns are the
    original objects.
    """
    if not constraints:
        return table

    changed = False
    columns = []
    for column in table.columns:
        values = constraints.get(column.name.lower())
        if values is None:
            columns.append(column)
        else:
            columns.append(column.with_enum_values(values))
            changed = True

    if not changed:
        return table
    return table.model_copy(update={"columns": tuple(columns)})


__all__ = [
    "CheckConstraintEnums",
    "extract_check_bodies",
    "parse_in_constraint",
    "parse_check_constraints",
    "enrich_table",
]
