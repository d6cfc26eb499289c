# ============================================================================
# NAMING CONVERTER
# ============================================================================
# STATUS: Codegen - Identifier casing
# PURPOSE: snake_case -> PascalCase / camelCase for generated names
# CREATED: 02 OCT 2026
# ============================================================================
"""
Identifier casing helpers.

Type names are always PascalCase. Property keys are camelCase only when the
``camel_case`` option is enabled, otherwise the raw column/table name is kept.

Collisions (``foo_bar`` and ``foo__bar`` both become ``FooBar``) are not
resolved: later entries in a mapping overwrite earlier ones.
"""

import re

_SEPARATOR_RUN = re.compile(r"[^0-9A-Za-z]+")
_UNDERSCORE_WORD = re.compile(r"(?<=[0-9A-Za-z])_+([0-9A-Za-z])")


def to_pascal_case(name: str) -> str:
    """
    Convert a delimited identifier into PascalCase.

    ``foo_bar`` -> ``FooBar``, ``public.user-events`` -> ``PublicUserEvents``.
    Existing inner capitals are preserved (``fooBar`` -> ``FooBar``). A result
    starting with a digit is prefixed with ``_`` to stay a valid identifier.
    """
    parts = [part for part in _SEPARATOR_RUN.split(name) if part]
    result = "".join(part[:1].upper() + part[1:] for part in parts)
    if not result:
        return "_"
    if result[0].isdigit():
        return f"_{result}"
    return result


def to_camel_case(name: str) -> str:
    """``baz_qux`` -> ``bazQux``. Leading underscores are kept."""
    return _UNDERSCORE_WORD.sub(lambda match: match.group(1).upper(), name)


def to_property_key(name: str, camel_case: bool = False) -> str:
    """Property key for a column or table, honouring the camelCase option."""
    return to_camel_case(name) if camel_case else name


__all__ = ["to_pascal_case", "to_camel_case", "to_property_key"]
