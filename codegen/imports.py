# ============================================================================
# IMPORT REGISTRY
# ============================================================================
# STATUS: Codegen - Import bookkeeping
# PURPOSE: Collect, deduplicate and alias module imports used by emitted types
# CREATED: 03 OCT 2026
# EXPORTS: ImportSpecifier, ImportRegistry, parse_custom_imports
# ============================================================================
"""
Import Registry

Tracks which importable names an emission actually references and turns
them into merged ``ImportStatementNode`` objects.

Custom import values are either ``"module"`` (the local name is also the
exported name) or ``"module#ExportedName"`` (aliased import). A ``#`` at
position 0 belongs to the module specifier (subpath imports like
``#types``), so only a later ``#`` splits.

Ordering:
- statements appear in the order their module was first requested
- clauses inside a statement appear in the order they were first requested
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from codegen.ast import ImportClauseNode, ImportStatementNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportSpecifier:
    """Where a local type name comes from."""
    module_name: str
    export_name: str

    def to_clause(self, local_name: str) -> ImportClauseNode:
        alias = local_name if local_name != self.export_name else None
        return ImportClauseNode(name=self.export_name, alias=alias)


def parse_import_specifier(local_name: str, specifier: str) -> ImportSpecifier:
    """
    Parse ``"module"`` or ``"module#ExportedName"``.

    Example:
        parse_import_specifier("InstantRange", "./custom-types#CustomInstantRange")
        -> ImportSpecifier("./custom-types", "CustomInstantRange")
    """
    index = specifier.rfind("#")
    if index > 0 and index < len(specifier) - 1:
        return ImportSpecifier(specifier[:index], specifier[index + 1:])
    return ImportSpecifier(specifier, local_name)


def parse_custom_imports(custom_imports: Optional[Mapping[str, str]]) -> Dict[str, ImportSpecifier]:
    """Parse a ``customImports`` mapping into specifiers keyed by local name."""
    return {
        local_name: parse_import_specifier(local_name, specifier)
        for local_name, specifier in (custom_imports or {}).items()
    }


class ImportRegistry:
    """
    Per-transformation import accumulator.

    Args:
        base_imports: Names the dialect adapter can import (ColumnType, ...)
        custom_imports: Parsed user imports; these win over base imports
    """

    def __init__(
        self,
        base_imports: Optional[Mapping[str, ImportSpecifier]] = None,
        custom_imports: Optional[Mapping[str, ImportSpecifier]] = None,
    ):
        self._available: Dict[str, ImportSpecifier] = {
            **(base_imports or {}),
            **(custom_imports or {}),
        }
        # module -> {local name -> clause}; dicts keep first-insertion order
        self._requested: Dict[str, Dict[str, ImportClauseNode]] = {}

    def register(self, name: str) -> bool:
        """
        Request an import for a local type name.

        Returns:
            True if the name is importable, False if it is not (built-in
            types, table identifiers, definitions)
        """
        specifier = self._available.get(name)
        if specifier is None:
            return False

        clauses = self._requested.setdefault(specifier.module_name, {})
        if name not in clauses:
            clauses[name] = specifier.to_clause(name)
            logger.debug(f"Import requested: {name} from {specifier.module_name}")
        return True

    def statements(self) -> List[ImportStatementNode]:
        """Merged import statements, one per module."""
        return [
            ImportStatementNode(module_name=module_name, clauses=list(clauses.values()))
            for module_name, clauses in self._requested.items()
        ]

    def __len__(self) -> int:
        return len(self._requested)


__all__ = [
    "ImportSpecifier",
    "ImportRegistry",
    "parse_import_specifier",
    "parse_custom_imports",
]
