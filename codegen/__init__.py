# ============================================================================
# CODEGEN MODULE
# ============================================================================
# STATUS: Codegen module initialization
# PURPOSE: Export the transformer, serializer and option models
# CREATED: 05 OCT 2026
# ============================================================================

from codegen.serializer import Serializer
from codegen.transformer import Transformer, transform
from codegen.type_mapper import ColumnOverrides, TransformOptions

__all__ = [
    "Serializer",
    "Transformer",
    "transform",
    "ColumnOverrides",
    "TransformOptions",
]
