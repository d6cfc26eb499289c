# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export configuration and logging utilities
# CREATED: 09 OCT 2026
# ============================================================================

from core.config import ConfigError, GeneratorConfig
from core.logging import configure_logging, get_logger, log_context

__all__ = [
    # Config
    "ConfigError",
    "GeneratorConfig",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
]
