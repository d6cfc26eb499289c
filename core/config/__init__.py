# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 09 OCT 2026
# ============================================================================
"""
Configuration Module

Provides the generator configuration and its loaders.
"""

from core.config.defaults import (
    ConfigError,
    GeneratorConfig,
)

__all__ = [
    "ConfigError",
    "GeneratorConfig",
]
