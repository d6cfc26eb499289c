# ============================================================================
# DIALECT INTROSPECTORS
# ============================================================================
# STATUS: Introspection - Per-database catalog readers
# PURPOSE: Package marker; import introspectors from their modules
# CREATED: 07 OCT 2026
# ============================================================================
