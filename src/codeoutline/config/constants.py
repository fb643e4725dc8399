"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
For configurable values, see models.py (ExtractionConfig, LimitsConfig, etc.).
"""

# =============================================================================
# Extraction Policy
# =============================================================================

MIN_DEFINITION_LINES = 4
"""Default minimum span (inclusive line count) for a definition to be listed."""

DEFAULT_MAX_WORKERS = 4
"""Default worker pool size for batch extraction."""

MAX_WORKERS_LIMIT = 64
"""Hard cap on batch worker threads."""

# =============================================================================
# Listing Limits
# =============================================================================

MAX_FILES_DEFAULT = 50
"""Default cap on files listed when a directory is expanded."""

MAX_FILES_LIMIT = 1000
"""Hard cap on files listed when a directory is expanded."""
