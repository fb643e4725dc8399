"""Core module exports."""

from codeoutline.core.errors import (
    CodeOutlineError,
    ConfigError,
    ErrorCode,
    ExtractionError,
)
from codeoutline.core.logging import (
    clear_batch_id,
    configure_logging,
    get_batch_id,
    set_batch_id,
)

__all__ = [
    # Errors
    "CodeOutlineError",
    "ConfigError",
    "ErrorCode",
    "ExtractionError",
    # Logging
    "clear_batch_id",
    "configure_logging",
    "get_batch_id",
    "set_batch_id",
]
