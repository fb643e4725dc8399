"""Config module exports."""

from codeoutline.config.loader import CodeOutlineSettings, load_config
from codeoutline.config.models import (
    CodeOutlineConfig,
    ExtractionConfig,
    LimitsConfig,
    LoggingConfig,
)

__all__ = [
    "load_config",
    "CodeOutlineConfig",
    "CodeOutlineSettings",
    "ExtractionConfig",
    "LimitsConfig",
    "LoggingConfig",
]
