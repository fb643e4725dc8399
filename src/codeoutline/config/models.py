"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CODEOUTLINE__SECTION__KEY)
3. Repo YAML (.codeoutline/config.yaml)
4. Global YAML (~/.config/codeoutline/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    CODEOUTLINE__<SECTION>__<KEY>=<VALUE>

Examples:
    CODEOUTLINE__LOGGING__LEVEL=DEBUG
    CODEOUTLINE__EXTRACTION__MIN_LINES=3
    CODEOUTLINE__EXTRACTION__MAX_WORKERS=8
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from codeoutline.config.constants import (
    DEFAULT_MAX_WORKERS,
    MAX_FILES_DEFAULT,
    MAX_FILES_LIMIT,
    MAX_WORKERS_LIMIT,
    MIN_DEFINITION_LINES,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CODEOUTLINE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every grammar load and file outcome.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ExtractionConfig(BaseModel):
    """Definition extraction policy.

    Env vars:
        CODEOUTLINE__EXTRACTION__MIN_LINES: Minimum definition span in lines
        CODEOUTLINE__EXTRACTION__MAX_WORKERS: Parallel extraction workers
    """

    min_lines: int = Field(
        default=MIN_DEFINITION_LINES,
        description="Definitions spanning fewer lines are left out of the outline.",
    )
    max_workers: int = Field(
        default=DEFAULT_MAX_WORKERS,
        description="Worker threads for batch extraction. 1 processes files sequentially.",
    )

    @field_validator("min_lines")
    @classmethod
    def validate_min_lines(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"min_lines must be >= 1, got {v}")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if not (1 <= v <= MAX_WORKERS_LIMIT):
            raise ValueError(f"max_workers must be 1-{MAX_WORKERS_LIMIT}, got {v}")
        return v


class LimitsConfig(BaseModel):
    """Listing limits.

    Env vars:
        CODEOUTLINE__LIMITS__MAX_FILES: Files listed per expanded directory
    """

    max_files: int = Field(
        default=MAX_FILES_DEFAULT,
        description="Cap on files outlined when a directory argument is expanded.",
    )

    @field_validator("max_files")
    @classmethod
    def validate_max_files(cls, v: int) -> int:
        if not (1 <= v <= MAX_FILES_LIMIT):
            raise ValueError(f"max_files must be 1-{MAX_FILES_LIMIT}, got {v}")
        return v


class CodeOutlineConfig(BaseModel):
    """Root configuration. Used for type hints; loading goes through loader.py."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
