"""CodeOutline error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Extraction
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Extraction (3xxx)
    UNSUPPORTED_LANGUAGE = 3001
    GRAMMAR_LOAD_FAILURE = 3002
    PARSE_FAILURE = 3003
    QUERY_EXECUTION_FAILURE = 3004
    IO_FAILURE = 3005

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CodeOutlineError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CodeOutlineError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ExtractionError(CodeOutlineError):
    """Per-file extraction outcome that is not a result.

    Returned (not raised) by the coordinator so a single bad file never
    aborts a batch.
    """

    @property
    def kind(self) -> str:
        """Outcome tag, e.g. 'UNSUPPORTED_LANGUAGE'."""
        return self.code.name

    @classmethod
    def unsupported_language(cls, target: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            message=f"No grammar or fallback parser for {target}",
            details={"target": target},
        )

    @classmethod
    def grammar_load_failure(cls, language: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.GRAMMAR_LOAD_FAILURE,
            message=f"Failed to load grammar '{language}': {reason}",
            retryable=True,
            details={"language": language, "reason": reason},
        )

    @classmethod
    def parse_failure(cls, target: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.PARSE_FAILURE,
            message=f"Parser faulted on {target}: {reason}",
            details={"target": target, "reason": reason},
        )

    @classmethod
    def query_execution_failure(cls, language: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.QUERY_EXECUTION_FAILURE,
            message=f"Definition query failed for '{language}': {reason}",
            details={"language": language, "reason": reason},
        )

    @classmethod
    def io_failure(cls, path: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.IO_FAILURE,
            message=f"Cannot read {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def unexpected(cls, path: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Unexpected failure extracting {path}: {reason}",
            details={"path": path, "reason": reason},
        )

