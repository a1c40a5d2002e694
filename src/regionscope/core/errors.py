"""RegionScope error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Boundary patterns
- 9xxx: Internal

Unmatched region markers, version skew between sources and unsupported
languages are ordinary results and never surface as errors.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Patterns (3xxx)
    PATTERN_INVALID_REGEX = 3001
    PATTERN_MISSING_PAIR = 3002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    PRECONDITION_FAILED = 9003


@dataclass(frozen=True, slots=True)
class RegionScopeError(Exception):
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
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(RegionScopeError):
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


class PatternError(RegionScopeError):
    """Boundary pattern errors.

    Raised while compiling a language's pattern pairs. The pattern table
    catches these per language, so a bad entry only disables its own language.
    """

    @classmethod
    def invalid_regex(cls, language_id: str, pattern: str, reason: str) -> "PatternError":
        return cls(
            code=ErrorCode.PATTERN_INVALID_REGEX,
            message=f"Invalid boundary pattern for '{language_id}': {reason}",
            details={"language_id": language_id, "pattern": pattern, "reason": reason},
        )

    @classmethod
    def missing_pair(cls, language_id: str, missing: str) -> "PatternError":
        return cls(
            code=ErrorCode.PATTERN_MISSING_PAIR,
            message=f"Boundary pattern pair for '{language_id}' has no {missing} pattern",
            details={"language_id": language_id, "missing": missing},
        )


class InternalError(RegionScopeError):
    """Internal/unexpected errors."""

    @classmethod
    def precondition_failed(cls, component: str, reason: str) -> "InternalError":
        return cls(
            code=ErrorCode.PRECONDITION_FAILED,
            message=f"{component}: {reason}",
            details={"component": component, "reason": reason},
        )
