# Result values and tagged error kinds for manage_mcp
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")
E = TypeVar("E")

# ABOUTME: Failure tags per operation family
RegistryErrorKind = Literal["PermissionDenied", "InvalidJSON", "InvalidFormat", "Unknown"]
SourceErrorKind = Literal["SourceMissing", "ParseFailed", "IOError"]
ExportErrorKind = Literal["ParseFailed", "IOError"]


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Explicit success/failure outcome of a fallible operation.

    ABOUTME: Expected conditions are returned as values, never raised
    ABOUTME: Callers check `success` before touching `value` or `error`
    """
    success: bool
    value: T | None = None
    error: E | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T, E]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: E) -> "Result[T, E]":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class RegistryError:
    """Failure reading or writing the canonical registry file."""
    kind: RegistryErrorKind
    message: str
    cause: Any = None


@dataclass(frozen=True)
class SourceError:
    """Failure reading an external tool's config for import.

    ABOUTME: SourceMissing is not a failure for callers, it means zero entries
    """
    kind: SourceErrorKind
    message: str
    cause: Any = None


@dataclass(frozen=True)
class ExportError:
    """Failure projecting the registry into an external tool's config."""
    kind: ExportErrorKind
    message: str
    cause: Any = None


class UnsupportedToolError(ValueError):
    """Raised when a tool name has no adapter."""


class McpOperationError(Exception):
    """Raised by orchestrators when a step returns a failure result.

    ABOUTME: Surfaces at the CLI boundary, which reports and exits non-zero
    """
