"""
Unified error taxonomy and Result wrapper.

Every failure the lifecycle engine can report maps to one subclass here, so the
HTTP layer and the worker can decide on status codes and retries from the type alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar, Union, cast


class ErrorSeverity(Enum):
    WARNING = "warning"      # operation committed, side effect degraded
    ERROR = "error"          # operation rejected, nothing written
    CRITICAL = "critical"    # infrastructure failure


@dataclass
class HireTrackError(Exception):
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    code: str = "UNKNOWN"
    context: Dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context or {},
        }


@dataclass
class NotFoundError(HireTrackError):
    code: str = "NOT_FOUND"


@dataclass
class NotAvailableError(HireTrackError):
    code: str = "NOT_AVAILABLE"


@dataclass
class ConflictError(HireTrackError):
    code: str = "CONFLICT"


@dataclass
class DuplicateApplicationError(ConflictError):
    code: str = "DUPLICATE_APPLICATION"


@dataclass
class StaleStageError(ConflictError):
    """The stored stage moved between the read and the conditional write."""

    code: str = "STALE_STAGE"


@dataclass
class InvalidTransitionError(HireTrackError):
    code: str = "INVALID_TRANSITION"
    current: Optional[str] = None
    attempted: Optional[str] = None

    def __post_init__(self) -> None:
        ctx = dict(self.context or {})
        ctx.setdefault("current", self.current)
        ctx.setdefault("attempted", self.attempted)
        self.context = ctx


@dataclass
class UnknownStageError(InvalidTransitionError):
    code: str = "UNKNOWN_STAGE"


@dataclass
class DispatchFailure(HireTrackError):
    severity: ErrorSeverity = ErrorSeverity.WARNING
    code: str = "DISPATCH_FAILURE"


@dataclass
class StorageFailure(HireTrackError):
    severity: ErrorSeverity = ErrorSeverity.CRITICAL
    code: str = "STORAGE_FAILURE"


@dataclass
class DeliveryError(HireTrackError):
    code: str = "DELIVERY_ERROR"


@dataclass
class TransientDeliveryError(DeliveryError):
    code: str = "DELIVERY_TRANSIENT"


@dataclass
class PermanentDeliveryError(DeliveryError):
    code: str = "DELIVERY_PERMANENT"


@dataclass
class AuthenticationError(HireTrackError):
    code: str = "AUTHENTICATION_FAILED"


@dataclass
class AuthorizationError(HireTrackError):
    code: str = "FORBIDDEN"


@dataclass
class ConfigurationError(HireTrackError):
    severity: ErrorSeverity = ErrorSeverity.CRITICAL
    code: str = "CONFIGURATION_ERROR"


T = TypeVar("T")
E = TypeVar("E", bound=HireTrackError)


@dataclass
class Result(Generic[T, E]):
    """Value-or-error holder for best-effort fan-out steps."""

    _value: Union[T, E]
    _is_ok: bool

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(_value=value, _is_ok=True)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(_value=error, _is_ok=False)

    def is_ok(self) -> bool:
        return self._is_ok

    def error(self) -> Optional[E]:
        return None if self._is_ok else cast(E, self._value)

    def unwrap(self) -> T:
        if not self._is_ok:
            raise cast(E, self._value)
        return cast(T, self._value)
