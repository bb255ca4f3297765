"""
Unified error module.
"""

from .errors import (
    ErrorSeverity,
    HireTrackError,
    NotFoundError,
    NotAvailableError,
    ConflictError,
    DuplicateApplicationError,
    StaleStageError,
    InvalidTransitionError,
    UnknownStageError,
    DispatchFailure,
    StorageFailure,
    DeliveryError,
    TransientDeliveryError,
    PermanentDeliveryError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    Result,
)

__all__ = [
    "ErrorSeverity",
    "HireTrackError",
    "NotFoundError",
    "NotAvailableError",
    "ConflictError",
    "DuplicateApplicationError",
    "StaleStageError",
    "InvalidTransitionError",
    "UnknownStageError",
    "DispatchFailure",
    "StorageFailure",
    "DeliveryError",
    "TransientDeliveryError",
    "PermanentDeliveryError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "Result",
]
