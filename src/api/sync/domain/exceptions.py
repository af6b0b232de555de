"""Domain exceptions for the sync bounded context.

Every exception carries the stable ``SyncErrorType`` discriminant and an
HTTP-equivalent status so the presentation layer can answer with a
structured error envelope without inspecting messages.
"""

from __future__ import annotations

from sync.domain.value_objects import ConnectionFailure, SyncErrorType


class SyncError(Exception):
    """Base class for all sync bridge errors."""

    error_type: SyncErrorType = SyncErrorType.UNKNOWN
    status_code: int = 500

    def __init__(self, message: str, *, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidShapeError(SyncError):
    """Raised when caller-supplied input is malformed."""

    error_type = SyncErrorType.INVALID_SHAPE
    status_code = 400


class NotLinkedError(SyncError):
    """Raised when an action targets a shop with no tenant binding.

    This is an expected state (onboarding not finished), not a system failure.
    """

    error_type = SyncErrorType.NOT_LINKED
    status_code = 409


class BackingStoreError(SyncError):
    """Raised by repositories when the backing store call fails.

    The error type and status hint come from the SQLSTATE classification
    performed at the adapter boundary.
    """

    def __init__(
        self,
        message: str,
        *,
        error_type: SyncErrorType = SyncErrorType.UNKNOWN,
        status_code: int | None = None,
        details: str | None = None,
    ):
        super().__init__(message, details=details)
        self.error_type = error_type
        self.status_hint = status_code
        self.status_code = status_code if status_code is not None else 500

    def to_failure(self) -> ConnectionFailure:
        """Convert to the resolver's failure value."""
        return ConnectionFailure(
            error_type=self.error_type,
            message=self.message,
            details=self.details,
            status_code=self.status_hint,
        )


class TenantResolutionError(SyncError):
    """Raised when an action cannot proceed because tenant resolution failed.

    Carries the resolver's classified failure unchanged.
    """

    def __init__(self, failure: ConnectionFailure):
        super().__init__(failure.message, details=failure.details)
        self.failure = failure
        self.error_type = failure.error_type
        self.status_code = failure.status_code or 500


class JobDispatchError(SyncError):
    """Raised when a job function cannot be reached at all.

    Job-level failures (non-2xx answers) are relayed, not raised.
    """

    error_type = SyncErrorType.NETWORK_ERROR
    status_code = 502


class ConfigurationError(SyncError):
    """Raised when required configuration is absent or invalid.

    Fatal and non-retryable: raised at process start where possible,
    otherwise answered with HTTP 500.
    """

    error_type = SyncErrorType.CONFIGURATION_ERROR
    status_code = 500


class UnknownIntentError(SyncError):
    """Raised when the dispatcher receives an intent outside the closed set.

    Reaching this means intent validation was bypassed.
    """

    error_type = SyncErrorType.UNKNOWN_INTENT
    status_code = 500
