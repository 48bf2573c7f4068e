"""Domain-specific exceptions for the generation relay."""

from __future__ import annotations

from .relay_models import FailureReason


class RelayError(Exception):
    """Base class for relay errors surfaced to the request boundary."""

    failure_reason: FailureReason = FailureReason.INTERNAL_ERROR


class ValidationError(RelayError):
    """Raised when client input is malformed (e.g. prompt missing)."""

    failure_reason = FailureReason.INVALID_REQUEST


class ConfigurationError(RelayError):
    """Raised when the provider credential is not configured."""

    failure_reason = FailureReason.CONFIGURATION_MISSING


class ProviderTimeoutError(RelayError):
    """Raised when the submission call exceeds its time bound."""

    failure_reason = FailureReason.PROVIDER_TIMEOUT


class QuotaExceededError(RelayError):
    """Raised when the provider rejects the submission with HTTP 429."""

    failure_reason = FailureReason.QUOTA_EXCEEDED
    quota_exceeded = True
    default_message = (
        "Freepik API quota exceeded (free trial limit reached). "
        "Upgrade your plan or use a new API key."
    )

    def __init__(self, message: str | None = None, *, body: str = "") -> None:
        super().__init__(message or self.default_message)
        self.body = body


class ProviderError(RelayError):
    """Raised for any other non-success provider response to submission."""

    failure_reason = FailureReason.PROVIDER_ERROR

    def __init__(self, status_code: int | None, body: str = "", message: str | None = None) -> None:
        if message is None:
            message = f"Freepik error {status_code}: {body}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProviderTaskFailedError(RelayError):
    """Raised when a polled task reaches a terminal failure status."""

    failure_reason = FailureReason.TASK_FAILED

    def __init__(self, status: str, task_id: str | None = None) -> None:
        super().__init__(f"Task failed: {status}")
        self.status = status
        self.task_id = task_id


class PollTimeoutError(RelayError):
    """Raised when polling exhausts its attempts without a terminal status."""

    failure_reason = FailureReason.POLL_TIMEOUT

    def __init__(self, attempts: int, task_id: str | None = None) -> None:
        super().__init__(f"Freepik polling timeout after {attempts} attempts")
        self.attempts = attempts
        self.task_id = task_id


class PollCancelledError(RelayError):
    """Raised when the caller asks polling to stop between rounds."""

    failure_reason = FailureReason.POLL_CANCELLED
