"""Reusable error primitives for API exception handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..relay.relay_errors import (
    ConfigurationError,
    PollCancelledError,
    PollTimeoutError,
    ProviderError,
    ProviderTaskFailedError,
    ProviderTimeoutError,
    QuotaExceededError,
    RelayError,
    ValidationError,
)
from ..relay.relay_models import FailureReason

HTTP_499_CLIENT_CLOSED_REQUEST = 499

_STATUS_BY_ERROR: tuple[tuple[type[RelayError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConfigurationError, status.HTTP_400_BAD_REQUEST),
    (QuotaExceededError, status.HTTP_429_TOO_MANY_REQUESTS),
    (ProviderError, status.HTTP_502_BAD_GATEWAY),
    (ProviderTaskFailedError, status.HTTP_502_BAD_GATEWAY),
    (ProviderTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (PollTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (PollCancelledError, HTTP_499_CLIENT_CLOSED_REQUEST),
)


@dataclass(slots=True)
class ApiError(Exception):
    """Structured application-level error for HTTP handlers."""

    status_code: int
    code: str
    message: str
    extra: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] | None = None

    def to_response(self) -> JSONResponse:
        """Materialise the error into a ``JSONResponse`` instance."""

        content: dict[str, Any] = {"error": self.message, "failure_reason": self.code}
        content.update(self.extra)
        return JSONResponse(
            status_code=self.status_code,
            content=content,
            headers=dict(self.headers or {}),
        )


async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    """Convert :class:`ApiError` exceptions into JSON payloads."""

    return exc.to_response()


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies with the relay error shape."""

    return invalid_request_error("request body must be a JSON object").to_response()


def api_error_from_relay(exc: RelayError) -> ApiError:
    """Map a relay domain error onto its HTTP representation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, mapped_status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = mapped_status
            break
    extra: dict[str, Any] = {}
    if isinstance(exc, QuotaExceededError):
        extra["quota_exceeded"] = True
    return ApiError(status_code, exc.failure_reason.value, str(exc), extra)


def invalid_request_error(message: str) -> ApiError:
    """Return an :class:`ApiError` representing malformed client input."""

    return ApiError(status.HTTP_400_BAD_REQUEST, FailureReason.INVALID_REQUEST.value, message)


def internal_error(message: str = "Freepik proxy failure") -> ApiError:
    """Return an :class:`ApiError` for unexpected failures."""

    return ApiError(
        status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.INTERNAL_ERROR.value, message
    )


__all__ = [
    "ApiError",
    "api_error_from_relay",
    "api_error_handler",
    "internal_error",
    "invalid_request_error",
    "request_validation_handler",
]
