"""Data structures for the generation relay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Lifecycle statuses reported by the provider for an async task."""

    CREATED = "CREATED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    ERROR = "ERROR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: Any) -> "TaskStatus":
        if not isinstance(raw, str):
            return cls.UNKNOWN
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_success(self) -> bool:
        return self in TERMINAL_SUCCESS

    @property
    def is_failure(self) -> bool:
        return self in TERMINAL_FAILURE


TERMINAL_SUCCESS = frozenset({TaskStatus.COMPLETED, TaskStatus.SUCCESS})
TERMINAL_FAILURE = frozenset({TaskStatus.FAILED, TaskStatus.ERROR})


class FailureReason(StrEnum):
    """Machine-readable codes attached to relay error responses."""

    INVALID_REQUEST = "invalid_request"
    CONFIGURATION_MISSING = "configuration_missing"
    QUOTA_EXCEEDED = "quota_exceeded"
    PROVIDER_ERROR = "provider_error"
    PROVIDER_TIMEOUT = "provider_timeout"
    TASK_FAILED = "task_failed"
    POLL_TIMEOUT = "poll_timeout"
    POLL_CANCELLED = "poll_cancelled"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Client input forwarded to the provider."""

    prompt: str
    aspect_ratio: str | None = None

    def to_payload(self) -> dict[str, str]:
        payload = {"prompt": self.prompt}
        if self.aspect_ratio is not None:
            payload["aspect_ratio"] = self.aspect_ratio
        return payload


@dataclass(frozen=True, slots=True)
class ProviderTaskHandle:
    """Identifier of an asynchronous provider task."""

    task_id: str


@dataclass(frozen=True, slots=True)
class EndpointCandidate:
    """One URL convention under which task status may be exposed."""

    name: str
    template: str

    def url_for(self, task_id: str) -> str:
        return self.template.format(task_id=task_id)


@dataclass(frozen=True, slots=True)
class NormalizedResult:
    """Stable ``{url}`` shape returned to clients."""

    url: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"url": self.url}


@dataclass(frozen=True, slots=True)
class SubmissionOutcome:
    """Classified provider response to the initial submission.

    Exactly one of ``result`` (synchronous) and ``handle`` (asynchronous) is set.
    """

    result: NormalizedResult | None = None
    handle: ProviderTaskHandle | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.handle is None):
            raise ValueError("SubmissionOutcome requires exactly one of result or handle")

    @property
    def is_async(self) -> bool:
        return self.handle is not None

    @classmethod
    def synchronous(cls, url: str | None) -> "SubmissionOutcome":
        return cls(result=NormalizedResult(url=url))

    @classmethod
    def asynchronous(cls, task_id: str) -> "SubmissionOutcome":
        return cls(handle=ProviderTaskHandle(task_id=task_id))


@dataclass(slots=True)
class PollAttemptResult:
    """Outcome of probing a single candidate within one polling round."""

    candidate: EndpointCandidate
    url: str
    http_status: int | None = None
    status: TaskStatus | None = None
    body: Any = None

    @property
    def recognised(self) -> bool:
        return self.status is not None
