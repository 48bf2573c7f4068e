"""Freepik Mystic provider: task submission and status polling."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlsplit

import httpx

from ..config import DEFAULT_FREEPIK_API_URL
from ..relay.extraction import (
    extract_artifact,
    extract_direct_result,
    extract_status,
    extract_task_handle,
)
from ..relay.relay_errors import (
    ConfigurationError,
    PollCancelledError,
    PollTimeoutError,
    ProviderError,
    ProviderTaskFailedError,
    ProviderTimeoutError,
    QuotaExceededError,
    ValidationError,
)
from ..relay.relay_models import (
    EndpointCandidate,
    GenerationRequest,
    PollAttemptResult,
    ProviderTaskHandle,
    SubmissionOutcome,
)
from .providers_base import CancelCheck, TaskPoller, TaskSubmitter

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-freepik-api-key"
LOG_BODY_LIMIT = 200
LOG_URL_LIMIT = 100


def build_status_candidates(api_url: str) -> tuple[EndpointCandidate, ...]:
    """Return the ordered status endpoint conventions for ``api_url``."""
    api_url = api_url.rstrip("/")
    parts = urlsplit(api_url)
    origin = f"{parts.scheme}://{parts.netloc}"
    return (
        EndpointCandidate("mystic-path", f"{api_url}/{{task_id}}"),
        EndpointCandidate("mystic-query", f"{api_url}?task_id={{task_id}}"),
        EndpointCandidate("tasks-path", f"{origin}/v1/ai/tasks/{{task_id}}"),
    )


def _headers(credential: str, *, with_body: bool = False) -> dict[str, str]:
    headers = {"Accept": "application/json", API_KEY_HEADER: credential}
    if with_body:
        headers["Content-Type"] = "application/json"
    return headers


def _preview(value: str | None, limit: int) -> str:
    return value[:limit] if value else "null"


@dataclass(slots=True)
class FreepikSubmitter(TaskSubmitter):
    """Submit a generation request and classify the immediate response."""

    api_url: str = DEFAULT_FREEPIK_API_URL
    timeout_seconds: float = 30.0
    log: logging.Logger = field(default_factory=lambda: logger)

    async def submit(self, request: GenerationRequest, credential: str | None) -> SubmissionOutcome:
        if not credential:
            raise ConfigurationError("Freepik API key missing on server")
        if not request.prompt or not request.prompt.strip():
            raise ValidationError("prompt required")

        self.log.info(
            "freepik.submit.start",
            extra={"endpoint": self.api_url, "aspect_ratio": request.aspect_ratio},
        )
        try:
            response = await asyncio.wait_for(
                self._post(headers=_headers(credential, with_body=True), json=request.to_payload()),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            self.log.error(
                "freepik.submit.timeout",
                extra={"endpoint": self.api_url, "timeout_seconds": self.timeout_seconds},
            )
            raise ProviderTimeoutError(
                f"Freepik did not respond within {self.timeout_seconds:g} seconds"
            ) from exc
        except httpx.HTTPError as exc:
            self.log.error("freepik.submit.transport_error endpoint=%s error=%s", self.api_url, exc)
            raise ProviderError(None, message=f"Freepik request failed: {exc}") from exc

        return self._classify(response)

    async def _post(self, *, headers: dict[str, str], json: dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            return await client.post(self.api_url, headers=headers, json=json)

    def _classify(self, response: httpx.Response) -> SubmissionOutcome:
        status_code = response.status_code
        self.log.info("freepik.submit.response status=%s", status_code)

        if not 200 <= status_code < 300:
            text = response.text or ""
            self.log.error(
                "freepik.submit.error status=%s body=%s", status_code, text[:LOG_BODY_LIMIT]
            )
            if status_code == 429:
                self.log.error("freepik.submit.quota_exceeded")
                raise QuotaExceededError(body=text)
            raise ProviderError(status_code, text)

        try:
            body = response.json()
        except ValueError as exc:
            raise ProviderError(
                status_code,
                response.text or "",
                message="Freepik returned a response that is not valid JSON",
            ) from exc

        handle = extract_task_handle(body)
        if handle is not None:
            self.log.info("freepik.submit.task_created", extra={"task_id": handle.task_id})
            return SubmissionOutcome(handle=handle)

        url = extract_direct_result(body)
        self.log.info("freepik.submit.direct_result url=%s", _preview(url, LOG_URL_LIMIT))
        return SubmissionOutcome.synchronous(url)


@dataclass(slots=True)
class _PollSession:
    """State of one polling call; discarded when the call returns."""

    handle: ProviderTaskHandle
    task_id: str
    headers: dict[str, str]
    max_attempts: int
    pinned: EndpointCandidate | None = None
    rounds: int = 0


@dataclass(slots=True)
class FreepikTaskPoller(TaskPoller):
    """Poll task status across candidate endpoints, pinning the first that answers."""

    api_url: str = DEFAULT_FREEPIK_API_URL
    request_timeout_seconds: float = 15.0
    progress_every: int = 10
    log: logging.Logger = field(default_factory=lambda: logger)
    candidates: tuple[EndpointCandidate, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.candidates = build_status_candidates(self.api_url)

    def deadline_seconds(self, max_attempts: int, interval_seconds: float) -> float:
        """Wall-clock budget of one polling call."""
        return max_attempts * interval_seconds + self.request_timeout_seconds

    async def poll(
        self,
        handle: ProviderTaskHandle,
        credential: str,
        *,
        max_attempts: int = 60,
        interval_seconds: float = 2.0,
        cancel_check: CancelCheck | None = None,
    ) -> str | None:
        if not credential:
            raise ConfigurationError("Freepik API key missing on server")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        session = _PollSession(
            handle=handle,
            task_id=quote(handle.task_id, safe=""),
            headers=_headers(credential),
            max_attempts=max_attempts,
        )
        deadline = self.deadline_seconds(max_attempts, interval_seconds)

        async with httpx.AsyncClient(timeout=self.request_timeout_seconds) as client:
            try:
                return await asyncio.wait_for(
                    self._run_rounds(client, session, interval_seconds, cancel_check),
                    timeout=deadline,
                )
            except asyncio.TimeoutError as exc:
                self.log.error(
                    "freepik.poll.deadline_exceeded rounds=%s deadline_seconds=%s task_id=%s",
                    session.rounds, deadline, handle.task_id,
                )
                raise PollTimeoutError(session.rounds, task_id=handle.task_id) from exc

    async def _run_rounds(
        self,
        client: httpx.AsyncClient,
        session: _PollSession,
        interval_seconds: float,
        cancel_check: CancelCheck | None,
    ) -> str | None:
        handle = session.handle
        max_attempts = session.max_attempts
        for attempt in range(max_attempts):
            if attempt and cancel_check is not None and await cancel_check():
                self.log.info(
                    "freepik.poll.cancelled",
                    extra={"task_id": handle.task_id, "attempt": attempt + 1},
                )
                raise PollCancelledError("Polling cancelled by caller")

            session.rounds = attempt + 1
            round_candidates = (session.pinned,) if session.pinned is not None else self.candidates
            for candidate in round_candidates:
                result = await self._check_candidate(
                    client, candidate, task_id=session.task_id, headers=session.headers,
                    attempt=attempt, max_attempts=max_attempts,
                )
                if not result.recognised:
                    continue
                if session.pinned is None:
                    session.pinned = candidate
                    self.log.info(
                        "freepik.poll.pinned",
                        extra={"task_id": handle.task_id, "endpoint": candidate.name},
                    )
                if result.status.is_success:
                    url = extract_artifact(result.body)
                    self.log.info(
                        "freepik.poll.completed task_id=%s url=%s",
                        handle.task_id,
                        _preview(url, LOG_URL_LIMIT),
                    )
                    return url
                if result.status.is_failure:
                    self.log.error(
                        "freepik.poll.failed",
                        extra={"task_id": handle.task_id, "status": result.status.value},
                    )
                    raise ProviderTaskFailedError(result.status.value, task_id=handle.task_id)

            if attempt % self.progress_every == 0:
                self.log.info(
                    "freepik.poll.progress attempt=%s/%s task_id=%s",
                    attempt + 1, max_attempts, handle.task_id,
                )
            if attempt + 1 < max_attempts:
                await asyncio.sleep(interval_seconds)

        self.log.error(
            "freepik.poll.timeout attempts=%s budget_seconds=%s task_id=%s",
            max_attempts, max_attempts * interval_seconds, handle.task_id,
        )
        raise PollTimeoutError(max_attempts, task_id=handle.task_id)

    async def _check_candidate(
        self,
        client: httpx.AsyncClient,
        candidate: EndpointCandidate,
        *,
        task_id: str,
        headers: dict[str, str],
        attempt: int,
        max_attempts: int,
    ) -> PollAttemptResult:
        url = candidate.url_for(task_id)
        result = PollAttemptResult(candidate=candidate, url=url)
        try:
            response = await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            self.log.info(
                "freepik.poll.transport_error attempt=%s/%s endpoint=%s error=%s",
                attempt + 1, max_attempts, candidate.name, exc,
            )
            return result

        result.http_status = response.status_code
        if not 200 <= response.status_code < 300:
            self.log.info(
                "freepik.poll.http_error attempt=%s/%s endpoint=%s status=%s",
                attempt + 1, max_attempts, candidate.name, response.status_code,
            )
            return result

        try:
            result.body = response.json()
        except ValueError:
            self.log.info(
                "freepik.poll.invalid_json attempt=%s/%s endpoint=%s",
                attempt + 1, max_attempts, candidate.name,
            )
            return result

        result.status = extract_status(result.body)
        if result.status is not None:
            self.log.info(
                "freepik.poll.attempt attempt=%s/%s endpoint=%s status=%s",
                attempt + 1, max_attempts, candidate.name, result.status.value,
            )
        return result
