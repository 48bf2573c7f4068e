"""Ordered extraction rules for heterogeneous provider payloads.

The provider reports the same concept under several field names and nests
it differently depending on the endpoint. Each rule table below is tried in
order and the first non-empty string wins.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from .relay_models import ProviderTaskHandle, TaskStatus

# Fields of a ``generated`` list element that may hold the image location.
ARTIFACT_FIELDS: tuple[str, ...] = ("url", "image_url", "imageUrl", "src")

# Fields of a completed status payload used when ``generated`` is absent.
TASK_RESULT_FIELDS: tuple[str, ...] = ("url", "image_url")

# Paths into a synchronous submission body.
DIRECT_RESULT_PATHS: tuple[tuple[str, ...], ...] = (
    ("data", "url"),
    ("data", "image_url"),
    ("url",),
    ("image_url",),
)


def _lookup(value: Any, path: Sequence[str]) -> Any:
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def first_value(value: Any, paths: Iterable[Sequence[str] | str]) -> str | None:
    """Return the first non-empty string found along ``paths``."""
    for path in paths:
        keys = (path,) if isinstance(path, str) else path
        found = _lookup(value, keys)
        if isinstance(found, str) and found:
            return found
    return None


def unwrap_payload(body: Any) -> Any:
    """Return the ``data`` envelope content when present, else the body."""
    if isinstance(body, Mapping) and isinstance(body.get("data"), Mapping):
        return body["data"]
    return body


def extract_status(body: Any) -> TaskStatus | None:
    """Return the task status, or ``None`` if the body carries no status field."""
    payload = unwrap_payload(body)
    if not isinstance(payload, Mapping) or "status" not in payload:
        return None
    return TaskStatus.parse(payload["status"])


def extract_task_handle(body: Any) -> ProviderTaskHandle | None:
    payload = unwrap_payload(body)
    if not isinstance(payload, Mapping):
        return None
    task_id = payload.get("task_id")
    if not task_id or TaskStatus.parse(payload.get("status")) is not TaskStatus.CREATED:
        return None
    return ProviderTaskHandle(task_id=str(task_id))


def extract_artifact(body: Any) -> str | None:
    """Extract the image location from a completed status payload."""
    payload = unwrap_payload(body)
    if not isinstance(payload, Mapping):
        return None
    generated = payload.get("generated")
    if isinstance(generated, list) and generated:
        first = generated[0]
        if isinstance(first, str):
            return first or None
        return first_value(first, ARTIFACT_FIELDS)
    return first_value(payload, TASK_RESULT_FIELDS)


def extract_direct_result(body: Any) -> str | None:
    """Extract an embedded result from a synchronous submission body."""
    return first_value(body, DIRECT_RESULT_PATHS)
