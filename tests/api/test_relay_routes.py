from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from src.app.main import create_app
from tests.mocks.providers import (
    MYSTIC_URL,
    TEST_API_KEY,
    DummyHTTPResponse,
    candidate_urls,
    status_response,
)

FIRST, SECOND, THIRD = candidate_urls("T1")
CREATED = DummyHTTPResponse(200, {"data": {"task_id": "T1", "status": "CREATED"}})


@pytest.fixture
def client(app_config) -> TestClient:
    return TestClient(create_app(app_config))


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_generate_resolves_async_task(client: TestClient, dummy_client) -> None:
    provider = dummy_client(
        post_queue=[CREATED],
        get_routes={
            FIRST: [
                status_response("IN_PROGRESS"),
                status_response("COMPLETED", generated=[{"url": "https://x/a.png"}]),
            ]
        },
    )

    response = client.post("/api/generate", json={"prompt": "a lighthouse", "aspect_ratio": "square_1_1"})

    assert response.status_code == 200
    assert response.json() == {"url": "https://x/a.png"}
    assert provider.post_calls[0]["json"] == {"prompt": "a lighthouse", "aspect_ratio": "square_1_1"}
    assert provider.get_calls == [FIRST, SECOND, THIRD, FIRST]


def test_legacy_freepik_path_is_supported(client: TestClient, dummy_client) -> None:
    dummy_client(post_queue=[DummyHTTPResponse(200, {"data": {"image_url": "https://x/direct.png"}})])

    response = client.post("/api/freepik/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 200
    assert response.json() == {"url": "https://x/direct.png"}


def test_generate_without_result_returns_null_url(client: TestClient, dummy_client) -> None:
    dummy_client(post_queue=[DummyHTTPResponse(200, {"data": {}})])

    response = client.post("/api/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 200
    assert response.json() == {"url": None}


@pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"aspect_ratio": "square_1_1"}])
def test_missing_prompt_is_rejected_without_provider_call(client: TestClient, dummy_client, body) -> None:
    provider = dummy_client(post_queue=[CREATED])

    response = client.post("/api/generate", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "prompt required", "failure_reason": "invalid_request"}
    assert provider.total_calls == 0


def test_malformed_body_is_invalid_request(client: TestClient, dummy_client) -> None:
    provider = dummy_client()

    response = client.post(
        "/api/generate", content=b"not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["failure_reason"] == "invalid_request"
    assert provider.total_calls == 0


def test_missing_key_is_configuration_error(app_config, dummy_client) -> None:
    provider = dummy_client(post_queue=[CREATED])
    client = TestClient(create_app(replace(app_config, api_key=None)))

    response = client.post("/api/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "Freepik API key missing on server",
        "failure_reason": "configuration_missing",
    }
    assert provider.total_calls == 0


def test_quota_error_is_flagged(client: TestClient, dummy_client) -> None:
    dummy_client(post_queue=[DummyHTTPResponse(429, None, text="rate limited")])

    response = client.post("/api/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 429
    body = response.json()
    assert body["quota_exceeded"] is True
    assert body["failure_reason"] == "quota_exceeded"
    assert "Upgrade your plan" in body["error"]


def test_provider_error_is_bad_gateway(client: TestClient, dummy_client) -> None:
    dummy_client(post_queue=[DummyHTTPResponse(500, None, text="boom")])

    response = client.post("/api/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 502
    assert response.json() == {"error": "Freepik error 500: boom", "failure_reason": "provider_error"}


def test_failed_task_is_reported(client: TestClient, dummy_client) -> None:
    dummy_client(post_queue=[CREATED], get_routes={FIRST: [status_response("FAILED")]})

    response = client.post("/api/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 502
    assert response.json() == {"error": "Task failed: FAILED", "failure_reason": "task_failed"}


def test_poll_timeout_is_distinct_from_failure(client: TestClient, dummy_client, app_config) -> None:
    provider = dummy_client(post_queue=[CREATED], get_routes={FIRST: [status_response("IN_PROGRESS")]})

    response = client.post("/api/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 504
    assert response.json()["failure_reason"] == "poll_timeout"
    assert provider.get_calls.count(FIRST) == app_config.poll_max_attempts


def test_submission_timeout_is_gateway_timeout(app_config, dummy_client) -> None:
    dummy_client(post_queue=[CREATED], post_delay=5.0)
    client = TestClient(create_app(replace(app_config, submit_timeout_seconds=0.05)))

    response = client.post("/api/generate", json={"prompt": "a lighthouse"})

    assert response.status_code == 504
    assert response.json()["failure_reason"] == "provider_timeout"


@pytest.mark.parametrize("path", ["/api/debug", "/api/freepik/debug"])
def test_debug_reports_configuration_without_network(client: TestClient, dummy_client, path) -> None:
    provider = dummy_client()

    first = client.get(path)
    second = client.get(path)

    assert first.status_code == 200
    assert first.json() == second.json() == {
        "hasKey": True,
        "keyTail": TEST_API_KEY[-6:],
        "endpoint": MYSTIC_URL,
    }
    assert provider.total_calls == 0


def test_debug_without_key(app_config) -> None:
    client = TestClient(create_app(replace(app_config, api_key=None)))

    assert client.get("/api/debug").json() == {"hasKey": False, "keyTail": None, "endpoint": MYSTIC_URL}
