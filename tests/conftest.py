from __future__ import annotations

from pathlib import Path

import pytest

from src.app.config import AppConfig
from tests.mocks.providers import (
    MYSTIC_URL,
    TEST_API_KEY,
    DummyAsyncClient,
    install_dummy_client,
)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        api_key=TEST_API_KEY,
        api_url=MYSTIC_URL,
        submit_timeout_seconds=5.0,
        poll_max_attempts=5,
        poll_interval_seconds=0,
        frontend_root=tmp_path,
    )


@pytest.fixture
def dummy_client(monkeypatch):
    """Return an installer for a scripted ``httpx.AsyncClient`` replacement."""

    def _install(**kwargs) -> DummyAsyncClient:
        return install_dummy_client(monkeypatch, DummyAsyncClient(**kwargs))

    return _install
