"""Smoke-check imports for the relay modules."""

from __future__ import annotations

from importlib import import_module
from types import ModuleType

import pytest

MODULES_AND_SYMBOLS = [
    ("src.app.main", "create_app"),
    ("src.app.config", "AppConfig"),
    ("src.app.dependencies", "include_routers"),
    ("src.app.api", "ApiError"),
    ("src.app.api.errors", "api_error_from_relay"),
    ("src.app.providers", "FreepikSubmitter"),
    ("src.app.providers", "FreepikTaskPoller"),
    ("src.app.providers.providers_factory", "create_poller"),
    ("src.app.relay.relay_api", "router"),
    ("src.app.relay.relay_service", "RelayService"),
    ("src.app.relay.extraction", "extract_artifact"),
    ("src.app.relay.relay_errors", "PollTimeoutError"),
    ("src.app.ui.frontend_router", "build_frontend_router"),
]


@pytest.mark.parametrize(("module_name", "symbol"), MODULES_AND_SYMBOLS)
def test_importable_symbols(module_name: str, symbol: str) -> None:
    """Import modules and verify that public symbols are exposed."""

    module: ModuleType = import_module(module_name)
    assert hasattr(module, symbol), f"{module_name} missing {symbol}"
