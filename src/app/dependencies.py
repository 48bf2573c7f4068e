"""Dependency wiring helpers."""

from fastapi import FastAPI

from .config import AppConfig
from .relay.relay_api import router as relay_router
from .relay.relay_service import RelayService
from .ui.frontend_router import build_frontend_router


def include_routers(app: FastAPI, config: AppConfig, relay_service: RelayService | None = None) -> None:
    """Mount module routers and attach services."""
    app.state.config = config
    app.state.relay_service = relay_service or RelayService.from_config(config)

    app.include_router(relay_router)
    # registered last: its catch-all asset route must not shadow /api
    app.include_router(build_frontend_router(config.frontend_root))
