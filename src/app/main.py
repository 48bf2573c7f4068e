"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import ApiError, api_error_handler, request_validation_handler
from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging
from .relay.relay_service import RelayService


def create_app(config: AppConfig | None = None, relay_service: RelayService | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="Image Relay")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    include_routers(app, cfg, relay_service)
    return app


def run() -> None:
    """Serve the relay with uvicorn on the configured host and port."""
    import uvicorn

    cfg = load_config()
    uvicorn.run(create_app(cfg), host=cfg.host, port=cfg.port)


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual launch
    run()
