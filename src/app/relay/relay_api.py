"""HTTP routes for the generation relay."""

from __future__ import annotations

from uuid import uuid4

import structlog
from fastapi import APIRouter, Body, Depends, Request

from ..api.errors import api_error_from_relay, internal_error
from .relay_errors import RelayError
from .relay_models import GenerationRequest
from .relay_schemas import (
    DebugInfoSchema,
    GenerateRequestSchema,
    GenerateResponseSchema,
    HealthSchema,
    RelayErrorSchema,
)
from .relay_service import RelayService

router = APIRouter(prefix="/api", tags=["relay"])
logger = structlog.get_logger(__name__)

_ERROR_RESPONSES = {
    code: {"model": RelayErrorSchema} for code in (400, 429, 499, 500, 502, 504)
}


def get_relay_service(request: Request) -> RelayService:
    """Fetch relay service from application state."""
    try:
        return request.app.state.relay_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("RelayService is not configured") from exc


@router.get("/health", response_model=HealthSchema)
async def health() -> dict[str, bool]:
    return {"ok": True}


@router.post("/generate", response_model=GenerateResponseSchema, responses=_ERROR_RESPONSES)
@router.post("/freepik/generate", response_model=GenerateResponseSchema, include_in_schema=False)
async def generate(
    request: Request,
    payload: GenerateRequestSchema | None = Body(None),
    service: RelayService = Depends(get_relay_service),
) -> dict[str, str | None]:
    """Submit the prompt to the provider and resolve the final image url."""
    payload = payload or GenerateRequestSchema()
    generation = GenerationRequest(prompt=payload.prompt or "", aspect_ratio=payload.aspect_ratio)

    with structlog.contextvars.bound_contextvars(request_id=uuid4().hex):
        try:
            result = await service.generate(generation, cancel_check=request.is_disconnected)
        except RelayError as exc:
            logger.warning(
                "relay.generate.failed",
                failure_reason=exc.failure_reason.value,
                detail=str(exc),
            )
            raise api_error_from_relay(exc) from exc
        except Exception as exc:
            logger.exception("relay.generate.unexpected_error")
            raise internal_error(str(exc) or "Freepik proxy failure") from exc

        logger.info("relay.generate.done", has_url=result.url is not None)
    return result.to_dict()


@router.get("/debug", response_model=DebugInfoSchema)
@router.get("/freepik/debug", response_model=DebugInfoSchema, include_in_schema=False)
async def debug(service: RelayService = Depends(get_relay_service)) -> dict[str, object]:
    """Report whether a credential is configured; performs no network call."""
    return service.debug_info()
