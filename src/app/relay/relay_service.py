"""Relay orchestration: submission followed by polling when the task is async."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import AppConfig
from ..providers.providers_base import CancelCheck, TaskPoller, TaskSubmitter
from ..providers.providers_factory import create_poller, create_submitter
from .relay_models import GenerationRequest, NormalizedResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RelayService:
    """Turn one client request into one normalised result.

    The service keeps no per-request state; the only shared value is the
    immutable ``AppConfig`` holding the provider credential.
    """

    config: AppConfig
    submitter: TaskSubmitter
    poller: TaskPoller
    log: logging.Logger = field(default_factory=lambda: logger)

    @classmethod
    def from_config(cls, config: AppConfig, provider: str = "freepik") -> "RelayService":
        return cls(
            config=config,
            submitter=create_submitter(provider, config),
            poller=create_poller(provider, config),
        )

    async def generate(
        self,
        request: GenerationRequest,
        *,
        cancel_check: CancelCheck | None = None,
    ) -> NormalizedResult:
        self.log.info(
            "relay.generate.request prompt=%s aspect_ratio=%s has_key=%s",
            (request.prompt or "none")[:80],
            request.aspect_ratio,
            self.config.has_api_key,
        )
        outcome = await self.submitter.submit(request, self.config.api_key)
        if not outcome.is_async:
            return outcome.result

        url = await self.poller.poll(
            outcome.handle,
            self.config.api_key,
            max_attempts=self.config.poll_max_attempts,
            interval_seconds=self.config.poll_interval_seconds,
            cancel_check=cancel_check,
        )
        self.log.info("relay.generate.poll_completed", extra={"task_id": outcome.handle.task_id})
        return NormalizedResult(url=url)

    def debug_info(self) -> dict[str, Any]:
        """Describe configuration without touching the network."""
        return {
            "hasKey": self.config.has_api_key,
            "keyTail": self.config.key_tail,
            "endpoint": self.config.api_url,
        }
