"""Abstract provider interfaces used by the relay service."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from ..relay.relay_models import GenerationRequest, ProviderTaskHandle, SubmissionOutcome

CancelCheck = Callable[[], Awaitable[bool]]


class TaskSubmitter(ABC):
    """Issues the initial generation request and classifies the reply."""

    @abstractmethod
    async def submit(self, request: GenerationRequest, credential: str | None) -> SubmissionOutcome:
        """Submit ``request`` and return a sync result or an async task handle."""


class TaskPoller(ABC):
    """Resolves an asynchronous task handle into a final image location."""

    @abstractmethod
    async def poll(
        self,
        handle: ProviderTaskHandle,
        credential: str,
        *,
        max_attempts: int = 60,
        interval_seconds: float = 2.0,
        cancel_check: CancelCheck | None = None,
    ) -> str | None:
        """Poll until a terminal status and return the artifact url (may be ``None``)."""
