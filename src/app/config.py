"""Application configuration builder."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_FREEPIK_API_URL = "https://api.freepik.com/v1/ai/mystic"


@dataclass(frozen=True, slots=True)
class AppConfig:
    api_key: str | None
    api_url: str = DEFAULT_FREEPIK_API_URL
    submit_timeout_seconds: float = 30.0
    poll_max_attempts: int = 60
    poll_interval_seconds: float = 2.0
    poll_request_timeout_seconds: float = 15.0
    frontend_root: Path = Path(".")
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def key_tail(self) -> str | None:
        return self.api_key[-6:] if self.api_key else None

    def validate(self) -> None:
        """Reject timing values that would make every generate call fail."""
        if self.poll_max_attempts < 1:
            raise ValueError(
                f"FREEPIK_POLL_MAX_ATTEMPTS must be at least 1, got {self.poll_max_attempts}"
            )
        if self.poll_interval_seconds < 0:
            raise ValueError(
                f"FREEPIK_POLL_INTERVAL_SECONDS must not be negative, got {self.poll_interval_seconds}"
            )
        for name, value in (
            ("FREEPIK_SUBMIT_TIMEOUT_SECONDS", self.submit_timeout_seconds),
            ("FREEPIK_POLL_REQUEST_TIMEOUT_SECONDS", self.poll_request_timeout_seconds),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


def load_config() -> AppConfig:
    """Load configuration from environment (``.env`` is honoured).

    Raises ``ValueError`` at startup for unusable polling or timeout values.
    """
    load_dotenv(find_dotenv(usecwd=True))

    api_key = os.getenv("FREEPIK_API_KEY") or None
    if api_key is None:
        logger.warning("config.api_key_missing: generation requests will be rejected")

    config = AppConfig(
        api_key=api_key,
        api_url=os.getenv("FREEPIK_API_URL", DEFAULT_FREEPIK_API_URL).rstrip("/"),
        submit_timeout_seconds=float(os.getenv("FREEPIK_SUBMIT_TIMEOUT_SECONDS", 30)),
        poll_max_attempts=int(os.getenv("FREEPIK_POLL_MAX_ATTEMPTS", 60)),
        poll_interval_seconds=float(os.getenv("FREEPIK_POLL_INTERVAL_SECONDS", 2)),
        poll_request_timeout_seconds=float(os.getenv("FREEPIK_POLL_REQUEST_TIMEOUT_SECONDS", 15)),
        frontend_root=Path(os.getenv("FRONTEND_ROOT", ".")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 3000)),
    )
    config.validate()
    return config
