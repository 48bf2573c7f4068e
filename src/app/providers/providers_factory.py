"""Factory for provider submitters and pollers."""

from ..config import AppConfig
from .providers_base import TaskPoller, TaskSubmitter
from .providers_freepik import FreepikSubmitter, FreepikTaskPoller


def create_submitter(name: str, config: AppConfig) -> TaskSubmitter:
    """Instantiate the task submitter for provider ``name``."""
    if name.lower() == "freepik":
        return FreepikSubmitter(
            api_url=config.api_url,
            timeout_seconds=config.submit_timeout_seconds,
        )
    raise ValueError(f"Unsupported provider '{name}'")


def create_poller(name: str, config: AppConfig) -> TaskPoller:
    """Instantiate the task poller for provider ``name``."""
    if name.lower() == "freepik":
        return FreepikTaskPoller(
            api_url=config.api_url,
            request_timeout_seconds=config.poll_request_timeout_seconds,
        )
    raise ValueError(f"Unsupported provider '{name}'")
