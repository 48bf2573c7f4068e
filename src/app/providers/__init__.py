"""Provider integrations for the generation relay."""

from .providers_base import TaskPoller, TaskSubmitter
from .providers_freepik import FreepikSubmitter, FreepikTaskPoller

__all__ = [
    "TaskPoller",
    "TaskSubmitter",
    "FreepikSubmitter",
    "FreepikTaskPoller",
]
