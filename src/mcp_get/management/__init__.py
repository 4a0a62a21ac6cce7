"""Control of the Claude desktop application process."""

from .host_process import (
    HostCommandError,
    HostProcessController,
    get_host_controller,
    prompt_for_restart,
)

__all__ = [
    "HostCommandError",
    "HostProcessController",
    "get_host_controller",
    "prompt_for_restart",
]
