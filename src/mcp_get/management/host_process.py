"""Detecting and restarting the Claude desktop application."""

import asyncio
import os
import platform
from abc import ABC, abstractmethod
from typing import Optional

import psutil
import structlog

from ..prompts import Prompter

logger = structlog.get_logger(__name__)

DEFAULT_RESTART_DELAY = 2.0


class HostCommandError(Exception):
    """A kill or relaunch command for the host app failed."""

    def __init__(self, command: str, returncode: Optional[int], stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command '{command}' exited with {returncode}: {stderr}")


class HostProcessController(ABC):
    """Liveness probe and restart for the host app on one platform."""

    kill_command: str = ""
    launch_command: str = ""

    def __init__(self, restart_delay: float = DEFAULT_RESTART_DELAY):
        self.restart_delay = restart_delay

    @abstractmethod
    def _matches(self, process: psutil.Process) -> bool:
        """Return True if the process is the host app."""

    async def is_host_running(self) -> bool:
        """Check the process list for the host app.

        Any failure while listing processes counts as not running.
        """
        own_pid = os.getpid()
        try:
            for process in psutil.process_iter(["name", "cmdline"]):
                if process.pid == own_pid:
                    continue
                try:
                    if self._matches(process):
                        return True
                except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                    continue
        except Exception as e:
            logger.warning("Failed to query running processes", error=str(e))
            return False
        return False

    async def restart_host(self) -> None:
        """Close the host app, wait for it to settle, then launch it again.

        Raises:
            HostCommandError: If the kill command fails
            OSError: If a command cannot be spawned
        """
        await self._run(self.kill_command)
        await asyncio.sleep(self.restart_delay)
        await self._spawn(self.launch_command)

    async def _run(self, command: str) -> None:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate()
        if process.returncode != 0:
            raise HostCommandError(
                command, process.returncode, stderr.decode(errors="replace").strip()
            )

    async def _spawn(self, command: str) -> None:
        # The relaunched app must outlive us, so it is not awaited.
        await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
            start_new_session=True,
        )


class WindowsHostController(HostProcessController):
    kill_command = 'taskkill /F /IM "Claude.exe"'
    launch_command = 'start "" "Claude.exe"'

    def _matches(self, process: psutil.Process) -> bool:
        return (process.info.get("name") or "") == "Claude.exe"


class MacHostController(HostProcessController):
    kill_command = 'killall "Claude"'
    launch_command = 'open -a "Claude"'

    def _matches(self, process: psutil.Process) -> bool:
        return (process.info.get("name") or "") == "Claude"


class LinuxHostController(HostProcessController):
    kill_command = 'pkill -f "claude"'
    launch_command = "claude"

    def _matches(self, process: psutil.Process) -> bool:
        cmdline = " ".join(process.info.get("cmdline") or [])
        return "claude" in cmdline


class UnsupportedHostController(HostProcessController):
    """Platforms without a known Claude desktop app: never running."""

    def _matches(self, process: psutil.Process) -> bool:
        return False

    async def is_host_running(self) -> bool:
        return False

    async def restart_host(self) -> None:
        raise HostCommandError("restart", None, f"unsupported platform {platform.system()}")


def get_host_controller(
    restart_delay: float = DEFAULT_RESTART_DELAY, system: Optional[str] = None
) -> HostProcessController:
    """Pick the controller for the current (or given) platform."""
    system = (system or platform.system()).lower()
    controllers = {
        "windows": WindowsHostController,
        "darwin": MacHostController,
        "linux": LinuxHostController,
    }
    controller_class = controllers.get(system, UnsupportedHostController)
    return controller_class(restart_delay=restart_delay)


async def prompt_for_restart(
    controller: HostProcessController, prompter: Prompter
) -> bool:
    """Offer to restart Claude so configuration changes take effect.

    Nothing is asked when Claude is not running. A failed restart is
    reported but never raised.

    Returns:
        True if the user asked for a restart
    """
    if not await controller.is_host_running():
        return False

    should_restart = prompter.confirm(
        "Would you like to restart the Claude desktop app to apply changes?",
        default=True,
    )
    if not should_restart:
        return False

    prompter.echo("Restarting Claude desktop app...")
    try:
        await controller.restart_host()
    except Exception as e:
        logger.error("Failed to restart Claude desktop app", error=str(e))
        prompter.echo(f"Failed to restart Claude desktop app: {e}")
        return True

    prompter.echo("Claude desktop app has been restarted.")
    return True
