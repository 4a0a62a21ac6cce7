"""Checks for the external tools a package runtime needs."""

import asyncio
import platform

import structlog

from ..prompts import Prompter

logger = structlog.get_logger(__name__)

UV_INSTALL_COMMANDS = {
    "windows": 'powershell -ExecutionPolicy ByPass -c "irm https://astral.sh/uv/install.ps1 | iex"',
    "default": "curl -LsSf https://astral.sh/uv/install.sh | sh",
}


async def check_uv_installed() -> bool:
    """Return True when ``uv --version`` runs successfully."""
    try:
        process = await asyncio.create_subprocess_exec(
            "uv",
            "--version",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        await process.communicate()
        return process.returncode == 0
    except (OSError, ValueError) as e:
        logger.debug("uv not available", error=str(e))
        return False


async def prompt_for_uv_install(prompter: Prompter) -> bool:
    """Offer to install uv.

    Returns:
        True if uv was installed, False if the user declined or it failed
    """
    should_install = prompter.confirm(
        "UV is required for Python MCP servers. Would you like to install it?",
        default=True,
    )
    if not should_install:
        return False

    system = platform.system().lower()
    command = UV_INSTALL_COMMANDS.get(system, UV_INSTALL_COMMANDS["default"])

    prompter.echo("Installing uv...")
    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate()
    except OSError as e:
        logger.warning("uv installation failed", error=str(e))
        prompter.echo("Failed to install uv. Please install it manually.")
        return False

    if process.returncode != 0:
        logger.warning(
            "uv installation failed",
            returncode=process.returncode,
            stderr=stderr.decode(errors="replace").strip(),
        )
        prompter.echo("Failed to install uv. Please install it manually.")
        return False

    prompter.echo("Successfully installed uv")
    return True
