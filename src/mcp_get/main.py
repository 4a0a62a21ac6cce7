"""Main CLI entry point for mcp-get.

This module provides the command-line interface for installing MCP server
packages into the Claude desktop application.
"""

import asyncio
import sys
import traceback
from typing import Optional

import click

from .__version__ import __version__
from .config.exceptions import ConfigurationError, PackageNotFoundError
from .config.host_config import sanitize_server_name
from .config.logging import configure_logging
from .config.settings import get_settings
from .cli_utils import print_status_indicator, print_table
from .installation import InstallationManager


class CLIError(Exception):
    """Base CLI error with user-friendly messages."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)


def handle_cli_error(error: Exception, ctx: Optional[click.Context] = None):
    """Global CLI error handler."""
    if isinstance(error, CLIError):
        click.echo(f"Error: {error.message}", err=True)
        if error.suggestion:
            click.echo(f"Suggestion: {error.suggestion}", err=True)
    elif isinstance(error, ConfigurationError):
        click.echo(f"Error: {error}", err=True)
    elif isinstance(error, click.ClickException):
        error.show()
    else:
        verbose = bool(ctx and ctx.obj and ctx.obj.get("verbose"))
        click.echo(f"Unexpected error: {str(error)}", err=True)
        if verbose:
            click.echo(traceback.format_exc(), err=True)
        else:
            click.echo("Run with --verbose for detailed error information", err=True)

    sys.exit(1)


def _get_manager() -> InstallationManager:
    return InstallationManager(settings=get_settings())


@click.group()
@click.version_option(version=__version__, prog_name="mcp-get")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with detailed logging",
)
@click.option(
    "--quiet", "-q", is_flag=True, help="Only log errors"
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool):
    """Install MCP servers into the Claude desktop app.

    \b
    Examples:
      mcp-get list
      mcp-get info @modelcontextprotocol/server-github
      mcp-get install @modelcontextprotocol/server-github
      mcp-get uninstall @modelcontextprotocol/server-github
    """
    if verbose and quiet:
        raise click.BadParameter("Cannot use both --verbose and --quiet options")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    settings = get_settings()
    level = settings.logging.level
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"

    log_file = settings.get_log_file_path()
    configure_logging(
        level=level,
        log_file=str(log_file) if log_file else None,
        json_logs=settings.logging.json_format,
    )


@cli.command()
@click.argument("package_name")
@click.pass_context
def install(ctx: click.Context, package_name: str):
    """Install an MCP server package.

    Prompts for any environment variables the package needs, registers the
    server in the Claude desktop config and offers to restart Claude.
    """
    try:
        manager = _get_manager()
        package = manager.catalog.get(package_name)
        if package is None:
            raise CLIError(
                f"Package {package_name} not found",
                "Run 'mcp-get list' to see available packages",
            )

        click.echo(f"Installing {package.name}...")
        asyncio.run(manager.install_package(package))
    except Exception as e:
        handle_cli_error(e, ctx)


@cli.command()
@click.argument("package_name")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def uninstall(ctx: click.Context, package_name: str, yes: bool):
    """Remove an MCP server package from the Claude desktop config."""
    try:
        if not yes and not click.confirm(
            f"Are you sure you want to uninstall {package_name}?", default=True
        ):
            click.echo("Uninstallation cancelled.")
            return

        manager = _get_manager()
        asyncio.run(manager.uninstall_package(package_name))
    except Exception as e:
        handle_cli_error(e, ctx)


@cli.command()
@click.argument("package_name")
@click.pass_context
def info(ctx: click.Context, package_name: str):
    """Show catalog details for a package."""
    try:
        manager = _get_manager()
        try:
            package = manager.get_package_details(package_name)
        except PackageNotFoundError as e:
            raise CLIError(str(e), "Run 'mcp-get list' to see available packages")

        click.secho(package.name, bold=True)
        if package.description:
            click.echo(f"  {package.description}")
        click.echo(f"  Runtime:   {package.runtime}")
        if package.vendor:
            click.echo(f"  Vendor:    {package.vendor}")
        if package.license:
            click.echo(f"  License:   {package.license}")
        if package.source_url:
            click.echo(f"  Source:    {package.source_url}")
        if package.homepage:
            click.echo(f"  Homepage:  {package.homepage}")

        if package.required_env_vars:
            click.echo("  Environment variables:")
            for key, requirement in package.required_env_vars.items():
                marker = "required" if requirement.required else "optional"
                click.echo(f"    {key} ({marker}): {requirement.description}")

        if package.is_installed:
            print_status_indicator("success", "  Installed")
        else:
            print_status_indicator("info", "  Not installed")
    except Exception as e:
        handle_cli_error(e, ctx)


@cli.command(name="list")
@click.argument("query", required=False)
@click.pass_context
def list_packages(ctx: click.Context, query: Optional[str]):
    """List catalog packages, optionally filtered by QUERY."""
    try:
        manager = _get_manager()
        packages = manager.catalog.search(query) if query else manager.catalog.load()
        if not packages:
            click.echo("No packages found.")
            return

        servers = manager.list_installed_servers()
        rows = [
            [
                package.name,
                package.runtime,
                "yes" if sanitize_server_name(package.name) in servers else "",
                package.description,
            ]
            for package in packages
        ]
        print_table(["Name", "Runtime", "Installed", "Description"], rows)
    except Exception as e:
        handle_cli_error(e, ctx)


@cli.command()
@click.pass_context
def installed(ctx: click.Context):
    """List the servers registered in the Claude desktop config."""
    try:
        manager = _get_manager()
        servers = manager.list_installed_servers()
        if not servers:
            click.echo("No MCP servers are installed.")
            return

        rows = []
        for name, entry in sorted(servers.items()):
            entry = entry if isinstance(entry, dict) else {}
            command = " ".join(
                [str(entry.get("command", ""))] + [str(a) for a in entry.get("args", [])]
            ).strip()
            rows.append([name, command, ", ".join(sorted(entry.get("env") or {}))])

        print_table(["Server", "Command", "Environment"], rows)
        click.echo(f"\nConfig file: {manager.config_store.get_config_path()}")
    except Exception as e:
        handle_cli_error(e, ctx)


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
