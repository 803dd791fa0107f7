"""CLI entry point for agenda-service.

This module provides the command-line interface for the agenda service,
including commands for writing a config file, checking the backend and
running the HTTP server.

Usage:
    agenda-service                         # Start the HTTP server
    agenda-service --port 9000 serve       # Start on another port
    agenda-service init-config             # Create config file
    agenda-service check-backend           # Verify backend connectivity
    agenda-service --version               # Show version
    agenda-service --help                  # Show help
"""

import asyncio
import contextlib
import sys
from pathlib import Path
from typing import Any

import click
import tomli_w

from agenda_service import __version__
from agenda_service.config import Settings, get_config_path, load_settings_with_toml


def get_default_config() -> dict[str, Any]:
    """Get default configuration for init-config.

    Returns:
        Default configuration dictionary
    """
    return {
        "backend": {
            "url": "http://localhost:54321",
            "anon_key": "your-anon-key",
            "timeout_seconds": 30.0,
        },
        "server": {
            "host": "127.0.0.1",
            "port": 8080,
            "log_level": "INFO",
            "log_format": "json",
        },
        "client": {
            "state_path": "~/.local/state/agenda-service/state.json",
            "toast_duration_seconds": 3.0,
        },
        "calendar": {
            "upcoming_limit": 6,
        },
        "search": {
            "live_min_length": 3,
        },
    }


class ErrorCategory:
    """Error categories for clear error messages."""

    CONFIGURATION = "configuration"
    BACKEND = "backend"
    VALIDATION = "validation"
    INTERNAL = "internal"


def format_error(category: str, message: str, remediation: str) -> str:
    """Format error with category and remediation.

    Args:
        category: Error category
        message: Error message
        remediation: Suggested fix

    Returns:
        Formatted error string
    """
    return f"""
Error [{category.upper()}]: {message}

Remediation: {remediation}
"""


def load_cli_settings(options: dict[str, Any]) -> Settings:
    """Build settings from the config file, env vars and CLI overrides."""
    config_path = options.get("config_path")
    try:
        settings = load_settings_with_toml(Path(config_path) if config_path else None)
    except ValueError as e:
        click.echo(
            format_error(
                ErrorCategory.CONFIGURATION,
                "Invalid configuration",
                f"Fix the config file or AGENDA_* environment variables.\n\nDetails: {e}",
            ),
            err=True,
        )
        sys.exit(1)

    if options.get("log_level"):
        settings.log_level = options["log_level"]
    if options.get("host"):
        settings.http_host = options["host"]
    if options.get("port"):
        settings.http_port = options["port"]
    return settings


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    type=click.Path(exists=False),
    help="Override global config file path",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Override log level",
)
@click.option("--host", type=str, help="Override HTTP bind address")
@click.option("--port", type=int, help="Override HTTP port")
@click.version_option(version=__version__, prog_name="agenda-service")
@click.pass_context
def main(
    ctx: click.Context,
    config: str | None,
    log_level: str | None,
    host: str | None,
    port: int | None,
) -> None:
    """Personal agenda service: calendars, tasks and projects.

    Start the server with: agenda-service

    Configuration is loaded from (in priority order):
    1. CLI arguments
    2. Environment variables (AGENDA_*)
    3. Global config file (~/.config/agenda-service/config.toml)
    4. Built-in defaults
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["log_level"] = log_level
    ctx.obj["host"] = host
    ctx.obj["port"] = port

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@main.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Run the HTTP server until interrupted."""
    from agenda_service.__main__ import run_services
    from agenda_service.utils.logging import setup_logging

    settings = load_cli_settings(ctx.obj)
    if not settings.backend_anon_key.get_secret_value():
        click.echo("Warning: backend anon key not configured. Backend calls will be rejected.", err=True)
        click.echo(f"Add backend.anon_key to {get_config_path()}", err=True)

    setup_logging(settings)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run_services(settings))


@main.command()
@click.pass_context
def init_config(ctx: click.Context) -> None:
    """Create global configuration file with defaults.

    Creates the configuration file at ~/.config/agenda-service/config.toml
    (or %APPDATA%/agenda-service/config.toml on Windows).

    The file is created with restrictive permissions (600) because it
    holds the backend key.
    """
    config_path = Path(ctx.obj.get("config_path") or get_config_path())

    if config_path.exists():
        click.echo(f"Config file already exists: {config_path}")
        if not click.confirm("Overwrite?"):
            sys.exit(0)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(get_default_config(), f)

    # chmod may not be supported on Windows
    with contextlib.suppress(OSError):
        config_path.chmod(0o600)

    click.echo(f"Created config file: {config_path}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Edit the config file to set the backend URL and anon key")
    click.echo("  2. Verify connectivity: agenda-service check-backend")
    click.echo("  3. Start the server: agenda-service")


@main.command()
@click.pass_context
def check_backend(ctx: click.Context) -> None:
    """Verify backend connectivity.

    Returns exit code 0 if the auth service answers, 1 otherwise.
    """
    settings = load_cli_settings(ctx.obj)
    ok = asyncio.run(check_backend_connectivity(settings))
    sys.exit(0 if ok else 1)


async def check_backend_connectivity(settings: Settings) -> bool:
    """Check that the configured backend answers its health endpoint.

    Args:
        settings: Settings holding the backend URL and key

    Returns:
        True when the backend is reachable
    """
    from agenda_service.backend import BackendClient

    click.echo("Checking backend connectivity...")
    click.echo()
    click.echo(f"Backend ({settings.backend_url})... ", nl=False)

    client = BackendClient(
        url=settings.backend_url,
        anon_key=settings.backend_anon_key,
        timeout=settings.backend_timeout_seconds,
    )
    try:
        ok = await client.health_check()
    finally:
        await client.close()

    if ok:
        click.echo(click.style("OK", fg="green"))
        click.echo()
        click.echo(click.style("All checks passed!", fg="green"))
    else:
        click.echo(click.style("FAILED", fg="red"))
        click.echo(
            format_error(
                ErrorCategory.BACKEND,
                f"Cannot reach backend at {settings.backend_url}",
                "Check backend.url and backend.anon_key in the config file.",
            ),
            err=True,
        )
    return ok


if __name__ == "__main__":
    main()
