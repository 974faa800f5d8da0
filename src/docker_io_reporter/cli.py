"""CLI for the Docker IO reporter.

Two commands, both running the same collection pipeline:
- host: serve metrics over HTTP, one fresh collection per scrape
- save: collect once and write to a file or standard output
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console

from docker_io_reporter import __version__
from docker_io_reporter.core.config import ReporterConfig, load_config
from docker_io_reporter.core.constants import ENV_CONFIG, ENV_HOST, ENV_LOG_LEVEL, ENV_PORT
from docker_io_reporter.core.errors import EnumerationError
from docker_io_reporter.delivery.server import serve
from docker_io_reporter.delivery.sinks import save_stats
from docker_io_reporter.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="docker-io-reporter",
    help="Report Docker container block I/O statistics from cgroup v2 in Prometheus text format.",
    add_completion=False,
    no_args_is_help=True,
)

# stdout is reserved for metrics output
console = Console(stderr=True)
logger = get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"docker-io-reporter {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Program that uses cgroup v2 to report container IO statistics."""


def _resolve_config(config_path: Path | None, **overrides: Any) -> ReporterConfig:
    """Merge CLI/environment overrides over the config file (or defaults)."""
    try:
        base = load_config(config_path) if config_path is not None else ReporterConfig()
        update = {key: value for key, value in overrides.items() if value is not None}
        return ReporterConfig.model_validate({**base.model_dump(), **update})
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[bold red]Error loading config: {e}[/]")
        raise typer.Exit(1) from e


@app.command()
def host(
    ip: str | None = typer.Argument(
        None,
        envvar=ENV_HOST,
        show_default="0.0.0.0",
        help="IP to which the server will bind. 0.0.0.0 means any IPv4 address.",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        envvar=ENV_PORT,
        show_default="9100",
        help="Port on which to start the server.",
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", envvar=ENV_CONFIG, help="Path to configuration file (YAML/JSON)"
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", "-l", envvar=ENV_LOG_LEVEL, help="Logging level"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
) -> None:
    """Host a Prometheus-compatible web server."""
    setup_logging(level=log_level, json_format=json_logs, rich_console=not json_logs)
    reporter_config = _resolve_config(config, host=ip, port=port)
    serve(reporter_config)


@app.command()
def save(
    path: Path | None = typer.Argument(
        None,
        help="Path of file to which the output will be saved. By default, outputs to standard output.",
    ),
    atomic: bool = typer.Option(
        False,
        "--atomic",
        "-a",
        help="Write to a temp file first, then atomically rename it over PATH. Requires PATH.",
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", envvar=ENV_CONFIG, help="Path to configuration file (YAML/JSON)"
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", "-l", envvar=ENV_LOG_LEVEL, help="Logging level"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
) -> None:
    """Save current stats to a file or standard output."""
    if atomic and path is None:
        raise typer.BadParameter("--atomic requires PATH to be set", param_hint="'--atomic'")

    setup_logging(level=log_level, json_format=json_logs, rich_console=not json_logs)
    reporter_config = _resolve_config(config)

    try:
        count = save_stats(reporter_config, path=path, atomic=atomic)
    except EnumerationError as e:
        console.print(f"[bold red]Error collecting stats: {e}[/]")
        raise typer.Exit(1) from e
    except OSError as e:
        console.print(f"[bold red]Error writing output: {e}[/]")
        raise typer.Exit(1) from e

    logger.info(f"Saved {count} samples")


if __name__ == "__main__":
    app()
