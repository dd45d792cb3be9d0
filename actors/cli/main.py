"""Cadence operator CLI implemented with Typer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from packages.cadence_core.main import serve
from packages.cadence_core.migrations import MigrationExecutionError, run_migrations
from packages.cadence_core.retention import run_retention
from packages.cadence_shared.config import CadenceSettings, load_settings
from packages.cadence_shared.errors import ErrorCategory
from packages.cadence_shared.http import HttpClient, HttpClientError

DOMAIN_ERROR_EXIT_CODE = 3
DEPENDENCY_ERROR_EXIT_CODE = 4


@dataclass(frozen=True)
class CliConfig:
    """Global CLI options shared by every command."""

    config_path: Path | None
    as_json: bool


def _emit_output(data: Any, as_json: bool) -> None:
    """Render command output in requested format."""
    if as_json:
        typer.echo(json.dumps(data, sort_keys=True, separators=(",", ":")))
        return
    if isinstance(data, dict) and "database" in data and "status" in data:
        typer.echo(_render_health(data))
        return
    if isinstance(data, dict):
        typer.echo("\n".join(f"{key}: {value}" for key, value in sorted(data.items())))
        return
    typer.echo(str(data))


def _emit_error(message: str, as_json: bool) -> None:
    """Render one failure to stderr."""
    if as_json:
        typer.echo(json.dumps({"error": message}), err=True)
        return
    typer.echo(f"error: {message}", err=True)


def _render_health(data: dict[str, Any]) -> str:
    """Render the API health payload for human scanning."""
    ready = data.get("status") == "ok"
    database_up = data.get("database") == "up"
    lines = [
        f"API: {_status_icon(ready)} {'healthy' if ready else 'degraded'}",
        f"  Database: {_status_icon(database_up)} {data.get('database', 'unknown')}",
    ]
    version = data.get("version")
    if isinstance(version, str) and version.strip() != "":
        lines.append(f"  Version: {version}")
    return "\n".join(lines)


def _status_icon(ready: bool) -> str:
    """Return status icon for one readiness value."""
    return "✅" if ready else "⚠️"


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


def _settings(cfg: CliConfig, overrides: dict[str, Any] | None = None) -> CadenceSettings:
    """Resolve settings with optional CLI overrides on top."""
    return load_settings(cli_params=overrides, config_path=cfg.config_path)


app = typer.Typer(no_args_is_help=True, help="Cadence command-line interface")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        envvar="CADENCE_CONFIG_PATH",
        help="Path to cadence.yaml",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Store global options for all commands."""
    ctx.obj = CliConfig(config_path=config, as_json=as_json)


@app.command("serve")
def serve_command(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="Listener host override"),
    port: int | None = typer.Option(None, min=1, max=65535, help="Listener port override"),
) -> None:
    """Run the HTTP API."""
    cfg = _require_config(ctx)
    http: dict[str, Any] = {}
    if host is not None:
        http["host"] = host
    if port is not None:
        http["port"] = port
    serve(_settings(cfg, {"http": http} if http else None))


@app.command("migrate")
def migrate_command(
    ctx: typer.Context,
    revision: str = typer.Option("head", help="Target Alembic revision"),
) -> None:
    """Upgrade the database schema."""
    cfg = _require_config(ctx)
    try:
        applied = run_migrations(settings=_settings(cfg).postgres, revision=revision)
    except MigrationExecutionError as exc:
        _emit_error(f"{exc}: {exc.__cause__}", cfg.as_json)
        raise typer.Exit(code=DEPENDENCY_ERROR_EXIT_CODE) from exc
    _emit_output({"revision": applied}, cfg.as_json)


@app.command("cleanup-energy")
def cleanup_energy_command(
    ctx: typer.Context,
    days: int | None = typer.Option(
        None, help="Days of energy logs to keep; defaults to energy.retention_days"
    ),
) -> None:
    """Delete energy logs older than the retention horizon."""
    cfg = _require_config(ctx)
    result = run_retention(settings=_settings(cfg), days_to_keep=days)
    if not result.ok:
        first = result.errors[0]
        _emit_error(first.message, cfg.as_json)
        code = (
            DEPENDENCY_ERROR_EXIT_CODE
            if first.category == ErrorCategory.DEPENDENCY
            else DOMAIN_ERROR_EXIT_CODE
        )
        raise typer.Exit(code=code)
    _emit_output({"deleted": result.value}, cfg.as_json)


@app.command("health")
def health_command(
    ctx: typer.Context,
    url: str | None = typer.Option(None, help="API base URL; defaults to http.host/port"),
    timeout: float = typer.Option(5.0, min=0.001, help="Request timeout in seconds"),
) -> None:
    """Query a running API's health route."""
    cfg = _require_config(ctx)
    if url is None:
        http = _settings(cfg).http
        url = f"http://{http.host}:{http.port}"
    try:
        with HttpClient(base_url=url, timeout_seconds=timeout) as client:
            response = client.request("GET", "/health", raise_for_status=False)
            data = response.json()
    except (HttpClientError, ValueError) as exc:
        _emit_error(str(exc), cfg.as_json)
        raise typer.Exit(code=DEPENDENCY_ERROR_EXIT_CODE) from exc
    _emit_output(data, cfg.as_json)
    if response.status_code != 200:
        raise typer.Exit(code=DEPENDENCY_ERROR_EXIT_CODE)


if __name__ == "__main__":
    app()
