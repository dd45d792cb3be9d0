"""Process entrypoint for the Cadence HTTP API."""

from __future__ import annotations

from fastapi import FastAPI

from packages.cadence_core.app import create_api
from packages.cadence_core.auth import build_current_principal
from packages.cadence_core.services import build_services
from packages.cadence_shared.clock import SystemClock
from packages.cadence_shared.config import CadenceSettings, load_settings
from packages.cadence_shared.http import HttpClient, UserinfoAccessTokenVerifier, run_app
from packages.cadence_shared.logging import configure_logging, get_logger
from resources.substrates.postgres import PostgresRuntime

_LOGGER = get_logger(__name__)


def build_application(
    settings: CadenceSettings,
    *,
    runtime: PostgresRuntime,
    http_client: HttpClient,
) -> FastAPI:
    """Wire services, authentication and routes over shared runtimes."""
    clock = SystemClock()
    services = build_services(settings=settings, sessions=runtime.sessions, clock=clock)
    verifier = UserinfoAccessTokenVerifier(
        http_client=http_client, userinfo_path=settings.auth.userinfo_path
    )
    return create_api(
        http=settings.http,
        services=services,
        current_principal=build_current_principal(verifier=verifier, users=services.users),
        database_ready=runtime.is_healthy,
        clock=clock,
    )


def serve(settings: CadenceSettings) -> None:
    """Build the app from ``settings`` and serve it until interrupted."""
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )
    runtime = PostgresRuntime.from_settings(settings.postgres)
    http_client = HttpClient(
        base_url=settings.auth.issuer_url,
        timeout_seconds=settings.auth.timeout_seconds,
    )
    try:
        app = build_application(settings, runtime=runtime, http_client=http_client)
        _LOGGER.info(
            "cadence API starting: host=%s port=%s", settings.http.host, settings.http.port
        )
        run_app(
            app,
            host=settings.http.host,
            port=settings.http.port,
            log_level=settings.logging.level.lower(),
        )
    finally:
        http_client.close()
        runtime.dispose()
        _LOGGER.info("cadence API stopped")


def main() -> None:
    """Serve the API with settings resolved from env and YAML."""
    serve(load_settings())


if __name__ == "__main__":
    main()
