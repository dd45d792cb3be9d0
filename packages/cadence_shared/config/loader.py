"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI/init params
2) Environment variables
3) ~/.config/cadence/cadence.yaml
4) Model defaults

Environment variable format:
- Prefix: ``CADENCE_``
- Nested keys: ``__`` separator
- Example: ``CADENCE_LOGGING__LEVEL=DEBUG`` -> ``logging.level = "DEBUG"``
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Mapping

from .models import DEFAULT_CONFIG_PATH, CadenceSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> CadenceSettings:
    """Resolve ``CadenceSettings`` from init params, env, YAML, then defaults.

    ``environ`` replaces the process environment for the duration of the load
    so callers (and tests) can pin the env source explicitly.
    """
    resolved_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    settings_cls = type(
        "ResolvedCadenceSettings",
        (CadenceSettings,),
        {"_config_path": resolved_path},
    )
    with _environment(environ):
        return settings_cls(**dict(cli_params or {}))


@contextmanager
def _environment(environ: Mapping[str, str] | None) -> Iterator[None]:
    """Temporarily swap ``os.environ`` when an explicit mapping is supplied."""
    if environ is None:
        yield
        return
    saved = dict(os.environ)
    os.environ.clear()
    os.environ.update(environ)
    try:
        yield
    finally:
        os.environ.clear()
        os.environ.update(saved)
