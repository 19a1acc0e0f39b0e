"""Granian entrypoint for the Synergy portal API.

``create_app`` serves the portal routes for the provider configured in the
YAML file named by ``SYNERGY_CONFIG_PATH``, or only the probes when that
variable is unset. ``main`` binds to ``SYNERGY_HOST``/``SYNERGY_PORT``
(default ``0.0.0.0:8080``) and applies ``SYNERGY_LOG_LEVEL``.
"""

from __future__ import annotations

import os
import typing as typ

from synergy.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(raw: str) -> int:
    """Return ``raw`` as a TCP port, exiting the process when it is invalid."""
    try:
        port = int(raw)
    except ValueError:
        port = None
    if port is None or not _MIN_PORT <= port <= _MAX_PORT:
        log_error(
            logger,
            "SYNERGY_PORT must be an integer in %d-%d, got %r",
            _MIN_PORT,
            _MAX_PORT,
            raw,
        )
        raise SystemExit(1)
    return port


def create_app() -> falcon.asgi.App:
    """Build the ASGI app; raises ``SynergyConfigError`` on a bad config file."""
    from synergy.api.app import create_app as _create_api_app

    config_path = os.environ.get("SYNERGY_CONFIG_PATH")

    if config_path is None:
        log_warning(logger, "SYNERGY_CONFIG_PATH not set; serving probes only")
        return _create_api_app()

    from synergy.api.app import AppDependencies
    from synergy.api.source import LazySynergyApi
    from synergy.config import load_config_tree, read_config

    provider_config = read_config(load_config_tree(config_path))
    log_info(
        logger,
        "Loaded %s provider configuration from %s",
        provider_config.provider,
        config_path,
    )
    deps = AppDependencies(
        api_source=LazySynergyApi(provider_config),
        provider_config=provider_config,
    )
    return _create_api_app(deps)


def main() -> None:
    """Serve :func:`create_app` with Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("SYNERGY_HOST", "0.0.0.0")  # noqa: S104
    port = _parse_port(os.environ.get("SYNERGY_PORT", "8080"))
    requested_level = os.environ.get("SYNERGY_LOG_LEVEL", "INFO")
    level, unknown = configure_logging(requested_level)
    if unknown:
        log_warning(
            logger, "Unknown SYNERGY_LOG_LEVEL %r; using %s", requested_level, level
        )

    log_info(logger, "Serving Synergy on %s:%d (log_level=%s)", host, port, level)
    Granian(
        "synergy.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    ).serve()


if __name__ == "__main__":
    main()
