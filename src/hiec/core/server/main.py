"""Command-line launcher for the Health Insight server (``hiec-server``)."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from hiec.core.config.settings import Settings, get_settings
from hiec.core.server.app import create_app

logger = logging.getLogger(__name__)

_LOOPBACK_NAMES = frozenset({"localhost", "localhost.localdomain"})


def _is_loopback_host(host: str) -> bool:
    if host.lower() in _LOOPBACK_NAMES:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _check_bind_address(settings: Settings) -> None:
    """Diary data is personal; only serve it beyond this machine on request."""
    if settings.hiec_allow_insecure_bind or _is_loopback_host(settings.hiec_host):
        return
    raise RuntimeError(
        f"HIEC_HOST={settings.hiec_host} is a non-loopback address and the "
        "server has no authentication. Bind to 127.0.0.1, or set "
        "HIEC_ALLOW_INSECURE_BIND=true if another layer guards access."
    )


def run() -> None:
    """Serve the symptom and weather tools over Streamable HTTP."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.hiec_log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _check_bind_address(settings)

    server = create_app()
    logger.info(
        "Health Insight listening on http://%s:%d (default period: %s)",
        settings.hiec_host,
        settings.hiec_port,
        settings.default_period,
    )
    server.run(
        transport="streamable-http",
        host=settings.hiec_host,
        port=settings.hiec_port,
    )


if __name__ == "__main__":
    run()
