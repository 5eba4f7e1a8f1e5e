"""WBAN server entry point: ``python -m wban.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from wban.core.config.settings import Settings, get_settings
from wban.core.server.app import create_app
from wban.domains.vitals.domain_logic.signal_models import WBAN_POSITIONS


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _describe_simulation(settings: Settings) -> str:
    """One-line summary of the simulation parameters for the startup log."""
    seed = "random" if settings.wban_random_seed is None else f"seed={settings.wban_random_seed}"
    return (
        f"{len(WBAN_POSITIONS)} sensors/patient, {seed}, "
        f"unit={settings.wban_temperature_unit}, "
        f"label={settings.wban_encryption_label}, "
        f"max_patients={settings.wban_max_patients}"
    )


def run() -> None:
    """Start the WBAN MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.wban_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    if not settings.wban_allow_insecure_bind and not _is_loopback_host(settings.wban_host):
        raise RuntimeError(
            "Refusing to bind the WBAN simulator to a non-loopback host: it has no auth layer. "
            "Set WBAN_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    if settings.wban_allow_insecure_bind:
        logger.warning("Serving simulated vitals on %s without authentication", settings.wban_host)

    logger.info(
        "Starting WBAN vitals simulator on %s:%d (%s)",
        settings.wban_host,
        settings.wban_port,
        _describe_simulation(settings),
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.wban_host,
        port=settings.wban_port,
    )


if __name__ == "__main__":
    run()
