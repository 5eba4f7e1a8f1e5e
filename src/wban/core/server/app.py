"""WBAN Vitals Simulator MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from wban.core.config.settings import get_settings
from wban.domains.vitals.connectors.sources import seeded_source
from wban.domains.vitals.domain_logic.generator_registry import GeneratorRegistry
from wban.domains.vitals.domain_logic.signal_models import WBAN_POSITIONS
from wban.domains.vitals.domain_logic.wban_generator import BLEWBANDataGenerator
from wban.domains.vitals.prompts.monitoring_prompts import register_monitoring_prompts
from wban.domains.vitals.resources.sensors import register_sensor_resources
from wban.domains.vitals.tools.network_tools import register_network_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "WBAN Vitals Simulator"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    registry_override: GeneratorRegistry | None = None,
) -> FastMCP:
    """Create and configure the WBAN MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Builds the per-patient generator registry
    3. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Simulated wireless body-area network (BLE) patient monitor. "
            "Poll wban_network_reading every few seconds per patient to obtain "
            "synthetic BLE frames, per-sensor vitals, an aggregated reading and "
            "network statistics. All data is simulated."
        ),
    )

    # --- Initialize generator registry ---
    if registry_override is not None:
        registry = registry_override
    else:
        def _new_generator(patient_id: str) -> BLEWBANDataGenerator:
            return BLEWBANDataGenerator(
                random_source=seeded_source(settings.wban_random_seed, patient_id),
                encryption_status=settings.wban_encryption_label,
            )

        registry = GeneratorRegistry(_new_generator, max_patients=settings.wban_max_patients)
        if settings.wban_random_seed is not None:
            logger.info("Reproducible sessions enabled (seed %d)", settings.wban_random_seed)

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "sensors_per_patient": len(WBAN_POSITIONS),
            "patients_tracked": registry.patient_ids(),
            "temperature_unit": settings.wban_temperature_unit,
        }

    register_network_tools(
        server, registry, temperature_unit=settings.wban_temperature_unit
    )
    logger.info("WBAN network tools registered")

    # --- Register resources ---
    register_sensor_resources(server, WBAN_POSITIONS)

    # --- Register prompts ---
    register_monitoring_prompts(server)

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
