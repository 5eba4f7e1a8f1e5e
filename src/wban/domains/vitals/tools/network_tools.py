"""MCP tools for polling simulated WBAN network readings."""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from wban.domains.vitals.domain_logic.generator_registry import GeneratorRegistry
    from wban.domains.vitals.domain_logic.signal_models import NetworkReading

from wban.domains.vitals.domain_logic.alerts import alert_level, vital_statuses
from wban.domains.vitals.domain_logic.signal_models import WBAN_POSITIONS
from wban.domains.vitals.domain_logic.vitals_derivation import round_half_up
from wban.domains.vitals.resources.sensors import catalog_payload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def _validate_patient_id(value: str | None) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("patient_id must be a non-empty string")
    return value


def fahrenheit_to_celsius(value: float) -> float:
    return round_half_up((value - 32) * 5 / 9, 1)


def format_network_reading(
    reading: NetworkReading, *, temperature_unit: str = "fahrenheit"
) -> dict[str, Any]:
    """Serialize a reading with alert classification, in the reporting unit.

    Alerts are computed on the Fahrenheit values before any conversion.
    """
    payload = reading.to_dict()
    payload["alert_level"] = alert_level(reading.vitals)
    payload["vital_status"] = vital_statuses(reading.vitals)

    vitals = payload["vitals"]
    if temperature_unit == "celsius":
        vitals["temperature"] = fahrenheit_to_celsius(vitals["temperature"])
    vitals["temperature_unit"] = temperature_unit
    return payload


# ---------------------------------------------------------------------------
# Tool registration
# ---------------------------------------------------------------------------

def register_network_tools(
    mcp: FastMCP,
    registry: GeneratorRegistry,
    *,
    temperature_unit: str = "fahrenheit",
) -> None:
    """Register WBAN network reading tools on the MCP server."""

    @mcp.tool
    async def wban_network_reading(ctx: Context, patient_id: str) -> str:
        """Generate the next simulated body-area network reading for a patient.

        Each call advances the patient's sensor network by one tick: one BLE
        frame per sensor, per-sensor vitals, and an aggregated consensus
        reading with network statistics and an alert level.

        Args:
            patient_id: Patient identifier (e.g. 'P001').
        """
        start_time = time.monotonic()
        patient_id = _validate_patient_id(patient_id)
        generator = registry.get(patient_id)
        reading = generator.generate_network_reading(patient_id)
        payload = format_network_reading(reading, temperature_unit=temperature_unit)

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.debug(
            "wban_network_reading patient=%s alert=%s in %.1f ms",
            patient_id,
            payload["alert_level"],
            elapsed_ms,
        )
        return json.dumps(payload, indent=2)

    @mcp.tool
    async def wban_sensor_catalog(ctx: Context) -> str:
        """List the body-area sensors each patient network reports from."""
        return json.dumps(catalog_payload(WBAN_POSITIONS), indent=2)

    @mcp.tool
    async def wban_reset_patient(ctx: Context, patient_id: str) -> str:
        """Restart a patient's simulated session (battery and frame numbering reset).

        Args:
            patient_id: Patient identifier to reset.
        """
        patient_id = _validate_patient_id(patient_id)
        removed = registry.reset(patient_id)
        return json.dumps({
            "status": "reset" if removed else "not_tracked",
            "patient_id": patient_id,
        })
