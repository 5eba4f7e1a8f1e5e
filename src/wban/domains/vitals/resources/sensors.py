"""MCP Resources for sensor catalog discovery."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from wban.domains.vitals.domain_logic.signal_models import SensorPosition


def catalog_payload(positions: Sequence[SensorPosition]) -> dict:
    return {
        "sensor_count": len(positions),
        "sensors": [p.to_dict() for p in positions],
    }


def register_sensor_resources(mcp: FastMCP, positions: Sequence[SensorPosition]) -> None:
    """Register the sensor catalog resource on the MCP server."""

    @mcp.resource("wban://sensors/catalog")
    def sensor_catalog_resource() -> str:
        """Discover the body-area sensors every patient network reports from."""
        return json.dumps(catalog_payload(positions), indent=2)
