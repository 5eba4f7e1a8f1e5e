"""Alert classification for aggregated vitals.

Thresholds follow the bedside monitoring view: temperatures in Fahrenheit.
Critical thresholds are checked before warning thresholds.
"""

from __future__ import annotations

from typing import Literal

from wban.domains.vitals.domain_logic.signal_models import VitalsReading

AlertLevel = Literal["normal", "warning", "critical"]

# (critical_low, critical_high, warning_low, warning_high); None = unbounded
_STATUS_THRESHOLDS: dict[str, tuple[float | None, float | None, float | None, float | None]] = {
    "heart_rate": (50, 120, 60, 100),
    "oxygen_saturation": (90, None, 95, None),
    "temperature": (95.0, 102.0, 97.0, 100.4),
}


def _outside(value: float, lo: float | None, hi: float | None) -> bool:
    return (lo is not None and value < lo) or (hi is not None and value > hi)


def vital_status(vital: str, value: float) -> AlertLevel:
    """Classify one vital value. Vitals without thresholds are always normal."""
    thresholds = _STATUS_THRESHOLDS.get(vital)
    if thresholds is None:
        return "normal"
    crit_lo, crit_hi, warn_lo, warn_hi = thresholds
    if _outside(value, crit_lo, crit_hi):
        return "critical"
    if _outside(value, warn_lo, warn_hi):
        return "warning"
    return "normal"


def vital_statuses(vitals: VitalsReading) -> dict[str, AlertLevel]:
    return {
        "heart_rate": vital_status("heart_rate", vitals.heart_rate),
        "oxygen_saturation": vital_status("oxygen_saturation", vitals.oxygen_saturation),
        "temperature": vital_status("temperature", vitals.temperature),
    }


def alert_level(vitals: VitalsReading) -> AlertLevel:
    """Overall patient alert level for one aggregated reading."""
    hr = vitals.heart_rate
    spo2 = vitals.oxygen_saturation
    abnormal = (
        hr > 100
        or hr < 60
        or vitals.blood_pressure.systolic > 140
        or spo2 < 95
        or vitals.temperature > 100.4
    )
    if not abnormal:
        return "normal"
    if hr > 120 or spo2 < 90:
        return "critical"
    return "warning"
