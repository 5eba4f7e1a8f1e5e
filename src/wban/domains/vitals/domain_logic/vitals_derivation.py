"""Vitals derivation: BLE frame characteristics -> per-sensor vital signs.

Each placement walks a fixed subset of vitals (see PLACEMENT_WALKS); the walk
is seeded from the device's previous reading. All outputs are clamped to
their physiological band both before and after signal-quality scaling.
"""

from __future__ import annotations

import math

from wban.domains.vitals.connectors import RandomSource
from wban.domains.vitals.domain_logic.signal_models import (
    BATTERY_DRAIN_PER_FRAME,
    BATTERY_FLOOR,
    PLACEMENT_WALKS,
    QUALITY_FACTORS,
    VITAL_BANDS,
    BLEFrame,
    BloodPressure,
    ConnectionStatus,
    SignalQuality,
    VitalsReading,
)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round to ``ndigits`` places with exact halves going up (-2.5 -> -2)."""
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def classify_signal_quality(frame: BLEFrame) -> SignalQuality:
    """Classify a frame; evaluated in precedence order poor -> fair -> good."""
    if frame.rssi < -70 or not frame.frame_decoded:
        return SignalQuality.POOR
    if frame.rssi < -60:
        return SignalQuality.FAIR
    if frame.rssi < -50:
        return SignalQuality.GOOD
    return SignalQuality.EXCELLENT


def classify_connection(signal_strength: float) -> ConnectionStatus:
    if signal_strength > 70:
        return ConnectionStatus.CONNECTED
    if signal_strength > 40:
        return ConnectionStatus.WEAK
    return ConnectionStatus.DISCONNECTED


def battery_level(frames_emitted: int) -> float:
    """Battery drains with every frame the generator has emitted, floored at 10%."""
    return round(max(BATTERY_FLOOR, 100 - frames_emitted * BATTERY_DRAIN_PER_FRAME), 2)


def bounded_walk(
    rng: RandomSource,
    vital: str,
    last_value: float | None,
    stability: float,
    amplitude: float,
) -> float:
    """One bounded random-walk step for ``vital``.

    ``clamp(last * stability + U(-amplitude/2, amplitude/2), lo, hi)``, where
    ``last`` falls back to the band default on first observation.
    """
    band = VITAL_BANDS[vital]
    base = band.default if last_value is None else last_value
    variation = (rng.random() - 0.5) * amplitude
    return band.clamp(base * stability + variation)


def _scale(vital: str, value: float, factor: float) -> float:
    band = VITAL_BANDS[vital]
    if vital == "temperature":
        return band.clamp(round_half_up(value * factor, 1))
    return int(band.clamp(round_half_up(value * factor)))


def derive_vitals(
    rng: RandomSource,
    frame: BLEFrame,
    last: VitalsReading | None,
    *,
    frames_emitted: int,
) -> VitalsReading:
    """Derive one reading from a frame and the device's previous reading.

    Pure with respect to generator state: the caller stores the result as the
    device's new last reading.

    Args:
        rng: Uniform random source (one draw per walked vital).
        frame: The frame just synthesized for this device.
        last: The device's previous reading, or None on first observation.
        frames_emitted: Generator-wide frame counter, drives battery drain.
    """
    quality = classify_signal_quality(frame)

    values = {name: band.default for name, band in VITAL_BANDS.items()}
    for rule in PLACEMENT_WALKS[frame.placement]:
        previous = last.vital_value(rule.vital) if last is not None else None
        values[rule.vital] = bounded_walk(
            rng, rule.vital, previous, rule.stability, rule.amplitude
        )

    factor = QUALITY_FACTORS[quality]
    scaled = {name: _scale(name, value, factor) for name, value in values.items()}

    return VitalsReading(
        heart_rate=scaled["heart_rate"],
        blood_pressure=BloodPressure(
            systolic=scaled["systolic"],
            diastolic=scaled["diastolic"],
        ),
        oxygen_saturation=scaled["oxygen_saturation"],
        temperature=scaled["temperature"],
        timestamp=frame.timestamp,
        signal_quality=quality,
        battery_level=battery_level(frames_emitted),
        connection_status=classify_connection(frame.signal_strength),
    )
