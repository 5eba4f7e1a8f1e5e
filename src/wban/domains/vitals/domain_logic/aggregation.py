"""Consensus aggregation of per-sensor readings and network statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from wban.domains.vitals.domain_logic.signal_models import (
    BLEFrame,
    ConnectionStatus,
    NetworkStats,
    SignalQuality,
    VitalsReading,
)
from wban.domains.vitals.domain_logic.vitals_derivation import round_half_up


def select_base_reading(readings: Sequence[VitalsReading]) -> VitalsReading:
    """First excellent reading, else first non-poor, else the first reading."""
    for r in readings:
        if r.signal_quality is SignalQuality.EXCELLENT:
            return r
    for r in readings:
        if r.signal_quality is not SignalQuality.POOR:
            return r
    return readings[0]


def aggregate_vitals(readings: Sequence[VitalsReading]) -> VitalsReading:
    """Fold several sensor readings into one consensus reading.

    Heart rate is the rounded mean over readings reporting a positive rate;
    blood pressure, SpO2, temperature, timestamp and battery come from the
    base reading. Quality collapses to good/fair; connection is connected
    only when every sensor is.

    Raises:
        ValueError: If ``readings`` is empty.
    """
    if not readings:
        raise ValueError("At least one reading is required")

    base = select_base_reading(readings)

    hr_values = [r.heart_rate for r in readings if r.heart_rate > 0]
    if hr_values:
        heart_rate = int(round_half_up(sum(hr_values) / len(hr_values)))
    else:
        heart_rate = base.heart_rate

    non_poor = sum(1 for r in readings if r.signal_quality is not SignalQuality.POOR)
    quality = SignalQuality.GOOD if non_poor > len(readings) / 2 else SignalQuality.FAIR

    connected = [r.connection_status is ConnectionStatus.CONNECTED for r in readings]
    if all(connected):
        connection = ConnectionStatus.CONNECTED
    elif any(connected):
        connection = ConnectionStatus.WEAK
    else:
        connection = ConnectionStatus.DISCONNECTED

    return replace(
        base,
        heart_rate=heart_rate,
        signal_quality=quality,
        connection_status=connection,
    )


def compute_network_stats(
    frames: Sequence[BLEFrame],
    *,
    total_devices: int,
    encryption_status: str = "AES-256",
) -> NetworkStats:
    """Summarize one tick of frames.

    Raises:
        ValueError: If ``frames`` is empty or ``total_devices`` is not positive.
    """
    if not frames:
        raise ValueError("At least one frame is required")
    if total_devices <= 0:
        raise ValueError("total_devices must be positive")

    active = sum(1 for f in frames if f.frame_decoded)
    average_rssi = sum(f.rssi for f in frames) / len(frames)
    packet_loss = (total_devices - active) / total_devices * 100

    return NetworkStats(
        total_devices=total_devices,
        active_devices=active,
        average_rssi=round_half_up(average_rssi, 1),
        packet_loss_rate=round_half_up(packet_loss, 1),
        encryption_status=encryption_status,
    )
