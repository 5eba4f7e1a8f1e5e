"""Synthetic BLE frame generation.

Each helper consumes draws from an injected RandomSource, so a frame is
exactly reproducible from the sequence of draws. Draw order per frame:

    tx power (1), channel (1), antenna (1), rssi noise (1), decode (1),
    bit length (1), phase (5), I (10), Q (10)

Nothing here performs real demodulation; the phase and I/Q arrays only give
a frame the shape of a signal record.
"""

from __future__ import annotations

from datetime import datetime

from wban.domains.vitals.connectors import RandomSource
from wban.domains.vitals.domain_logic.signal_models import (
    BASE_FREQUENCY_HZ,
    BASE_RSSI_DBM,
    BLE_CHANNELS,
    CHANNEL_SPACING_HZ,
    FRAME_DECODE_SUCCESS_RATE,
    IQ_SAMPLES,
    PHASE_SAMPLES,
    RSSI_NOISE_SPAN_DBM,
    BLEFrame,
    Placement,
    TxPower,
)


def draw_channel(rng: RandomSource) -> int:
    """Draw a channel uniformly from BLE_CHANNELS."""
    idx = int(rng.random() * len(BLE_CHANNELS))
    return BLE_CHANNELS[min(idx, len(BLE_CHANNELS) - 1)]


def draw_tx_power(rng: RandomSource) -> TxPower:
    """Draw a transmit-power class: ~30% 9dbm, ~20% 6dbm, otherwise 3dbm."""
    r = rng.random()
    if r > 0.7:
        return TxPower.DBM_9
    if r > 0.5:
        return TxPower.DBM_6
    return TxPower.DBM_3


def channel_frequency_hz(channel: int) -> int:
    """Carrier frequency for a channel index: 2.402 GHz + 2 MHz per channel."""
    return BASE_FREQUENCY_HZ + channel * CHANNEL_SPACING_HZ


def draw_rssi(rng: RandomSource, noise_factor: float) -> float:
    """RSSI around the strong-signal baseline, noise scaled by 1 / noise_factor."""
    noise = rng.random() * RSSI_NOISE_SPAN_DBM - RSSI_NOISE_SPAN_DBM / 2
    return BASE_RSSI_DBM + noise * (1 / noise_factor)


def signal_strength_from_rssi(rssi: float) -> float:
    """Map RSSI (dBm) onto a 0-100 percentage, clamped."""
    return max(0.0, min(100.0, (rssi + 100) * 1.25))


def _noise_array(rng: RandomSource, length: int, span: float) -> list[float]:
    return [rng.random() * span - span / 2 for _ in range(length)]


def synthesize_frame(
    rng: RandomSource,
    *,
    frame_number: int,
    device_id: str,
    placement: Placement | str,
    noise_factor: float,
    timestamp: datetime,
) -> BLEFrame:
    """Build one BLE frame.

    Args:
        rng: Uniform random source.
        frame_number: Sequence number assigned by the owning generator.
        device_id: Non-empty device identifier (``<patient>_<sensor>``).
        placement: Anatomical placement (enum or its string value).
        noise_factor: Per-device factor in [0.9, 1.0].
        timestamp: Wall-clock stamp for the frame.

    Raises:
        ValueError: If ``device_id`` is empty or ``placement`` is unknown.
    """
    if not device_id:
        raise ValueError("device_id must be a non-empty string")
    placement = Placement(placement)

    tx_power = draw_tx_power(rng)
    channel = draw_channel(rng)
    antenna = int(rng.random() * 4) + 1
    rssi = draw_rssi(rng, noise_factor)
    frame_decoded = rng.random() < FRAME_DECODE_SUCCESS_RATE
    bit_length = int(rng.random() * 100) + 150

    return BLEFrame(
        frame_number=frame_number,
        timestamp=timestamp,
        device_id=device_id,
        placement=placement,
        tx_power=tx_power,
        antenna=antenna,
        frequency_hz=channel_frequency_hz(channel),
        channel=channel,
        rssi=rssi,
        signal_strength=signal_strength_from_rssi(rssi),
        frame_decoded=frame_decoded,
        bit_length=bit_length,
        max_gradient_unwrapped_phase=_noise_array(rng, PHASE_SAMPLES, 0.03),
        i_component=_noise_array(rng, IQ_SAMPLES, 0.02),
        q_component=_noise_array(rng, IQ_SAMPLES, 0.02),
    )
