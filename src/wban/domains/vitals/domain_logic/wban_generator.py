"""BLE WBAN data generator: frame synthesis, vitals derivation, aggregation.

One generator instance owns all mutable simulation state: the frame counter
and the per-device last readings. It must be used by at most one logical
update stream per device identifier at a time; interleaved calls for the
same device would break the read-before-write ordering of the random walk.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from wban.domains.vitals.connectors import RandomSource
from wban.domains.vitals.domain_logic.aggregation import (
    aggregate_vitals,
    compute_network_stats,
)
from wban.domains.vitals.domain_logic.frame_synthesizer import synthesize_frame
from wban.domains.vitals.domain_logic.signal_models import (
    BATTERY_FLOOR,
    NOISE_FACTOR_MIN,
    NOISE_FACTOR_SPAN,
    WBAN_POSITIONS,
    BLEFrame,
    NetworkReading,
    Placement,
    SensorPosition,
    VitalsReading,
)
from wban.domains.vitals.domain_logic.vitals_derivation import derive_vitals

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BLEWBANDataGenerator:
    """Simulates a body-area sensor network for any number of patients.

    Usage::

        generator = BLEWBANDataGenerator(random_source=random.Random(7))
        reading = generator.generate_network_reading("P001")
        reading.vitals.heart_rate
    """

    def __init__(
        self,
        *,
        random_source: RandomSource | None = None,
        clock: Callable[[], datetime] = _utc_now,
        positions: Sequence[SensorPosition] = WBAN_POSITIONS,
        encryption_status: str = "AES-256",
    ) -> None:
        """Initialize generator state.

        Args:
            random_source: Uniform source for every draw; defaults to a fresh
                ``random.Random``.
            clock: Returns the wall-clock timestamp for each frame.
            positions: Sensor catalog, in orchestration order.
            encryption_status: Informational label copied into NetworkStats.
        """
        if not positions:
            raise ValueError("At least one sensor position is required")
        self._rng = random_source if random_source is not None else random.Random()
        self._clock = clock
        self._positions = tuple(positions)
        self._encryption_status = encryption_status
        self._frame_counter = 0
        self._last_readings: dict[str, VitalsReading] = {}
        self._battery_floor_logged = False

        # One noise factor per catalog sensor, fixed for the generator's lifetime.
        self._noise_factors: dict[str, float] = {
            pos.id: self._rng.random() * NOISE_FACTOR_SPAN + NOISE_FACTOR_MIN
            for pos in self._positions
        }

    # ---------------------------------------------------------------
    # State accessors
    # ---------------------------------------------------------------

    @property
    def frame_counter(self) -> int:
        return self._frame_counter

    @property
    def positions(self) -> tuple[SensorPosition, ...]:
        return self._positions

    def last_reading(self, device_id: str) -> VitalsReading | None:
        return self._last_readings.get(device_id)

    def noise_factor(self, device_id: str) -> float:
        """Noise factor for a device id, resolved via the sensor id it names."""
        if device_id in self._noise_factors:
            return self._noise_factors[device_id]
        for pos in self._positions:
            if device_id.endswith(f"_{pos.id}"):
                return self._noise_factors[pos.id]
        return 1.0

    # ---------------------------------------------------------------
    # Operations
    # ---------------------------------------------------------------

    def generate_frame(self, device_id: str, placement: Placement | str) -> BLEFrame:
        """Synthesize the next BLE frame for ``device_id``."""
        if not device_id:
            raise ValueError("device_id must be a non-empty string")
        placement = Placement(placement)
        self._frame_counter += 1
        return synthesize_frame(
            self._rng,
            frame_number=self._frame_counter,
            device_id=device_id,
            placement=placement,
            noise_factor=self.noise_factor(device_id),
            timestamp=self._clock(),
        )

    def derive_vitals(self, frame: BLEFrame) -> VitalsReading:
        """Derive a reading from ``frame`` and store it as the device's last reading."""
        reading = derive_vitals(
            self._rng,
            frame,
            self._last_readings.get(frame.device_id),
            frames_emitted=self._frame_counter,
        )
        self._last_readings[frame.device_id] = reading

        if reading.battery_level <= BATTERY_FLOOR and not self._battery_floor_logged:
            self._battery_floor_logged = True
            logger.info("Simulated battery reached its %.0f%% floor", BATTERY_FLOOR)
        return reading

    def aggregate(self, readings: Sequence[VitalsReading]) -> VitalsReading:
        return aggregate_vitals(readings)

    def generate_network_reading(self, patient_id: str) -> NetworkReading:
        """Generate one tick of the whole sensor network for ``patient_id``.

        Raises:
            ValueError: If ``patient_id`` is empty.
        """
        if not patient_id:
            raise ValueError("patient_id must be a non-empty string")

        frames: list[BLEFrame] = []
        readings: list[VitalsReading] = []
        for pos in self._positions:
            frame = self.generate_frame(f"{patient_id}_{pos.id}", pos.placement)
            frames.append(frame)
            readings.append(self.derive_vitals(frame))

        vitals = self.aggregate(readings)
        stats = compute_network_stats(
            frames,
            total_devices=len(self._positions),
            encryption_status=self._encryption_status,
        )
        logger.debug(
            "Patient %s tick: frames %d-%d, %d/%d active, avg RSSI %.1f dBm",
            patient_id,
            frames[0].frame_number,
            frames[-1].frame_number,
            stats.active_devices,
            stats.total_devices,
            stats.average_rssi,
        )
        return NetworkReading(
            patient_id=patient_id,
            vitals=vitals,
            frames=frames,
            network_stats=stats,
        )
