"""WBAN signal models and domain constants for the vitals simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Closed enumerations
# ---------------------------------------------------------------------------

class Placement(str, Enum):
    """Anatomical placement of a body-area sensor."""

    HEAD = "head"
    ARM = "arm"
    WRIST = "wrist"
    CHEST = "chest"
    TORSO_FRONT = "torso_front"
    TORSO_BACK = "torso_back"


class TxPower(str, Enum):
    """Transmit-power class. ``DBM_0`` is representable but never drawn."""

    DBM_9 = "9dbm"
    DBM_6 = "6dbm"
    DBM_3 = "3dbm"
    DBM_0 = "0dbm"


class SignalQuality(str, Enum):
    """Ordered signal-quality classification (excellent > good > fair > poor)."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    WEAK = "weak"
    DISCONNECTED = "disconnected"


# ---------------------------------------------------------------------------
# Sensor catalog and RF constants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SensorPosition:
    """Static catalog entry for one body-area sensor."""

    id: str
    name: str
    placement: Placement
    priority: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "placement": self.placement.value,
            "priority": self.priority,
        }


WBAN_POSITIONS: tuple[SensorPosition, ...] = (
    SensorPosition("chest", "Chest ECG", Placement.CHEST, 1),
    SensorPosition("wrist_l", "Left Wrist", Placement.WRIST, 2),
    SensorPosition("wrist_r", "Right Wrist", Placement.WRIST, 2),
    SensorPosition("head", "Head Monitor", Placement.HEAD, 3),
    SensorPosition("arm_l", "Left Arm BP", Placement.ARM, 2),
    SensorPosition("torso_back", "Back Monitor", Placement.TORSO_BACK, 4),
)

# 37, 38, 39 are the advertising channels. Index 11 is absent; frequency
# math depends on this exact membership and order.
BLE_CHANNELS: tuple[int, ...] = (
    *range(0, 11),
    *range(12, 37),
    37, 38, 39,
)

BASE_FREQUENCY_HZ = 2_402_000_000
CHANNEL_SPACING_HZ = 2_000_000

BASE_RSSI_DBM = -40.0           # Strong-signal baseline
RSSI_NOISE_SPAN_DBM = 20.0      # uniform(-10, 10) before noise-factor scaling
NOISE_FACTOR_MIN = 0.9
NOISE_FACTOR_SPAN = 0.1
FRAME_DECODE_SUCCESS_RATE = 0.95

PHASE_SAMPLES = 5
IQ_SAMPLES = 10


# ---------------------------------------------------------------------------
# Physiological bands and random-walk rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VitalBand:
    """Physiological band a vital is clamped into, plus its default value."""

    lo: float
    hi: float
    default: float

    def clamp(self, value: float) -> float:
        return max(self.lo, min(self.hi, value))


VITAL_BANDS: dict[str, VitalBand] = {
    "heart_rate": VitalBand(50, 150, 72),
    "systolic": VitalBand(90, 180, 120),
    "diastolic": VitalBand(60, 120, 80),
    "oxygen_saturation": VitalBand(85, 100, 98),
    "temperature": VitalBand(95.0, 104.0, 98.6),
}


@dataclass(frozen=True)
class WalkRule:
    """One bounded random-walk step: clamp(last * stability + U(-a/2, a/2))."""

    vital: str
    stability: float
    amplitude: float


# Placements absent from a vital's rules keep that vital's default.
PLACEMENT_WALKS: dict[Placement, tuple[WalkRule, ...]] = {
    Placement.CHEST: (
        WalkRule("heart_rate", 0.8, 10),
    ),
    Placement.WRIST: (
        WalkRule("heart_rate", 0.9, 10),
        WalkRule("oxygen_saturation", 0.95, 2),
    ),
    Placement.ARM: (
        WalkRule("systolic", 1.0, 8),
        WalkRule("diastolic", 1.0, 6),
    ),
    Placement.HEAD: (
        WalkRule("temperature", 1.0, 0.5),
    ),
    Placement.TORSO_FRONT: (),
    Placement.TORSO_BACK: (
        WalkRule("heart_rate", 0.7, 10),
        WalkRule("temperature", 1.0, 0.5),
    ),
}

QUALITY_FACTORS: dict[SignalQuality, float] = {
    SignalQuality.EXCELLENT: 1.0,
    SignalQuality.GOOD: 0.95,
    SignalQuality.FAIR: 0.85,
    SignalQuality.POOR: 0.7,
}

BATTERY_FLOOR = 10.0
BATTERY_DRAIN_PER_FRAME = 0.01


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class BLEFrame:
    """One synthetic BLE transmission record."""

    frame_number: int
    timestamp: datetime
    device_id: str
    placement: Placement
    tx_power: TxPower
    antenna: int
    frequency_hz: int
    channel: int
    rssi: float                    # dBm
    signal_strength: float         # 0-100, affine map of rssi
    frame_decoded: bool
    bit_length: int
    max_gradient_unwrapped_phase: list[float] = field(default_factory=list)
    i_component: list[float] = field(default_factory=list)
    q_component: list[float] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "frame_number": self.frame_number,
            "timestamp": self.timestamp.isoformat(),
            "device_id": self.device_id,
            "placement": self.placement.value,
            "tx_power": self.tx_power.value,
            "antenna": self.antenna,
            "frequency_hz": self.frequency_hz,
            "channel": self.channel,
            "rssi": self.rssi,
            "signal_strength": self.signal_strength,
            "frame_decoded": self.frame_decoded,
            "bit_length": self.bit_length,
            "max_gradient_unwrapped_phase": list(self.max_gradient_unwrapped_phase),
            "i_component": list(self.i_component),
            "q_component": list(self.q_component),
        }


@dataclass(frozen=True)
class BloodPressure:
    systolic: int
    diastolic: int


@dataclass(frozen=True)
class VitalsReading:
    """Vital signs derived from one frame, or the aggregate of several."""

    heart_rate: int                # bpm
    blood_pressure: BloodPressure  # mmHg
    oxygen_saturation: int         # %
    temperature: float             # degrees Fahrenheit
    timestamp: datetime
    signal_quality: SignalQuality
    battery_level: float           # %
    connection_status: ConnectionStatus

    def vital_value(self, vital: str) -> float:
        """Return a vital by its VITAL_BANDS name."""
        if vital == "systolic":
            return self.blood_pressure.systolic
        if vital == "diastolic":
            return self.blood_pressure.diastolic
        if vital in ("heart_rate", "oxygen_saturation", "temperature"):
            return getattr(self, vital)
        raise ValueError(f"Unknown vital: {vital!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "heart_rate": self.heart_rate,
            "blood_pressure": {
                "systolic": self.blood_pressure.systolic,
                "diastolic": self.blood_pressure.diastolic,
            },
            "oxygen_saturation": self.oxygen_saturation,
            "temperature": self.temperature,
            "timestamp": self.timestamp.isoformat(),
            "signal_quality": self.signal_quality.value,
            "battery_level": self.battery_level,
            "connection_status": self.connection_status.value,
        }


@dataclass(frozen=True)
class NetworkStats:
    total_devices: int
    active_devices: int
    average_rssi: float
    packet_loss_rate: float        # percent
    encryption_status: str         # informational label only

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_devices": self.total_devices,
            "active_devices": self.active_devices,
            "average_rssi": self.average_rssi,
            "packet_loss_rate": self.packet_loss_rate,
            "encryption_status": self.encryption_status,
        }


@dataclass(frozen=True)
class NetworkReading:
    """Per-patient composite for one tick of the network."""

    patient_id: str
    vitals: VitalsReading
    frames: list[BLEFrame]
    network_stats: NetworkStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "patient_id": self.patient_id,
            "vitals": self.vitals.to_dict(),
            "ble_frames": [f.to_dict() for f in self.frames],
            "network_stats": self.network_stats.to_dict(),
        }
