"""Shared test fixtures for WBAN simulator tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

_WBAN_ENV_VARS = (
    "WBAN_HOST",
    "WBAN_PORT",
    "WBAN_LOG_LEVEL",
    "WBAN_ALLOW_INSECURE_BIND",
    "WBAN_RANDOM_SEED",
    "WBAN_TEMPERATURE_UNIT",
    "WBAN_ENCRYPTION_LABEL",
    "WBAN_MAX_PATIENTS",
)


@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _WBAN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of Settings().
    monkeypatch.chdir(tmp_path)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from wban.domains.vitals.connectors.sources import SequenceRandomSource  # noqa: E402
from wban.domains.vitals.domain_logic.signal_models import (  # noqa: E402
    BLEFrame,
    BloodPressure,
    ConnectionStatus,
    Placement,
    SignalQuality,
    TxPower,
    VitalsReading,
)
from wban.domains.vitals.domain_logic.wban_generator import BLEWBANDataGenerator  # noqa: E402

FIXED_TIME = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_TIME


def make_frame(
    placement: Placement = Placement.CHEST,
    *,
    device_id: str = "P001_chest",
    rssi: float = -40.0,
    frame_decoded: bool = True,
    signal_strength: float | None = None,
    frame_number: int = 1,
) -> BLEFrame:
    """Create a frame with sensible defaults; strength follows rssi unless given."""
    if signal_strength is None:
        signal_strength = max(0.0, min(100.0, (rssi + 100) * 1.25))
    return BLEFrame(
        frame_number=frame_number,
        timestamp=FIXED_TIME,
        device_id=device_id,
        placement=placement,
        tx_power=TxPower.DBM_3,
        antenna=1,
        frequency_hz=2_402_000_000,
        channel=0,
        rssi=rssi,
        signal_strength=signal_strength,
        frame_decoded=frame_decoded,
        bit_length=200,
        max_gradient_unwrapped_phase=[0.0] * 5,
        i_component=[0.0] * 10,
        q_component=[0.0] * 10,
    )


def make_reading(
    *,
    heart_rate: int = 72,
    systolic: int = 120,
    diastolic: int = 80,
    oxygen_saturation: int = 98,
    temperature: float = 98.6,
    signal_quality: SignalQuality = SignalQuality.EXCELLENT,
    battery_level: float = 99.0,
    connection_status: ConnectionStatus = ConnectionStatus.CONNECTED,
) -> VitalsReading:
    return VitalsReading(
        heart_rate=heart_rate,
        blood_pressure=BloodPressure(systolic=systolic, diastolic=diastolic),
        oxygen_saturation=oxygen_saturation,
        temperature=temperature,
        timestamp=FIXED_TIME,
        signal_quality=signal_quality,
        battery_level=battery_level,
        connection_status=connection_status,
    )


@pytest.fixture
def midpoint_source() -> SequenceRandomSource:
    """Every draw is 0.5: zero walk variation, rssi exactly -40 dBm, frames decoded."""
    return SequenceRandomSource([0.5])


@pytest.fixture
def midpoint_generator(midpoint_source: SequenceRandomSource) -> BLEWBANDataGenerator:
    return BLEWBANDataGenerator(random_source=midpoint_source, clock=fixed_clock)


@pytest.fixture
def seeded_generator() -> BLEWBANDataGenerator:
    import random

    return BLEWBANDataGenerator(random_source=random.Random(1234), clock=fixed_clock)


@pytest.fixture
def frame_factory():
    """Return the make_frame helper."""
    return make_frame


@pytest.fixture
def reading_factory():
    """Return the make_reading helper."""
    return make_reading
