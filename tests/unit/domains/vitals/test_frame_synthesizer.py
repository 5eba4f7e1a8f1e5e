"""Unit tests for BLE frame synthesis."""

from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from wban.domains.vitals.connectors.sources import SequenceRandomSource
from wban.domains.vitals.domain_logic.frame_synthesizer import (
    channel_frequency_hz,
    draw_tx_power,
    signal_strength_from_rssi,
    synthesize_frame,
)
from wban.domains.vitals.domain_logic.signal_models import (
    BLE_CHANNELS,
    IQ_SAMPLES,
    PHASE_SAMPLES,
    Placement,
    TxPower,
)

_NOW = datetime(2026, 1, 15, tzinfo=timezone.utc)


def _frame(values, *, noise_factor=1.0, placement=Placement.CHEST, device_id="P001_chest"):
    return synthesize_frame(
        SequenceRandomSource(values),
        frame_number=7,
        device_id=device_id,
        placement=placement,
        noise_factor=noise_factor,
        timestamp=_NOW,
    )


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

class TestChannelSet:
    def test_has_39_channels(self):
        assert len(BLE_CHANNELS) == 39

    def test_channel_11_absent(self):
        assert 11 not in BLE_CHANNELS

    def test_exact_membership_and_order(self):
        assert BLE_CHANNELS == tuple(list(range(0, 11)) + list(range(12, 37)) + [37, 38, 39])

    def test_frequency_formula(self):
        assert channel_frequency_hz(0) == 2_402_000_000
        assert channel_frequency_hz(20) == 2_442_000_000
        assert channel_frequency_hz(39) == 2_480_000_000


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestTxPower:
    @pytest.mark.parametrize("draw, expected", [
        (0.99, TxPower.DBM_9),
        (0.71, TxPower.DBM_9),
        (0.7, TxPower.DBM_6),
        (0.51, TxPower.DBM_6),
        (0.5, TxPower.DBM_3),
        (0.0, TxPower.DBM_3),
    ])
    def test_thresholds(self, draw, expected):
        assert draw_tx_power(SequenceRandomSource([draw])) is expected

    def test_zero_dbm_never_drawn(self):
        rng = random.Random(3)
        assert all(draw_tx_power(rng) is not TxPower.DBM_0 for _ in range(2000))


class TestSignalStrength:
    @pytest.mark.parametrize("rssi, expected", [
        (-100, 0.0),
        (-120, 0.0),
        (-40, 75.0),
        (-20, 100.0),
        (0, 100.0),
    ])
    def test_affine_map_clamped(self, rssi, expected):
        assert signal_strength_from_rssi(rssi) == pytest.approx(expected)


# ---------------------------------------------------------------------------
# synthesize_frame
# ---------------------------------------------------------------------------

class TestSynthesizeFrame:
    def test_fields_follow_draw_order(self):
        # tx, channel, antenna, rssi, decode, bit length, then arrays
        frame = _frame([0.8, 0.5, 0.25, 0.75, 0.5, 0.5])
        assert frame.frame_number == 7
        assert frame.timestamp == _NOW
        assert frame.tx_power is TxPower.DBM_9
        assert frame.channel == 20           # BLE_CHANNELS[19]
        assert frame.frequency_hz == 2_442_000_000
        assert frame.antenna == 2
        assert frame.rssi == pytest.approx(-35.0)
        assert frame.signal_strength == pytest.approx(81.25)
        assert frame.frame_decoded is True
        assert frame.bit_length == 200

    def test_top_draw_selects_last_channel(self):
        frame = _frame([0.999])
        assert frame.channel == 39
        assert frame.antenna == 4
        assert frame.bit_length == 249

    def test_decode_failure_at_five_percent_tail(self):
        # 5th draw is the decode flag
        frame = _frame([0.5, 0.5, 0.5, 0.5, 0.96, 0.5])
        assert frame.frame_decoded is False

    def test_noise_factor_scales_rssi_deviation(self):
        # rssi draw 0.75 -> +5 dBm before scaling
        strong = _frame([0.5, 0.5, 0.5, 0.75], noise_factor=1.0)
        noisy = _frame([0.5, 0.5, 0.5, 0.75], noise_factor=0.9)
        assert strong.rssi == pytest.approx(-35.0)
        assert noisy.rssi == pytest.approx(-40 + 5 / 0.9)

    def test_array_shapes_and_ranges(self):
        frame = _frame([0.0, 0.999, 0.3, 0.7])
        assert len(frame.max_gradient_unwrapped_phase) == PHASE_SAMPLES == 5
        assert len(frame.i_component) == IQ_SAMPLES == 10
        assert len(frame.q_component) == IQ_SAMPLES
        assert all(-0.015 <= v < 0.015 for v in frame.max_gradient_unwrapped_phase)
        assert all(-0.01 <= v < 0.01 for v in frame.i_component + frame.q_component)

    def test_placement_string_coerced(self):
        frame = _frame([0.5], placement="wrist")
        assert frame.placement is Placement.WRIST

    def test_unknown_placement_raises(self):
        with pytest.raises(ValueError):
            _frame([0.5], placement="knee")

    def test_empty_device_id_raises(self):
        with pytest.raises(ValueError, match="device_id"):
            _frame([0.5], device_id="")

    def test_strength_always_in_range(self):
        rng = random.Random(99)
        for n in range(500):
            frame = synthesize_frame(
                rng,
                frame_number=n,
                device_id="P_x",
                placement=Placement.HEAD,
                noise_factor=0.9,
                timestamp=_NOW,
            )
            assert 0 <= frame.signal_strength <= 100
            assert frame.channel in BLE_CHANNELS
            assert 1 <= frame.antenna <= 4
            assert 150 <= frame.bit_length < 250

    def test_to_dict_is_json_safe(self):
        payload = _frame([0.5]).to_dict()
        assert payload["placement"] == "chest"
        assert payload["tx_power"] == "3dbm"
        assert payload["timestamp"] == _NOW.isoformat()
