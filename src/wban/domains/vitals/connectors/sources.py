"""Concrete RandomSource implementations."""

from __future__ import annotations

import random
import zlib
from collections.abc import Iterable


class SequenceRandomSource:
    """Replays a fixed sequence of draws, cycling when exhausted.

    Usage::

        source = SequenceRandomSource([0.5, 0.1, 0.99])
        generator = BLEWBANDataGenerator(random_source=source)
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        if not self._values:
            raise ValueError("At least one value is required")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"Sequence values must lie in [0, 1), got {v!r}")
        self._index = 0
        self.draws = 0

    def random(self) -> float:
        value = self._values[self._index]
        self._index = (self._index + 1) % len(self._values)
        self.draws += 1
        return value


def seeded_source(seed: int | None, patient_id: str = "") -> random.Random:
    """Build a ``random.Random`` for one patient stream.

    With a seed, each patient gets a distinct but reproducible stream
    (seed mixed with a CRC of the patient id). Without one, the stream is
    seeded from the OS.
    """
    if seed is None:
        return random.Random()
    return random.Random(seed ^ zlib.crc32(patient_id.encode()))
