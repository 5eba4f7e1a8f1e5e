"""Randomness connectors: the uniform source feeding the WBAN simulator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Abstract interface for uniform random draws.

    The frame synthesizer and vitals derivation only ever ask for the next
    float in [0, 1). ``random.Random`` satisfies this protocol directly;
    tests plug in a fixed sequence to make every formula reproducible.
    """

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        ...
