"""Per-patient generator registry.

Each patient stream gets its own BLEWBANDataGenerator, so battery drain and
frame numbering are scoped to one monitoring session. Resetting a patient
re-instantiates its generator.

Sessions live until reset or until the registry is full: with ``max_patients``
set, creating a new session evicts the least recently polled one. An evicted
patient starts a fresh session on its next poll.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable

from wban.domains.vitals.domain_logic.wban_generator import BLEWBANDataGenerator

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Lazily creates and caches one generator per patient identifier."""

    def __init__(
        self,
        factory: Callable[[str], BLEWBANDataGenerator],
        *,
        max_patients: int | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            factory: Maps a patient id to a new generator.
            max_patients: Upper bound on live sessions; None means unbounded.
        """
        if max_patients is not None and max_patients < 1:
            raise ValueError("max_patients must be at least 1")
        self._factory = factory
        self._max_patients = max_patients
        self._generators: OrderedDict[str, BLEWBANDataGenerator] = OrderedDict()

    @property
    def max_patients(self) -> int | None:
        return self._max_patients

    def get(self, patient_id: str) -> BLEWBANDataGenerator:
        if not patient_id:
            raise ValueError("patient_id must be a non-empty string")
        generator = self._generators.get(patient_id)
        if generator is not None:
            self._generators.move_to_end(patient_id)
            return generator

        generator = self._factory(patient_id)
        self._generators[patient_id] = generator
        logger.info("Started WBAN session for patient %s", patient_id)
        if self._max_patients is not None and len(self._generators) > self._max_patients:
            evicted, _ = self._generators.popitem(last=False)
            logger.info(
                "Evicted WBAN session for patient %s (limit %d)", evicted, self._max_patients
            )
        return generator

    def reset(self, patient_id: str) -> bool:
        """Discard a patient's generator. Returns True if one existed."""
        removed = self._generators.pop(patient_id, None) is not None
        if removed:
            logger.info("Reset WBAN session for patient %s", patient_id)
        return removed

    def patient_ids(self) -> list[str]:
        return sorted(self._generators)

    def __contains__(self, patient_id: object) -> bool:
        return patient_id in self._generators

    def __len__(self) -> int:
        return len(self._generators)
