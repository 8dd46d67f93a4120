"""Base classes for strain skills."""

import math
from abc import ABC, abstractmethod

from catch_perf.models.difficulty import DifficultyEvent


class Skill(ABC):
    """Accumulates difficulty from a stream of difficulty events.

    Events must be processed in ascending time order. ``difficulty_value`` is
    only meaningful once every event of the chart has been processed.
    """

    @abstractmethod
    def process(self, event: DifficultyEvent) -> None:
        """Feed the next event into the skill."""
        ...

    @property
    @abstractmethod
    def difficulty_value(self) -> float:
        """Aggregate difficulty of everything processed so far."""
        ...


class StrainDecaySkill(Skill):
    """A skill whose strain decays exponentially between events.

    The chart is divided into sections of ``section_length`` ms. The highest
    strain of each section is recorded, and the final value is a weighted sum
    of the section peaks sorted from hardest to easiest, each weighted
    ``decay_weight`` times less than the one before.
    """

    def __init__(
        self,
        section_length: float = 750.0,
        decay_weight: float = 0.9,
        strain_decay_base: float = 0.15,
        skill_multiplier: float = 1.0,
    ) -> None:
        self.section_length = section_length
        self.decay_weight = decay_weight
        self.strain_decay_base = strain_decay_base
        self.skill_multiplier = skill_multiplier

        self.current_strain = 0.0
        self.strain_peaks: list[float] = []
        self._current_section_peak = 0.0
        self._current_section_end: float | None = None

    @abstractmethod
    def strain_value_of(self, event: DifficultyEvent) -> float:
        """Strain added by a single event, before the skill multiplier."""
        ...

    def process(self, event: DifficultyEvent) -> None:
        if self._current_section_end is None:
            self._current_section_end = (
                math.ceil(event.start_time / self.section_length) * self.section_length
            )

        while event.start_time > self._current_section_end:
            self.strain_peaks.append(self._current_section_peak)
            self._current_section_peak = self._initial_strain(self._current_section_end, event)
            self._current_section_end += self.section_length

        self._current_section_peak = max(self._strain_value_at(event), self._current_section_peak)

    @property
    def difficulty_value(self) -> float:
        difficulty = 0.0
        weight = 1.0
        for strain in sorted(self.current_strain_peaks, reverse=True):
            difficulty += strain * weight
            weight *= self.decay_weight
        return difficulty

    @property
    def current_strain_peaks(self) -> list[float]:
        """Recorded section peaks including the section in progress."""
        return [*self.strain_peaks, self._current_section_peak]

    def _strain_value_at(self, event: DifficultyEvent) -> float:
        self.current_strain *= self._strain_decay(event.delta_time)
        self.current_strain += self.strain_value_of(event) * self.skill_multiplier
        return self.current_strain

    def _initial_strain(self, time: float, event: DifficultyEvent) -> float:
        # Strain left over from the previous event at the start of a section
        return self.current_strain * self._strain_decay(time - event.last_start_time)

    def _strain_decay(self, ms: float) -> float:
        return self.strain_decay_base ** (ms / 1000)
