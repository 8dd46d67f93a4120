"""Calculation results and play statistics."""

from dataclasses import dataclass, field

from catch_perf.models.mods import Mods


@dataclass(frozen=True)
class DifficultyAttributes:
    """Difficulty of a chart under one modifier combination."""

    mods: Mods
    star_rating: float
    approach_rate: float = 0.0  # display value, clock rate applied
    max_combo: int = 0


@dataclass(frozen=True)
class PerformanceAttributes:
    """Performance value of a play."""

    mods: Mods
    total: float


@dataclass(frozen=True)
class HitStatistics:
    """Judgement counts of a play."""

    great: int = 0  # fruits caught
    large_tick_hit: int = 0  # droplets caught
    small_tick_hit: int = 0  # tiny droplets caught
    small_tick_miss: int = 0  # tiny droplets missed
    miss: int = 0  # fruits and droplets missed

    @property
    def total_combo_hits(self) -> int:
        return self.miss + self.large_tick_hit + self.great

    @property
    def total_successful_hits(self) -> int:
        return self.small_tick_hit + self.large_tick_hit + self.great

    @property
    def total_hits(self) -> int:
        return self.total_successful_hits + self.miss + self.small_tick_miss

    @property
    def accuracy(self) -> float:
        """Fraction of judged pickups caught, clamped to [0, 1]; 0 if nothing was judged."""
        if self.total_hits == 0:
            return 0.0
        return min(max(self.total_successful_hits / self.total_hits, 0.0), 1.0)


@dataclass(frozen=True)
class ScoreInfo:
    """A play result to evaluate."""

    statistics: HitStatistics = field(default_factory=HitStatistics)
    max_combo: int = 0
    mods: Mods = Mods.NONE
