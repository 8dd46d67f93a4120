"""Difficulty preprocessing models."""

from dataclasses import dataclass

from catch_perf.models.objects import Pickup

# Radius of a pickup after normalising the catcher to a fixed size
NORMALIZED_HITOBJECT_RADIUS = 41.0

# Minimum strain time, equivalent to 375 BPM streaming speed
MIN_STRAIN_TIME = 40.0


@dataclass(frozen=True)
class DifficultyEvent:
    """Movement between a pickup and the combo-relevant pickup before it.

    Times are divided by the clock rate; positions are scaled so that the
    catcher's half width becomes ``NORMALIZED_HITOBJECT_RADIUS``.
    """

    base: Pickup
    last: Pickup
    clock_rate: float
    half_catcher_width: float

    @property
    def start_time(self) -> float:
        return self.base.start_time / self.clock_rate

    @property
    def last_start_time(self) -> float:
        return self.last.start_time / self.clock_rate

    @property
    def delta_time(self) -> float:
        return (self.base.start_time - self.last.start_time) / self.clock_rate

    @property
    def strain_time(self) -> float:
        return max(MIN_STRAIN_TIME, self.delta_time)

    @property
    def scaling_factor(self) -> float:
        return NORMALIZED_HITOBJECT_RADIUS / self.half_catcher_width

    @property
    def normalized_position(self) -> float:
        return self.base.x * self.scaling_factor

    @property
    def last_normalized_position(self) -> float:
        return self.last.x * self.scaling_factor

    @property
    def movement(self) -> float:
        """Signed catcher-relative horizontal distance from the last pickup."""
        return self.normalized_position - self.last_normalized_position
