"""Chart-level models: difficulty settings, control points and the chart itself."""

import bisect
from dataclasses import dataclass, field, replace

from catch_perf.models.mods import Mods
from catch_perf.models.objects import (
    BananaShower,
    HitObject,
    JuiceStream,
    Pickup,
    PickupKind,
)


def difficulty_range(difficulty: float, min_value: float, mid_value: float, max_value: float) -> float:
    """Map a 0-10 difficulty setting onto a two-segment linear range.

    ``min_value`` is reached at 0, ``mid_value`` at 5 and ``max_value`` at 10.
    """
    if difficulty > 5:
        return mid_value + (max_value - mid_value) * (difficulty - 5) / 5
    if difficulty < 5:
        return mid_value - (mid_value - min_value) * (5 - difficulty) / 5
    return mid_value


@dataclass
class BeatmapDifficulty:
    """Global difficulty settings of a chart."""

    circle_size: float = 5.0
    approach_rate: float = 5.0
    overall_difficulty: float = 5.0
    drain_rate: float = 5.0
    slider_multiplier: float = 1.4
    slider_tick_rate: float = 1.0
    clock_rate: float = 1.0

    def clone(self) -> "BeatmapDifficulty":
        return replace(self)


@dataclass(frozen=True)
class TimingPoint:
    time: float
    beat_length: float = 500.0  # ms per beat


@dataclass(frozen=True)
class DifficultyPoint:
    time: float
    slider_velocity: float = 1.0


@dataclass(frozen=True)
class EffectPoint:
    time: float
    kiai: bool = False


@dataclass
class ControlPointInfo:
    """Time-indexed lookups for timing, slider velocity and effects.

    Each list must be sorted by time. A lookup before the first point returns
    the first point; an empty list returns the default point.
    """

    timing_points: list[TimingPoint] = field(default_factory=list)
    difficulty_points: list[DifficultyPoint] = field(default_factory=list)
    effect_points: list[EffectPoint] = field(default_factory=list)

    def timing_point_at(self, time: float) -> TimingPoint:
        return self._lookup(self.timing_points, time) or TimingPoint(0)

    def difficulty_point_at(self, time: float) -> DifficultyPoint:
        return self._lookup(self.difficulty_points, time) or DifficultyPoint(0)

    def effect_point_at(self, time: float) -> EffectPoint:
        return self._lookup(self.effect_points, time) or EffectPoint(0)

    @staticmethod
    def _lookup(points: list, time: float):
        if not points:
            return None
        index = bisect.bisect_right([p.time for p in points], time) - 1
        return points[max(index, 0)]


@dataclass
class CatchChart:
    """A catch-the-fruit chart: ordered hit objects plus their settings."""

    objects: list[HitObject] = field(default_factory=list)
    difficulty: BeatmapDifficulty = field(default_factory=BeatmapDifficulty)
    control_points: ControlPointInfo = field(default_factory=ControlPointInfo)
    title: str = ""
    artist: str = ""
    version: str = ""
    mods: Mods = Mods.NONE

    def apply_defaults(self) -> None:
        """Derive per-object timing from the difficulty and control points.

        Sets preempt, scale and kiai on every object, tick distance and
        velocity on juice streams, and regenerates all nested pickups.
        """
        time_preempt = difficulty_range(self.difficulty.approach_rate, 1800, 1200, 450)
        scale = (1.0 - 0.7 * (self.difficulty.circle_size - 5) / 5) / 2

        for i, obj in enumerate(self.objects):
            kiai = self.control_points.effect_point_at(obj.start_time).kiai

            if isinstance(obj, Pickup):
                self.objects[i] = obj.clone(time_preempt=time_preempt, scale=scale, kiai=kiai)
                continue

            obj.time_preempt = time_preempt
            obj.scale = scale
            obj.kiai = kiai

            if isinstance(obj, JuiceStream):
                timing_point = self.control_points.timing_point_at(obj.start_time)
                difficulty_point = self.control_points.difficulty_point_at(obj.start_time)
                scoring_distance = (
                    JuiceStream.BASE_DISTANCE
                    * self.difficulty.slider_multiplier
                    * difficulty_point.slider_velocity
                )
                obj.tick_distance = scoring_distance / self.difficulty.slider_tick_rate
                obj.velocity = scoring_distance / timing_point.beat_length

            obj.create_nested()

    def count(self, kind: PickupKind) -> int:
        """Number of pickups of a kind, including nested ones."""
        total = 0
        for obj in self.objects:
            if isinstance(obj, Pickup):
                total += obj.kind is kind
            else:
                total += sum(1 for p in obj.nested_pickups if p.kind is kind)
        return total

    @property
    def max_combo(self) -> int:
        """Number of combo-contributing pickups (fruits and droplets)."""
        return self.count(PickupKind.FRUIT) + self.count(PickupKind.DROPLET)

    @property
    def fruits(self) -> int:
        """Leaf fruits placed directly in the chart."""
        return sum(
            1 for obj in self.objects if isinstance(obj, Pickup) and obj.kind is PickupKind.FRUIT
        )

    @property
    def juice_streams(self) -> int:
        return sum(1 for obj in self.objects if isinstance(obj, JuiceStream))

    @property
    def banana_showers(self) -> int:
        return sum(1 for obj in self.objects if isinstance(obj, BananaShower))
