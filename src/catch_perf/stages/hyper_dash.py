"""Hyperdash stage - marks pickups that need a hyperdash to reach the next one."""

import numpy as np

from catch_perf.catcher import ALLOWED_CATCH_RANGE, BASE_DASH_SPEED, calculate_catch_width
from catch_perf.models.objects import BananaShower, Pickup, PickupKind
from catch_perf.models.pipeline import CalculationContext, StageResult
from catch_perf.pipeline.base import CalculationStage

# A quarter of a 60 fps frame of grace time (ms)
HYPER_DASH_GRACE_TIME = 1000.0 / 60.0 / 4


def apply_hyper_dash(
    timeline: list[Pickup | BananaShower], circle_size: float
) -> list[Pickup | BananaShower]:
    """Return a copy of a time-sorted timeline with hyperdash data filled in.

    Only fruits and droplets take part. For each of them except the last,
    either ``hyper_dash`` is set (the next one cannot be reached by dashing)
    or ``distance_to_hyper_dash`` holds the spare distance. Uses the full
    catcher width, excluding the catch margins.
    """
    half_catcher_width = calculate_catch_width(circle_size) / 2 / ALLOWED_CATCH_RANGE

    result = list(timeline)
    indices = [
        i
        for i, obj in enumerate(result)
        if isinstance(obj, Pickup) and obj.kind in (PickupKind.FRUIT, PickupKind.DROPLET)
    ]

    last_direction = 0
    last_excess = half_catcher_width

    for current_index, next_index in zip(indices, indices[1:]):
        current = result[current_index]
        following = result[next_index]
        assert isinstance(current, Pickup) and isinstance(following, Pickup)

        direction = 1 if following.x > current.x else -1
        # Start times are truncated to whole milliseconds first
        time_to_next = (
            int(following.start_time) - int(current.start_time) - HYPER_DASH_GRACE_TIME
        )
        distance_to_next = abs(following.x - current.x) - (
            last_excess if last_direction == direction else half_catcher_width
        )
        distance_to_hyper = float(np.float32(time_to_next * BASE_DASH_SPEED - distance_to_next))

        if distance_to_hyper < 0:
            result[current_index] = current.clone(hyper_dash=True, distance_to_hyper_dash=0.0)
            last_excess = half_catcher_width
        else:
            result[current_index] = current.clone(
                hyper_dash=False, distance_to_hyper_dash=distance_to_hyper
            )
            last_excess = min(max(distance_to_hyper, 0.0), half_catcher_width)

        last_direction = direction

    if indices:
        last = result[indices[-1]]
        assert isinstance(last, Pickup)
        result[indices[-1]] = last.clone(hyper_dash=False, distance_to_hyper_dash=0.0)

    return result


class HyperDashStage(CalculationStage):
    """Stage 2: Hyperdash.

    Annotates the timeline for the circle size of this calculation, so that
    modifiers changing the catcher size get their own hyperdash layout.
    """

    @property
    def name(self) -> str:
        return "hyper_dash"

    def execute(self, context: CalculationContext) -> StageResult:
        """Replace context.timeline with its annotated copy."""
        context.timeline = apply_hyper_dash(context.timeline, context.difficulty.circle_size)

        hyper_dashes = sum(
            1 for obj in context.timeline if isinstance(obj, Pickup) and obj.hyper_dash
        )

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=[f"Found {hyper_dashes} hyperdashes"],
        )
