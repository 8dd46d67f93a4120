"""Attributes stage - derives star rating and display attributes."""

import math

from catch_perf.models.attributes import DifficultyAttributes
from catch_perf.models.chart import difficulty_range
from catch_perf.models.pipeline import CalculationContext, StageResult
from catch_perf.pipeline.base import CalculationStage

STAR_SCALING_FACTOR = 0.153


def approach_rate_from_preempt(preempt: float) -> float:
    """Invert a preempt time (ms) back into an approach rate."""
    if preempt > 1200.0:
        return -(preempt - 1800.0) / 120.0
    return -(preempt - 1200.0) / 150.0 + 5.0


class AttributesStage(CalculationStage):
    """Stage 5: Attributes.

    Star rating is the square root of the first skill's difficulty value,
    scaled by ``STAR_SCALING_FACTOR``. The approach rate is reported as
    perceived at the calculation's clock rate.
    """

    @property
    def name(self) -> str:
        return "attributes"

    def execute(self, context: CalculationContext) -> StageResult:
        chart = context.chart

        if not chart.objects:
            context.attributes = DifficultyAttributes(mods=context.mods, star_rating=0.0)
            return StageResult(
                success=True,
                stage_name=self.name,
                duration_seconds=0,
            )

        if not context.skills:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="No skills to derive a star rating from",
            )

        preempt = (
            difficulty_range(context.difficulty.approach_rate, 1800, 1200, 450)
            / context.clock_rate
        )
        star_rating = math.sqrt(context.skills[0].difficulty_value) * STAR_SCALING_FACTOR

        context.attributes = DifficultyAttributes(
            mods=context.mods,
            star_rating=star_rating,
            approach_rate=approach_rate_from_preempt(preempt),
            max_combo=chart.max_combo,
        )

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=[f"Star rating: {star_rating:.2f}"],
        )
