"""Strain stage - feeds difficulty events into the skills."""

from catch_perf.models.pipeline import CalculationContext, StageResult
from catch_perf.pipeline.base import CalculationStage


class StrainStage(CalculationStage):
    """Stage 4: Strain.

    Every skill sees every event once, in time order.
    """

    @property
    def name(self) -> str:
        return "strain"

    def execute(self, context: CalculationContext) -> StageResult:
        if not context.skills:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="No skills to process",
            )

        for event in context.events:
            for skill in context.skills:
                skill.process(event)

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
        )
