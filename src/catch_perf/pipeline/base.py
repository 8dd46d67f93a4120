"""Base classes for calculation stages."""

from abc import ABC, abstractmethod
import time

from catch_perf.models.pipeline import CalculationContext, StageResult


class CalculationStage(ABC):
    """Abstract base class for calculation stages.

    Each stage implements execute() which receives a CalculationContext,
    performs its work (mutating the context), and returns a StageResult.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this stage."""
        ...

    @abstractmethod
    def execute(self, context: CalculationContext) -> StageResult:
        """Execute this stage.

        Args:
            context: Mutable calculation context that accumulates results.

        Returns:
            StageResult indicating success/failure and any warnings.
        """
        ...

    def run(self, context: CalculationContext) -> StageResult:
        """Run the stage with timing.

        This is the public entry point that wraps execute() with timing
        and error handling. The exception of a failed stage is kept on the
        result so the orchestrator can re-raise it.
        """
        start_time = time.perf_counter()
        try:
            result = self.execute(context)
            result.duration_seconds = time.perf_counter() - start_time
            return result
        except Exception as e:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=time.perf_counter() - start_time,
                error_message=f"Unexpected error: {e}",
                error=e,
            )
