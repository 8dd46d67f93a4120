"""Preprocessing stage - turns the pickup timeline into movement events."""

from collections.abc import Iterable, Iterator

from catch_perf.models.difficulty import DifficultyEvent
from catch_perf.models.objects import BananaShower, Pickup, PickupKind
from catch_perf.models.pipeline import CalculationContext, StageResult
from catch_perf.pipeline.base import CalculationStage


def preprocess(
    timeline: Iterable[Pickup | BananaShower],
    half_catcher_width: float,
    clock_rate: float,
) -> Iterator[DifficultyEvent]:
    """Pair every combo-relevant pickup with the one before it.

    Banana showers and tiny droplets are skipped without breaking the pairing,
    and the first combo-relevant pickup produces no event, so N such pickups
    give N - 1 events.

    Args:
        timeline: Flattened pickups sorted by start time.
        half_catcher_width: Half catcher width for this calculation.
        clock_rate: Playback rate applied to all time deltas.
    """
    last: Pickup | None = None

    for obj in timeline:
        match obj:
            case BananaShower():
                continue
            case Pickup(kind=PickupKind.TINY_DROPLET | PickupKind.BANANA):
                continue
            case Pickup():
                if last is not None:
                    yield DifficultyEvent(
                        base=obj,
                        last=last,
                        clock_rate=clock_rate,
                        half_catcher_width=half_catcher_width,
                    )
                last = obj


class PreprocessingStage(CalculationStage):
    """Stage 3: Preprocessing.

    Produces the difficulty events consumed by the skills.
    """

    @property
    def name(self) -> str:
        return "preprocessing"

    def execute(self, context: CalculationContext) -> StageResult:
        """Fill context.events from context.timeline."""
        context.events = list(
            preprocess(context.timeline, context.half_catcher_width, context.clock_rate)
        )

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=[f"Produced {len(context.events)} difficulty events"],
        )
