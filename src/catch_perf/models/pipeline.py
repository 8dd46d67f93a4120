"""Calculation pipeline models for Catch Perf.

A context is created for every calculation and owned by it alone, so that the
catcher width and skill state of one modifier combination never leak into
another.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from catch_perf.models.attributes import DifficultyAttributes
from catch_perf.models.chart import BeatmapDifficulty, CatchChart
from catch_perf.models.difficulty import DifficultyEvent
from catch_perf.models.mods import Mods
from catch_perf.models.objects import BananaShower, Pickup

if TYPE_CHECKING:
    from catch_perf.skills.base import Skill


@dataclass
class CalculationContext:
    """Mutable state passed through calculation stages."""

    # Input
    chart: CatchChart
    mods: Mods
    difficulty: BeatmapDifficulty  # modifiers already applied
    half_catcher_width: float

    # Skills fed by the strain stage
    skills: list["Skill"] = field(default_factory=list)

    # Flattened, time-sorted pickups (nesting stage)
    timeline: list[Pickup | BananaShower] = field(default_factory=list)

    # Movement events (preprocessing stage)
    events: list[DifficultyEvent] = field(default_factory=list)

    # Final output
    attributes: DifficultyAttributes | None = None

    # Notes collected from every stage
    warnings: list[str] = field(default_factory=list)

    @property
    def clock_rate(self) -> float:
        return self.difficulty.clock_rate


@dataclass
class StageResult:
    """Result of a calculation stage execution."""

    success: bool
    stage_name: str
    duration_seconds: float
    error_message: str | None = None
    warnings: list[str] = field(default_factory=list)
    error: Exception | None = field(default=None, repr=False)


@dataclass
class CalculationResult:
    """Outcome of one difficulty calculation."""

    attributes: DifficultyAttributes
    stages_completed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_duration: float = 0.0
