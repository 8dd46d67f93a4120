"""Difficulty calculation orchestrator for Catch Perf."""

import itertools
import time
from collections.abc import Callable, Iterator

from catch_perf.catcher import calculate_half_catcher_width
from catch_perf.config import Settings, get_settings
from catch_perf.models.attributes import DifficultyAttributes
from catch_perf.models.chart import BeatmapDifficulty, CatchChart
from catch_perf.models.mods import DIFFICULTY_MODS, Mods, apply_mods, is_compatible
from catch_perf.models.pipeline import CalculationContext, CalculationResult
from catch_perf.pipeline.base import CalculationStage
from catch_perf.skills.base import Skill
from catch_perf.skills.movement import Movement

SkillFactory = Callable[[BeatmapDifficulty, float, Settings], list[Skill]]


class CalculationError(RuntimeError):
    """Raised when a calculation stage fails."""


def create_movement_skills(
    difficulty: BeatmapDifficulty, half_catcher_width: float, settings: Settings
) -> list[Skill]:
    """Default skill set: a single Movement skill."""
    return [
        Movement(
            half_catcher_width=half_catcher_width,
            clock_rate=difficulty.clock_rate,
            section_length=settings.section_length,
            decay_weight=settings.decay_weight,
            strain_decay_base=settings.strain_decay_base,
            skill_multiplier=settings.skill_multiplier,
        )
    ]


class DifficultyCalculator:
    """Orchestrates the calculation stages for one chart.

    Every call builds its own CalculationContext holding the half catcher
    width and fresh skills, so calculations for different modifier
    combinations are independent of each other.
    """

    def __init__(
        self,
        chart: CatchChart,
        settings: Settings | None = None,
        stages: list[CalculationStage] | None = None,
        skill_factory: SkillFactory = create_movement_skills,
    ) -> None:
        """Initialize the calculator.

        Args:
            chart: Chart with defaults applied and no modifiers baked in.
            settings: Application settings (global settings if omitted).
            stages: Ordered list of stages (default pipeline if omitted).
            skill_factory: Builds the skills for each calculation.
        """
        self.chart = chart
        self.settings = settings or get_settings()
        self.stages = stages if stages is not None else default_stages()
        self.skill_factory = skill_factory

    def run(self, mods: Mods) -> CalculationResult:
        """Run every stage for one modifier combination.

        Args:
            mods: Active modifiers.

        Returns:
            CalculationResult with the attributes and the notes of every stage.

        Raises:
            CalculationError: If a stage fails.
        """
        start_time = time.perf_counter()
        context = self.create_context(mods)
        stages_completed: list[str] = []

        for stage in self.stages:
            stage_result = stage.run(context)
            context.warnings.extend(stage_result.warnings)

            if not stage_result.success:
                raise CalculationError(
                    f"{stage.name}: {stage_result.error_message}"
                ) from stage_result.error
            stages_completed.append(stage.name)

        if context.attributes is None:
            raise CalculationError("Pipeline finished without producing attributes")

        return CalculationResult(
            attributes=context.attributes,
            stages_completed=stages_completed,
            warnings=context.warnings,
            total_duration=time.perf_counter() - start_time,
        )

    def run_all(self) -> Iterator[CalculationResult]:
        """Run the stages for every compatible combination of difficulty modifiers."""
        for mods in difficulty_mod_combinations():
            yield self.run(mods)

    def calculate(self) -> DifficultyAttributes:
        """Difficulty with no modifiers applied."""
        return self.calculate_with_mods(Mods.NONE)

    def calculate_with_mods(self, mods: Mods) -> DifficultyAttributes:
        """Difficulty for a specific modifier combination."""
        return self.run(mods).attributes

    def calculate_all(self) -> Iterator[DifficultyAttributes]:
        """Difficulty for every compatible combination of difficulty modifiers."""
        for result in self.run_all():
            yield result.attributes

    def create_context(self, mods: Mods) -> CalculationContext:
        difficulty = apply_mods(self.chart.difficulty, mods)
        half_catcher_width = calculate_half_catcher_width(difficulty.circle_size)

        return CalculationContext(
            chart=self.chart,
            mods=mods,
            difficulty=difficulty,
            half_catcher_width=half_catcher_width,
            skills=self.skill_factory(difficulty, half_catcher_width, self.settings),
        )


def difficulty_mod_combinations() -> list[Mods]:
    """No-mod plus every compatible combination of the difficulty modifiers."""
    combinations = [Mods.NONE]
    for size in range(1, len(DIFFICULTY_MODS) + 1):
        for combo in itertools.combinations(DIFFICULTY_MODS, size):
            mods = Mods.NONE
            for flag in combo:
                mods |= flag
            if is_compatible(mods):
                combinations.append(mods)
    return combinations


def default_stages() -> list[CalculationStage]:
    """Create the default stage list.

    Returns:
        Stages in execution order.
    """
    from catch_perf.stages import (
        AttributesStage,
        HyperDashStage,
        NestingStage,
        PreprocessingStage,
        StrainStage,
    )

    return [
        NestingStage(),
        HyperDashStage(),
        PreprocessingStage(),
        StrainStage(),
        AttributesStage(),
    ]
