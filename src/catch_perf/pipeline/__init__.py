"""Pipeline module for Catch Perf."""

from catch_perf.pipeline.base import CalculationStage
from catch_perf.pipeline.orchestrator import (
    CalculationError,
    DifficultyCalculator,
    default_stages,
    difficulty_mod_combinations,
)

__all__ = [
    "CalculationError",
    "CalculationStage",
    "DifficultyCalculator",
    "default_stages",
    "difficulty_mod_combinations",
]
