"""Data models for Catch Perf."""

from catch_perf.models.attributes import (
    DifficultyAttributes,
    HitStatistics,
    PerformanceAttributes,
    ScoreInfo,
)
from catch_perf.models.chart import (
    BeatmapDifficulty,
    CatchChart,
    ControlPointInfo,
    DifficultyPoint,
    EffectPoint,
    TimingPoint,
    difficulty_range,
)
from catch_perf.models.difficulty import DifficultyEvent
from catch_perf.models.mods import Mods, apply_mods
from catch_perf.models.objects import (
    BananaShower,
    HitObject,
    HitSample,
    JuiceStream,
    Pickup,
    PickupKind,
    fruit,
)
from catch_perf.models.path import SliderPath
from catch_perf.models.pipeline import CalculationContext, CalculationResult, StageResult

__all__ = [
    "BananaShower",
    "BeatmapDifficulty",
    "CalculationContext",
    "CalculationResult",
    "CatchChart",
    "ControlPointInfo",
    "DifficultyAttributes",
    "DifficultyEvent",
    "DifficultyPoint",
    "EffectPoint",
    "HitObject",
    "HitSample",
    "HitStatistics",
    "JuiceStream",
    "Mods",
    "PerformanceAttributes",
    "Pickup",
    "PickupKind",
    "ScoreInfo",
    "SliderPath",
    "StageResult",
    "TimingPoint",
    "apply_mods",
    "difficulty_range",
    "fruit",
]
