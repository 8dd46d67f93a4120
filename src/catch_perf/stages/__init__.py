"""Calculation stages for Catch Perf."""

from catch_perf.stages.attributes import AttributesStage
from catch_perf.stages.hyper_dash import HyperDashStage
from catch_perf.stages.nesting import NestingStage
from catch_perf.stages.preprocessing import PreprocessingStage
from catch_perf.stages.strain import StrainStage

__all__ = [
    "AttributesStage",
    "HyperDashStage",
    "NestingStage",
    "PreprocessingStage",
    "StrainStage",
]
