"""Strain skills for Catch Perf."""

from catch_perf.skills.base import Skill, StrainDecaySkill
from catch_perf.skills.movement import Movement

__all__ = ["Movement", "Skill", "StrainDecaySkill"]
