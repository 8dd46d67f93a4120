"""Modifier flags and their effect on difficulty settings."""

import enum
from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catch_perf.models.chart import BeatmapDifficulty


class Mods(enum.IntFlag):
    """Active modifiers, using the legacy bit values."""

    NONE = 0
    NO_FAIL = 1 << 0
    EASY = 1 << 1
    HIDDEN = 1 << 3
    HARD_ROCK = 1 << 4
    DOUBLE_TIME = 1 << 6
    HALF_TIME = 1 << 8
    NIGHTCORE = 1 << 9
    FLASHLIGHT = 1 << 10

    def has(self, flag: "Mods") -> bool:
        """Capability test used by the calculators."""
        if flag is Mods.DOUBLE_TIME:
            return bool(self & (Mods.DOUBLE_TIME | Mods.NIGHTCORE))
        return bool(self & flag)

    @property
    def acronyms(self) -> str:
        """String form such as ``HDHR``; empty for no mods."""
        result = ""
        for flag, acronym in _ACRONYMS:
            if flag is Mods.DOUBLE_TIME and self & Mods.NIGHTCORE:
                continue
            if self & flag:
                result += acronym
        return result

    @classmethod
    def from_acronyms(cls, text: str) -> "Mods":
        """Parse a string such as ``HDDT`` (case-insensitive, ``NM`` for none)."""
        text = text.strip().upper().replace("+", "")
        if text in ("", "NM", "NOMOD"):
            return cls.NONE
        if len(text) % 2:
            raise ValueError(f"Invalid mod string: {text!r}")

        lookup = {acronym: flag for flag, acronym in _ACRONYMS}
        mods = cls.NONE
        for i in range(0, len(text), 2):
            acronym = text[i : i + 2]
            if acronym not in lookup:
                raise ValueError(f"Unknown mod: {acronym}")
            mods |= lookup[acronym]
        if mods & Mods.NIGHTCORE:
            mods |= Mods.DOUBLE_TIME
        return mods


_ACRONYMS: list[tuple[Mods, str]] = [
    (Mods.NO_FAIL, "NF"),
    (Mods.EASY, "EZ"),
    (Mods.HIDDEN, "HD"),
    (Mods.HALF_TIME, "HT"),
    (Mods.HARD_ROCK, "HR"),
    (Mods.DOUBLE_TIME, "DT"),
    (Mods.NIGHTCORE, "NC"),
    (Mods.FLASHLIGHT, "FL"),
]

# Modifiers that change the result of a difficulty calculation
DIFFICULTY_MODS = [Mods.DOUBLE_TIME, Mods.HALF_TIME, Mods.HARD_ROCK, Mods.EASY]

# Pairs that cannot be active together
INCOMPATIBLE_MODS = [
    Mods.DOUBLE_TIME | Mods.HALF_TIME,
    Mods.HARD_ROCK | Mods.EASY,
]


def is_compatible(mods: Mods) -> bool:
    return not any((mods & pair) == pair for pair in INCOMPATIBLE_MODS)


def apply_mods(difficulty: "BeatmapDifficulty", mods: Mods) -> "BeatmapDifficulty":
    """Return a copy of ``difficulty`` adjusted for the active modifiers.

    Speed changes only touch the clock rate; object times stay unscaled.
    """
    adjusted = replace(difficulty)

    if mods.has(Mods.HARD_ROCK):
        adjusted.circle_size = min(adjusted.circle_size * 1.3, 10.0)
        adjusted.approach_rate = min(adjusted.approach_rate * 1.4, 10.0)
        adjusted.overall_difficulty = min(adjusted.overall_difficulty * 1.4, 10.0)
        adjusted.drain_rate = min(adjusted.drain_rate * 1.4, 10.0)

    if mods.has(Mods.EASY):
        adjusted.circle_size *= 0.5
        adjusted.approach_rate *= 0.5
        adjusted.overall_difficulty *= 0.5
        adjusted.drain_rate *= 0.5

    if mods.has(Mods.DOUBLE_TIME):
        adjusted.clock_rate *= 1.5
    if mods.has(Mods.HALF_TIME):
        adjusted.clock_rate *= 0.75

    return adjusted
