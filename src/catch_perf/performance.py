"""Performance evaluation - turns a play into a single performance value."""

import math

from catch_perf.models.attributes import (
    DifficultyAttributes,
    HitStatistics,
    PerformanceAttributes,
    ScoreInfo,
)
from catch_perf.models.chart import CatchChart
from catch_perf.models.mods import Mods
from catch_perf.models.objects import PickupKind


def evaluate(
    attributes: DifficultyAttributes,
    statistics: HitStatistics,
    achieved_max_combo: int,
    mods: Mods = Mods.NONE,
) -> float:
    """Performance value of a play.

    Catch relies almost entirely on movement, so the value grows with the
    star rating and is then scaled by length, misses, combo, approach rate,
    modifiers and accuracy.
    """
    base = max(1.0, attributes.star_rating / 0.0049)
    value = (5.0 * base - 4.0) ** 2.0 / 100000.0

    # Longer maps are worth more; length counts combo-relevant pickups only
    total_combo = statistics.total_combo_hits
    length_bonus = 0.95 + 0.3 * min(1.0, total_combo / 2500.0) + (
        math.log10(total_combo / 2500.0) * 0.475 if total_combo > 2500 else 0.0
    )
    value *= length_bonus

    value *= 0.97 ** statistics.miss

    if attributes.max_combo > 0:
        value *= min(achieved_max_combo**0.8 / attributes.max_combo**0.8, 1.0)

    approach_rate = attributes.approach_rate
    approach_rate_factor = 1.0
    if approach_rate > 9:
        approach_rate_factor += 0.1 * (approach_rate - 9)
    if approach_rate > 10:
        approach_rate_factor += 0.1 * (approach_rate - 10)
    elif approach_rate < 8:
        approach_rate_factor += 0.025 * (8 - approach_rate)
    value *= approach_rate_factor

    if mods.has(Mods.HIDDEN):
        # Worth little at high approach rates, more the lower it is
        if approach_rate <= 10:
            value *= 1.05 + 0.075 * (10 - approach_rate)
        else:
            value *= 1.01 + 0.04 * (11 - min(11, approach_rate))

    if mods.has(Mods.FLASHLIGHT):
        # Flashlight gets harder the longer the map
        value *= 1.35 * length_bonus

    value *= statistics.accuracy**5.5

    if mods.has(Mods.NO_FAIL):
        value *= 0.9

    return value


class PerformanceCalculator:
    """Evaluates scores against one set of difficulty attributes."""

    def __init__(self, attributes: DifficultyAttributes) -> None:
        self.attributes = attributes

    def calculate(self, score: ScoreInfo) -> PerformanceAttributes:
        total = evaluate(self.attributes, score.statistics, score.max_combo, score.mods)
        return PerformanceAttributes(mods=score.mods, total=total)


def simulate_statistics(chart: CatchChart) -> HitStatistics:
    """Statistics of a play catching every pickup of the chart."""
    return HitStatistics(
        great=chart.count(PickupKind.FRUIT),
        large_tick_hit=chart.count(PickupKind.DROPLET),
        small_tick_hit=chart.count(PickupKind.TINY_DROPLET),
    )


def simulate_score(chart: CatchChart, attributes: DifficultyAttributes) -> ScoreInfo:
    """A perfect play of the chart with the attributes' modifiers."""
    return ScoreInfo(
        statistics=simulate_statistics(chart),
        max_combo=attributes.max_combo,
        mods=attributes.mods,
    )
