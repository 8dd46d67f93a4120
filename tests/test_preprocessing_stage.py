"""Tests for the PreprocessingStage."""

import pytest

from catch_perf.models import BananaShower, CatchChart, Mods, Pickup, PickupKind, fruit
from catch_perf.models.difficulty import MIN_STRAIN_TIME, NORMALIZED_HITOBJECT_RADIUS
from catch_perf.pipeline import DifficultyCalculator
from catch_perf.stages.nesting import flatten
from catch_perf.stages.preprocessing import PreprocessingStage, preprocess


class TestPreprocess:
    """Tests for preprocess."""

    def test_pairs_consecutive_pickups(self):
        timeline = [fruit(0, 100), fruit(100, 200), fruit(300, 150)]

        events = list(preprocess(timeline, half_catcher_width=41.0, clock_rate=1.0))

        assert len(events) == 2
        assert events[0].last is timeline[0] and events[0].base is timeline[1]
        assert events[1].last is timeline[1] and events[1].base is timeline[2]
        assert events[0].delta_time == pytest.approx(100)
        assert events[1].delta_time == pytest.approx(200)

    def test_skips_tiny_droplets_and_bananas(self):
        """Skipped objects do not break the pairing."""
        first = fruit(0, 100)
        tiny = Pickup(PickupKind.TINY_DROPLET, 50, 120)
        shower = BananaShower(start_time=75, end_time=90)
        banana = Pickup(PickupKind.BANANA, 80, 300)
        second = fruit(100, 200)

        events = list(preprocess([first, tiny, shower, banana, second], 41.0, 1.0))

        assert len(events) == 1
        assert events[0].last is first
        assert events[0].base is second

    def test_first_pickup_emits_nothing(self):
        assert list(preprocess([fruit(0, 100)], 41.0, 1.0)) == []
        assert list(preprocess([], 41.0, 1.0)) == []

    def test_clock_rate_scales_times(self):
        timeline = [fruit(1500, 100), fruit(1800, 100)]

        (event,) = preprocess(timeline, 41.0, clock_rate=1.5)

        assert event.delta_time == pytest.approx(200)
        assert event.start_time == pytest.approx(1200)
        assert event.last_start_time == pytest.approx(1000)

    def test_strain_time_has_a_floor(self):
        (event,) = preprocess([fruit(0, 100), fruit(10, 100)], 41.0, 1.0)

        assert event.delta_time == pytest.approx(10)
        assert event.strain_time == MIN_STRAIN_TIME

    def test_positions_normalised_to_catcher(self):
        """Positions are scaled so the half catcher width becomes the hitobject radius."""
        half_width = NORMALIZED_HITOBJECT_RADIUS * 2
        (event,) = preprocess([fruit(0, 100), fruit(500, 300)], half_width, 1.0)

        assert event.last_normalized_position == pytest.approx(50)
        assert event.normalized_position == pytest.approx(150)
        assert event.movement == pytest.approx(100)

    def test_is_lazy(self):
        events = preprocess([fruit(0, 0), fruit(1, 1)], 41.0, 1.0)
        assert iter(events) is events

    def test_event_count_for_juice_stream(self, make_stream):
        """N combo-relevant pickups give N - 1 events."""
        stream = make_stream(start_time=0, distance=500, velocity=0.5, tick_distance=100, repeats=2)
        timeline = flatten([fruit(-500, 0), stream, BananaShower(start_time=4000, end_time=5000)])
        combo_relevant = [
            p for p in timeline if isinstance(p, Pickup) and p.counts_toward_combo
        ]
        assert any(
            isinstance(p, Pickup) and p.kind is PickupKind.TINY_DROPLET for p in timeline
        )

        events = list(preprocess(timeline, 41.0, 1.0))

        assert len(events) == len(combo_relevant) - 1


class TestPreprocessingStage:
    def test_stage_name(self):
        assert PreprocessingStage().name == "preprocessing"

    def test_uses_context_width_and_rate(self):
        chart = CatchChart(objects=[fruit(0, 100), fruit(300, 200)])
        context = DifficultyCalculator(chart).create_context(Mods.DOUBLE_TIME)
        context.timeline = list(chart.objects)

        result = PreprocessingStage().execute(context)

        assert result.success is True
        assert len(context.events) == 1
        assert context.events[0].delta_time == pytest.approx(200)
        assert context.events[0].half_catcher_width == context.half_catcher_width
