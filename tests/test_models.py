"""Tests for data models."""

import dataclasses

import pytest

from catch_perf.models import (
    BananaShower,
    BeatmapDifficulty,
    CatchChart,
    ControlPointInfo,
    DifficultyPoint,
    EffectPoint,
    HitSample,
    HitStatistics,
    Mods,
    Pickup,
    PickupKind,
    SliderPath,
    TimingPoint,
    apply_mods,
    difficulty_range,
    fruit,
)
from catch_perf.stages.nesting import expand_juice_stream


class TestPickup:
    """Tests for Pickup and PickupKind."""

    def test_combo_relevance(self):
        """Only fruits and droplets count toward combo."""
        assert PickupKind.FRUIT.counts_toward_combo
        assert PickupKind.DROPLET.counts_toward_combo
        assert not PickupKind.TINY_DROPLET.counts_toward_combo
        assert not PickupKind.BANANA.counts_toward_combo

    def test_judgement_categories(self):
        """Each kind maps onto its statistic."""
        assert PickupKind.FRUIT.judgement == "great"
        assert PickupKind.DROPLET.judgement == "large_tick_hit"
        assert PickupKind.TINY_DROPLET.judgement == "small_tick_hit"
        assert PickupKind.BANANA.judgement is None

    def test_pickups_are_immutable(self):
        """Pickups cannot be modified, only cloned."""
        pickup = fruit(1000, 256)
        with pytest.raises(dataclasses.FrozenInstanceError):
            pickup.x = 100  # type: ignore[misc]

        moved = pickup.clone(x=100.0)
        assert moved.x == 100.0
        assert pickup.x == 256
        assert moved.kind is PickupKind.FRUIT


class TestJuiceStream:
    """Tests for JuiceStream timing."""

    def test_duration_from_velocity(self, make_stream):
        """Duration follows from distance, spans and velocity."""
        stream = make_stream(start_time=1000, distance=200, velocity=0.5, repeats=1)

        assert stream.spans == 2
        assert stream.duration == pytest.approx(800)
        assert stream.span_duration == pytest.approx(400)
        assert stream.end_time == pytest.approx(1800)

    def test_setting_duration_recomputes_velocity(self, make_stream):
        """velocity * span duration stays equal to the distance."""
        stream = make_stream(distance=300, velocity=1.0, repeats=2)

        stream.duration = 450

        assert stream.velocity * stream.span_duration == pytest.approx(stream.distance)
        assert stream.velocity == pytest.approx(2.0)

    def test_setting_distance_keeps_invariant(self, make_stream):
        """Changing the distance changes the duration, not the velocity."""
        stream = make_stream(distance=100, velocity=0.5)

        stream.distance = 150

        assert stream.velocity == pytest.approx(0.5)
        assert stream.velocity * stream.span_duration == pytest.approx(150)

    def test_zero_velocity_has_zero_duration(self, make_stream):
        """A stream that cannot move has no duration instead of failing."""
        stream = make_stream(velocity=0.0)
        assert stream.duration == 0.0

    def test_end_x_follows_span_parity(self, make_stream):
        """The stream ends at the far end after odd span counts."""
        assert make_stream(x=100, distance=100, repeats=0).end_x == pytest.approx(200)
        assert make_stream(x=100, distance=100, repeats=1).end_x == pytest.approx(100)
        assert make_stream(x=100, distance=100, repeats=2).end_x == pytest.approx(200)

    @pytest.mark.parametrize(
        ("field", "value", "combo"),
        [("tick_distance", 100.0, 4), ("repeats", 1, 4), ("velocity", 0.5, 2)],
    )
    def test_field_changes_regenerate_pickups(self, make_stream, field, value, combo):
        """Generated pickups never go stale after a field is assigned."""
        stream = make_stream(distance=400, velocity=1, tick_distance=200)
        assert sum(p.counts_toward_combo for p in stream.nested_pickups) == 2

        setattr(stream, field, value)

        assert sum(p.counts_toward_combo for p in stream.nested_pickups) == combo
        assert stream.nested_pickups == expand_juice_stream(stream)

    def test_clone_is_independent(self, make_stream):
        """Cloned streams do not share their path."""
        stream = make_stream(distance=100)
        cloned = stream.clone()

        cloned.distance = 50

        assert stream.distance == pytest.approx(100)
        assert cloned.distance == pytest.approx(50)


class TestBananaShower:
    def test_duration(self):
        shower = BananaShower(start_time=1000, end_time=2500)
        assert shower.duration == 1500

        shower.duration = 500
        assert shower.end_time == 1500

    def test_moving_end_regenerates_bananas(self):
        shower = BananaShower(start_time=0, end_time=400)
        assert len(shower.nested_pickups) == 5

        shower.end_time = 800

        assert len(shower.nested_pickups) == 9


class TestSliderPath:
    """Tests for SliderPath geometry."""

    def test_linear_positions(self):
        """Positions interpolate along the polyline by distance."""
        path = SliderPath(control_points=[(0, 0), (100, 0), (100, 100)])

        assert path.distance == pytest.approx(200)
        assert path.position_at(0) == pytest.approx((0, 0))
        assert path.position_at(0.25) == pytest.approx((50, 0))
        assert path.position_at(0.75) == pytest.approx((100, 50))
        assert path.position_at(1) == pytest.approx((100, 100))

    def test_expected_distance_truncates(self):
        """A shorter expected distance cuts the geometry."""
        path = SliderPath(control_points=[(0, 0), (200, 0)], expected_distance=100)

        assert path.distance == 100
        assert path.position_at(1) == pytest.approx((100, 0))

    def test_expected_distance_extends(self):
        """A longer expected distance continues along the last segment."""
        path = SliderPath(control_points=[(0, 0), (100, 0)], expected_distance=300)

        assert path.position_at(1) == pytest.approx((300, 0))

    def test_empty_path(self):
        """A path without control points has no length."""
        path = SliderPath()

        assert path.distance == 0
        assert path.position_at(0.5) == (0.0, 0.0)

    def test_bezier_endpoints_and_symmetry(self):
        """A symmetric bezier passes through its ends and is centred halfway."""
        path = SliderPath(control_points=[(0, 0), (100, 100), (200, 0)], curve_type="bezier")

        assert path.position_at(0) == pytest.approx((0, 0), abs=1e-9)
        assert path.position_at(1) == pytest.approx((200, 0), abs=1e-9)
        assert path.position_at(0.5)[0] == pytest.approx(100, abs=1e-6)
        # Curved, so longer than the straight line between its ends
        assert path.distance > 200

    def test_progress_at_ping_pongs(self):
        """Overall progress maps back and forth along the path."""
        assert SliderPath.progress_at(0.25, 2) == pytest.approx(0.5)
        assert SliderPath.progress_at(0.75, 2) == pytest.approx(0.5)
        assert SliderPath.progress_at(1.0, 1) == pytest.approx(1.0)
        assert SliderPath.progress_at(1.0, 2) == pytest.approx(0.0)


class TestControlPoints:
    """Tests for ControlPointInfo lookups."""

    def test_lookup_uses_latest_point(self):
        info = ControlPointInfo(
            timing_points=[TimingPoint(0, 500), TimingPoint(2000, 250)],
        )

        assert info.timing_point_at(1999).beat_length == 500
        assert info.timing_point_at(2000).beat_length == 250
        assert info.timing_point_at(5000).beat_length == 250

    def test_lookup_before_first_point(self):
        """Times before the first point use the first point."""
        info = ControlPointInfo(difficulty_points=[DifficultyPoint(1000, 1.5)])
        assert info.difficulty_point_at(0).slider_velocity == 1.5

    def test_lookup_without_points(self):
        """Empty lists fall back to default points."""
        info = ControlPointInfo()

        assert info.timing_point_at(100).beat_length == 500
        assert info.difficulty_point_at(100).slider_velocity == 1.0
        assert info.effect_point_at(100).kiai is False


class TestDifficultyRange:
    @pytest.mark.parametrize(
        "approach_rate,expected",
        [(0, 1800), (2.5, 1500), (5, 1200), (9, 600), (10, 450)],
    )
    def test_preempt_mapping(self, approach_rate, expected):
        """Approach rate maps onto preempt through two linear segments."""
        assert difficulty_range(approach_rate, 1800, 1200, 450) == pytest.approx(expected)


class TestCatchChart:
    """Tests for CatchChart."""

    def test_apply_defaults_sets_stream_timing(self, make_stream):
        """Tick distance and velocity come from the control points."""
        stream = make_stream(start_time=1000, distance=280)
        chart = CatchChart(
            objects=[stream],
            difficulty=BeatmapDifficulty(slider_multiplier=1.4, slider_tick_rate=2),
            control_points=ControlPointInfo(
                timing_points=[TimingPoint(0, 500)],
                difficulty_points=[DifficultyPoint(0, 1.0)],
            ),
        )

        chart.apply_defaults()

        assert stream.tick_distance == pytest.approx(70)
        assert stream.velocity == pytest.approx(0.28)
        assert stream.duration == pytest.approx(1000)

    def test_apply_defaults_sets_pickup_defaults(self):
        """Leaf pickups get preempt, scale and kiai."""
        chart = CatchChart(
            objects=[fruit(500, 100), fruit(1500, 200)],
            difficulty=BeatmapDifficulty(approach_rate=9, circle_size=5),
            control_points=ControlPointInfo(effect_points=[EffectPoint(0), EffectPoint(1000, True)]),
        )

        chart.apply_defaults()

        first, second = chart.objects
        assert isinstance(first, Pickup) and isinstance(second, Pickup)
        assert first.time_preempt == pytest.approx(600)
        assert first.scale == pytest.approx(0.5)
        assert first.kiai is False
        assert second.kiai is True

    def test_max_combo_counts_fruits_and_droplets(self, make_stream):
        """Tiny droplets and bananas do not add to the max combo."""
        stream = make_stream(distance=400, velocity=1, tick_distance=100)
        shower = BananaShower(start_time=2000, end_time=3000)
        chart = CatchChart(objects=[fruit(0, 100), stream, shower])

        # 3 droplets + tail fruit from the stream, 1 leaf fruit
        assert chart.max_combo == 5
        assert chart.count(PickupKind.BANANA) > 0
        assert chart.fruits == 1
        assert chart.juice_streams == 1
        assert chart.banana_showers == 1

    def test_empty_chart(self):
        chart = CatchChart()
        assert chart.max_combo == 0


class TestMods:
    """Tests for modifier parsing and application."""

    def test_from_acronyms(self):
        mods = Mods.from_acronyms("hdhr")

        assert mods.has(Mods.HIDDEN)
        assert mods.has(Mods.HARD_ROCK)
        assert not mods.has(Mods.DOUBLE_TIME)
        assert mods.acronyms == "HDHR"

    def test_nightcore_implies_double_time(self):
        mods = Mods.from_acronyms("NC")

        assert mods.has(Mods.DOUBLE_TIME)
        assert mods.acronyms == "NC"

    def test_no_mod(self):
        assert Mods.from_acronyms("") == Mods.NONE
        assert Mods.from_acronyms("NM") == Mods.NONE
        assert Mods.NONE.acronyms == ""

    @pytest.mark.parametrize("text", ["XX", "HDX", "SD"])
    def test_invalid_acronyms(self, text):
        with pytest.raises(ValueError):
            Mods.from_acronyms(text)

    def test_hard_rock_adjustment(self):
        """Hard rock raises settings and caps them at 10."""
        base = BeatmapDifficulty(circle_size=5, approach_rate=9)

        adjusted = apply_mods(base, Mods.HARD_ROCK)

        assert adjusted.circle_size == pytest.approx(6.5)
        assert adjusted.approach_rate == pytest.approx(10)
        assert adjusted.clock_rate == 1.0
        # Original untouched
        assert base.circle_size == 5

    def test_easy_and_speed_adjustment(self):
        base = BeatmapDifficulty(circle_size=4, approach_rate=8)

        assert apply_mods(base, Mods.EASY).circle_size == pytest.approx(2)
        assert apply_mods(base, Mods.DOUBLE_TIME).clock_rate == pytest.approx(1.5)
        assert apply_mods(base, Mods.HALF_TIME).clock_rate == pytest.approx(0.75)
        assert apply_mods(base, Mods.from_acronyms("NC")).clock_rate == pytest.approx(1.5)


class TestHitStatistics:
    """Tests for HitStatistics totals."""

    def test_totals(self):
        stats = HitStatistics(
            great=10, large_tick_hit=5, small_tick_hit=20, small_tick_miss=3, miss=2
        )

        assert stats.total_combo_hits == 17
        assert stats.total_successful_hits == 35
        assert stats.total_hits == 40
        assert stats.accuracy == pytest.approx(35 / 40)

    def test_no_hits_has_zero_accuracy(self):
        assert HitStatistics().accuracy == 0.0

    @pytest.mark.parametrize(
        "stats",
        [
            HitStatistics(great=1),
            HitStatistics(miss=5),
            HitStatistics(small_tick_hit=3, small_tick_miss=9),
            HitStatistics(great=1000, large_tick_hit=5, small_tick_hit=7, miss=1),
        ],
    )
    def test_accuracy_is_clamped(self, stats):
        assert 0.0 <= stats.accuracy <= 1.0


def test_hit_sample_with_name():
    sample = HitSample(name="hitnormal", bank="soft", volume=70)
    tick = sample.with_name("slidertick")

    assert tick.name == "slidertick"
    assert tick.bank == "soft"
    assert sample.name == "hitnormal"
