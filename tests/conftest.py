"""Pytest fixtures for Catch Perf tests."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from catch_perf.config import Settings, configure
from catch_perf.models import (
    BeatmapDifficulty,
    CatchChart,
    JuiceStream,
    SliderPath,
    fruit,
)


@pytest.fixture(autouse=True)
def settings() -> Settings:
    """Reset global settings to their defaults for every test."""
    return configure()


@pytest.fixture
def make_stream() -> Callable[..., JuiceStream]:
    """Return a factory for straight, horizontal juice streams."""

    def factory(
        start_time: float = 0.0,
        x: float = 100.0,
        distance: float = 100.0,
        velocity: float = 1.0,
        tick_distance: float = 100.0,
        repeats: int = 0,
        **kwargs: object,
    ) -> JuiceStream:
        return JuiceStream(
            start_time=start_time,
            x=x,
            path=SliderPath(control_points=[(0.0, 0.0), (distance, 0.0)]),
            velocity=velocity,
            tick_distance=tick_distance,
            repeats=repeats,
            **kwargs,  # type: ignore[arg-type]
        )

    return factory


@pytest.fixture
def make_alternating_chart() -> Callable[..., CatchChart]:
    """Return a factory for charts of fruits alternating between two positions."""

    def factory(
        interval: float = 500.0,
        left: float = 200.0,
        right: float = 312.0,
        count: int = 32,
        circle_size: float = 5.0,
        approach_rate: float = 9.0,
    ) -> CatchChart:
        chart = CatchChart(
            objects=[
                fruit(1000.0 + i * interval, left if i % 2 == 0 else right)
                for i in range(count)
            ],
            difficulty=BeatmapDifficulty(circle_size=circle_size, approach_rate=approach_rate),
        )
        chart.apply_defaults()
        return chart

    return factory


@pytest.fixture
def chart_document() -> dict:
    """Return a small chart document with every object type."""
    return {
        "title": "Test Song",
        "artist": "Test Artist",
        "version": "Salad",
        "difficulty": {
            "circle_size": 4.0,
            "approach_rate": 8.0,
            "slider_multiplier": 1.4,
            "slider_tick_rate": 1.0,
        },
        "timing_points": [{"time": 0, "beat_length": 500}],
        "difficulty_points": [{"time": 0, "slider_velocity": 1.0}],
        "effect_points": [{"time": 0, "kiai": False}, {"time": 3000, "kiai": True}],
        "hit_objects": [
            {"type": "fruit", "time": 1000, "x": 256},
            {"type": "fruit", "time": 1250, "x": 128},
            {
                "type": "juice_stream",
                "time": 1500,
                "x": 100,
                "repeats": 1,
                "curve_type": "linear",
                "points": [[0, 0], [280, 0]],
                "length": 280,
            },
            {"type": "fruit", "time": 3750, "x": 400},
            {"type": "banana_shower", "time": 4000, "end_time": 5000},
            {"type": "fruit", "time": 5500, "x": 300},
        ],
    }


@pytest.fixture
def chart_file(tmp_path: Path, chart_document: dict) -> Path:
    """Write the chart document to a temporary JSON file."""
    path = tmp_path / "chart.json"
    path.write_text(json.dumps(chart_document), encoding="utf-8")
    return path
