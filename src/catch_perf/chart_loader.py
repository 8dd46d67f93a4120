"""Chart loading - builds a CatchChart from a JSON chart document.

Document layout::

    {
      "title": "...", "artist": "...", "version": "...",
      "difficulty": {"circle_size": 4, "approach_rate": 8, ...},
      "timing_points": [{"time": 0, "beat_length": 500}],
      "difficulty_points": [{"time": 0, "slider_velocity": 1.0}],
      "effect_points": [{"time": 0, "kiai": false}],
      "hit_objects": [
        {"type": "fruit", "time": 1000, "x": 256},
        {"type": "juice_stream", "time": 1500, "x": 100, "repeats": 1,
         "curve_type": "linear", "points": [[0, 0], [200, 0]], "length": 200},
        {"type": "banana_shower", "time": 3000, "end_time": 4000}
      ]
    }

Path points are relative to the object's position.
"""

import json
from pathlib import Path
from typing import Any

from catch_perf.models.chart import (
    BeatmapDifficulty,
    CatchChart,
    ControlPointInfo,
    DifficultyPoint,
    EffectPoint,
    TimingPoint,
)
from catch_perf.models.objects import (
    BananaShower,
    HitObject,
    HitSample,
    JuiceStream,
    Pickup,
    PickupKind,
)
from catch_perf.models.path import SliderPath

DIFFICULTY_FIELDS = (
    "circle_size",
    "approach_rate",
    "overall_difficulty",
    "drain_rate",
    "slider_multiplier",
    "slider_tick_rate",
)


class ChartFormatError(ValueError):
    """Raised when a chart document is malformed."""


def load_chart(path: Path) -> CatchChart:
    """Load a chart from a JSON file and apply its defaults."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ChartFormatError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ChartFormatError(f"Could not read {path}: {e}") from e
    return chart_from_dict(data)


def chart_from_dict(data: dict[str, Any]) -> CatchChart:
    """Build a chart from a parsed document and apply its defaults.

    Raises:
        ChartFormatError: If the document is malformed in any way.
    """
    if not isinstance(data, dict):
        raise ChartFormatError("Chart document must be an object")

    try:
        chart = _build_chart(data)
    except ChartFormatError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ChartFormatError(f"Malformed chart document: {e}") from e

    chart.apply_defaults()
    return chart


def _build_chart(data: dict[str, Any]) -> CatchChart:
    difficulty_data = data.get("difficulty", {})
    if not isinstance(difficulty_data, dict):
        raise ChartFormatError("Difficulty settings must be an object")
    unknown = set(difficulty_data) - set(DIFFICULTY_FIELDS)
    if unknown:
        raise ChartFormatError(f"Unknown difficulty settings: {', '.join(sorted(unknown))}")

    difficulty = BeatmapDifficulty(
        **{key: float(value) for key, value in difficulty_data.items()}
    )
    if difficulty.slider_tick_rate <= 0:
        raise ChartFormatError("slider_tick_rate must be positive")

    control_points = ControlPointInfo(
        timing_points=[
            TimingPoint(float(p["time"]), float(p.get("beat_length", 500.0)))
            for p in _sorted_points(data, "timing_points")
        ],
        difficulty_points=[
            DifficultyPoint(float(p["time"]), float(p.get("slider_velocity", 1.0)))
            for p in _sorted_points(data, "difficulty_points")
        ],
        effect_points=[
            EffectPoint(float(p["time"]), bool(p.get("kiai", False)))
            for p in _sorted_points(data, "effect_points")
        ],
    )
    if any(p.beat_length <= 0 for p in control_points.timing_points):
        raise ChartFormatError("Timing points must have a positive beat_length")

    hit_objects = data.get("hit_objects", [])
    if not isinstance(hit_objects, list):
        raise ChartFormatError("hit_objects must be a list")

    objects: list[HitObject] = []
    last_time = float("-inf")
    for index, obj_data in enumerate(hit_objects):
        obj = _parse_hit_object(index, obj_data)
        if obj.start_time < last_time:
            raise ChartFormatError(
                f"Hit object {index} starts at {obj.start_time}, before the previous object"
            )
        last_time = obj.start_time
        objects.append(obj)

    return CatchChart(
        objects=objects,
        difficulty=difficulty,
        control_points=control_points,
        title=str(data.get("title", "")),
        artist=str(data.get("artist", "")),
        version=str(data.get("version", "")),
    )


def _sorted_points(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    points = data.get(key, [])
    if not isinstance(points, list) or not all(isinstance(p, dict) for p in points):
        raise ChartFormatError(f"{key} must be a list of objects")
    try:
        return sorted(points, key=lambda p: float(p["time"]))
    except KeyError as e:
        raise ChartFormatError(f"Control point in {key} is missing {e}") from e


def _parse_hit_object(index: int, data: dict[str, Any]) -> HitObject:
    try:
        obj_type = data["type"]
        start_time = float(data["time"])

        match obj_type:
            case "fruit" | "droplet" | "tiny_droplet":
                return Pickup(
                    kind=PickupKind(obj_type),
                    start_time=start_time,
                    x=float(data["x"]),
                    samples=_parse_samples(data.get("samples", [])),
                )
            case "juice_stream":
                path = SliderPath(
                    control_points=[(float(x), float(y)) for x, y in data.get("points", [])],
                    curve_type=data.get("curve_type", "linear"),
                    expected_distance=(
                        float(data["length"]) if data.get("length") is not None else None
                    ),
                )
                if path.curve_type not in ("linear", "bezier"):
                    raise ChartFormatError(
                        f"Hit object {index}: unknown curve type {path.curve_type!r}"
                    )
                repeats = int(data.get("repeats", 0))
                if repeats < 0:
                    raise ChartFormatError(f"Hit object {index}: negative repeat count")
                offset = data.get("legacy_last_tick_offset")
                return JuiceStream(
                    start_time=start_time,
                    x=float(data["x"]),
                    path=path,
                    repeats=repeats,
                    samples=_parse_samples(data.get("samples", [])),
                    node_samples=[_parse_samples(n) for n in data.get("node_samples", [])],
                    legacy_last_tick_offset=float(offset) if offset is not None else None,
                )
            case "banana_shower":
                end_time = float(data["end_time"])
                if end_time < start_time:
                    raise ChartFormatError(f"Hit object {index}: banana shower ends before it starts")
                return BananaShower(
                    start_time=start_time,
                    end_time=end_time,
                    x=float(data.get("x", 256.0)),
                    samples=_parse_samples(data.get("samples", [])),
                )
            case _:
                raise ChartFormatError(f"Hit object {index}: unknown type {obj_type!r}")
    except ChartFormatError:
        raise
    except KeyError as e:
        raise ChartFormatError(f"Hit object {index} is missing {e}") from e
    except (TypeError, ValueError) as e:
        raise ChartFormatError(f"Hit object {index} is malformed: {e}") from e


def _parse_samples(data: list[dict[str, Any]]) -> tuple[HitSample, ...]:
    if not isinstance(data, list) or not all(isinstance(s, dict) for s in data):
        raise TypeError("samples must be a list of objects")
    return tuple(
        HitSample(
            name=str(s.get("name", "hitnormal")),
            bank=str(s.get("bank", "normal")),
            volume=int(s.get("volume", 100)),
        )
        for s in data
    )
