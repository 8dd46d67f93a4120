"""Nesting stage - expands juice streams and showers into pickups."""

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from catch_perf.models.objects import (
    BananaShower,
    HitObject,
    JuiceStream,
    Pickup,
    PickupKind,
)
from catch_perf.models.pipeline import CalculationContext, StageResult
from catch_perf.pipeline.base import CalculationStage

# Paths longer than this are truncated when generating ticks
MAX_PATH_LENGTH = 100000.0

# Tiny droplets are only generated in gaps longer than this (ms)
MIN_TINY_DROPLET_GAP = 80

# Upper bound on the spacing of tiny droplets and bananas (ms)
MAX_NESTED_SPACING = 100.0


class SliderEventType(enum.Enum):
    TICK = "tick"
    REPEAT = "repeat"
    TAIL = "tail"


@dataclass(frozen=True)
class SliderEvent:
    """A point of interest along a juice stream."""

    type: SliderEventType
    time: float
    path_progress: float
    span_index: int


def generate_slider_events(
    start_time: float,
    span_duration: float,
    velocity: float,
    tick_distance: float,
    total_distance: float,
    span_count: int,
    legacy_last_tick_offset: float | None = None,
) -> Iterator[SliderEvent]:
    """Generate ticks, repeats and the tail of a path travelled back and forth.

    Ticks sit at every multiple of ``tick_distance`` along each span, except
    within ``velocity * 10`` px of the span end. Odd spans travel the path
    backwards. The tail may be pulled earlier by ``legacy_last_tick_offset``,
    but never before the event preceding it.
    """
    length = min(MAX_PATH_LENGTH, total_distance)
    tick_distance = min(max(tick_distance, 0.0), length)
    min_distance_from_end = velocity * 10
    last_time = start_time

    for span in range(span_count):
        span_start_time = start_time + span * span_duration
        reversed_span = span % 2 == 1

        ticks = list(
            _generate_ticks(
                span,
                span_start_time,
                span_duration,
                reversed_span,
                length,
                tick_distance,
                min_distance_from_end,
            )
        )
        if reversed_span:
            ticks.reverse()

        for tick in ticks:
            last_time = tick.time
            yield tick

        if span < span_count - 1:
            last_time = span_start_time + span_duration
            yield SliderEvent(SliderEventType.REPEAT, last_time, (span + 1) % 2, span)

    total_duration = span_count * span_duration
    end_time = start_time + total_duration
    tail_time = end_time
    if legacy_last_tick_offset:
        tail_time = max(start_time + total_duration / 2, tail_time - legacy_last_tick_offset)
    tail_time = max(tail_time, last_time)

    tail_progress = float(span_count % 2)
    if tail_time < end_time and span_duration > 0:
        # Position along the final span at the shifted time
        final_span_start_time = start_time + (span_count - 1) * span_duration
        tail_progress = (tail_time - final_span_start_time) / span_duration
        if span_count % 2 == 0:
            tail_progress = 1 - tail_progress

    yield SliderEvent(SliderEventType.TAIL, tail_time, tail_progress, span_count - 1)


def _generate_ticks(
    span_index: int,
    span_start_time: float,
    span_duration: float,
    reversed_span: bool,
    length: float,
    tick_distance: float,
    min_distance_from_end: float,
) -> Iterator[SliderEvent]:
    if tick_distance == 0 or span_duration <= 0:
        return

    d = tick_distance
    while d <= length:
        if d >= length - min_distance_from_end:
            break

        path_progress = d / length
        time_progress = 1 - path_progress if reversed_span else path_progress
        yield SliderEvent(
            SliderEventType.TICK,
            span_start_time + time_progress * span_duration,
            path_progress,
            span_index,
        )
        d += tick_distance


def expand_juice_stream(stream: JuiceStream) -> list[Pickup]:
    """Expand a juice stream into droplets, tiny droplets and fruits.

    Ticks become droplets, repeat nodes and the tail become fruits, and gaps
    of more than 80 ms between consecutive events are filled with tiny
    droplets. The stream start is the origin of the first gap but is not
    itself a pickup, so the last pickup is always the tail fruit.
    """
    tick_samples = tuple(s.with_name("slidertick") for s in stream.samples)

    def make(kind: PickupKind, time: float, progress: float, samples: tuple) -> Pickup:
        return Pickup(
            kind=kind,
            start_time=time,
            x=stream.x + stream.path.position_at(progress)[0],
            samples=samples,
            kiai=stream.kiai,
            time_preempt=stream.time_preempt,
            scale=stream.scale,
        )

    events = generate_slider_events(
        start_time=stream.start_time,
        span_duration=stream.span_duration,
        velocity=stream.velocity,
        tick_distance=stream.tick_distance,
        total_distance=stream.distance,
        span_count=stream.spans,
        legacy_last_tick_offset=stream.legacy_last_tick_offset,
    )

    pickups: list[Pickup] = []
    last_time = stream.start_time
    last_progress = 0.0
    node_index = 1  # node 0 is the stream start

    for event in events:
        since_last = int(event.time) - int(last_time)
        if since_last > MIN_TINY_DROPLET_GAP:
            spacing = float(since_last)
            while spacing > MAX_NESTED_SPACING:
                spacing /= 2

            t = spacing
            while t < since_last:
                progress = last_progress + (t / since_last) * (event.path_progress - last_progress)
                pickups.append(make(PickupKind.TINY_DROPLET, t + last_time, progress, tick_samples))
                t += spacing

        last_time = event.time
        last_progress = event.path_progress

        match event.type:
            case SliderEventType.TICK:
                pickups.append(make(PickupKind.DROPLET, event.time, event.path_progress, tick_samples))
            case SliderEventType.REPEAT | SliderEventType.TAIL:
                if node_index < len(stream.node_samples):
                    samples = tuple(stream.node_samples[node_index])
                else:
                    samples = stream.samples
                pickups.append(make(PickupKind.FRUIT, event.time, event.path_progress, samples))
                node_index += 1

    pickups.sort(key=lambda p: p.start_time)
    return pickups


def expand_banana_shower(shower: BananaShower) -> list[Pickup]:
    """Expand a banana shower into evenly spaced bananas.

    The spacing is the shower's duration halved until it is at most 100 ms.
    Bananas are decorative and share the shower's position.
    """
    spacing = shower.duration
    while spacing > MAX_NESTED_SPACING:
        spacing /= 2
    if spacing <= 0:
        return []

    bananas: list[Pickup] = []
    time = shower.start_time
    while time <= shower.end_time:
        bananas.append(
            Pickup(
                kind=PickupKind.BANANA,
                start_time=time,
                x=shower.x,
                samples=shower.samples,
                kiai=shower.kiai,
                time_preempt=shower.time_preempt,
                scale=shower.scale,
            )
        )
        time += spacing
    return bananas


def expand(obj: HitObject) -> list[Pickup]:
    """Pickups generated by a chart object; a leaf pickup expands to itself."""
    match obj:
        case JuiceStream():
            return expand_juice_stream(obj)
        case BananaShower():
            return expand_banana_shower(obj)
        case Pickup():
            return [obj]
    raise TypeError(f"Not a hit object: {obj!r}")


def flatten(objects: Iterable[HitObject]) -> list[Pickup | BananaShower]:
    """Replace juice streams with their pickups and sort everything by time.

    Banana showers stay whole. The sort is stable, so simultaneous objects
    keep their chart order. Streams contribute their ``nested_pickups``, the
    same pickups the chart's combo counts are taken from.
    """
    timeline: list[Pickup | BananaShower] = []
    for obj in objects:
        if isinstance(obj, JuiceStream):
            timeline.extend(obj.nested_pickups)
        else:
            timeline.append(obj)
    return sorted(timeline, key=lambda o: o.start_time)


class NestingStage(CalculationStage):
    """Stage 1: Nesting.

    Builds the flattened, time-sorted pickup timeline of the chart. The
    chart's own objects are not modified.
    """

    @property
    def name(self) -> str:
        return "nesting"

    def execute(self, context: CalculationContext) -> StageResult:
        """Flatten the chart into context.timeline."""
        warnings: list[str] = []

        context.timeline = flatten(context.chart.objects)

        if not context.chart.objects:
            warnings.append("Chart has no hit objects")
        else:
            warnings.append(
                f"Flattened {len(context.chart.objects)} objects into "
                f"{len(context.timeline)} timeline entries"
            )

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=warnings,
        )
