"""Hit object models for catch-the-fruit charts.

Every catchable unit is a ``Pickup`` tagged with a ``PickupKind``. Juice
streams and banana showers are containers that generate pickups on demand.
"""

import enum
from dataclasses import dataclass, field, replace
from typing import ClassVar

from catch_perf.models.path import SliderPath


class PickupKind(enum.Enum):
    """Variant tag for a catchable pickup."""

    FRUIT = "fruit"
    DROPLET = "droplet"
    TINY_DROPLET = "tiny_droplet"
    BANANA = "banana"

    @property
    def counts_toward_combo(self) -> bool:
        return self in (PickupKind.FRUIT, PickupKind.DROPLET)

    @property
    def judgement(self) -> str | None:
        """Statistic a successful catch of this kind is counted under."""
        match self:
            case PickupKind.FRUIT:
                return "great"
            case PickupKind.DROPLET:
                return "large_tick_hit"
            case PickupKind.TINY_DROPLET:
                return "small_tick_hit"
            case _:
                return None


@dataclass(frozen=True)
class HitSample:
    """A sound played when an object is caught."""

    name: str = "hitnormal"
    bank: str = "normal"
    volume: int = 100

    def with_name(self, name: str) -> "HitSample":
        return replace(self, name=name)


@dataclass(frozen=True)
class Pickup:
    """A single catchable unit (fruit, droplet, tiny droplet or banana)."""

    kind: PickupKind
    start_time: float  # ms
    x: float  # playfield pixels, 0-512
    samples: tuple[HitSample, ...] = ()
    kiai: bool = False
    time_preempt: float = 1200.0  # ms
    scale: float = 1.0
    hyper_dash: bool = False  # next pickup can only be reached with a hyperdash
    distance_to_hyper_dash: float = 0.0

    @property
    def counts_toward_combo(self) -> bool:
        return self.kind.counts_toward_combo

    def clone(self, **changes: object) -> "Pickup":
        return replace(self, **changes)  # type: ignore[arg-type]


def fruit(start_time: float, x: float, **kwargs: object) -> Pickup:
    """Shorthand for a leaf fruit."""
    return Pickup(PickupKind.FRUIT, start_time, x, **kwargs)  # type: ignore[arg-type]


@dataclass
class JuiceStream:
    """A fruit path: a continuous object expanded into fruits and droplets.

    ``velocity`` (px/ms) and ``path.distance`` determine the duration; setting
    ``duration`` recomputes the velocity so that
    ``velocity * span_duration == distance`` always holds. Assigning any
    field discards the generated pickups; in-place edits of ``path`` need an
    explicit ``create_nested()``.
    """

    BASE_DISTANCE: ClassVar[float] = 100.0

    start_time: float
    x: float
    path: SliderPath = field(default_factory=SliderPath)
    velocity: float = 1.0
    tick_distance: float = 100.0
    repeats: int = 0
    samples: tuple[HitSample, ...] = ()
    node_samples: list[tuple[HitSample, ...]] = field(default_factory=list)
    kiai: bool = False
    time_preempt: float = 1200.0
    scale: float = 1.0
    legacy_last_tick_offset: float | None = None

    _nested: list[Pickup] | None = field(default=None, init=False, repr=False, compare=False)

    def __setattr__(self, name: str, value: object) -> None:
        super().__setattr__(name, value)
        if not name.startswith("_"):
            # Any public field change invalidates the generated pickups
            super().__setattr__("_nested", None)

    @property
    def distance(self) -> float:
        return self.path.distance

    @distance.setter
    def distance(self, value: float) -> None:
        self.path.distance = value

    @property
    def spans(self) -> int:
        return self.repeats + 1

    @property
    def duration(self) -> float:
        if self.velocity <= 0:
            return 0.0
        return self.spans * self.path.distance / self.velocity

    @duration.setter
    def duration(self, value: float) -> None:
        self.velocity = self.spans * self.path.distance / value if value > 0 else 0.0

    @property
    def span_duration(self) -> float:
        return self.duration / self.spans

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def end_x(self) -> float:
        return self.x + self.path.curve_position_at(1, self.spans)[0]

    @property
    def nested_pickups(self) -> list[Pickup]:
        """Generated pickups, created on first access."""
        if self._nested is None:
            self.create_nested()
        assert self._nested is not None
        return self._nested

    def create_nested(self) -> list[Pickup]:
        """(Re)generate the nested pickups, replacing any previous ones."""
        from catch_perf.stages.nesting import expand_juice_stream

        self._nested = expand_juice_stream(self)
        return self._nested

    def clone(self) -> "JuiceStream":
        return replace(
            self,
            path=self.path.clone(),
            node_samples=[tuple(n) for n in self.node_samples],
        )


@dataclass
class BananaShower:
    """A timed shower of decorative bananas."""

    start_time: float
    end_time: float
    x: float = 256.0
    samples: tuple[HitSample, ...] = ()
    kiai: bool = False
    time_preempt: float = 1200.0
    scale: float = 1.0

    _nested: list[Pickup] | None = field(default=None, init=False, repr=False, compare=False)

    def __setattr__(self, name: str, value: object) -> None:
        super().__setattr__(name, value)
        if not name.startswith("_"):
            super().__setattr__("_nested", None)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @duration.setter
    def duration(self, value: float) -> None:
        self.end_time = self.start_time + value

    @property
    def nested_pickups(self) -> list[Pickup]:
        if self._nested is None:
            self.create_nested()
        assert self._nested is not None
        return self._nested

    def create_nested(self) -> list[Pickup]:
        from catch_perf.stages.nesting import expand_banana_shower

        self._nested = expand_banana_shower(self)
        return self._nested

    def clone(self) -> "BananaShower":
        return replace(self)


# Anything a chart can hold at the top level
HitObject = Pickup | JuiceStream | BananaShower
