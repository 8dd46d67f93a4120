"""Path geometry for juice streams.

Control points are offsets relative to the owning object's position, the first
point normally being (0, 0). A path may carry an expected distance which
truncates (or linearly extends) the calculated geometry, mirroring how charts
store a pixel length next to the curve.
"""

from dataclasses import dataclass, field, replace
from typing import Literal

import numpy as np

CurveType = Literal["linear", "bezier"]

# Points sampled along every bezier segment
BEZIER_SAMPLES = 50


def _bezier(points: np.ndarray, samples: int) -> np.ndarray:
    """Evaluate a bezier curve with de Casteljau's algorithm.

    Args:
        points: Array of shape (K, 2) with the segment's control points.
        samples: Number of evenly spaced curve parameters to evaluate.

    Returns:
        Array of shape (samples, 2).
    """
    t = np.linspace(0.0, 1.0, samples)[:, None, None]
    layer = np.broadcast_to(points, (samples, *points.shape)).copy()
    while layer.shape[1] > 1:
        layer = (1.0 - t) * layer[:, :-1] + t * layer[:, 1:]
    return layer[:, 0]


@dataclass
class SliderPath:
    """Geometry of a continuous path-object."""

    control_points: list[tuple[float, float]] = field(default_factory=list)
    curve_type: CurveType = "linear"
    expected_distance: float | None = None

    _vertices: np.ndarray | None = field(default=None, init=False, repr=False, compare=False)
    _cumulative: np.ndarray | None = field(default=None, init=False, repr=False, compare=False)

    @property
    def calculated_distance(self) -> float:
        """Length of the geometry before applying the expected distance."""
        _, cumulative = self._geometry()
        return float(cumulative[-1])

    @property
    def distance(self) -> float:
        if self.expected_distance is not None:
            return max(0.0, self.expected_distance)
        return self.calculated_distance

    @distance.setter
    def distance(self, value: float) -> None:
        self.expected_distance = value

    def position_at(self, progress: float) -> tuple[float, float]:
        """Position along the path at a progress in [0, 1] of its distance."""
        vertices, cumulative = self._geometry()
        d = min(max(progress, 0.0), 1.0) * self.distance

        if len(vertices) == 1:
            return float(vertices[0, 0]), float(vertices[0, 1])

        if d >= cumulative[-1]:
            # Past the calculated geometry: continue along the final segment
            direction = vertices[-1] - vertices[-2]
            segment_length = float(np.linalg.norm(direction))
            if segment_length == 0:
                return float(vertices[-1, 0]), float(vertices[-1, 1])
            point = vertices[-1] + direction * (d - cumulative[-1]) / segment_length
            return float(point[0]), float(point[1])

        index = int(np.searchsorted(cumulative, d, side="right")) - 1
        index = min(max(index, 0), len(vertices) - 2)
        segment_length = cumulative[index + 1] - cumulative[index]
        weight = 0.0 if segment_length == 0 else (d - cumulative[index]) / segment_length
        point = vertices[index] + (vertices[index + 1] - vertices[index]) * weight
        return float(point[0]), float(point[1])

    def curve_position_at(self, progress: float, spans: int) -> tuple[float, float]:
        """Position at an overall progress of a path travelled back and forth."""
        return self.position_at(self.progress_at(progress, spans))

    @staticmethod
    def progress_at(progress: float, spans: int) -> float:
        """Convert overall progress into progress along the path itself."""
        p = progress * spans % 1
        if int(progress * spans) % 2 == 1:
            p = 1 - p
        return p

    def clone(self) -> "SliderPath":
        return replace(self, control_points=list(self.control_points))

    def _geometry(self) -> tuple[np.ndarray, np.ndarray]:
        if self._vertices is None or self._cumulative is None:
            vertices = self._calculate_vertices()
            lengths = np.linalg.norm(np.diff(vertices, axis=0), axis=1)
            self._vertices = vertices
            self._cumulative = np.concatenate([[0.0], np.cumsum(lengths)])
        return self._vertices, self._cumulative

    def _calculate_vertices(self) -> np.ndarray:
        points = np.asarray(self.control_points, dtype=float).reshape(-1, 2)
        if len(points) == 0:
            return np.zeros((1, 2))
        if self.curve_type == "linear" or len(points) < 3:
            return points

        # Repeated control points split a bezier into independent segments
        vertices: list[np.ndarray] = []
        start = 0
        for i in range(1, len(points) + 1):
            at_end = i == len(points)
            if at_end or np.array_equal(points[i], points[i - 1]):
                segment = points[start:i]
                if len(segment) >= 2:
                    curve = _bezier(segment, BEZIER_SAMPLES)
                    vertices.append(curve if not vertices else curve[1:])
                start = i
        if not vertices:
            return points[:1]
        return np.concatenate(vertices)
