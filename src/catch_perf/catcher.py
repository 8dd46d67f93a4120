"""Catcher geometry derived from circle size.

Sizes are rounded through single precision where the reference game keeps
them in 32-bit floats, so that widths match its output exactly.
"""

import numpy as np

# Size of the catcher at 1x scale
BASE_SIZE = 106.75

# Fraction of the catcher's width that can receive fruit
ALLOWED_CATCH_RANGE = 0.8

# Horizontal dash speed in pixels per millisecond
BASE_DASH_SPEED = 1.0


def _fround(value: float) -> float:
    return float(np.float32(value))


def calculate_scale(circle_size: float) -> float:
    """Catcher scale for a circle size (1.0 at CS 5)."""
    return 1.0 - _fround(0.7) * (circle_size - 5) / 5


def calculate_catch_width(circle_size: float) -> float:
    """Width of the catcher area that can receive fruit."""
    return _fround(BASE_SIZE) * abs(calculate_scale(circle_size)) * _fround(ALLOWED_CATCH_RANGE)


def calculate_half_catcher_width(circle_size: float) -> float:
    """Half catcher width used for difficulty calculation.

    For circle sizes above 5.5 the width is narrowed further to model
    imperfect control over very small catchers.
    """
    half_width = _fround(calculate_catch_width(circle_size) / 2)
    half_width *= 1 - _fround(max(0.0, circle_size - 5.5) * 0.0625)
    return half_width
