"""Quarter-turn rotation algebra for grid headings and in-face coordinates."""

from __future__ import annotations

import numpy as np

RIGHT, DOWN, LEFT, UP = 0, 1, 2, 3
DIRECTIONS = (RIGHT, DOWN, LEFT, UP)
DIRECTION_NAMES = ("right", "down", "left", "up")

# Unit grid steps; y grows downward so clockwise is right -> down -> left -> up.
DIRECTION_VECTORS = ((1, 0), (0, 1), (-1, 0), (0, -1))

_QUARTER_TURN = np.array([[0, -1], [1, 0]], dtype=np.int64)
_TURN_MATRICES = tuple(np.linalg.matrix_power(_QUARTER_TURN, k) for k in range(4))


def rotate_direction(direction: int, turns: int) -> int:
    return (direction + turns) % 4


def compose(first: int, second: int) -> int:
    return (first + second) % 4


def invert(rotation: int) -> int:
    return (-rotation) % 4


def opposite(direction: int) -> int:
    return (direction + 2) % 4


def rotate_vector(vector: tuple[int, int], turns: int) -> tuple[int, int]:
    """Rotate an integer grid vector by ``turns`` clockwise quarter turns."""
    out = _TURN_MATRICES[turns % 4] @ np.asarray(vector, dtype=np.int64)
    return int(out[0]), int(out[1])


def rotate_point(point: tuple[int, int], turns: int, size: int) -> tuple[int, int]:
    """Rotate an in-face coordinate about the centre of a ``size`` x ``size`` face.

    One clockwise quarter turn maps ``(i, j)`` to ``(size - 1 - j, i)``.
    """
    # Doubled offsets from the face centre keep the arithmetic integral.
    cx = 2 * point[0] - (size - 1)
    cy = 2 * point[1] - (size - 1)
    rx, ry = rotate_vector((cx, cy), turns)
    return (rx + size - 1) // 2, (ry + size - 1) // 2
