"""
Cube movement logic - move values, rotation matrices and slice selection
"""

import math
from dataclasses import dataclass, replace
from typing import List, Sequence

import numpy as np

from config import DEFAULT_DURATION, SLICE_EPSILON
from cube_state import AXIS_INDEX, Cubie


@dataclass(frozen=True)
class Move:
    """
    A quarter turn of one slice.

    direction follows the right-hand rule: +1 about x sends +y to +z.
    Moves are never edited once created; inverse() builds a new one.
    """
    axis: str
    slice: float
    direction: int
    duration: float = DEFAULT_DURATION

    def inverse(self) -> "Move":
        return replace(self, direction=-self.direction)

    def as_list(self) -> list:
        """Compact form for JSON history"""
        return [self.axis, self.slice, self.direction]


def rotation_matrix(axis: str, angle: float) -> np.ndarray:
    """Right-handed rotation of `angle` radians about a world axis"""
    c = math.cos(angle)
    s = math.sin(angle)
    if axis == "x":
        return np.array([[1, 0, 0], [0, c, -s], [0, s, c]], dtype=float)
    if axis == "y":
        return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]], dtype=float)
    if axis == "z":
        return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]], dtype=float)
    raise ValueError(f"Unknown axis: {axis!r}")


def quarter_turn(axis: str, direction: int) -> np.ndarray:
    """Exact integer matrix of a quarter turn"""
    return np.rint(rotation_matrix(axis, direction * math.pi / 2))


def select_slice(cubies: Sequence[Cubie], axis: str, slice_value: float,
                 epsilon: float = SLICE_EPSILON) -> List[int]:
    """
    Indices of the cubies whose coordinate on `axis` is `slice_value`.
    An unknown axis selects nothing.
    """
    axis_idx = AXIS_INDEX.get(axis)
    if axis_idx is None:
        return []
    return [c.index for c in cubies if abs(c.position[axis_idx] - slice_value) < epsilon]


def invert_sequence(moves: Sequence[Move]) -> List[Move]:
    """Moves that undo `moves`, in the order they must be applied"""
    return [m.inverse() for m in reversed(moves)]
