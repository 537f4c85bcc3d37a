"""
Cube state - cubie model, lattice helpers and solved-state checking
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from config import (
    FACE_COLORS, INTERIOR_COLOR, MIN_SIZE, MAX_SIZE,
    POSITION_TOLERANCE, ORIENTATION_TOLERANCE,
)

AXES = ("x", "y", "z")
AXIS_INDEX = {"x": 0, "y": 1, "z": 2}

# Outward unit vector of each labelled direction
DIRECTIONS = {
    "+x": np.array([1.0, 0.0, 0.0]),
    "-x": np.array([-1.0, 0.0, 0.0]),
    "+y": np.array([0.0, 1.0, 0.0]),
    "-y": np.array([0.0, -1.0, 0.0]),
    "+z": np.array([0.0, 0.0, 1.0]),
    "-z": np.array([0.0, 0.0, -1.0]),
}

# Viewer-facing faces and the direction that points out of each
FACE_DIRECTIONS = {
    "right": "+x",
    "left": "-x",
    "top": "+y",
    "bottom": "-y",
    "front": "+z",
    "back": "-z",
}

# Screen basis (right, up) for a viewer looking straight at each face
FACE_BASIS = {
    "front": ("+x", "+y"),
    "back": ("-x", "+y"),
    "right": ("-z", "+y"),
    "left": ("+z", "+y"),
    "top": ("+x", "-z"),
    "bottom": ("+x", "+z"),
}


@dataclass(eq=False)
class Cubie:
    """One sub-cube. Colors are keyed by the cubie's own (local) directions."""
    index: int
    initial_position: np.ndarray
    colors: Dict[str, str]
    position: Optional[np.ndarray] = None
    orientation: np.ndarray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self):
        self.initial_position = np.array(self.initial_position, dtype=float)
        self.initial_position.setflags(write=False)
        if self.position is None:
            self.position = self.initial_position.copy()

    def outward_color(self, direction: str) -> str:
        """Color currently showing towards a world direction"""
        local = self.orientation.T @ DIRECTIONS[direction]
        for label, vec in DIRECTIONS.items():
            if np.dot(local, vec) > 0.5:
                return self.colors[label]
        return INTERIOR_COLOR


def check_size(size: int) -> int:
    if not isinstance(size, int) or not MIN_SIZE <= size <= MAX_SIZE:
        raise ValueError(f"Cube size must be an integer in {MIN_SIZE}..{MAX_SIZE}, got {size!r}")
    return size


def lattice_offset(size: int) -> float:
    return (size - 1) / 2


def lattice_values(size: int) -> List[float]:
    """Valid coordinates along one axis, lowest first"""
    offset = lattice_offset(size)
    return [i - offset for i in range(size)]


def snap_coordinate(value: float, size: int) -> float:
    """Round a coordinate to the nearest valid lattice value"""
    offset = lattice_offset(size)
    index = int(round(value + offset))
    index = min(max(index, 0), size - 1)
    return index - offset


def snap_position(position: np.ndarray, size: int) -> np.ndarray:
    return np.array([snap_coordinate(v, size) for v in position])


def snap_orientation(orientation: np.ndarray) -> np.ndarray:
    """
    Round a rotation onto the nearest quarter-turn rotation.
    Entries of a quarter-turn rotation matrix are exactly -1, 0 or 1.
    """
    return np.rint(orientation) + 0.0


def build_cubies(size: int) -> List[Cubie]:
    """Create the size^3 cubies on the centered lattice, in x, y, z order"""
    check_size(size)
    offset = lattice_offset(size)
    cubies = []

    for ix in range(size):
        for iy in range(size):
            for iz in range(size):
                adjusted = (ix - offset, iy - offset, iz - offset)
                colors = {}
                for axis_idx, axis in enumerate(AXES):
                    coord = adjusted[axis_idx]
                    colors[f"+{axis}"] = FACE_COLORS[f"+{axis}"] if coord == offset else INTERIOR_COLOR
                    colors[f"-{axis}"] = FACE_COLORS[f"-{axis}"] if coord == -offset else INTERIOR_COLOR
                cubies.append(Cubie(index=len(cubies), initial_position=adjusted, colors=colors))

    return cubies


def rotation_angle(orientation: np.ndarray) -> float:
    """Angle (radians) of the rotation away from identity"""
    cos_angle = (np.trace(orientation) - 1.0) / 2.0
    return float(np.arccos(np.clip(cos_angle, -1.0, 1.0)))


def is_cube_solved(cubies: List[Cubie],
                   position_tolerance: float = POSITION_TOLERANCE,
                   orientation_tolerance: float = ORIENTATION_TOLERANCE) -> bool:
    """Check every cubie is home and unrotated"""
    for cubie in cubies:
        if np.max(np.abs(cubie.position - cubie.initial_position)) > position_tolerance:
            return False
        if rotation_angle(cubie.orientation) > orientation_tolerance:
            return False
    return True


def face_stickers(cubies: List[Cubie], face: str, size: int,
                  position_tolerance: float = POSITION_TOLERANCE) -> List[List[str]]:
    """
    Colors on one face as seen by a viewer looking at it.
    Row 0 is the top of the face, column 0 its left edge.
    """
    outward = FACE_DIRECTIONS[face]
    right_label, up_label = FACE_BASIS[face]
    normal = DIRECTIONS[outward]
    right = DIRECTIONS[right_label]
    up = DIRECTIONS[up_label]
    offset = lattice_offset(size)

    grid = [[INTERIOR_COLOR] * size for _ in range(size)]
    for cubie in cubies:
        if abs(np.dot(cubie.position, normal) - offset) > position_tolerance:
            continue
        col = int(round(np.dot(cubie.position, right) + offset))
        row = int(round(offset - np.dot(cubie.position, up)))
        grid[row][col] = cubie.outward_color(outward)

    return grid


def sticker_position(face: str, row: int, col: int, size: int) -> tuple:
    """Lattice position of the cubie behind a sticker of face_stickers()"""
    right_label, up_label = FACE_BASIS[face]
    offset = lattice_offset(size)
    position = (DIRECTIONS[FACE_DIRECTIONS[face]] * offset
                + DIRECTIONS[right_label] * (col - offset)
                + DIRECTIONS[up_label] * (offset - row))
    return tuple(float(v) + 0.0 for v in position)
