"""
View-relative controls - translate keys and drags into moves

Everything here is a pure function of a ViewContext; nothing reads the
camera or the screen directly and nothing touches the cube.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from config import (
    COLUMN_UP_KEYS, COLUMN_DOWN_KEYS, ROW_LEFT_KEYS, ROW_RIGHT_KEYS,
    DEFAULT_DURATION, DRAG_THRESHOLD_PX, KEYBOARD_SIZES,
)
from cube_state import AXIS_INDEX, lattice_offset, snap_coordinate
from moves import Move

COLUMN_UP = "column_up"
COLUMN_DOWN = "column_down"
ROW_LEFT = "row_left"
ROW_RIGHT = "row_right"
KEY_GROUPS = (COLUMN_UP, COLUMN_DOWN, ROW_LEFT, ROW_RIGHT)

FACES = ("top", "bottom", "left", "right", "front", "back")

# (face, group) -> (axis, slice sign, direction)
#
# Columns turn about the screen-right axis, rows about the screen-up axis
# (see cube_state.FACE_BASIS). Key index 0 is the leftmost column / topmost row, and
# slice = slice_sign * (key_index - (N - 1) / 2).
KEY_GROUP_TABLE: Dict[Tuple[str, str], Tuple[str, int, int]] = {
    ("front", COLUMN_UP): ("x", 1, -1),
    ("front", COLUMN_DOWN): ("x", 1, 1),
    ("front", ROW_LEFT): ("y", -1, -1),
    ("front", ROW_RIGHT): ("y", -1, 1),

    ("back", COLUMN_UP): ("x", -1, 1),
    ("back", COLUMN_DOWN): ("x", -1, -1),
    ("back", ROW_LEFT): ("y", -1, -1),
    ("back", ROW_RIGHT): ("y", -1, 1),

    ("right", COLUMN_UP): ("z", -1, 1),
    ("right", COLUMN_DOWN): ("z", -1, -1),
    ("right", ROW_LEFT): ("y", -1, -1),
    ("right", ROW_RIGHT): ("y", -1, 1),

    ("left", COLUMN_UP): ("z", 1, -1),
    ("left", COLUMN_DOWN): ("z", 1, 1),
    ("left", ROW_LEFT): ("y", -1, -1),
    ("left", ROW_RIGHT): ("y", -1, 1),

    ("top", COLUMN_UP): ("x", 1, -1),
    ("top", COLUMN_DOWN): ("x", 1, 1),
    ("top", ROW_LEFT): ("z", 1, 1),
    ("top", ROW_RIGHT): ("z", 1, -1),

    ("bottom", COLUMN_UP): ("x", 1, -1),
    ("bottom", COLUMN_DOWN): ("x", 1, 1),
    ("bottom", ROW_LEFT): ("z", -1, -1),
    ("bottom", ROW_RIGHT): ("z", -1, 1),
}


@dataclass(frozen=True)
class ViewContext:
    """
    Snapshot of what the controls need to know about the view.

    cubie_position: lattice position of the grabbed cubie (drags only)
    drag_delta: pointer displacement in pixels, screen y grows downward
    """
    camera_position: Tuple[float, float, float]
    cubie_position: Optional[Tuple[float, float, float]] = None
    drag_delta: Tuple[float, float] = (0.0, 0.0)


def dominant_face(camera_position: Sequence[float]) -> str:
    """
    Face the camera is mostly looking at.
    Ties go to y, then x, then z, so (5, 5, 5) is "top".
    """
    x, y, z = (float(v) for v in camera_position)
    ax, ay, az = abs(x), abs(y), abs(z)

    if ay >= ax and ay >= az:
        return "top" if y >= 0 else "bottom"
    if ax >= az:
        return "right" if x >= 0 else "left"
    return "front" if z >= 0 else "back"


def key_layout(size: int) -> Dict[str, Tuple[str, int]]:
    """key -> (group, index) for a supported size, empty otherwise"""
    if size not in KEYBOARD_SIZES:
        return {}
    layout = {}
    rows = (COLUMN_UP_KEYS, COLUMN_DOWN_KEYS, ROW_LEFT_KEYS, ROW_RIGHT_KEYS)
    for group, keys in zip(KEY_GROUPS, rows):
        for index, key in enumerate(keys[:size]):
            layout[key] = (group, index)
    return layout


def map_key(key: str, view: ViewContext, size: int,
            duration: float = DEFAULT_DURATION) -> Optional[Move]:
    """Move for a key press, or None if the key is not bound"""
    binding = key_layout(size).get(key.lower())
    if binding is None:
        return None

    group, index = binding
    axis, slice_sign, direction = KEY_GROUP_TABLE[(dominant_face(view.camera_position), group)]
    raw_slice = index - lattice_offset(size)
    return Move(axis, slice_sign * raw_slice + 0.0, direction, duration)


def map_drag(view: ViewContext, size: int, threshold: float = DRAG_THRESHOLD_PX,
             duration: float = DEFAULT_DURATION) -> Optional[Move]:
    """
    Move for a drag that started on a cubie.
    Horizontal drags turn the grabbed cubie's row, vertical ones its column.
    """
    if view.cubie_position is None:
        return None

    dx, dy = view.drag_delta
    if math.hypot(dx, dy) < threshold:
        return None

    face = dominant_face(view.camera_position)
    if abs(dx) >= abs(dy):
        group = ROW_RIGHT if dx > 0 else ROW_LEFT
    else:
        group = COLUMN_UP if dy < 0 else COLUMN_DOWN

    axis, _, direction = KEY_GROUP_TABLE[(face, group)]
    slice_value = snap_coordinate(view.cubie_position[AXIS_INDEX[axis]], size)
    return Move(axis, slice_value, direction, duration)

