"""
Configuration constants for the Rubik's Cube Simulator
"""

from pathlib import Path

# Puzzle sizes
DEFAULT_SIZE = 3
MIN_SIZE = 1
MAX_SIZE = 7
KEYBOARD_SIZES = (2, 3, 4)

# Numerical tolerances (lattice spacing is 1 for every size)
SLICE_EPSILON = 0.1
POSITION_TOLERANCE = 0.1
ORIENTATION_TOLERANCE = 0.05  # radians

# Move timing (seconds)
DEFAULT_DURATION = 0.3
SCRAMBLE_DURATION = 0.05
SCRAMBLE_LENGTH = 20

# Input
DRAG_THRESHOLD_PX = 10
MAX_QUEUED_WHILE_ANIMATING = 2
DEFAULT_CAMERA = (8.0, 8.0, 12.0)
ORBIT_STEP_DEG = 30.0

# Game flow
WIN_MIN_ELAPSED = 2.0
FRAME_INTERVAL = 0.02

# Key rows, left to right / top to bottom; truncated to the puzzle size
COLUMN_UP_KEYS = "qwer"
COLUMN_DOWN_KEYS = "asdf"
ROW_LEFT_KEYS = "uiop"
ROW_RIGHT_KEYS = "jkl;"

# Face colors, keyed by outward direction
INTERIOR_COLOR = "black"
FACE_COLORS = {
    "+x": "red",
    "-x": "orange",
    "+y": "white",
    "-y": "yellow",
    "+z": "green",
    "-z": "blue",
}

# Color name to curses color pair
COLOR_TO_CURSES = {
    "blue": 1,
    "white": 2,
    "orange": 3,
    "green": 4,
    "red": 5,
    "yellow": 6,
    "black": 0,
}

# Files
HISTORY_FILE = Path.home() / ".cube_history.json"
MAX_HISTORY = 100  # Keep last N solves
LOG_FILE = Path.home() / ".cube_sim.log"

# Terminal cell size, for converting mouse drags to pixels
CELL_WIDTH_PX = 8
CELL_HEIGHT_PX = 16
