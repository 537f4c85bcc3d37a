"""
Cube engine - move queue, slice animation and lattice snapping
"""

import logging
import math
from collections import deque
from typing import Callable, List, Optional

import numpy as np

from animations import Tween
from config import (
    DEFAULT_DURATION, DEFAULT_SIZE, SLICE_EPSILON,
    POSITION_TOLERANCE, ORIENTATION_TOLERANCE,
)
from cube_state import (
    AXIS_INDEX, Cubie, build_cubies, check_size, is_cube_solved,
    snap_orientation, snap_position,
)
from moves import Move, rotation_matrix, select_slice

logger = logging.getLogger(__name__)


class CubeDisposedError(RuntimeError):
    """Raised when a disposed engine is used"""


class Pivot:
    """
    Temporary rotation frame for one move.
    Holds cubie indices only; the cubie table stays with the engine.
    """

    def __init__(self):
        self.indices: List[int] = []
        self.axis: Optional[str] = None
        self.angle = 0.0

    def attach(self, indices: List[int], axis: str):
        self.indices = list(indices)
        self.axis = axis
        self.angle = 0.0

    def set_angle(self, angle: float):
        self.angle = angle

    def matrix(self) -> np.ndarray:
        if self.axis not in AXIS_INDEX:
            return np.eye(3)
        return rotation_matrix(self.axis, self.angle)

    def release(self) -> List[int]:
        """Hand every borrowed index back and reset the frame"""
        indices, self.indices = self.indices, []
        self.axis = None
        self.angle = 0.0
        return indices

    def __contains__(self, index: int) -> bool:
        return index in self.indices


class CubeEngine:
    """
    Owns the cubies of one puzzle and rotates them one move at a time.

    States: idle (nothing in flight) and animating (one move attached to
    the pivot). Moves leave the queue in FIFO order; the next one is only
    selected after the previous one has been snapped back onto the lattice.
    Time is supplied from outside through tick(dt).
    """

    def __init__(self, size: int = DEFAULT_SIZE,
                 on_sequence_complete: Optional[Callable[[], None]] = None,
                 on_move_start: Optional[Callable[[Move], None]] = None,
                 on_move_end: Optional[Callable[[Move], None]] = None,
                 slice_epsilon: float = SLICE_EPSILON,
                 position_tolerance: float = POSITION_TOLERANCE,
                 orientation_tolerance: float = ORIENTATION_TOLERANCE):
        self._size = check_size(size)
        self.on_sequence_complete = on_sequence_complete
        self.on_move_start = on_move_start
        self.on_move_end = on_move_end
        self.slice_epsilon = slice_epsilon
        self.position_tolerance = position_tolerance
        self.orientation_tolerance = orientation_tolerance

        self.cubies: List[Cubie] = build_cubies(size)
        self.pivot = Pivot()
        self._queue = deque()
        self._animating = False
        self._active_move: Optional[Move] = None
        self._tween: Optional[Tween] = None
        self._draining = False
        self._drain_runs = 0
        self._disposed = False
        self._generation = 0

        logger.debug("Created %dx%dx%d cube", size, size, size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_animating(self) -> bool:
        return self._animating

    @property
    def pending_moves(self) -> int:
        return len(self._queue)

    @property
    def active_move(self) -> Optional[Move]:
        return self._active_move

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _ensure_alive(self):
        if self._disposed:
            raise CubeDisposedError("Cube engine has been disposed")

    # Queue

    def queue_move(self, axis: str, slice_value: float, direction: int,
                   duration: float = DEFAULT_DURATION):
        """Enqueue a quarter turn; an empty slice is a harmless no-op"""
        self.enqueue(Move(axis, slice_value, direction, duration))

    def enqueue(self, move: Move):
        self._ensure_alive()
        self._queue.append(move)
        logger.debug("Queued %s (pending=%d)", move, len(self._queue))
        self._drain()

    def _drain(self, completed: bool = False):
        # Completion callbacks may enqueue; the outer loop picks those up
        if self._draining:
            return
        self._drain_runs += 1
        generation = self._generation
        self._draining = True
        try:
            while not self._animating and self._queue:
                self._start(self._queue.popleft())
                if not self._animating:
                    completed = True
        finally:
            self._draining = False

        if generation != self._generation:
            return
        if completed and not self._animating and not self._queue:
            logger.debug("Move queue drained")
            if self.on_sequence_complete:
                self.on_sequence_complete()

    def _start(self, move: Move):
        self._animating = True
        self._active_move = move

        if move.axis not in AXIS_INDEX:
            logger.warning("Move with unknown axis %r rotates nothing", move.axis)
        indices = select_slice(self.cubies, move.axis, move.slice, self.slice_epsilon)
        self.pivot.attach(indices, move.axis)

        if self.on_move_start:
            self.on_move_start(move)

        target = move.direction * math.pi / 2
        self._tween = Tween(move.duration,
                            on_update=lambda p: self.pivot.set_angle(target * p),
                            on_complete=self._finish)
        if move.duration <= 0:
            self._tween.advance(0.0)

    def _finish(self):
        final = self.pivot.matrix()
        for index in self.pivot.release():
            cubie = self.cubies[index]
            cubie.position = snap_position(final @ cubie.position, self._size)
            cubie.orientation = snap_orientation(final @ cubie.orientation)

        move = self._active_move
        self._animating = False
        self._active_move = None
        self._tween = None

        generation = self._generation
        drain_runs = self._drain_runs
        if self.on_move_end:
            self.on_move_end(move)
        if generation != self._generation:
            return

        # A drain started from on_move_end has already run the queue
        if self._draining or drain_runs != self._drain_runs:
            return
        self._drain(completed=True)

    def tick(self, dt: float) -> bool:
        """Advance the move in flight by dt seconds; returns is_animating"""
        self._ensure_alive()
        if self._tween is not None:
            self._tween.advance(dt)
        return self._animating

    def _abort(self):
        self._generation += 1
        if self._tween is not None:
            self._tween.cancel()
        # Borrowed cubies still hold their pre-move lattice pose
        self.pivot.release()
        self._queue.clear()
        self._tween = None
        self._active_move = None
        self._animating = False

    # State

    def world_position(self, index: int) -> np.ndarray:
        """Current (possibly mid-animation) position of a cubie"""
        cubie = self.cubies[index]
        if index in self.pivot:
            return self.pivot.matrix() @ cubie.position
        return cubie.position.copy()

    def check_solved(self) -> bool:
        self._ensure_alive()
        return is_cube_solved(self.cubies, self.position_tolerance, self.orientation_tolerance)

    def reset(self, size: Optional[int] = None):
        """Drop queued and in-flight moves and rebuild the cubies"""
        self._ensure_alive()
        if size is not None:
            self._size = check_size(size)
        self._abort()
        self.cubies = build_cubies(self._size)
        logger.info("Cube reset to %dx%dx%d", self._size, self._size, self._size)

    def dispose(self):
        if self._disposed:
            return
        self._abort()
        self.cubies = []
        self._disposed = True
        logger.info("Cube disposed")


def create_cube(size: int = DEFAULT_SIZE,
                on_sequence_complete: Optional[Callable[[], None]] = None) -> CubeEngine:
    return CubeEngine(size, on_sequence_complete)
