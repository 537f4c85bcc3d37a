"""
Game flow - scramble, timer, input throttling and win detection
"""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional

from config import (
    DEFAULT_SIZE, HISTORY_FILE, MAX_QUEUED_WHILE_ANIMATING,
    SCRAMBLE_DURATION, SCRAMBLE_LENGTH, WIN_MIN_ELAPSED,
)
from engine import CubeEngine
from history import add_solve, get_best_time
from input_mapper import ViewContext, map_drag, map_key
from moves import Move
from shuffle import shuffle_cube

logger = logging.getLogger(__name__)


class GameSession:
    """
    One player's session around a cube engine.

    The timer starts when a scramble has finished playing; a win is only
    checked when the move queue drains, and only counts once the timer has
    been running for WIN_MIN_ELAPSED seconds.
    """

    def __init__(self, size: int = DEFAULT_SIZE,
                 clock: Callable[[], float] = time.monotonic,
                 history_path: Path = HISTORY_FILE,
                 player_name: str = "UNK",
                 record_history: bool = True):
        self.clock = clock
        self.history_path = history_path
        self.player_name = player_name
        self.record_history = record_history

        self.engine = CubeEngine(size,
                                 on_sequence_complete=self._on_sequence_complete,
                                 on_move_end=self._on_move_end)

        self.timer_running = False
        self.timer_start = 0.0
        self.timer_result: Optional[float] = None
        self.is_pb = False
        self.scrambling = False
        self._queueing_scramble = False
        self.move_count = 0
        self.solve_moves: List[list] = []
        self.last_solve: Optional[dict] = None

    @property
    def size(self) -> int:
        return self.engine.size

    # Input

    def accepts_input(self) -> bool:
        """Player input is dropped while a backlog builds up"""
        engine = self.engine
        return not (engine.is_animating and engine.pending_moves > MAX_QUEUED_WHILE_ANIMATING)

    def play(self, move: Optional[Move]) -> bool:
        if move is None or self.scrambling or not self.accepts_input():
            return False
        self.engine.enqueue(move)
        return True

    def handle_key(self, key: str, view: ViewContext) -> bool:
        return self.play(map_key(key, view, self.size))

    def handle_drag(self, view: ViewContext) -> bool:
        return self.play(map_drag(view, self.size))

    # Flow

    def scramble(self, count: int = SCRAMBLE_LENGTH,
                 duration: float = SCRAMBLE_DURATION,
                 seed: Optional[int] = None) -> List[Move]:
        if self.engine.is_animating:
            return []

        self.stop_timer()
        self.timer_result = None
        self.is_pb = False
        self.scrambling = True
        # Instant moves drain one by one; only the whole scramble counts
        self._queueing_scramble = True
        try:
            moves = shuffle_cube(self.engine, count, duration, seed)
        finally:
            self._queueing_scramble = False

        if not moves:
            self.scrambling = False
        elif not self.engine.is_animating:
            self._on_sequence_complete()
        return moves

    def start_timer(self):
        if self.timer_running:
            return
        self.timer_start = self.clock()
        self.timer_running = True
        self.move_count = 0
        self.solve_moves = []

    def stop_timer(self):
        self.timer_running = False

    def elapsed(self) -> float:
        if self.timer_running:
            return self.clock() - self.timer_start
        return self.timer_result or 0.0

    def tick(self, dt: float):
        self.engine.tick(dt)

    def reset(self, size: Optional[int] = None):
        self.engine.reset(size)
        self.stop_timer()
        self.timer_result = None
        self.is_pb = False
        self.scrambling = False
        self.move_count = 0
        self.solve_moves = []

    def dispose(self):
        self.engine.dispose()

    # Engine callbacks

    def _on_move_end(self, move: Move):
        if self.scrambling:
            return
        self.move_count += 1
        if self.timer_running:
            self.solve_moves.append(move.as_list())

    def _on_sequence_complete(self):
        if self._queueing_scramble:
            return
        if self.scrambling:
            self.scrambling = False
            self.start_timer()
            return
        self.check_win()

    def check_win(self) -> bool:
        if not self.timer_running:
            return False
        elapsed = self.clock() - self.timer_start
        if elapsed <= WIN_MIN_ELAPSED or not self.engine.check_solved():
            return False

        self.stop_timer()
        self.timer_result = elapsed
        logger.info("Solved %dx%d in %.2fs with %d moves",
                    self.size, self.size, elapsed, self.move_count)

        if self.record_history:
            best = get_best_time(self.size, self.history_path)
            self.is_pb = best is None or elapsed < best
            self.last_solve = add_solve(elapsed, list(self.solve_moves), self.is_pb,
                                        size=self.size, name=self.player_name,
                                        path=self.history_path)
        return True
