"""
Shuffle functionality for the cube
"""

import logging
import random
from typing import List, Optional

from config import SCRAMBLE_DURATION, SCRAMBLE_LENGTH
from cube_state import AXES, lattice_values
from engine import CubeEngine
from moves import Move

logger = logging.getLogger(__name__)


def random_moves(size: int, count: int = SCRAMBLE_LENGTH,
                 duration: float = SCRAMBLE_DURATION,
                 seed: Optional[int] = None) -> List[Move]:
    """Random quarter turns, never undoing the previous one"""
    rng = random.Random(seed)
    slices = lattice_values(size)
    moves = []

    while len(moves) < count:
        move = Move(rng.choice(AXES), rng.choice(slices), rng.choice((1, -1)), duration)
        if moves and move == moves[-1].inverse():
            continue
        moves.append(move)

    return moves


def shuffle_cube(engine: CubeEngine, count: int = SCRAMBLE_LENGTH,
                 duration: float = SCRAMBLE_DURATION,
                 seed: Optional[int] = None) -> List[Move]:
    """Queue a scramble; returns the moves, or [] while the cube is busy"""
    if engine.is_animating:
        logger.info("Shuffle ignored: cube is animating")
        return []

    moves = random_moves(engine.size, count, duration, seed)
    logger.info("Shuffling with %d moves", len(moves))
    for move in moves:
        engine.enqueue(move)
    return moves
