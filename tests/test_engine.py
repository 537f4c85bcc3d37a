import logging
import math
import random

import numpy as np
import pytest

from cube_state import AXES, lattice_values
from engine import CubeDisposedError, CubeEngine, create_cube
from moves import Move, invert_sequence, quarter_turn


def index_at(engine, position):
    for cubie in engine.cubies:
        if np.allclose(cubie.position, position):
            return cubie.index
    raise LookupError(position)


def random_sequence(size, count, seed, duration=0.0):
    rng = random.Random(seed)
    values = lattice_values(size)
    return [Move(rng.choice(AXES), rng.choice(values), rng.choice((1, -1)), duration)
            for _ in range(count)]


def assert_on_lattice(engine):
    values = lattice_values(engine.size)
    for cubie in engine.cubies:
        for v in cubie.position:
            assert min(abs(v - lv) for lv in values) < 1e-12
        assert set(np.unique(cubie.orientation)) <= {-1.0, 0.0, 1.0}
        np.testing.assert_allclose(cubie.orientation @ cubie.orientation.T, np.eye(3))


def test_new_engine_is_idle_and_solved(cube):
    assert cube.size == 3
    assert not cube.is_animating
    assert cube.pending_moves == 0
    assert cube.check_solved()


@pytest.mark.parametrize("size", [0, 8, 2.5])
def test_engine_rejects_unsupported_sizes(size):
    with pytest.raises(ValueError):
        CubeEngine(size)


def test_quarter_turn_moves_the_right_cubies(cube, run_until_idle):
    corner = index_at(cube, (1, 1, 1))
    untouched = index_at(cube, (-1, 1, 1))

    cube.queue_move("x", 1.0, 1)
    assert cube.is_animating
    run_until_idle(cube)

    np.testing.assert_array_equal(cube.cubies[corner].position, [1, -1, 1])
    np.testing.assert_array_equal(cube.cubies[corner].orientation, quarter_turn("x", 1))
    np.testing.assert_array_equal(cube.cubies[untouched].position, [-1, 1, 1])
    assert not cube.check_solved()


def test_world_position_mid_animation(cube):
    index = index_at(cube, (1, 1, 0))
    cube.queue_move("x", 1.0, 1, duration=1.0)
    cube.tick(0.5)

    half = math.sqrt(0.5)
    np.testing.assert_allclose(cube.world_position(index), [1, half, half], atol=1e-12)
    # Stored pose only changes once the move finishes
    np.testing.assert_array_equal(cube.cubies[index].position, [1, 1, 0])

    cube.tick(0.5)
    assert not cube.is_animating
    np.testing.assert_array_equal(cube.world_position(index), [1, 0, 1])
    np.testing.assert_array_equal(cube.cubies[index].orientation, quarter_turn("x", 1))


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_random_sequences_stay_on_the_lattice(size):
    engine = CubeEngine(size)
    for move in random_sequence(size, 60, seed=size):
        engine.enqueue(move)
    assert not engine.is_animating
    assert_on_lattice(engine)
    assert len({tuple(c.position) for c in engine.cubies}) == size ** 3


def test_animated_moves_stay_on_the_lattice(run_until_idle):
    engine = CubeEngine(4)
    for move in random_sequence(4, 15, seed=7, duration=0.3):
        engine.enqueue(move)
    # Uneven frame times
    run_until_idle(engine, dt=0.07)
    assert_on_lattice(engine)


@pytest.mark.parametrize("size", [2, 3, 4])
def test_move_then_inverse_is_identity(size):
    engine = CubeEngine(size)
    for move in random_sequence(size, 10, seed=size * 11):
        engine.enqueue(move)
        engine.enqueue(move.inverse())
    assert engine.check_solved()


@pytest.mark.parametrize("axis", AXES)
def test_four_quarter_turns_are_identity(axis):
    engine = CubeEngine(3)
    for _ in range(4):
        engine.queue_move(axis, -1.0, 1, duration=0.0)
    assert engine.check_solved()


@pytest.mark.parametrize("size", [2, 3, 5])
def test_scramble_then_undo_solves(size):
    engine = CubeEngine(size)
    scramble = random_sequence(size, 25, seed=3)
    for move in scramble:
        engine.enqueue(move)
    assert not engine.check_solved()

    for move in invert_sequence(scramble):
        engine.enqueue(move)
    assert engine.check_solved()


def test_moves_run_in_fifo_order(run_until_idle):
    events = []
    engine = CubeEngine(3,
                        on_move_start=lambda m: events.append(("start", m)),
                        on_move_end=lambda m: events.append(("end", m)))
    moves = [Move("x", 1.0, 1), Move("y", -1.0, -1), Move("z", 0.0, 1)]
    for move in moves:
        engine.enqueue(move)
    assert engine.pending_moves == 2
    assert engine.active_move == moves[0]

    run_until_idle(engine)

    expected = []
    for move in moves:
        expected += [("start", move), ("end", move)]
    assert events == expected


def test_sequence_complete_fires_once_per_batch(run_until_idle):
    calls = []
    engine = create_cube(3, on_sequence_complete=lambda: calls.append(True))
    for _ in range(3):
        engine.queue_move("y", 1.0, 1)
    run_until_idle(engine)
    assert calls == [True]

    engine.queue_move("y", 1.0, 1)
    run_until_idle(engine)
    assert calls == [True, True]


def test_zero_duration_batch_completes_synchronously():
    calls = []
    engine = CubeEngine(3, on_sequence_complete=lambda: calls.append(engine.is_animating))
    engine.queue_move("x", 1.0, 1, duration=0.0)
    assert not engine.is_animating
    assert calls == [False]


def test_callback_can_enqueue_more_moves(run_until_idle):
    calls = []

    def on_complete():
        calls.append(engine.pending_moves)
        if len(calls) == 1:
            engine.queue_move("z", 1.0, 1)

    engine = CubeEngine(3, on_sequence_complete=on_complete)
    engine.queue_move("x", 1.0, 1)
    run_until_idle(engine)
    assert calls == [0, 0]


def test_instant_move_enqueued_from_move_end_completes_the_batch_once(run_until_idle):
    fired = []

    def on_move_end(move):
        if move.axis == "x":
            engine.enqueue(Move("y", 1.0, 1, 0.0))

    engine = CubeEngine(3, on_sequence_complete=lambda: fired.append(True),
                        on_move_end=on_move_end)
    engine.queue_move("x", 1.0, 1, 0.3)
    run_until_idle(engine)

    assert fired == [True]
    assert not engine.is_animating


def test_empty_slice_completes_without_rotating(cube, run_until_idle):
    ends = []
    cube.on_move_end = ends.append
    cube.queue_move("x", 0.5, 1)
    assert cube.is_animating
    run_until_idle(cube)
    assert len(ends) == 1
    assert cube.check_solved()


def test_unknown_axis_is_logged_and_harmless(cube, run_until_idle, caplog):
    with caplog.at_level(logging.WARNING, logger="engine"):
        cube.queue_move("w", 1.0, 1)
        run_until_idle(cube)
    assert "unknown axis" in caplog.text
    assert cube.check_solved()


def test_reset_mid_animation_discards_everything(run_until_idle):
    calls = []
    engine = CubeEngine(3, on_sequence_complete=lambda: calls.append(True))
    engine.queue_move("x", 1.0, 1)
    engine.queue_move("y", 1.0, 1)
    engine.tick(0.1)

    engine.reset()
    assert not engine.is_animating
    assert engine.pending_moves == 0
    assert engine.check_solved()
    assert len(engine.pivot.indices) == 0
    engine.tick(1.0)
    assert calls == []

    engine.queue_move("x", 1.0, 1)
    run_until_idle(engine)
    assert calls == [True]


def test_reset_can_change_size():
    engine = CubeEngine(3)
    engine.reset(5)
    assert engine.size == 5
    assert len(engine.cubies) == 125
    with pytest.raises(ValueError):
        engine.reset(9)


def test_dispose_mid_animation():
    calls = []
    engine = CubeEngine(3, on_sequence_complete=lambda: calls.append(True))
    engine.queue_move("x", 1.0, 1)
    engine.tick(0.1)

    engine.dispose()
    engine.dispose()
    assert engine.disposed
    assert calls == []
    with pytest.raises(CubeDisposedError):
        engine.tick(0.1)
    with pytest.raises(CubeDisposedError):
        engine.queue_move("x", 1.0, 1)
    with pytest.raises(CubeDisposedError):
        engine.check_solved()


def test_reset_from_move_end_callback_stops_the_batch():
    calls = []

    def on_move_end(move):
        engine.reset()

    engine = CubeEngine(3, on_sequence_complete=lambda: calls.append(True),
                        on_move_end=on_move_end)
    engine.queue_move("x", 1.0, 1, duration=0.0)
    assert calls == []
    assert engine.check_solved()


def test_drift_is_snapped_away(cube):
    index = index_at(cube, (1, 1, 1))
    cube.cubies[index].position = cube.cubies[index].position + 0.03
    cube.queue_move("x", 1.0, 1, duration=0.0)
    np.testing.assert_array_equal(cube.cubies[index].position, [1, -1, 1])


def test_single_cubie_twist_is_not_solved():
    engine = CubeEngine(1)
    engine.queue_move("y", 0.0, 1, duration=0.0)
    np.testing.assert_array_equal(engine.cubies[0].position, [0, 0, 0])
    assert not engine.check_solved()

    for _ in range(3):
        engine.queue_move("y", 0.0, 1, duration=0.0)
    assert engine.check_solved()


def test_center_twist_of_the_middle_slice_is_detected():
    engine = CubeEngine(3)
    engine.queue_move("z", 0.0, 1, duration=0.0)
    core = index_at(engine, (0, 0, 0))
    assert not np.array_equal(engine.cubies[core].orientation, np.eye(3))
    assert not engine.check_solved()
