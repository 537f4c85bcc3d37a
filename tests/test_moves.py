import dataclasses

import numpy as np
import pytest

from config import DEFAULT_DURATION
from cube_state import AXES, build_cubies, lattice_values
from moves import Move, invert_sequence, quarter_turn, rotation_matrix, select_slice


def test_move_is_immutable():
    move = Move("x", 1.0, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        move.direction = -1


def test_move_defaults_and_inverse():
    move = Move("y", -1.0, 1)
    assert move.duration == DEFAULT_DURATION
    assert move.inverse() == Move("y", -1.0, -1)
    assert move.inverse().inverse() == move
    assert move.as_list() == ["y", -1.0, 1]


def test_invert_sequence_reverses_order():
    moves = [Move("x", 1.0, 1), Move("y", 0.0, -1), Move("z", -1.0, 1)]
    assert invert_sequence(moves) == [
        Move("z", -1.0, -1), Move("y", 0.0, 1), Move("x", 1.0, -1),
    ]


def test_right_hand_rule():
    np.testing.assert_array_equal(quarter_turn("x", 1) @ [0, 1, 0], [0, 0, 1])
    np.testing.assert_array_equal(quarter_turn("y", 1) @ [0, 0, 1], [1, 0, 0])
    np.testing.assert_array_equal(quarter_turn("z", 1) @ [1, 0, 0], [0, 1, 0])


@pytest.mark.parametrize("axis", AXES)
def test_rotation_matrix_is_rigid(axis):
    m = rotation_matrix(axis, 0.3)
    np.testing.assert_allclose(m @ m.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(m) == pytest.approx(1.0)


def test_rotation_matrix_rejects_unknown_axis():
    with pytest.raises(ValueError):
        rotation_matrix("w", 1.0)


@pytest.mark.parametrize("size", [2, 3, 4, 5])
@pytest.mark.parametrize("axis", AXES)
def test_slices_partition_the_cube(size, axis):
    cubies = build_cubies(size)
    seen = set()
    for value in lattice_values(size):
        selected = select_slice(cubies, axis, value)
        assert len(selected) == size ** 2
        assert seen.isdisjoint(selected)
        seen.update(selected)
    assert seen == set(range(size ** 3))


def test_select_slice_tolerates_drift():
    cubies = build_cubies(3)
    cubies[0].position = cubies[0].position + 0.04
    assert 0 in select_slice(cubies, "x", -1.0)
    assert len(select_slice(cubies, "x", -1.0)) == 9


def test_select_slice_does_not_reach_the_neighbour_layer():
    cubies = build_cubies(2)
    selected = select_slice(cubies, "z", 0.5)
    assert all(cubies[i].position[2] == 0.5 for i in selected)


def test_select_slice_without_match_or_axis_is_empty():
    cubies = build_cubies(3)
    assert select_slice(cubies, "x", 0.5) == []
    assert select_slice(cubies, "x", 4.0) == []
    assert select_slice(cubies, "w", 0.0) == []
