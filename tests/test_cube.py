import collections

import numpy as np
import pytest

from envs.rubik.cube import CubeletType, Cubelet, CubeState, random_twist_list
from envs.rubik.stickers import Color, initial_state
from envs.rubik.twists import SINGLE_TWIST_LIST, TWIST_LIST, InvalidTwistError, Twist


def matrix_snapshot(cube):
    return [(id(c), c.position, tuple((s.face, s.color) for s in c.stickers)) for c in cube.cubelets()]


def test_init_builds_a_solved_cube(cube):
    cubelets = list(cube.cubelets())
    assert len(cubelets) == 27
    counts = collections.Counter(c.type for c in cubelets)
    assert counts == {CubeletType.AXIS: 1, CubeletType.CENTER: 6, CubeletType.EDGE: 12, CubeletType.CORNER: 8}
    assert sum(len(c.stickers) for c in cubelets) == 54
    assert all(s.color != Color.PLAIN for c in cubelets for s in c.stickers)
    assert (cube.get_sticker_colors() == initial_state(0, 0)).all()
    assert cube.is_solved()
    assert cube.get_history() == []


def test_cubelet_types_by_position():
    assert Cubelet(1, 1, 1).type == CubeletType.AXIS
    assert Cubelet(1, 2, 1).type == CubeletType.CENTER
    assert Cubelet(0, 2, 1).type == CubeletType.EDGE
    assert Cubelet(2, 0, 2).type == CubeletType.CORNER


def test_cubelet_init_paints_every_sticker_with_its_face(cube):
    cubelet = cube.cubelet_at(2, 2, 2)
    cubelet.rotate_sticker_faces([Twist.R])
    cubelet.init()
    assert len(cubelet.stickers) == 3
    assert all(s.color == Color(s.face) for s in cubelet.stickers)


def test_cubelet_outside_the_grid_fails_fast():
    with pytest.raises(AssertionError):
        Cubelet(3, 0, 0)


@pytest.mark.parametrize("twist", TWIST_LIST)
def test_reverse_twist_restores_the_matrix(cube, twist):
    cube.twist("R U F'")
    snapshot = matrix_snapshot(cube)
    cube.rotate_matrix(twist)
    assert matrix_snapshot(cube) != snapshot
    cube.rotate_matrix(twist, reverse=True)
    assert matrix_snapshot(cube) == snapshot


@pytest.mark.parametrize("twist", TWIST_LIST)
def test_inverse_twist_restores_the_stickers(cube, twist):
    cube.twist("L' D2 S")
    colors = cube.get_sticker_colors()
    cube.twist([twist, twist.inverse])
    assert (cube.get_sticker_colors() == colors).all()


@pytest.mark.parametrize("twist", SINGLE_TWIST_LIST)
def test_four_quarter_twists_restore_the_matrix(cube, twist):
    snapshot = matrix_snapshot(cube)
    cube.twist([twist] * 4)
    assert matrix_snapshot(cube) == snapshot


def test_types_never_change(cube):
    types = {id(c): c.type for c in cube.cubelets()}
    cube.scramble(30)
    assert {id(c): c.type for c in cube.cubelets()} == types
    for c in cube.cubelets():
        assert cube.cubelet_at(*c.position) is c


def test_history_and_undo(cube):
    cube.twist(["U", "R"])
    cube.twist(Twist.M2)
    assert cube.get_history() == [Twist.U, Twist.R, Twist.M2]
    assert cube.get_undo_list(2) == [Twist.M2, Twist.R]

    cube.undo()
    assert cube.get_history() == [Twist.U, Twist.R]
    assert (cube.get_sticker_colors() == _colors_after("U R")).all()

    cube.undo(10)
    assert cube.get_history() == []
    assert cube.is_solved()


def test_undo_clamps(cube):
    assert cube.get_undo_list(5) == []
    assert cube.get_undo_list(-1) == []
    cube.undo(3)
    assert cube.is_solved()


def test_invalid_twist_is_rejected_before_any_change(cube):
    with pytest.raises(InvalidTwistError):
        cube.twist(["U", "Q"])
    assert cube.get_history() == []
    assert cube.is_solved()


def test_reset(cube):
    generation = cube.generation
    cube.scramble(25)
    assert not cube.is_solved()
    cube.reset()
    assert cube.generation > generation
    assert cube.get_history() == []
    assert cube.is_solved()
    for c in cube.cubelets():
        assert c.position == c.initial_position
        assert cube.cubelet_at(*c.position) is c


def test_scramble_length_and_history(cube):
    twists = cube.scramble(12)
    assert len(twists) == 12
    assert cube.get_history() == twists
    assert all(t in SINGLE_TWIST_LIST for t in twists)


def test_scramble_default_length(cube):
    for _ in range(20):
        cube.reset()
        assert 15 <= len(cube.scramble()) <= 30


def test_scramble_never_cancels_the_previous_twist():
    for _ in range(50):
        twists = random_twist_list(40)
        for a, b in zip(twists, twists[1:]):
            assert not a.cancels(b)


def test_scramble_bumps_generation(cube):
    generation = cube.generation
    cube.scramble(3)
    # once for the scramble, once per twist
    assert cube.generation == generation + 4


def test_twist_and_undo_bump_generation(cube):
    generation = cube.generation
    cube.twist("R U")
    assert cube.generation == generation + 2
    cube.undo()
    assert cube.generation == generation + 3
    cube.twist("")
    assert cube.generation == generation + 3


def test_next_sticker_colors_is_a_preview(cube):
    preview = cube.get_next_sticker_colors("F")
    assert cube.is_solved()
    cube.twist("F")
    assert (cube.get_sticker_colors() == preview).all()


def test_debug_output(logger):
    cube = CubeState(debug=True, logger=logger)
    cube.init()
    cube.twist("U R")
    assert logger.messages[-1] == "U R"
    assert any("www" in m for m in logger.messages)

    cube.scramble(2)
    assert any(m.startswith("Scramble: ") for m in logger.messages)


def _colors_after(twists):
    cube = CubeState()
    cube.init()
    cube.twist(twists)
    return np.array(cube.get_sticker_colors())
