"""
Cubelet model of the 3x3x3 cube.

usage
-----
- create and populate a solved cube with `c = CubeState(); c.init()`.
- twist with `c.twist("U")`, `c.twist(["R", "U'"])` or `c.twist("R U R'")`.
- step back with `c.undo(2)`; scramble with `c.scramble(20)`.
- read the flat sticker array with `c.get_sticker_colors()`.

conventions
-----------
- The matrix is indexed `[y][z][x]` and owns the cubelets; a cubelet only
  remembers its own position, and a twist moves cubelets between slots.
- A cubelet's type never changes, only its position and the faces its
  stickers point at.
"""
from enum import Enum

import numpy as np

from envs.rubik.permutation import default_permutation_table, rotate_face, twist_ring
from envs.rubik.stickers import (CUBE_SIZE, N_STICKERS, Color, exposed_faces,
                                 format_stickers, is_goal, sticker_index)
from envs.rubik.twists import SINGLE_TWIST_LIST, TWIST_RULE, Twist, format_twists, parse_twists
from utils.metric_logging import StdoutLogger


class CubeletType(Enum):
    AXIS = "axis"
    CENTER = "center"
    EDGE = "edge"
    CORNER = "corner"


# indexed by the number of cube sides a cubelet touches
CUBELET_TYPE_LIST = [CubeletType.AXIS, CubeletType.CENTER, CubeletType.EDGE, CubeletType.CORNER]

STICKER_COUNT = {
    CubeletType.AXIS: 0,
    CubeletType.CENTER: 1,
    CubeletType.EDGE: 2,
    CubeletType.CORNER: 3,
}


class Sticker:
    __slots__ = ("face", "color")

    def __init__(self, face, color=Color.PLAIN):
        self.face = face
        self.color = color

    def __repr__(self):
        return f"Sticker({self.face.name}, {self.color.name})"


class Cubelet:
    def __init__(self, x, y, z):
        self.initial_position = (x, y, z)
        self.position = (x, y, z)
        self.type = CUBELET_TYPE_LIST[len(exposed_faces(x, y, z))]
        self.stickers = []

    def init(self):
        """Place the cubelet at its initial position and paint its stickers."""
        self.position = self.initial_position
        self.stickers = [Sticker(face) for face in exposed_faces(*self.position)]
        assert len(self.stickers) == STICKER_COUNT[self.type]
        for sticker in self.stickers:
            sticker.color = Color(sticker.face)

    def reset(self):
        self.init()

    def rotate_sticker_faces(self, twists, reverse=False):
        for sticker in self.stickers:
            for twist in twists:
                sticker.face = rotate_face(sticker.face, twist, reverse)

    def __repr__(self):
        return f"Cubelet({self.type.value}, at={self.position}, from={self.initial_position})"


def random_twist_list(steps=None):
    """
    Random quarter twists, `steps` of them or between 15 and 30 when not
    given. A twist is never directly followed by its inverse.
    """
    count = steps if steps else np.random.randint(15, 31)
    twists = []
    prev = None
    while len(twists) < count:
        twist = SINGLE_TWIST_LIST[np.random.randint(len(SINGLE_TWIST_LIST))]
        if prev is not None and prev.cancels(twist):
            continue
        twists.append(twist)
        prev = twist
    return twists


class CubeState:
    """
    CubeState
    ---------
    Initialize with arguments:
    - optional `debug=True` to log the history and a sticker dump after
      every twist
    - optional `logger`, anything with a `log_message(message)` method
    - optional `permutations`, a `PermutationTable` for sticker previews
    """

    def __init__(self, debug=False, logger=None, permutations=None):
        self.debug = debug
        self.logger = logger if logger is not None else StdoutLogger()
        self.permutations = permutations if permutations is not None else default_permutation_table()
        # bumped whenever the stickers change or the cube is scrambled or reset
        self.generation = 0
        self._history = []
        self._matrix = []

    def init(self):
        self._matrix = []
        for y in range(CUBE_SIZE):
            zarray = []
            for z in range(CUBE_SIZE):
                xarray = []
                for x in range(CUBE_SIZE):
                    cubelet = Cubelet(x, y, z)
                    cubelet.init()
                    xarray.append(cubelet)
                zarray.append(xarray)
            self._matrix.append(zarray)
        self._history = []

    def reset(self):
        cubelets = list(self.cubelets())
        for cubelet in cubelets:
            cubelet.reset()
        for cubelet in cubelets:
            x, y, z = cubelet.position
            self._matrix[y][z][x] = cubelet
        self._history = []
        self.generation += 1

    def cubelets(self):
        for zarray in self._matrix:
            for xarray in zarray:
                yield from xarray

    def cubelet_at(self, x, y, z):
        return self._matrix[y][z][x]

    def scramble(self, steps=None):
        twists = random_twist_list(steps)
        if self.debug:
            self.logger.log_message("Scramble: " + format_twists(twists))
        self.generation += 1
        self.twist(twists)
        return twists

    def undo(self, steps=1):
        self.twist(self.get_undo_list(steps), reverse=True)

    def get_history(self):
        return list(self._history)

    def get_undo_list(self, steps=1):
        t = min(max(steps, 0), len(self._history))
        if t == 0:
            return []
        return self._history[-t:][::-1]

    def twist(self, twist, reverse=False):
        """
        Make one twist or a sequence of them. With `reverse=True` every
        twist is turned the other way and popped from the history instead
        of pushed.
        """
        for t in parse_twists(twist):
            self._twist(t, reverse)

    def _twist(self, twist, reverse):
        self.rotate_matrix(twist, reverse)
        self.generation += 1
        if reverse:
            if self._history:
                self._history.pop()
        else:
            self._history.append(twist)

        if self.debug:
            self.dump_stickers()
            self.logger.log_message(format_twists(self._history))

    def rotate_matrix(self, twist, reverse=False):
        twist = Twist.parse(twist)
        rule = TWIST_RULE[twist]
        for level in rule.levels:
            ring = twist_ring(twist, level, reverse)
            moved = []
            for x, y, z in ring:
                cubelet = self._matrix[y][z][x]
                cubelet.rotate_sticker_faces([twist], reverse)
                moved.append(cubelet)
            for i, cubelet in enumerate(moved):
                x, y, z = ring[(i + rule.steps * 2) % 8]
                cubelet.position = (x, y, z)
                self._matrix[y][z][x] = cubelet

    def get_sticker_colors(self):
        colors = np.full(N_STICKERS, Color.PLAIN, dtype=np.int8)
        for cubelet in self.cubelets():
            for sticker in cubelet.stickers:
                colors[sticker_index(*cubelet.position, sticker.face)] = sticker.color
        return colors

    def get_next_sticker_colors(self, twist):
        """Sticker array one twist ahead, without touching the cube."""
        return self.permutations.apply(self.get_sticker_colors(), twist)

    def is_solved(self):
        return is_goal(self.get_sticker_colors())

    def dump_stickers(self):
        self.logger.log_message(format_stickers(self.get_sticker_colors()))
