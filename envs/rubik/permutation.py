"""
Sticker permutations induced by each twist.

A twist moves the cubelets of a ring of 8 positions on each of its levels
and turns their stickers to new faces. `cube_permutation_group` derives
both movements from the rule table; `PermutationTable` keeps the resulting
sticker index pairs for every twist so that a twist can be applied to a
flat sticker array with a single fancy-indexing assignment.
"""
import functools
from collections import namedtuple

import numpy as np

from envs.rubik.stickers import Face, exposed_faces, sticker_index
from envs.rubik.twists import TWIST_LIST, SINGLE_TWIST_LIST, TWIST_RULE, Twist

# ring of boundary positions on a level, as offsets on the two free coordinates
RING_A = (0, 1, 2, 2, 2, 1, 0, 0)
RING_B = (0, 0, 0, 1, 2, 2, 2, 1)

# faces cycled by a quarter turn around x, y and z
ROTATE_MAP = (
    (Face.U, Face.F, Face.D, Face.B),
    (Face.F, Face.R, Face.B, Face.L),
    (Face.U, Face.L, Face.D, Face.R),
)

CubePermutation = namedtuple("CubePermutation", ["before", "after", "sticker_before", "sticker_after"])


def twist_ring(twist, level, reverse=False):
    """The 8 positions (x, y, z) on `level` that `twist` moves, in turning order."""
    axis = TWIST_RULE[twist].axis
    i = axis.index(-1) if -1 in axis else axis.index(1)
    s = (-1 if reverse else 1) * axis[i]
    coords = [None, None, None]
    coords[i] = (level,) * 8
    coords[(i + s) % 3] = RING_A
    coords[(i - s) % 3] = RING_B
    return list(zip(*coords))


def rotate_face(face, twist, reverse=False):
    """Face a sticker on `face` ends up on after `twist`."""
    rule = TWIST_RULE[twist]
    direction = -1 if reverse else 1
    for axis_index, cycle in enumerate(ROTATE_MAP):
        if face not in cycle:
            continue
        k = cycle.index(face)
        face = cycle[(k + direction * rule.axis[axis_index] * rule.steps) % 4]
    return Face(face)


def cube_permutation_group(twist, reverse=False):
    twist = Twist.parse(twist)
    rule = TWIST_RULE[twist]
    result = CubePermutation([], [], [], [])

    for level in rule.levels:
        ring = twist_ring(twist, level, reverse)
        for i, position in enumerate(ring):
            position2 = ring[(i + rule.steps * 2) % 8]
            result.before.append(position)
            result.after.append(position2)
            for face in exposed_faces(*position):
                result.sticker_before.append(sticker_index(*position, face))
                result.sticker_after.append(sticker_index(*position2, rotate_face(face, twist, reverse)))

    return result


class PermutationTable:
    """
    Sticker permutation of every twist, built once from the rule table.

    `table[twist]` gives the `(before, after)` index arrays, meaning that
    after the twist `state[after[i]]` holds what `state[before[i]]` held.
    """

    def __init__(self, twists=TWIST_LIST):
        self._table = {}
        for twist in twists:
            group = cube_permutation_group(twist)
            before = np.array(group.sticker_before, dtype=np.intp)
            after = np.array(group.sticker_after, dtype=np.intp)
            before.setflags(write=False)
            after.setflags(write=False)
            self._table[twist] = (before, after)

    def __getitem__(self, twist):
        return self._table[Twist.parse(twist)]

    def __len__(self):
        return len(self._table)

    def apply(self, state, twist):
        before, after = self[twist]
        state = np.asarray(state)
        result = state.copy()
        result[after] = state[before]
        return result

    def apply_sequence(self, state, twists):
        for twist in twists:
            state = self.apply(state, twist)
        return state

    def apply_all(self, states, twists=SINGLE_TWIST_LIST):
        """
        Apply every twist in `twists` to `states`.

        `states` is a single sticker array or a batch of them; the result
        gets an extra axis before the sticker axis, one row per twist.
        """
        states = np.asarray(states)
        result = np.repeat(states[..., np.newaxis, :], len(twists), axis=-2)
        for row, twist in enumerate(twists):
            before, after = self[twist]
            result[..., row, after] = states[..., before]
        return result


@functools.lru_cache(maxsize=None)
def default_permutation_table():
    return PermutationTable()


def apply_twist(state, twist, table=None):
    """Sticker array after `twist`; `state` itself is left untouched."""
    if table is None:
        table = default_permutation_table()
    return table.apply(state, twist)
