"""
Faces, sticker colors and the bijection between (cubelet position, face)
and the flat 54 sticker array.

conventions
-----------
- Positions are `(x, y, z)` with every coordinate in {0, 1, 2}.
- x grows towards R, y grows towards U, z grows towards F.
- The sticker array is ordered face by face (U, F, R, D, B, L), each face
  row by row: `index = face * 9 + row * 3 + column`.
"""
from enum import IntEnum

import numpy as np

CUBE_SIZE = 3
SIDE_MIN = 0
SIDE_MAX = CUBE_SIZE - 1
SIDE_MIDDLE = CUBE_SIZE // 2
FACE_STICKERS = CUBE_SIZE * CUBE_SIZE
N_STICKERS = 6 * FACE_STICKERS


class Face(IntEnum):
    U = 0
    F = 1
    R = 2
    D = 3
    B = 4
    L = 5


class Color(IntEnum):
    UP = 0
    FRONT = 1
    RIGHT = 2
    DOWN = 3
    BACK = 4
    LEFT = 5
    PLAIN = 6


# one-letter names, used for dumps and signatures in logs
COLOR_LABELS = "wgrybo."


def _check_coord(*coords):
    for c in coords:
        assert SIDE_MIN <= c <= SIDE_MAX, f"coordinate out of range: {c}"


def sticker_index(x, y, z, face):
    """Index in the sticker array of the `face` side of the cubelet at (x, y, z)."""
    _check_coord(x, y, z)
    face = Face(face)

    if face == Face.U:
        px, py = x, z
    elif face == Face.D:
        px, py = x, SIDE_MAX - z
    elif face == Face.F:
        px, py = x, SIDE_MAX - y
    elif face == Face.B:
        px, py = SIDE_MAX - x, SIDE_MAX - y
    elif face == Face.R:
        px, py = SIDE_MAX - z, SIDE_MAX - y
    else:
        px, py = z, SIDE_MAX - y

    return face * FACE_STICKERS + py * CUBE_SIZE + px


def cube_from_sticker_index(index):
    """Inverse of `sticker_index`: returns (x, y, z, face)."""
    assert 0 <= index < N_STICKERS, f"sticker index out of range: {index}"
    face = Face(index // FACE_STICKERS)
    py, px = divmod(index % FACE_STICKERS, CUBE_SIZE)

    if face == Face.U:
        x, y, z = px, SIDE_MAX, py
    elif face == Face.D:
        x, y, z = px, SIDE_MIN, SIDE_MAX - py
    elif face == Face.F:
        x, y, z = px, SIDE_MAX - py, SIDE_MAX
    elif face == Face.B:
        x, y, z = SIDE_MAX - px, SIDE_MAX - py, SIDE_MIN
    elif face == Face.R:
        x, y, z = SIDE_MAX, SIDE_MAX - py, SIDE_MAX - px
    else:
        x, y, z = SIDE_MIN, SIDE_MAX - py, px

    return x, y, z, face


def exposed_faces(x, y, z):
    """Faces of the cube a cubelet at (x, y, z) shows, in R L U D F B order."""
    _check_coord(x, y, z)
    faces = []
    if x == SIDE_MAX:
        faces.append(Face.R)
    if x == SIDE_MIN:
        faces.append(Face.L)
    if y == SIDE_MAX:
        faces.append(Face.U)
    if y == SIDE_MIN:
        faces.append(Face.D)
    if z == SIDE_MAX:
        faces.append(Face.F)
    if z == SIDE_MIN:
        faces.append(Face.B)
    return faces


# side colors around each up color, listed in F R B L order for front 0
SIDE_FACES = [
    [1, 2, 4, 5],
    [2, 0, 5, 3],
    [0, 1, 3, 4],
    [2, 1, 5, 4],
    [0, 2, 3, 5],
    [1, 0, 4, 3],
]


def initial_state(up, front):
    """
    Solved sticker array with color `up` on the U face and the
    `front`-th side color of `SIDE_FACES[up]` on the F face.
    """
    down = (up + 3) % 6
    side = SIDE_FACES[up]
    colors = [up, side[front % 4], side[(front + 1) % 4], down,
              side[(front + 2) % 4], side[(front + 3) % 4]]
    return np.repeat(np.array(colors, dtype=np.int8), FACE_STICKERS)


GOAL_STATES = np.stack([initial_state(up, front) for up in range(6) for front in range(4)])
GOAL_STATES.setflags(write=False)


def is_goal(state):
    return bool((GOAL_STATES == np.asarray(state)).all(axis=1).any())


def format_stickers(state):
    """
    Unfolded text view of a sticker array:

            U
          L F R B
            D
    """
    labels = [COLOR_LABELS[int(c)] for c in state]

    def rows(faces):
        lines = []
        for row in range(CUBE_SIZE):
            line = []
            for face in faces:
                if face is None:
                    line.append(" " * CUBE_SIZE)
                else:
                    start = face * FACE_STICKERS + row * CUBE_SIZE
                    line.append("".join(labels[start:start + CUBE_SIZE]))
            lines.append(" ".join(line).rstrip())
        return lines

    return "\n".join(rows([None, Face.U]) + rows([Face.L, Face.F, Face.R, Face.B]) + rows([None, Face.D]))
