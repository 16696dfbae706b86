import gin

from envs.rubik.cube import CubeState
from envs.rubik.permutation import default_permutation_table
from envs.rubik.stickers import is_goal


@gin.configurable()
def generate_problems_rubik(n_problems, shuffles):
    """Sticker arrays of `n_problems` cubes scrambled with `shuffles` twists each."""
    problems = []
    cube = CubeState()
    cube.init()

    for _ in range(n_problems):
        cube.reset()
        cube.scramble(shuffles)
        problems.append(cube.get_sticker_colors())

    return problems


def check_answer(problem, answer, permutations=None):
    """True when `answer` twists `problem` into a solved state."""
    if permutations is None:
        permutations = default_permutation_table()
    return is_goal(permutations.apply_sequence(problem, answer))
