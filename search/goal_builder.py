import gin

from envs.rubik.permutation import default_permutation_table
from envs.rubik.twists import SINGLE_TWIST_LIST, parse_twists


@gin.configurable
class TrivialPolicy:
    """Proposes every state one quarter twist away."""

    def __init__(self, permutations=None, twists=SINGLE_TWIST_LIST):
        self.permutations = permutations if permutations is not None else default_permutation_table()
        self.twists = tuple(parse_twists(twists))

    def build_goals(self, states):
        """`(k, 54)` states -> `(k, len(twists), 54)` successor states."""
        return self.permutations.apply_all(states, self.twists)
