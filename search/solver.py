import gin
import numpy as np

from envs.rubik.permutation import default_permutation_table
from envs.rubik.stickers import GOAL_STATES, is_goal
from envs.rubik.twists import format_twists
from search.goal_builder import TrivialPolicy
from search.heap_queue import HeapQueue
from search.value_function import CostOracleError
from utils.metric_logging import StdoutLogger

FINISHED_SOLVED = 'Finished cause solved'
FINISHED_ALREADY_SOLVED = 'Already solved'
FINISHED_EXHAUSTED = 'Queue exhausted'
FINISHED_TREE_LIMIT = 'Tree size limit'
FINISHED_CANCELLED = 'Cancelled'


class SolverNode:
    def __init__(self, state, answer):
        self.state = state
        self.answer = answer

    @property
    def depth(self):
        return len(self.answer)


def state_signature(state):
    return np.ascontiguousarray(state, dtype=np.int8).tobytes()


def goal_mask(states):
    """Which rows of a `(k, 54)` batch are solved states."""
    return (states[:, np.newaxis, :] == GOAL_STATES[np.newaxis]).all(axis=2).any(axis=1)


@gin.configurable
class BestFSSolver():
    """
    Best-first search over sticker arrays.

    Each round pops up to `n_expansions` nodes, proposes the states one
    quarter twist away, drops the ones already reached by an answer at least
    as short, and scores the rest with a single `value_estimator.estimate`
    call. Nodes are queued by `path_weight * len(answer) + cost`. The first
    solved state proposed ends the search, so the answer is not guaranteed
    to be the shortest.
    """

    def __init__(self,
                 value_estimator,
                 batch_size=100,
                 n_expansions=150,
                 path_weight=0.3,
                 max_tree_size=None,
                 goal_builder_class=TrivialPolicy,
                 permutations=None,
                 logger=None,
                 ):
        if n_expansions < 1:
            raise ValueError(f"n_expansions must be at least 1, got {n_expansions}")
        self.value_estimator = value_estimator
        self.batch_size = batch_size
        self.n_expansions = n_expansions
        self.path_weight = path_weight
        self.max_tree_size = max_tree_size
        self.permutations = permutations if permutations is not None else default_permutation_table()
        self.goal_builder = goal_builder_class(permutations=self.permutations)
        self.logger = logger if logger is not None else StdoutLogger()

    def construct_networks(self):
        self.value_estimator.construct_networks()

    def solve(self, input, is_cancelled=None):
        """
        Returns `(answer, tree_metrics, additional_info)`. `answer` is the
        list of twists found, empty when the cube is already solved or when
        the search gave up; `additional_info['finished_cause']` tells which.
        `is_cancelled` is polled after every cost estimate.
        """
        start = np.asarray(input, dtype=np.int8)
        tree_size = 1
        expanded_nodes = 0
        rounds = 0
        oracle_calls = 0
        tree_depth = 0
        solution = None
        finished_cause = FINISHED_EXHAUSTED

        nodes_queue = HeapQueue()
        if is_goal(start):
            self.logger.log_message('Already resolved.')
            finished_cause = FINISHED_ALREADY_SOLVED
        else:
            nodes_queue.push(0, SolverNode(start, []))
        seen_hashed_states = {state_signature(start): 0}

        while len(nodes_queue) > 0:
            if self.max_tree_size is not None and tree_size >= self.max_tree_size:
                finished_cause = FINISHED_TREE_LIMIT
                break

            to_expand = [nodes_queue.pop_min() for _ in range(min(self.n_expansions, len(nodes_queue)))]
            expanded_nodes += len(to_expand)
            rounds += 1

            proposals = self.goal_builder.build_goals(np.stack([node.state for node in to_expand]))
            candidates = []
            for node, next_states in zip(to_expand, proposals):
                for twist, next_state in zip(self.goal_builder.twists, next_states):
                    next_answer = node.answer + [twist]
                    next_hash = state_signature(next_state)
                    if next_hash not in seen_hashed_states or seen_hashed_states[next_hash] > len(next_answer):
                        seen_hashed_states[next_hash] = len(next_answer)
                        candidates.append(SolverNode(next_state, next_answer))

            if not candidates:
                continue

            states = np.stack([node.state for node in candidates])
            hits = np.flatnonzero(goal_mask(states))
            if hits.size > 0:
                solution = candidates[hits[0]]
                finished_cause = FINISHED_SOLVED
                break

            cost_to_goals = self.value_estimator.estimate(states, batch_size=self.batch_size)
            oracle_calls += 1
            if len(cost_to_goals) != len(candidates):
                raise CostOracleError(
                    f"Cost oracle returned {len(cost_to_goals)} values for {len(candidates)} states")

            if is_cancelled is not None and is_cancelled():
                finished_cause = FINISHED_CANCELLED
                break

            for node, cost in zip(candidates, cost_to_goals):
                nodes_queue.push(self.path_weight * node.depth + float(cost), node)
                tree_depth = max(tree_depth, node.depth)
                tree_size += 1

        tree_metrics = {'nodes': tree_size,
                        'expanded_nodes': expanded_nodes,
                        'unexpanded_nodes': len(nodes_queue),
                        'rounds': rounds,
                        'oracle_calls': oracle_calls,
                        'max_depth': tree_depth,
                        'seen_states': len(seen_hashed_states),
                        }
        additional_info = {'finished_cause': finished_cause}

        if solution is None:
            if finished_cause == FINISHED_EXHAUSTED:
                self.logger.log_message('Could not find any answers, give up.')
            return [], tree_metrics, additional_info

        self.logger.log_message(f'Answer: ({solution.depth}) {format_twists(solution.answer)}')
        return list(solution.answer), tree_metrics, additional_info
