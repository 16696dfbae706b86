import itertools

from search.solver import FINISHED_CANCELLED


class Resolver:
    """
    Runs the solver on the current state of one cube.

    Only the latest `resolve()` counts: starting another one, calling
    `cancel()`, or scrambling or resetting the cube makes an in-flight solve
    stop after its next cost estimate and come back empty. Twisting or undoing
    on the cube counts as well.
    """

    def __init__(self, cube, solver):
        self.cube = cube
        self.solver = solver
        self._generations = itertools.count(1)
        self.generation = 0

    def cancel(self):
        self.generation = next(self._generations)

    def resolve(self, apply=False):
        """
        Returns `(answer, tree_metrics, additional_info)` like the solver.
        With `apply=True` a found answer is also twisted onto the cube.
        """
        generation = self.generation = next(self._generations)
        cube_generation = self.cube.generation

        def is_cancelled():
            return self.generation != generation or self.cube.generation != cube_generation

        answer, tree_metrics, additional_info = self.solver.solve(
            self.cube.get_sticker_colors(), is_cancelled=is_cancelled)

        if is_cancelled():
            return [], tree_metrics, dict(additional_info, finished_cause=FINISHED_CANCELLED)

        if apply and answer:
            self.cube.twist(answer)
        return answer, tree_metrics, additional_info
