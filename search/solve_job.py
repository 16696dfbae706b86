from collections import defaultdict
import time

from joblib import Parallel, delayed
import gin
import numpy as np

from envs.rubik.twists import format_twists
from envs.rubik.utils.rubik_solver_utils import check_answer
from search.solver import FINISHED_ALREADY_SOLVED


def solve_problem(solver, problem):
    time_s = time.time()
    answer, tree_metrics, additional_info = solver.solve(problem)
    time_solving = time.time() - time_s
    solved = additional_info['finished_cause'] == FINISHED_ALREADY_SOLVED or len(answer) > 0
    return dict(
        answer=answer,
        solved=solved,
        verified=solved and check_answer(problem, answer),
        tree_metrics=tree_metrics,
        time_solving=time_solving,
        input_problem=np.array(problem, copy=True),
        additional_info=additional_info
    )


@gin.configurable
class SolveJob():
    def __init__(self,
                 loggers,
                 solver_class,
                 n_jobs,
                 n_parallel_workers,
                 batch_size,
                 generate_problems,
                 shuffles,
                 budget_checkpoints,
                 output_dir=None,
                 verbose=0,
                 ):

        self.loggers = loggers
        self.solver_class = solver_class
        self.n_jobs = n_jobs
        self.n_parallel_workers = n_parallel_workers
        self.batch_size = batch_size
        self.budget_checkpoints = budget_checkpoints
        self.shuffles = shuffles
        self.generate_problems = generate_problems
        self.output_dir = output_dir
        self.verbose = verbose
        self.solution_lengths = []
        self.budget_solved = defaultdict(int)
        self.budget_exp_solved = defaultdict(int)
        self.prefix = f"{self.shuffles}_shuffles"

        self.solved_boards = 0
        self.all_boards = 0

    def execute(self):
        solver = self.solver_class()
        solver.construct_networks()

        problems_to_solve = self.generate_problems(self.n_jobs, self.shuffles)

        jobs_done = 0
        jobs_to_do = self.n_jobs
        batch_num = 0
        all_batches = -(-self.n_jobs // self.batch_size)

        all_results = []

        while jobs_to_do > 0:
            jobs_in_batch = min(jobs_to_do, self.batch_size)
            problems_to_solve_in_batch = problems_to_solve[jobs_done:jobs_done+jobs_in_batch]
            self.loggers.log_message('============================ Batch {:>4}  out  of  {:>4} ============================'.
                                     format(batch_num+1, all_batches))
            results = Parallel(n_jobs=self.n_parallel_workers, verbose=self.verbose)(
                delayed(solve_problem)(solver, input_problem) for input_problem in problems_to_solve_in_batch
            )

            all_results += results

            jobs_done += jobs_in_batch
            jobs_to_do -= jobs_in_batch
            batch_num += 1

        self.log_results(all_results)
        return all_results

    def log_results(self, results):
        for log_num, result in enumerate(results):
            self.loggers.log_scalar('solution_length', log_num, len(result['answer']) if result['solved'] else -1)
            self.loggers.log_scalar('nodes', log_num, result['tree_metrics']['nodes'])
            self.loggers.log_scalar('expanded_nodes', log_num, result['tree_metrics']['expanded_nodes'])
            self.loggers.log_scalar('time_solving', log_num, result['time_solving'])
            if result['solved']:
                self.loggers.log_message(f"{log_num}: ({len(result['answer'])}) {format_twists(result['answer'])}")
            else:
                self.loggers.log_message(f"{log_num}: {result['additional_info']['finished_cause']}")

            if result['verified']:
                self.solved_boards += 1
                self.solution_lengths.append(len(result['answer']))
                for budget in self.budget_checkpoints:
                    if result['tree_metrics']['nodes'] < budget:
                        self.budget_solved[budget] += 1
                    if result['tree_metrics']['expanded_nodes'] < budget:
                        self.budget_exp_solved[budget] += 1

            self.all_boards += 1

        def get_name(name):
            if self.prefix is not None:
                return f'{self.prefix}/{name}'
            return name

        self.loggers.log_scalar(get_name('solved_rate'), 0, self.solved_boards / self.all_boards)

        avg_length = 0 if not self.solution_lengths else (sum(self.solution_lengths)/len(self.solution_lengths))
        self.loggers.log_scalar(get_name('avg_length'), 0, avg_length)

        for budget in self.budget_checkpoints:
            self.loggers.log_scalar(get_name(f'solved_rate_{budget}_nodes'), 0, self.budget_solved[budget] / self.all_boards)
            self.loggers.log_scalar(get_name(f'solved_rate_{budget}_exp_nodes'), 0, self.budget_exp_solved[budget] / self.all_boards)
