import sys
import time

import numpy as np

from algx.exact_cover import ExactCoverSolver, SearchSetting
from algx.model_utils import random_relations, planted_relation
from algx.utils import brute_force_exact_covers, is_exact_cover


def cross_check(total: int, seed=0):
    """ Algorithm X against brute force on small random relations """
    n_solvable = 0
    for relation in random_relations(total, seed=seed):
        solver = ExactCoverSolver(relation)
        rows = solver.solve()
        truth = next(brute_force_exact_covers(relation), None)
        assert solver.found == (truth is not None), relation
        assert not solver.found or is_exact_cover(relation, rows), (relation, rows)
        assert rows == ExactCoverSolver(relation, SearchSetting(iterative=True)).solve()
        n_solvable += bool(solver.found)
    print(f'{n_solvable} / {total} solvable, all agree with brute force')


def timings(n_cols: int, n_decoys: int, repeat=5):
    relation, planted = planted_relation(n_cols, n_cols // 3, n_decoys, density=0.15, seed=0)
    for setting in (SearchSetting(), SearchSetting(branch_all_columns=False), SearchSetting(iterative=True)):
        elapsed = []
        for _ in range(repeat):
            solver = ExactCoverSolver(relation, setting)
            tic = time.perf_counter()
            solver.solve()
            elapsed.append(time.perf_counter() - tic)
        print(f'{setting}: {np.median(elapsed) * 1000:.2f} ms, {solver.stats}')


if __name__ == '__main__':
    cross_check(int(sys.argv[1]) if len(sys.argv) >= 2 else 500)
    timings(int(sys.argv[2]) if len(sys.argv) >= 3 else 30, int(sys.argv[3]) if len(sys.argv) >= 4 else 60)
