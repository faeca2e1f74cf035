import dataclasses
import functools
from typing import Tuple, Optional

import numpy as np

from algx.exact_cover import ExactCoverSolver, SearchSetting


@dataclasses.dataclass
class ExactCoverExample:
    name: str
    relation: np.ndarray
    expected: Optional[Tuple[int, ...]]  # 0-based rows, None if there is no exact cover
    is_solvable: bool

    def check(self, setting: Optional[SearchSetting] = None) -> bool:
        solver = ExactCoverSolver(self.relation, setting)
        rows = solver.solve()
        if solver.found != self.is_solvable:
            return False
        if self.expected is None:
            return rows == []
        base = solver.setting.index_base
        return tuple(r - base for r in rows) == self.expected


def knuth_relation() -> np.ndarray:
    """ Universe {1, ..., 7} with A = {1, 4, 7}, B = {1, 4}, C = {4, 5, 7}, D = {3, 5, 6}, E = {2, 3, 6, 7}, F = {2, 7} """
    return np.array([[1, 0, 0, 1, 0, 0, 1],
                     [1, 0, 0, 1, 0, 0, 0],
                     [0, 0, 0, 1, 1, 0, 1],
                     [0, 0, 1, 0, 1, 1, 0],
                     [0, 1, 1, 0, 0, 1, 1],
                     [0, 1, 0, 0, 0, 0, 1]], dtype=bool)


@functools.lru_cache(1)
def exact_cover_examples() -> Tuple[ExactCoverExample, ...]:
    examples = []

    # {B, D, F} is the unique exact cover
    examples.append(ExactCoverExample('knuth', knuth_relation(), (1, 3, 5), True))

    examples.append(ExactCoverExample('single row', np.ones((1, 3), dtype=bool), (0,), True))

    R = np.array([[1, 1, 0], [0, 0, 1]], dtype=bool)
    examples.append(ExactCoverExample('two disjoint rows', R, (0, 1), True))

    R = np.array([[1, 1, 0]], dtype=bool)
    examples.append(ExactCoverExample('missing element', R, None, False))

    examples.append(ExactCoverExample('no rows', np.zeros((0, 4), dtype=bool), None, False))

    # the empty cover
    examples.append(ExactCoverExample('empty', np.zeros((0, 0), dtype=bool), (), True))
    examples.append(ExactCoverExample('no columns', np.zeros((3, 0), dtype=bool), (), True))

    R = np.array([[0, 0, 0], [1, 1, 0], [0, 0, 0], [0, 0, 1]], dtype=bool)
    examples.append(ExactCoverExample('inert rows', R, (1, 3), True))

    R = np.array([[1, 1, 0], [0, 1, 1], [1, 0, 1]], dtype=bool)
    examples.append(ExactCoverExample('pairwise overlaps', R, None, False))

    return tuple(examples)
