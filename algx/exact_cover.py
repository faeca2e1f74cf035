import logging
import time
from dataclasses import dataclass
from typing import Collection, AbstractSet, Optional, Sequence, List, Iterator, Tuple, TypeVar

import numpy as np

from algx.relation import as_relation, incidence_matrix, IndexView, Chunk
from algx.utils import unique

T = TypeVar('T')

logger = logging.getLogger(__name__)


class SearchTimeout(Exception):
    def __init__(self, msg, evidence=None):
        super().__init__(msg)
        self.evidence = evidence


@dataclass
class SearchSetting:
    index_base: int = 0
    iterative: bool = False
    branch_all_columns: bool = True
    time_limit: Optional[float] = None

    def __post_init__(self):
        if self.index_base not in (0, 1):
            raise ValueError(f'index_base must be 0 or 1, not {self.index_base}')
        if self.time_limit is not None and self.time_limit < 0:
            raise ValueError(f'negative time limit: {self.time_limit}')


@dataclass
class SearchStats:
    nodes: int = 0
    backtracks: int = 0
    max_depth: int = 0


class ExactCoverSolver:
    """ Knuth's Algorithm X over a dense boolean relation

    Rows of the relation are candidate subsets and columns are the elements of the universe.
    The search halts at the first exact cover found.

    Examples
    --------
    >>> X = [[1, 0, 0, 1, 0, 0, 1],
    ...      [1, 0, 0, 1, 0, 0, 0],
    ...      [0, 0, 0, 1, 1, 0, 1],
    ...      [0, 0, 1, 0, 1, 1, 0],
    ...      [0, 1, 1, 0, 0, 1, 1],
    ...      [0, 1, 0, 0, 0, 0, 1]]
    >>> ExactCoverSolver(X).solve()
    [1, 3, 5]
    """

    def __init__(self, relation, setting: Optional[SearchSetting] = None):
        """

        Parameters
        ----------
        relation :
            a rectangular boolean (or 0/1) matrix, rows by columns
        setting :
            search options, defaults to `SearchSetting()`
        """
        self.relation = as_relation(relation).copy()
        self.relation.flags.writeable = False
        self.setting = setting if setting is not None else SearchSetting()
        self.solution = []  # type: List[int]
        self.found = None  # type: Optional[bool]
        self.stats = SearchStats()
        self.__deadline = None  # type: Optional[float]

    def solve(self) -> List[int]:
        """ Row indices of an exact cover, or an empty list if there is none (see `found`) """
        self.solution = []
        self.stats = SearchStats()
        if self.setting.time_limit is not None:
            self.__deadline = time.monotonic() + self.setting.time_limit
        else:
            self.__deadline = None

        view = IndexView.full(self.relation)
        try:
            if self.setting.iterative:
                self.found = self.__solve_iterative(view)
            else:
                try:
                    self.found = self.__solve(view)
                except RecursionError:
                    logger.debug('recursion limit reached at depth %d, restarting on an explicit stack',
                                 len(self.solution))
                    self.solution = []
                    self.stats = SearchStats()
                    self.found = self.__solve_iterative(view)
        except SearchTimeout:
            self.found = None
            self.solution = []
            raise

        logger.debug('%s after %d nodes, %d backtracks, depth %d',
                     'solved' if self.found else 'no exact cover',
                     self.stats.nodes, self.stats.backtracks, self.stats.max_depth)
        return [r + self.setting.index_base for r in self.solution]

    def __column_order(self, view: IndexView) -> Tuple[np.ndarray, bool]:
        # stable, so that ties keep the original column order
        counts = view.column_counts()
        order = np.argsort(counts, kind='stable')
        coverable = bool(counts[order[0]] > 0)
        if not self.setting.branch_all_columns:
            order = order[:1]
        return view.cols[order], coverable

    def __branches(self, view: IndexView) -> Iterator[Tuple[int, IndexView]]:
        """ candidate rows at a node with at least one column, paired with their reduced views """
        self.stats.nodes += 1
        cols, coverable = self.__column_order(view)
        if not coverable:
            return
        for c in cols:
            for r in view.rows_covering(c):
                self.__check_deadline()
                yield int(r), view.without_row(r)

    def __check_deadline(self):
        if self.__deadline is not None and time.monotonic() > self.__deadline:
            raise SearchTimeout(f'no exact cover found within {self.setting.time_limit} seconds',
                                evidence=list(self.solution))

    def __commit(self, row: int):
        self.solution.append(row)
        self.stats.max_depth = max(self.stats.max_depth, len(self.solution))

    def __backtrack(self):
        self.solution.pop()
        self.stats.backtracks += 1

    def __solve(self, view: IndexView) -> bool:
        if view.n_cols == 0:
            return True

        for row, reduced in self.__branches(view):
            self.__commit(row)
            if self.__solve(reduced):
                return True
            self.__backtrack()
        return False

    def __solve_iterative(self, view: IndexView) -> bool:
        if view.n_cols == 0:
            return True

        # one pending branch iterator per node on the current path
        stack = [self.__branches(view)]
        while stack:
            branch = next(stack[-1], None)
            if branch is None:
                stack.pop()
                if stack:
                    self.__backtrack()
                continue

            row, reduced = branch
            self.__commit(row)
            if reduced.n_cols == 0:
                return True
            stack.append(self.__branches(reduced))
        return False


def exact_cover(relation, **kwargs) -> List[int]:
    """ Row indices of the first exact cover found by Algorithm X, or [] if none exists.

    Keyword arguments are those of `SearchSetting`.
    A relation without columns is exactly covered by no rows, and also yields [].
    """
    return ExactCoverSolver(relation, SearchSetting(**kwargs)).solve()


def is_solvable(relation, **kwargs) -> bool:
    solver = ExactCoverSolver(relation, SearchSetting(**kwargs))
    solver.solve()
    return bool(solver.found)


class SetExactCoverSolver:
    """ Exact cover of a universe by a collection of its subsets

    Pieces only need to be hashable: columns follow the first-seen order of `pieces`,
    and subsets are ordered by the columns they cover.
    """

    def __init__(self, pieces: Collection[T], subsets: AbstractSet[Chunk], setting: Optional[SearchSetting] = None):
        """

        Parameters
        ----------
        pieces :
            a universe
        subsets :
            a subcollection of the universe
        setting :
            search options, `index_base` is ignored
        """
        self.pieces = tuple(unique(pieces))
        self.elements = frozenset(self.pieces)  # = universe
        column_of = {piece: j for j, piece in enumerate(self.pieces)}

        # subsets reaching outside the universe can never be part of its exact cover
        inside = unique(frozenset(subset) for subset in subsets if frozenset(subset) <= self.elements)
        self.subsets = sorted(inside, key=lambda subset: sorted(column_of[piece] for piece in subset))
        self.relation, _, self.chunks = incidence_matrix(self.pieces, self.subsets)
        self.failed = not bool(self.relation.any(axis=0).all())
        self.setting = setting

    def solve(self) -> Optional[Sequence[Chunk]]:
        if self.failed:
            return None

        setting = self.setting if self.setting is not None else SearchSetting()
        if setting.index_base != 0:
            setting = SearchSetting(0, setting.iterative, setting.branch_all_columns, setting.time_limit)
        solver = ExactCoverSolver(self.relation, setting)
        rows = solver.solve()
        if not solver.found:
            return None
        return [self.chunks[r] for r in sorted(rows)]
