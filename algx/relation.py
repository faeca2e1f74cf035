import warnings
from typing import Collection, Sequence, Tuple, TypeVar, Optional, FrozenSet, Union

import numpy as np

T = TypeVar('T')

Chunk = FrozenSet[T]


class MalformedRelationError(ValueError):
    def __init__(self, msg, evidence=None):
        super().__init__(msg)
        self.evidence = evidence


def as_relation(matrix: Union[np.ndarray, Sequence[Sequence[int]]], n_cols: Optional[int] = None) -> np.ndarray:
    """ A two-dimensional boolean incidence relation (rows: subsets, columns: elements)

    Parameters
    ----------
    matrix :
        rectangular container of booleans or 0/1 integers
    n_cols :
        number of columns for a relation without rows (ignored otherwise)
    """
    if isinstance(matrix, np.ndarray):
        array = matrix
    else:
        try:
            rows = [list(row) for row in matrix]
        except TypeError as e:
            raise MalformedRelationError(f'expected a 2-dimensional relation, got {type(matrix).__name__} '
                                         f'whose rows are not sequences') from e
        lengths = {len(row) for row in rows}
        if len(lengths) > 1:
            raise MalformedRelationError(f'ragged rows with lengths {sorted(lengths)}', evidence=sorted(lengths))
        if not rows:
            array = np.zeros((0, n_cols or 0), dtype=bool)
        else:
            array = np.array(rows)

    if array.ndim != 2:
        raise MalformedRelationError(f'expected a 2-dimensional relation, got {array.ndim} dimension(s)')
    if array.shape[0] == 0 and n_cols is not None:
        array = np.zeros((0, n_cols), dtype=bool)
    if array.dtype != bool:
        if array.size and not np.isin(array, (0, 1)).all():
            raise MalformedRelationError('entries must be 0/1 or booleans')
        array = array.astype(bool)

    uncoverable = np.flatnonzero(~array.any(axis=0))
    if len(uncoverable):
        warnings.warn(f'columns {uncoverable.tolist()} are not covered by any row')
    return array


def incidence_matrix(pieces: Sequence[T], subsets: Sequence[Collection[T]]) -> Tuple[np.ndarray, Tuple[T, ...], Tuple[Chunk, ...]]:
    """ Relation of a universe (columns) and a collection of its subsets (rows), in the given orders """
    pieces = tuple(pieces)
    subsets = tuple(frozenset(subset) for subset in subsets)
    column_of = {piece: j for j, piece in enumerate(pieces)}
    if len(column_of) != len(pieces):
        raise MalformedRelationError('duplicate pieces in the universe')

    relation = np.zeros((len(subsets), len(pieces)), dtype=bool)
    for i, subset in enumerate(subsets):
        strangers = subset - column_of.keys()
        if strangers:
            raise MalformedRelationError(f'subset {i} has elements outside the universe: {strangers}', evidence=strangers)
        relation[i, [column_of[piece] for piece in subset]] = True
    return relation, pieces, subsets


class IndexView:
    """ Live original rows and columns of a relation.

    All lookups go through `rows` and `cols`, which are ascending arrays of original indices,
    so that any row or column at any depth maps back to the input.
    """

    def __init__(self, relation: np.ndarray, rows: np.ndarray, cols: np.ndarray):
        self.relation = relation
        self.rows = rows
        self.cols = cols

    @classmethod
    def full(cls, relation: np.ndarray) -> 'IndexView':
        n_rows, n_cols = relation.shape
        return cls(relation, np.arange(n_rows), np.arange(n_cols))

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.cols)

    def submatrix(self) -> np.ndarray:
        return self.relation[np.ix_(self.rows, self.cols)]

    def column_counts(self) -> np.ndarray:
        """ number of live rows covering each live column, aligned with `cols` """
        return self.submatrix().sum(axis=0)

    def rows_covering(self, col: int) -> np.ndarray:
        """ live rows (original indices, ascending) that cover an original column """
        return self.rows[self.relation[self.rows, col]]

    def without_row(self, row: int) -> 'IndexView':
        """ Selecting `row`: its columns are satisfied, and rows clashing with them are excluded """
        covered = self.relation[row, self.cols]
        clashing = self.relation[np.ix_(self.rows, self.cols[covered])].any(axis=1)
        return IndexView(self.relation, self.rows[~clashing], self.cols[~covered])

    def original_rows(self) -> Tuple[int, ...]:
        return tuple(int(r) for r in self.rows)

    def original_cols(self) -> Tuple[int, ...]:
        return tuple(int(c) for c in self.cols)

    def __repr__(self):
        return f'IndexView(rows={list(self.original_rows())}, cols={list(self.original_cols())})'
