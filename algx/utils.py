from contextlib import contextmanager
from itertools import combinations as itercomb
from typing import Iterable, TypeVar, Generator, Tuple, List, Sequence

import numpy as np

T = TypeVar('T')


@contextmanager
def seeded(seed=None):
    if seed is not None:
        st0 = np.random.get_state()
        np.random.seed(seed)
        try:
            yield
        finally:
            # noinspection PyTypeChecker
            np.random.set_state(st0)
    else:
        yield


def sortup(xs: Iterable[T]) -> Tuple[T, ...]:
    """ Syntactic sugar for tuple(sorted(...)) """
    return tuple(sorted(xs))


def unique(vs: Iterable[T]) -> List[T]:
    seen = set()
    at = list()
    for v in vs:
        if v not in seen:
            at.append(v)
            seen.add(v)
    return at


def combinations(xs: Iterable[T]) -> Generator[Tuple[T, ...], None, None]:
    """ all combinations of given in the order of increasing its size """
    xs = list(xs)
    for i in range(len(xs) + 1):
        for comb in itercomb(xs, i):
            yield comb


def covered_columns(relation: np.ndarray, rows: Sequence[int], index_base: int = 0) -> np.ndarray:
    """ Number of selected rows covering each column """
    relation = np.asarray(relation, dtype=bool)
    indices = [r - index_base for r in rows]
    return relation[indices].sum(axis=0) if indices else np.zeros(relation.shape[1], dtype=int)


def is_exact_cover(relation: np.ndarray, rows: Sequence[int], index_base: int = 0) -> bool:
    """ Whether every column is covered by exactly one of the selected (distinct) rows """
    relation = np.asarray(relation, dtype=bool)
    if len(set(rows)) != len(rows):
        return False
    if any(not (0 <= r - index_base < relation.shape[0]) for r in rows):
        return False
    return bool((covered_columns(relation, rows, index_base) == 1).all())


def brute_force_exact_covers(relation: np.ndarray) -> Generator[Tuple[int, ...], None, None]:
    """ Every exact cover of a (small) relation, smaller ones first """
    relation = np.asarray(relation, dtype=bool)
    for comb in combinations(range(relation.shape[0])):
        if is_exact_cover(relation, comb):
            yield comb
