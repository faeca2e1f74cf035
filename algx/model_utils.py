from typing import Optional, Tuple, Generator

import numpy as np
from tqdm import trange

from algx.utils import seeded, sortup


def random_relation(n_rows: int, n_cols: int, density: float = 0.3, seed: Optional[int] = None) -> np.ndarray:
    """ A relation whose entries are independently true with probability `density` """
    assert 0 <= density <= 1
    with seeded(seed):
        return np.random.rand(n_rows, n_cols) < density


def planted_relation(n_cols: int,
                     n_parts: int,
                     n_decoys: int = 0,
                     density: float = 0.3,
                     seed: Optional[int] = None
                     ) -> Tuple[np.ndarray, Tuple[int, ...]]:
    """ Randomly generate a relation with at least one exact cover.

    The columns are partitioned into `n_parts` nonempty rows, which are shuffled among `n_decoys` random rows.
    Returns the relation and the (sorted) indices of the planted rows.
    """
    assert 1 <= n_parts <= n_cols
    with seeded(seed):
        # every part gets one column for sure, the rest are dealt out at random
        owners = np.concatenate([np.arange(n_parts), np.random.randint(n_parts, size=n_cols - n_parts)])
        np.random.shuffle(owners)
        parts = owners[None, :] == np.arange(n_parts)[:, None]
        decoys = np.random.rand(n_decoys, n_cols) < density

        relation = np.vstack([parts, decoys])
        order = np.random.permutation(len(relation))
        relation = relation[order]
        planted = sortup(int(i) for i in np.flatnonzero(order < n_parts))
    return relation, planted


def random_relations(total: int, is_tqdm=True, max_cols=8, seed: Optional[int] = None) -> Generator[np.ndarray, None, None]:
    """ `total` small random relations, with or without exact covers """
    with seeded(seed):
        for _ in (trange(total, smoothing=0.01) if is_tqdm else range(total)):
            n_cols = np.random.randint(1, max_cols + 1)
            if np.random.rand() < 0.5:
                relation, _ = planted_relation(n_cols, np.random.randint(1, n_cols + 1), np.random.poisson(3))
            else:
                relation = random_relation(np.random.randint(0, 2 * n_cols), n_cols, np.random.uniform(0.1, 0.6))
            yield relation
