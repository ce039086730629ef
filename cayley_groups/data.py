import itertools
from typing import Callable, Hashable, Iterable

import numpy as np

from .config import INDEX_DTYPE
from .table import Table


def table_from_operation(elements: Iterable[Hashable], op: Callable) -> Table:
    """tabulate op(a, b) over all ordered pairs of `elements`"""
    elements = list(elements)
    data = [[op(a, b) for b in elements] for a in elements]
    return Table(elements, data)


def cyclic_table(n: int) -> Table:
    """integers mod n under addition"""
    if n < 1:
        raise ValueError(f"cyclic tables need n >= 1, got {n}")
    i, j = np.indices((n, n))
    return Table.from_indices(range(n), ((i + j) % n).astype(INDEX_DTYPE))


def symmetric_table(k: int) -> Table:
    """permutations of range(k) as tuples, lexicographic order, (p*q)[i] = p[q[i]]"""
    if k < 1:
        raise ValueError(f"symmetric tables need k >= 1, got {k}")
    perms = list(itertools.permutations(range(k)))
    return table_from_operation(perms, lambda p, q: tuple(p[x] for x in q))

