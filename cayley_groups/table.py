import logging
from functools import cached_property
from typing import Any, Hashable, Iterable, Iterator, Sequence

import numpy as np

from . import metrics
from .config import INDEX_DTYPE
from .errors import ClosureError, UnknownElementError, ValidationError

logger = logging.getLogger(__name__)


def _validate_elements(elements) -> tuple:
    try:
        elements = tuple(elements)
    except TypeError:
        raise ValidationError("elements must be an iterable of values") from None
    if not elements:
        raise ValidationError("a table needs at least one element")

    seen = set()
    for x in elements:
        if x is None:
            raise ValidationError("None is not a valid element")
        try:
            hash(x)
        except TypeError:
            raise ValidationError(f"elements must be hashable, got {type(x).__name__}") from None
        if not (x == x):
            raise ValidationError(f"element {x!r} is not equal to itself")
        if x in seen:
            raise ValidationError(f"duplicate element: {x!r}")
        seen.add(x)
    return elements


def _as_rows(data) -> list[list]:
    try:
        rows = [list(row) for row in data]
    except TypeError:
        raise ValidationError("table data must be a sequence of rows") from None
    size = len(rows)
    for row in rows:
        if len(row) != size:
            raise ValidationError("the multiplication table must be square")
    return rows


def _check_dimension(size: int, n: int):
    if size != n:
        raise ValidationError(
            f"table is {size}x{size} but {n} elements were listed"
        )


class Table:
    """
    Dense Cayley table of a binary operation on a finite set of hashable elements.

    `data[i][j]` is the element `elements[i] * elements[j]`. The table is translated
    once into an integer index matrix (`indices`) and every axiom check runs on
    that matrix; element values are only looked up at the public boundary.
    Tables are immutable: do not mutate the arrays handed to the constructor.
    """

    def __init__(self, elements: Iterable[Hashable], data: Sequence[Sequence[Any]] | np.ndarray):
        elements = _validate_elements(elements)
        rows = _as_rows(data)
        n = len(elements)
        _check_dimension(len(rows), n)

        index_of = {x: i for i, x in enumerate(elements)}
        T = np.empty((n, n), dtype=INDEX_DTYPE)
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                try:
                    T[i, j] = index_of[value]
                except (KeyError, TypeError):
                    raise ValidationError(
                        f"cell ({i}, {j}) holds {value!r}, which is not a table element"
                    ) from None
        self._setup(elements, index_of, T)

    @classmethod
    def from_indices(cls, elements: Iterable[Hashable], indices) -> "Table":
        """build a table from a matrix of positions into `elements`"""
        elements = _validate_elements(elements)
        n = len(elements)
        T = np.asarray(_as_rows(indices) if not isinstance(indices, np.ndarray) else indices)
        if T.ndim != 2 or T.shape[0] != T.shape[1]:
            raise ValidationError("the multiplication table must be square")
        _check_dimension(T.shape[0], n)
        if not np.issubdtype(T.dtype, np.integer):
            raise ValidationError(f"index tables must hold integers, got dtype {T.dtype}")
        bad = (T < 0) | (T >= n)
        if bad.any():
            i, j = (int(v) for v in np.argwhere(bad)[0])
            raise ValidationError(
                f"cell ({i}, {j}) holds index {int(T[i, j])}, outside 0..{n - 1}"
            )

        self = cls.__new__(cls)
        self._setup(elements, {x: i for i, x in enumerate(elements)}, T.astype(INDEX_DTYPE))
        return self

    def _setup(self, elements: tuple, index_of: dict, T: np.ndarray):
        T.setflags(write=False)
        self._elements = elements
        self._index_of = index_of
        self._T = T
        self._rows = T.tolist()
        logger.debug("validated %dx%d table", len(elements), len(elements))

    # basic access

    @property
    def elements(self) -> tuple:
        return self._elements

    @property
    def indices(self) -> np.ndarray:
        """read-only integer matrix: indices[i, j] is the position of elements[i] * elements[j]"""
        return self._T

    @property
    def order(self) -> int:
        return len(self._elements)

    @cached_property
    def data(self) -> tuple[tuple, ...]:
        els = self._elements
        return tuple(tuple(els[k] for k in row) for row in self._rows)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator:
        return iter(self._elements)

    def __contains__(self, x) -> bool:
        try:
            return x in self._index_of
        except TypeError:
            return False

    def index_of(self, x) -> int:
        """position of `x` in `elements`; raises UnknownElementError"""
        try:
            return self._index_of[x]
        except (KeyError, TypeError):
            raise UnknownElementError(x) from None

    def __eq__(self, other):
        if not isinstance(other, Table):
            return NotImplemented
        return self._elements == other._elements and bool(np.array_equal(self._T, other._T))

    __hash__ = None

    def __repr__(self):
        shown = ", ".join(repr(x) for x in self._elements[:6])
        if self.order > 6:
            shown += ", ..."
        return f"Table(order={self.order}, elements=[{shown}])"

    # operation

    def _mul(self, i: int, j: int) -> int:
        """index-level product, no checks"""
        return self._rows[i][j]

    def multiply(self, a, b):
        i, j = self.index_of(a), self.index_of(b)
        return self._elements[self._rows[i][j]]

    # axioms

    def is_rearrangable(self) -> bool:
        return metrics.is_rearrangable(self._T)

    def is_associative(self) -> bool:
        return metrics.is_associative(self._T)

    def is_commutative(self) -> bool:
        return metrics.is_commutative(self._T)

    def associativity_fraction(self) -> float:
        return metrics.associativity_fraction(self._T)

    def first_nonassociative_triple(self):
        """first (a, b, c) in element order with a*(b*c) != (a*b)*c, or None"""
        triple = metrics.first_nonassociative_triple(self._T)
        if triple is None:
            return None
        return tuple(self._elements[k] for k in triple)

    # identities and absorbers

    def find_left_identities(self) -> list:
        return [self._elements[e] for e in metrics.left_identities(self._T)]

    def find_right_identities(self) -> list:
        return [self._elements[e] for e in metrics.right_identities(self._T)]

    def find_identity(self):
        """first left identity in element order, if it is also a right identity; else None"""
        candidates = metrics.left_identities(self._T)
        if not candidates:
            return None
        if len(candidates) > 1:
            logger.warning(
                "table has %d left identities, checking only the first (%r)",
                len(candidates), self._elements[candidates[0]],
            )
        e = candidates[0]
        rows = self._rows
        for x in range(self.order):
            if rows[x][e] != x:
                return None
        return self._elements[e]

    def find_left_absorbers(self) -> list:
        return [self._elements[z] for z in metrics.left_absorbers(self._T)]

    def find_right_absorbers(self) -> list:
        return [self._elements[z] for z in metrics.right_absorbers(self._T)]

    def find_absorber(self):
        """first left absorber in element order, if it is also a right absorber; else None"""
        candidates = metrics.left_absorbers(self._T)
        if not candidates:
            return None
        if len(candidates) > 1:
            logger.warning(
                "table has %d left absorbers, checking only the first (%r)",
                len(candidates), self._elements[candidates[0]],
            )
        z = candidates[0]
        rows = self._rows
        for x in range(self.order):
            if rows[x][z] != z:
                return None
        return self._elements[z]

    # equations

    def solve_left(self, a, b):
        """find x such that x * a == b"""
        ia, ib = self.index_of(a), self.index_of(b)
        rows = self._rows
        for x in range(self.order):
            if rows[x][ia] == ib:
                return self._elements[x]
        return None

    def solve_right(self, a, b):
        """find x such that a * x == b"""
        ia, ib = self.index_of(a), self.index_of(b)
        row = self._rows[ia]
        for x in range(self.order):
            if row[x] == ib:
                return self._elements[x]
        return None

    # derived tables

    def restrict(self, subset: Iterable[Hashable]) -> "Table":
        """
        Sub-table of the operation restricted to `subset`, in the given order.
        Raises ClosureError on the first product (row-major) that leaves the subset.
        """
        subset = _validate_elements(subset)
        G = [self.index_of(x) for x in subset]
        idx = {g: u for u, g in enumerate(G)}
        m = len(G)
        T_loc = np.empty((m, m), dtype=INDEX_DTYPE)
        rows = self._rows
        for u, a in enumerate(G):
            for v, b in enumerate(G):
                p = rows[a][b]
                if p not in idx:
                    raise ClosureError((subset[u], subset[v]), self._elements[p])
                T_loc[u, v] = idx[p]
        return Table.from_indices(subset, T_loc)

