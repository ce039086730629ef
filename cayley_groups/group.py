import logging
from functools import reduce
from typing import Hashable, Iterator

from .errors import AxiomError
from .table import Table

logger = logging.getLogger(__name__)


class Group:
    """
    Finite group given by a Cayley table.

    Construction checks, in order, that the table is rearrangable (a Latin square),
    associative and has a two-sided identity; an AxiomError names the first check
    that fails. Conjugacy classes are discovered lazily and cached for the lifetime
    of the group.
    """

    def __init__(self, table: Table):
        if not table.is_rearrangable():
            raise AxiomError(
                "rearrangability",
                "group can only be constructed from a rearrangable multiplication table",
            )
        if not table.is_associative():
            a, b, c = table.first_nonassociative_triple()
            raise AxiomError(
                "associativity",
                "group can only be constructed from an associative multiplication table "
                f"({a!r} * ({b!r} * {c!r}) != ({a!r} * {b!r}) * {c!r})",
            )
        identity = table.find_identity()
        if identity is None:
            raise AxiomError("identity", "group must have a unique two-sided identity element")

        self._table = table
        self._identity = identity
        self._e = table.index_of(identity)
        self._classes: list[frozenset] = []
        self._all_classes_found = False
        logger.debug("group of order %d, identity %r", table.order, identity)

    @property
    def table(self) -> Table:
        return self._table

    @property
    def identity(self):
        return self._identity

    @property
    def elements(self) -> tuple:
        return self._table.elements

    @property
    def order(self) -> int:
        return self._table.order

    def __len__(self) -> int:
        return self._table.order

    def __iter__(self) -> Iterator:
        return iter(self._table.elements)

    def __contains__(self, g) -> bool:
        return g in self._table

    def contains(self, g) -> bool:
        return g in self._table

    def __repr__(self):
        return f"{type(self).__name__}(order={self.order}, identity={self._identity!r})"

    # operations

    def multiply(self, *gs: Hashable):
        """product g1 * g2 * ... * gk, reduced left to right"""
        if not gs:
            raise TypeError("multiply() needs at least one element")
        if len(gs) == 1:
            self._table.index_of(gs[0])
            return gs[0]
        return reduce(self._table.multiply, gs)

    mul = multiply

    def _inv(self, i: int) -> int:
        """index-level inverse, no checks"""
        return self._table._rows[i].index(self._e)

    def inverse(self, g):
        i = self._table.index_of(g)
        return self.elements[self._inv(i)]

    inv = inverse

    def conjugate(self, g, h):
        """h * g * h^-1"""
        return self.multiply(h, g, self.inverse(h))

    def power(self, g, k: int):
        """g ** k; negative exponents go through the inverse"""
        i = self._table.index_of(g)
        if k < 0:
            i = self._inv(i)
            k = -k
        # exponentiation by squaring
        mul = self._table._mul
        result, base = self._e, i
        while k:
            if k & 1:
                result = mul(result, base)
            k >>= 1
            if k:
                base = mul(base, base)
        return self.elements[result]

    def element_order(self, g) -> int:
        """smallest k >= 1 with g ** k == identity"""
        i = self._table.index_of(g)
        mul = self._table._mul
        k, x = 1, i
        while x != self._e:
            x = mul(x, i)
            k += 1
        return k

    def is_abelian(self) -> bool:
        return self._table.is_commutative()

    def center(self) -> frozenset:
        """elements commuting with every element: the union of singleton classes"""
        return frozenset(x for c in self.classes if len(c) == 1 for x in c)

    # conjugacy classes

    def _find_class(self, g):
        for c in self._classes:
            if g in c:
                return c
        return None

    def class_of(self, g) -> frozenset:
        """conjugacy class {h * g * h^-1 : h in G}, cached once found"""
        i = self._table.index_of(g)
        c = self._find_class(g)
        if c is not None:
            return c

        mul, inv, els = self._table._mul, self._inv, self.elements
        c = frozenset(els[mul(mul(h, i), inv(h))] for h in range(self.order))
        self._classes.append(c)
        return c

    @property
    def classes(self) -> list[frozenset]:
        """partition of the elements into conjugacy classes, in discovery order"""
        if self._all_classes_found:
            return list(self._classes)

        for g in self.elements:
            if self._find_class(g) is None:
                self.class_of(g)

        self._all_classes_found = True
        logger.debug("found %d conjugacy classes in group of order %d", len(self._classes), self.order)
        return list(self._classes)
