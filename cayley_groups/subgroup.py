import logging
from typing import Hashable, Iterable, Iterator

from .group import Group
from .table import Table

logger = logging.getLogger(__name__)


def bounded_closure_from_seed(seed: Iterable[Hashable], table: Table) -> set:
    """smallest subset containing `seed` that is closed under the table's operation"""
    G = {table.index_of(x) for x in seed}
    mul = table._mul
    frontier = list(G)
    while frontier:
        new_elems = []
        for x in frontier:
            for y in list(G):
                for prod in (mul(x, y), mul(y, x)):
                    if prod not in G:
                        G.add(prod)
                        new_elems.append(prod)
        frontier = new_elems
    return G


class Subgroup:
    """
    Subgroup of `supergroup` on the given elements.

    The restricted table is derived through the supergroup operation (raising
    ClosureError on the first product that leaves the subset) and validated as a
    Group in its own right. The supergroup is only consulted again for normality.
    """

    def __init__(self, supergroup: Group, elements: Iterable[Hashable]):
        table = supergroup.table.restrict(elements)
        self._supergroup = supergroup
        self._group = Group(table)
        self._is_normal = None
        logger.debug("subgroup of order %d in group of order %d", self.order, supergroup.order)

    @classmethod
    def generated_by(cls, supergroup: Group, generators: Iterable[Hashable]) -> "Subgroup":
        """subgroup generated by `generators`; elements keep the supergroup's order"""
        seed = list(generators) or [supergroup.identity]
        G = bounded_closure_from_seed(seed, supergroup.table)
        return cls(supergroup, [supergroup.elements[i] for i in sorted(G)])

    # delegated group capabilities

    @property
    def supergroup(self) -> Group:
        return self._supergroup

    @property
    def group(self) -> Group:
        return self._group

    @property
    def table(self) -> Table:
        return self._group.table

    @property
    def identity(self):
        return self._group.identity

    @property
    def elements(self) -> tuple:
        return self._group.elements

    @property
    def order(self) -> int:
        return self._group.order

    @property
    def index(self) -> int:
        """[G : H]"""
        return self._supergroup.order // self.order

    def __len__(self) -> int:
        return self.order

    def __iter__(self) -> Iterator:
        return iter(self.elements)

    def __contains__(self, g) -> bool:
        return g in self._group

    def contains(self, g) -> bool:
        return g in self._group

    def multiply(self, *gs: Hashable):
        return self._group.multiply(*gs)

    mul = multiply

    def inverse(self, g):
        return self._group.inverse(g)

    inv = inverse

    def class_of(self, g) -> frozenset:
        return self._group.class_of(g)

    @property
    def classes(self) -> list[frozenset]:
        return self._group.classes

    def __repr__(self):
        return f"Subgroup(order={self.order}, index={self.index}, elements={list(self.elements)!r})"

    # normality

    @property
    def is_normal(self) -> bool:
        if self._is_normal is None:
            self._is_normal = self._compute_is_normal()
            logger.debug("subgroup of order %d normal: %s", self.order, self._is_normal)
        return self._is_normal

    def _compute_is_normal(self) -> bool:
        sup = self._supergroup
        for g in sup.elements:
            if g in self:
                continue
            for h in self.elements:
                if sup.conjugate(h, g) not in self:
                    return False
        return True


def trivial_subgroup(group: Group) -> Subgroup:
    return Subgroup(group, [group.identity])


def whole_group(group: Group) -> Subgroup:
    return Subgroup(group, group.elements)
