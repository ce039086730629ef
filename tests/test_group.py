import tracemalloc

import numpy as np
import pytest

from cayley_groups import AxiomError, Group, Table, UnknownElementError, table_from_operation

from .conftest import S3_ID, S3_ROTATIONS, S3_TRANSPOSITIONS


class TestConstruction:
    def test_not_rearrangable(self):
        t = table_from_operation(range(4), lambda a, b: (a * b) % 4)
        with pytest.raises(AxiomError, match="rearrangable") as info:
            Group(t)
        assert info.value.axiom == "rearrangability"

    def test_not_associative(self, quasigroup_table):
        with pytest.raises(AxiomError, match="associative") as info:
            Group(quasigroup_table)
        assert info.value.axiom == "associativity"

    def test_rearrangability_checked_before_associativity(self):
        t = Table([0, 1], [[1, 1], [0, 0]])
        assert not t.is_associative()
        with pytest.raises(AxiomError) as info:
            Group(t)
        assert info.value.axiom == "rearrangability"

    def test_associativity_checked_before_identity(self, quasigroup_table):
        assert quasigroup_table.find_identity() is None
        with pytest.raises(AxiomError) as info:
            Group(quasigroup_table)
        assert info.value.axiom == "associativity"
        assert "0 * (0 * 1)" in str(info.value)

    def test_large_nonassociative_table_stays_small_in_memory(self):
        n = 150
        i, j = np.indices((n, n))
        t = Table.from_indices(range(n), (-(i + j)) % n)
        tracemalloc.start()
        try:
            with pytest.raises(AxiomError):
                Group(t)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        # a dense n^3 int64 cube alone would be 27 MB
        assert peak < 10_000_000

    def test_axiom_error_is_value_error(self, quasigroup_table):
        with pytest.raises(ValueError):
            Group(quasigroup_table)

    def test_trivial_group(self):
        g = Group(Table(["e"], [["e"]]))
        assert g.identity == "e"
        assert g.inverse("e") == "e"
        assert g.classes == [frozenset({"e"})]

    def test_identity_not_first(self):
        # Z3 listed with its identity last
        g = Group(table_from_operation([1, 2, 0], lambda a, b: (a + b) % 3))
        assert g.identity == 0

    def test_repr(self, z4):
        assert repr(z4) == "Group(order=4, identity=0)"


class TestOperations:
    def test_identity_law(self, z4, s3, klein):
        for G in (z4, s3, klein):
            for g in G:
                assert G.multiply(G.identity, g) == g == G.multiply(g, G.identity)

    def test_inverse_law(self, z4, s3, klein):
        for G in (z4, s3, klein):
            for g in G:
                assert G.multiply(g, G.inverse(g)) == G.identity == G.multiply(G.inverse(g), g)

    def test_z4_inverses(self, z4):
        assert z4.identity == 0
        assert z4.inverse(1) == 3
        assert z4.inverse(2) == 2
        assert z4.inv(3) == 1

    def test_nary_multiply(self, z4, s3):
        assert z4.multiply(1, 1, 1) == 3
        assert z4.mul(1, 2, 3, 3) == 1
        assert z4.multiply(2) == 2
        r = (1, 2, 0)
        assert s3.multiply(r, r, r) == S3_ID

    def test_multiply_non_commutative(self, s3):
        a, b = (0, 2, 1), (1, 0, 2)
        assert s3.multiply(a, b) != s3.multiply(b, a)

    def test_multiply_needs_arguments(self, z4):
        with pytest.raises(TypeError):
            z4.multiply()

    def test_unknown_elements(self, z4):
        with pytest.raises(UnknownElementError):
            z4.multiply(1, 2, 7)
        with pytest.raises(UnknownElementError):
            z4.multiply(7)
        with pytest.raises(UnknownElementError):
            z4.inverse(-1)
        with pytest.raises(UnknownElementError):
            z4.class_of("x")

    def test_power(self, z4, s3):
        assert z4.power(1, 0) == 0
        assert z4.power(1, 3) == 3
        assert z4.power(1, -1) == 3
        assert z4.power(3, 10) == 2
        r = (1, 2, 0)
        assert s3.power(r, 2) == s3.inverse(r)

    def test_element_order(self, z4, s3):
        assert [z4.element_order(g) for g in z4] == [1, 4, 2, 4]
        assert s3.element_order(S3_ID) == 1
        for t in S3_TRANSPOSITIONS:
            assert s3.element_order(t) == 2
        for r in S3_ROTATIONS:
            assert s3.element_order(r) == 3

    def test_abelian(self, z4, s3, klein):
        assert z4.is_abelian()
        assert klein.is_abelian()
        assert not s3.is_abelian()

    def test_conjugate(self, s3):
        r, t = (1, 2, 0), (0, 2, 1)
        assert s3.conjugate(r, t) == s3.inverse(r)
        assert s3.conjugate(r, S3_ID) == r

    def test_contains(self, z4):
        assert z4.contains(3)
        assert 5 not in z4


class TestConjugacyClasses:
    def test_identity_class(self, z4, s3, klein):
        for G in (z4, s3, klein):
            assert G.class_of(G.identity) == frozenset({G.identity})

    def test_abelian_classes_are_singletons(self, z4):
        assert z4.classes == [frozenset({g}) for g in range(4)]

    def test_s3_classes(self, s3):
        classes = s3.classes
        assert len(classes) == 3
        assert set(classes) == {frozenset({S3_ID}), S3_TRANSPOSITIONS, S3_ROTATIONS}

    def test_partition(self, s3, klein, z6):
        for G in (s3, klein, z6):
            classes = G.classes
            union = frozenset().union(*classes)
            assert union == frozenset(G.elements)
            assert sum(len(c) for c in classes) == G.order
            for i, a in enumerate(classes):
                for b in classes[i + 1:]:
                    assert not (a & b)

    def test_class_of_is_cached(self, s3):
        t = (0, 2, 1)
        c = s3.class_of(t)
        assert c == S3_TRANSPOSITIONS
        assert s3.class_of((2, 1, 0)) is c

    def test_classes_reuse_discovered_class(self, s3):
        c = s3.class_of((2, 0, 1))
        assert any(x is c for x in s3.classes)

    def test_classes_complete_once(self, s3):
        first = s3.classes
        assert s3._all_classes_found
        assert s3.classes == first

    def test_center(self, s3, z4):
        assert s3.center() == frozenset({S3_ID})
        assert z4.center() == frozenset(range(4))
