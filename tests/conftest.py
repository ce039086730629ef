import pytest

from cayley_groups import Group, Table, cyclic_table, symmetric_table, table_from_operation

# permutations of range(3) in lexicographic order
S3_ID = (0, 1, 2)
S3_TRANSPOSITIONS = frozenset({(0, 2, 1), (1, 0, 2), (2, 1, 0)})
S3_ROTATIONS = frozenset({(1, 2, 0), (2, 0, 1)})


@pytest.fixture
def z4_table():
    return Table(range(4), [[(a + b) % 4 for b in range(4)] for a in range(4)])


@pytest.fixture
def z4(z4_table):
    return Group(z4_table)


@pytest.fixture
def s3():
    return Group(symmetric_table(3))


@pytest.fixture
def klein():
    return Group(table_from_operation(
        [(0, 0), (0, 1), (1, 0), (1, 1)],
        lambda a, b: (a[0] ^ b[0], a[1] ^ b[1]),
    ))


@pytest.fixture
def z6():
    return Group(cyclic_table(6))


@pytest.fixture
def quasigroup_table():
    """latin square without identity: a * b = -(a + b) mod 3"""
    return table_from_operation(range(3), lambda a, b: (-(a + b)) % 3)
