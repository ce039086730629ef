import numpy as np


def is_rearrangable(T: np.ndarray) -> bool:
    """every row and every column of the index table is a permutation of range(n)"""
    n = T.shape[0]
    rows = T.tolist()
    row_seen = [False] * n
    col_seen = [False] * n
    for a in range(n):
        for k in range(n):
            row_seen[k] = False
            col_seen[k] = False
        for b in range(n):
            c = rows[a][b]
            if row_seen[c]:
                return False
            row_seen[c] = True
            d = rows[b][a]
            if col_seen[d]:
                return False
            col_seen[d] = True
    return True


def first_nonassociative_triple(T: np.ndarray):
    """first (i, j, k) in lexicographic order with i*(j*k) != (i*j)*k, or None"""
    n = T.shape[0]
    rows = T.tolist()
    for i in range(n):
        for j in range(n):
            ij = rows[i][j]
            for k in range(n):
                jk = rows[j][k]
                if rows[ij][k] != rows[i][jk]:
                    return (i, j, k)
    return None


def is_associative(T: np.ndarray) -> bool:
    return first_nonassociative_triple(T) is None


def associativity_fraction(T: np.ndarray) -> float:
    """share of the n^3 triples (i, j, k) satisfying (i*j)*k == i*(j*k)"""
    n = T.shape[0]
    hits = 0
    # one n x n slice per i keeps memory quadratic
    for i in range(n):
        lhs = T[T[i]]      # lhs[j, k] = T[T[i, j], k]
        rhs = T[i, T]      # rhs[j, k] = T[i, T[j, k]]
        hits += int(np.count_nonzero(lhs == rhs))
    return hits / n**3


def is_commutative(T: np.ndarray) -> bool:
    return bool(np.array_equal(T, T.T))


def left_identities(T: np.ndarray) -> list[int]:
    """rows e with e*x == x for all x"""
    n = T.shape[0]
    hits = np.all(T == np.arange(n)[None, :], axis=1)
    return [int(e) for e in np.flatnonzero(hits)]


def right_identities(T: np.ndarray) -> list[int]:
    """columns e with x*e == x for all x"""
    n = T.shape[0]
    hits = np.all(T == np.arange(n)[:, None], axis=0)
    return [int(e) for e in np.flatnonzero(hits)]


def left_absorbers(T: np.ndarray) -> list[int]:
    """rows z with z*x == z for all x"""
    n = T.shape[0]
    hits = np.all(T == np.arange(n)[:, None], axis=1)
    return [int(z) for z in np.flatnonzero(hits)]


def right_absorbers(T: np.ndarray) -> list[int]:
    """columns z with x*z == z for all x"""
    n = T.shape[0]
    hits = np.all(T == np.arange(n)[None, :], axis=0)
    return [int(z) for z in np.flatnonzero(hits)]
