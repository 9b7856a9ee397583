from math import comb
from typing import Iterator


class Combinations:
    """
    Every strictly increasing ``k``-tuple of indices drawn from ``range(n)``, in lexicographic order.

    The sequence is lazy and restartable: each call to ``iter()`` starts from ``(0, 1, ..., k-1)``.
    """

    def __init__(self, n: int, k: int):
        if n < 0 or k < 0:
            raise ValueError(f"n and k must be non-negative, got {n=} {k=}")
        self.n = n
        self.k = k

    def __len__(self) -> int:
        return comb(self.n, self.k)

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        n, k = self.n, self.k
        if k > n:
            return
        indices = list(range(k))
        while True:
            yield tuple(indices)

            # rightmost position that can still move
            i = k - 1
            while i >= 0 and indices[i] == n - k + i:
                i -= 1
            if i < 0:
                return
            indices[i] += 1
            for j in range(i + 1, k):
                indices[j] = indices[j - 1] + 1

    def __repr__(self) -> str:
        return f"Combinations(n={self.n}, k={self.k})"
