"""
Principal component analysis on top of the randomized SVD.
"""
import numpy as np

from typing import Optional
from numpy.typing import NDArray

from redsvd.algorithms.operators import DTYPE, Operand, as_operand, effective_rank, is_degenerate
from redsvd.algorithms.rsvd import RedSVD, Seed


class RedPCA:
    def __init__(self, A: Optional[Operand] = None, rank: Optional[int] = None, seed: Seed = None):
        """
        PCA of the rows of A. A is not mean centered here; center it first
        for the covariance interpretation.
        """
        self.rng = np.random.default_rng(seed)
        self._principal_components: NDArray = np.zeros((0, 0), dtype=DTYPE)
        self._scores: NDArray = np.zeros((0, 0), dtype=DTYPE)

        if A is not None and rank is not None:
            self.run(A, rank)

    @property
    def principal_components(self) -> NDArray:
        return self._principal_components

    @property
    def scores(self) -> NDArray:
        return self._scores

    def run(self, A: Operand, rank: int) -> "RedPCA":
        A = as_operand(A)
        effective_rank(A, rank)  # rejects a negative rank before the guard
        if is_degenerate(A):
            return self

        result = RedSVD(seed=self.rng)
        result.run(A, rank)

        # scores = U diag(S)
        self._principal_components = result.matrix_v
        self._scores = result.matrix_u * result.singular_values
        return self
