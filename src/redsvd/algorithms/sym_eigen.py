"""
Implementation of the randomized eigendecomposition of symmetric matrices.
"""
import logging
import numpy as np

from typing import Optional
from numpy.typing import NDArray
from scipy.linalg import eigh

from redsvd.algorithms.operators import (
    DTYPE, Operand, as_operand, effective_rank, is_degenerate, matmul, rmatmul
)
from redsvd.algorithms.orthonormalize import gram_schmidt
from redsvd.algorithms.rsvd import Seed
from redsvd.algorithms.sampling import sample_gaussian

logger = logging.getLogger(__name__)


class RedSymEigen:
    def __init__(self, A: Optional[Operand] = None, rank: Optional[int] = None, seed: Seed = None):
        """
        Randomized eigendecomposition A ~ V diag(lambda) V^T of a symmetric
        matrix. Symmetry of A is assumed, not checked.
        """
        self.rng = np.random.default_rng(seed)
        self._eigen_values: NDArray = np.zeros(0, dtype=DTYPE)
        self._eigen_vectors: NDArray = np.zeros((0, 0), dtype=DTYPE)

        if A is not None and rank is not None:
            self.run(A, rank)

    @property
    def eigen_values(self) -> NDArray:
        """
        Eigenvalues in ascending order.
        """
        return self._eigen_values

    @property
    def eigen_vectors(self) -> NDArray:
        return self._eigen_vectors

    def run(self, A: Operand, rank: int) -> "RedSymEigen":
        A = as_operand(A)
        r = effective_rank(A, rank)
        if is_degenerate(A):
            logger.debug("Skipping degenerate matrix of shape %s", A.shape)
            return self

        m, n = A.shape
        logger.debug("RedSymEigen: shape=(%d, %d), rank=%d", m, n, r)

        if r == 0:
            self._eigen_values = np.zeros(0, dtype=DTYPE)
            self._eigen_vectors = np.zeros((n, 0), dtype=DTYPE)
            return self

        # Row and column spaces coincide, one projection is enough
        O = sample_gaussian(np.empty((m, r), dtype=DTYPE), self.rng)
        Y = rmatmul(A, O)
        gram_schmidt(Y)

        # Reduced r x r symmetric matrix
        B = Y.T @ matmul(A, Y)
        w, V_B = eigh(B, check_finite=False)

        self._eigen_values = w.astype(DTYPE)
        self._eigen_vectors = (Y @ V_B).astype(DTYPE)
        return self
