"""
Implementation of the randomized singular value decomposition.
"""
import logging
import numpy as np

from typing import Optional, Union
from numpy.typing import NDArray
from scipy.linalg import svd

from redsvd.algorithms.operators import (
    DTYPE, Operand, as_operand, effective_rank, is_degenerate, matmul, rmatmul
)
from redsvd.algorithms.orthonormalize import gram_schmidt
from redsvd.algorithms.sampling import sample_gaussian

logger = logging.getLogger(__name__)

Seed = Union[None, int, np.random.Generator]


class RedSVD:
    def __init__(self, A: Optional[Operand] = None, rank: Optional[int] = None, seed: Seed = None):
        """
        Randomized truncated SVD, A ~ U diag(S) V^T.

        A, rank, optional: when both are given, `run` is called right away.
        seed, optional: int seed or Generator for the Gaussian sampling.
        """
        self.rng = np.random.default_rng(seed)
        self._U: NDArray = np.zeros((0, 0), dtype=DTYPE)
        self._S: NDArray = np.zeros(0, dtype=DTYPE)
        self._V: NDArray = np.zeros((0, 0), dtype=DTYPE)

        if A is not None and rank is not None:
            self.run(A, rank)

    @property
    def matrix_u(self) -> NDArray:
        return self._U

    @property
    def singular_values(self) -> NDArray:
        return self._S

    @property
    def matrix_v(self) -> NDArray:
        return self._V

    def run(self, A: Operand, rank: int) -> "RedSVD":
        """
        Given an m by n matrix A and a target rank, compute the rank-r
        factorization with r = min(rank, m, n). The row space of A is sampled
        first, then the column space of the projected matrix B = A Y, so that
        only an r by r matrix is decomposed exactly.
        """
        A = as_operand(A)
        r = effective_rank(A, rank)
        if is_degenerate(A):
            logger.debug("Skipping degenerate matrix of shape %s", A.shape)
            return self

        m, n = A.shape
        logger.debug("RedSVD: shape=(%d, %d), rank=%d", m, n, r)

        if r == 0:
            self._U = np.zeros((m, 0), dtype=DTYPE)
            self._S = np.zeros(0, dtype=DTYPE)
            self._V = np.zeros((n, 0), dtype=DTYPE)
            return self

        # Gaussian random matrix for A^T
        O = sample_gaussian(np.empty((m, r), dtype=DTYPE), self.rng)

        # Sample the row space of A and orthonormalize it
        Y = rmatmul(A, O)
        gram_schmidt(Y)

        # Range(B) = Range(A Y), an m x r matrix
        B = matmul(A, Y)

        # Sample the column space of B and orthonormalize it
        P = sample_gaussian(np.empty((B.shape[1], r), dtype=DTYPE), self.rng)
        Z = B @ P
        gram_schmidt(Z)

        # Reduced r x r matrix, C = U_C S V_C^T
        C = Z.T @ B
        U_C, S, VT_C = svd(C, full_matrices=False, lapack_driver="gesdd", check_finite=False)

        # A ~ Z U_C S V_C^T Y^T
        self._U = (Z @ U_C).astype(DTYPE)
        self._S = S.astype(DTYPE)
        self._V = (Y @ VT_C.T).astype(DTYPE)
        return self


def rsvd(A: Operand, k: int, seed: Seed = None) -> tuple[NDArray, NDArray, NDArray]:
    """
    Given an m by n matrix A and a target rank k, compute the approximate
    rank-k factorization `U S V^T` of A. Returns U, S and V^T.
    """
    result = RedSVD(A, k, seed=seed)
    return result.matrix_u, result.singular_values, result.matrix_v.T
