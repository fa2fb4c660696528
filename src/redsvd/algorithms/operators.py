"""
Matrix operands accepted by the randomized decompositions.

Everything the range finders need from the input is its shape, products
`A @ X` and `A.T @ X` with a dense block `X`, which numpy arrays, scipy
sparse matrices and scipy `LinearOperator`s all provide.
"""
from typing import Union

import numpy as np

from numpy.typing import ArrayLike, NDArray
from scipy.sparse import csr_matrix, issparse, spmatrix
from scipy.sparse.linalg import LinearOperator

DTYPE = np.float32

Operand = Union[NDArray, spmatrix, LinearOperator]


def as_operand(A: Union[ArrayLike, spmatrix, LinearOperator]) -> Operand:
    """
    Normalize `A` to a float32 ndarray, a float32 CSR matrix, or leave it as
    a `LinearOperator`.
    """
    if isinstance(A, LinearOperator):
        return A
    if issparse(A):
        return csr_matrix(A, dtype=DTYPE)

    A = np.asarray(A, dtype=DTYPE)
    if A.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got an array with {A.ndim} dimension(s)")
    return A


def matmul(A: Operand, X: NDArray) -> NDArray:
    """
    Dense float32 result of `A @ X`.
    """
    return np.asarray(A @ X, dtype=DTYPE)


def rmatmul(A: Operand, X: NDArray) -> NDArray:
    """
    Dense float32 result of `A.T @ X`.
    """
    return np.asarray(A.T @ X, dtype=DTYPE)


def effective_rank(A: Operand, rank: int) -> int:
    if rank < 0:
        raise ValueError(f"rank must be non-negative, got {rank}")
    m, n = A.shape
    return min(rank, n, m)


def is_degenerate(A: Operand) -> bool:
    m, n = A.shape
    return m == 0 or n == 0
