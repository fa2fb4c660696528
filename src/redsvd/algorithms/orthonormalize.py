"""
Column orthonormalization by modified Gram-Schmidt with re-orthogonalization.
"""
import logging

import numpy as np

from numpy.typing import NDArray

logger = logging.getLogger(__name__)


def gram_schmidt(mat: NDArray) -> NDArray:
    """
    Orthonormalize the columns of `mat` in place, first to last.

    Once column i is normalized its direction is removed from every later
    column (the modified Gram-Schmidt sweep). Before normalizing, column i
    has its components along columns 0..i-1 removed a second time, which
    recovers the orthogonality lost to rounding in the first sweep. A column
    with no residual left is set to zero.
    """
    n_cols = mat.shape[1]
    tiny = np.finfo(mat.dtype).tiny

    for i in range(n_cols):
        col = mat[:, i]

        # Re-orthogonalize against the finished columns
        if i > 0:
            done = mat[:, :i]
            col -= done @ (done.T @ col)

        norm = np.linalg.norm(col)
        if not norm > tiny:
            logger.warning("Column %d is linearly dependent on the previous columns, zeroing it", i)
            col[:] = 0.0
            continue
        col /= norm

        # Project the new direction out of the remaining columns
        rest = mat[:, i + 1:]
        rest -= np.outer(col, col @ rest)

    return mat
