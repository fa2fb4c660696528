"""
Randomized low-rank decompositions: truncated SVD, symmetric
eigendecomposition and PCA of dense, sparse or matrix-free operands.
"""
from redsvd.algorithms.orthonormalize import gram_schmidt
from redsvd.algorithms.pca import RedPCA
from redsvd.algorithms.rsvd import RedSVD, rsvd
from redsvd.algorithms.sampling import sample_gaussian
from redsvd.algorithms.sym_eigen import RedSymEigen
from redsvd.utils.io import (
    MatrixFileError,
    feature_vectors_to_matrix,
    parse_feature_line,
    read_dense_matrix,
    read_sparse_matrix,
    write_result,
)

__version__ = "0.1.0"

__all__ = [
    "RedSVD",
    "RedSymEigen",
    "RedPCA",
    "rsvd",
    "sample_gaussian",
    "gram_schmidt",
    "MatrixFileError",
    "parse_feature_line",
    "feature_vectors_to_matrix",
    "read_sparse_matrix",
    "read_dense_matrix",
    "write_result",
]
