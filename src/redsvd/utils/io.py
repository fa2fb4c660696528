"""
Reading matrices from text files and writing decomposition results.

Sparse files hold one row per line as `index:value` pairs separated by
whitespace, dense files hold whitespace separated values.
"""
import logging
import numpy as np

from pathlib import Path
from typing import Callable, Iterable, Optional, Union
from numpy.typing import NDArray
from scipy.sparse import csr_matrix

from redsvd.algorithms.operators import DTYPE
from redsvd.algorithms.pca import RedPCA
from redsvd.algorithms.rsvd import RedSVD
from redsvd.algorithms.sym_eigen import RedSymEigen

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
FeatureVector = list[tuple[int, float]]


class MatrixFileError(OSError):
    """
    A matrix file could not be opened or written.
    """


def _feature_pair(token: str) -> tuple[int, float]:
    index, sep, value = token.partition(":")
    if not sep:
        raise ValueError(f"expected 'index:value', got {token!r}")
    index = int(index)
    if index < 0:
        raise ValueError(f"negative feature index {index}")
    return index, float(value)


def _sorted_unique(fv: FeatureVector) -> FeatureVector:
    fv = sorted(fv)
    unique = []
    for index, value in fv:
        if unique and unique[-1][0] == index:
            continue
        unique.append((index, value))
    return unique


def _leading_values(tokens: list[str], convert: Callable) -> tuple[list, Optional[str]]:
    """
    Convert tokens up to the first one `convert` rejects. Returns the
    converted prefix and the rejected token, or None when all converted.
    """
    values = []
    for token in tokens:
        try:
            values.append(convert(token))
        except ValueError:
            return values, token
    return values, None


def parse_feature_line(line: str) -> FeatureVector:
    """
    Parse `index:value` tokens into a feature vector sorted by index. When an
    index repeats, the entry that sorts first is kept. Raises ValueError on
    a malformed token.
    """
    return _sorted_unique([_feature_pair(token) for token in line.split()])


def feature_vectors_to_matrix(fvs: Iterable[FeatureVector]) -> csr_matrix:
    """
    Stack feature vectors as the rows of a CSR matrix with
    `max index + 1` columns.
    """
    indptr = [0]
    indices = []
    data = []
    n_cols = 0
    for fv in fvs:
        for index, value in fv:
            indices.append(index)
            data.append(value)
            n_cols = max(n_cols, index + 1)
        indptr.append(len(indices))

    shape = (len(indptr) - 1, n_cols)
    return csr_matrix(
        (np.array(data, dtype=DTYPE), np.array(indices, dtype=np.int32), np.array(indptr, dtype=np.int32)),
        shape=shape
    )


def _open_for_reading(path: PathLike):
    try:
        return open(path)
    except OSError as e:
        raise MatrixFileError(f"failed to open {path}: {e}") from e


def read_sparse_matrix(path: PathLike) -> csr_matrix:
    """
    Read a sparse matrix, one feature vector per line. Empty lines are
    skipped and do not produce rows. A line is read up to its first
    malformed token, with a warning.
    """
    fvs = []
    with _open_for_reading(path) as f:
        for line_no, line in enumerate(f, start=1):
            pairs, bad = _leading_values(line.split(), _feature_pair)
            if bad is not None:
                logger.warning("%s:%d: malformed entry %r, ignoring the rest of the line", path, line_no, bad)
            fv = _sorted_unique(pairs)
            if fv:
                fvs.append(fv)

    return feature_vectors_to_matrix(fvs)


def read_dense_matrix(path: PathLike) -> NDArray:
    """
    Read a dense matrix. The first line sets the number of columns; shorter
    rows are padded with zeros and longer rows truncated, with a warning.
    A row is read up to its first non-numeric value, also with a warning.
    """
    rows = []
    with _open_for_reading(path) as f:
        for line_no, line in enumerate(f, start=1):
            row, bad = _leading_values(line.split(), float)
            if bad is not None:
                logger.warning("%s:%d: non-numeric value %r, ignoring the rest of the line", path, line_no, bad)
            rows.append(row)

    if not rows:
        return np.zeros((0, 0), dtype=DTYPE)

    n_cols = len(rows[0])
    A = np.zeros((len(rows), n_cols), dtype=DTYPE)
    for i, row in enumerate(rows):
        if len(row) != n_cols:
            logger.warning(
                "%d-th row has %d entries. %d entries are expected", i + 1, len(row), n_cols
            )
        k = min(n_cols, len(row))
        A[i, :k] = row[:k]
    return A


def write_matrix(path: PathLike, M: NDArray) -> None:
    logger.info("write %s", path)
    try:
        np.savetxt(path, np.atleast_2d(M), fmt="%+f", delimiter=" ")
    except OSError as e:
        raise MatrixFileError(f"cannot open {path}: {e}") from e


def write_vector(path: PathLike, v: NDArray) -> None:
    logger.info("write %s", path)
    try:
        np.savetxt(path, np.ravel(v), fmt="%+f")
    except OSError as e:
        raise MatrixFileError(f"cannot open {path}: {e}") from e


def write_result(stem: PathLike, result: Union[RedSVD, RedPCA, RedSymEigen]) -> list[str]:
    """
    Write every output of a decomposition next to `stem`, returning the
    paths written:
        RedSVD      -> .U .S .V
        RedPCA      -> .pc .score
        RedSymEigen -> .evec .eval
    """
    stem = str(stem)
    if isinstance(result, RedSVD):
        outputs = [
            (stem + ".U", write_matrix, result.matrix_u),
            (stem + ".S", write_vector, result.singular_values),
            (stem + ".V", write_matrix, result.matrix_v),
        ]
    elif isinstance(result, RedPCA):
        outputs = [
            (stem + ".pc", write_matrix, result.principal_components),
            (stem + ".score", write_matrix, result.scores),
        ]
    elif isinstance(result, RedSymEigen):
        outputs = [
            (stem + ".evec", write_matrix, result.eigen_vectors),
            (stem + ".eval", write_vector, result.eigen_values),
        ]
    else:
        raise TypeError(f"Unknown decomposition result: {type(result).__name__}")

    for path, writer, value in outputs:
        writer(path, value)
    return [path for path, _, _ in outputs]
