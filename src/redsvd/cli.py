"""
redsvd command line
===================

Randomized SVD, PCA or symmetric eigendecomposition of a matrix file.

Usage:
    redsvd -i matrix.txt -o out -r 10
    redsvd -i features.txt -o out -r 20 -f sparse -m PCA
    python -m redsvd -i matrix.txt -o out -m SymEigen
"""
import argparse
import logging
import sys

from typing import List, Optional

from redsvd.algorithms.pca import RedPCA
from redsvd.algorithms.rsvd import RedSVD
from redsvd.algorithms.sym_eigen import RedSymEigen
from redsvd.utils.io import MatrixFileError, read_dense_matrix, read_sparse_matrix, write_result
from redsvd.utils.utils import Timer

logger = logging.getLogger(__name__)

METHODS = {
    'SVD': RedSVD,
    'PCA': RedPCA,
    'SymEigen': RedSymEigen,
}

READERS = {
    'dense': read_dense_matrix,
    'sparse': read_sparse_matrix,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='redsvd',
        description="Randomized low-rank matrix decompositions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output files:
  SVD       OUTPUT.U OUTPUT.S OUTPUT.V
  PCA       OUTPUT.pc OUTPUT.score
  SymEigen  OUTPUT.evec OUTPUT.eval
"""
    )
    parser.add_argument('-i', '--input', required=True, help='Input matrix file')
    parser.add_argument('-o', '--output', required=True, help='Output file stem')
    parser.add_argument('-r', '--rank', type=int, default=10, help='Target rank (default: 10)')
    parser.add_argument('-f', '--format', choices=sorted(READERS), default='dense',
                        help='Input format (default: dense)')
    parser.add_argument('-m', '--method', choices=list(METHODS), default='SVD',
                        help='Decomposition (default: SVD)')
    parser.add_argument('-s', '--seed', type=int, default=None, help='Random seed')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug output')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only warnings and errors')
    return parser


def run(input_path: str, output: str, rank: int, fmt: str = 'dense',
        method: str = 'SVD', seed: Optional[int] = None) -> Timer:
    """Read, decompose and write. Returns the phase timings."""
    if rank < 0:
        raise ValueError(f"rank must be non-negative, got {rank}")

    timer = Timer()

    with timer.phase('read matrix'):
        A = READERS[fmt](input_path)

    rows, cols = A.shape
    nnz = A.nnz if fmt == 'sparse' else rows * cols
    logger.info("rows: %d, cols: %d, non-zero: %d", rows, cols, nnz)

    with timer.phase(f'compute {method}'):
        result = METHODS[method](seed=seed)
        result.run(A, rank)

    with timer.phase('write'):
        write_result(output, result)

    return timer


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        run(args.input, args.output, args.rank, args.format, args.method, args.seed)
    except (MatrixFileError, ValueError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
