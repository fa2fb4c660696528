"""
Tests for the command line and the phase timer.
"""
import logging

import numpy as np
import pytest

from redsvd.cli import build_parser, main, run
from redsvd.utils.utils import Timer


@pytest.fixture
def dense_file(tmp_path):
    path = tmp_path / "dense.txt"
    path.write_text("1 0 0\n0 1 0\n0 0 1\n1 1 1\n")
    return path


@pytest.fixture
def sparse_file(tmp_path):
    path = tmp_path / "sparse.txt"
    path.write_text("0:1.0 2:3.0\n1:2.0\n")
    return path


class TestCommandLine:

    def test_defaults(self):
        args = build_parser().parse_args(["-i", "in.txt", "-o", "out"])

        assert args.rank == 10
        assert args.format == "dense"
        assert args.method == "SVD"
        assert args.seed is None

    def test_invalid_method(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-i", "in.txt", "-o", "out", "-m", "QR"])

    def test_svd_dense(self, dense_file, tmp_path):
        stem = tmp_path / "out"

        assert main(["-i", str(dense_file), "-o", str(stem), "-r", "3", "-s", "0"]) == 0

        U = np.loadtxt(f"{stem}.U", ndmin=2)
        S = np.loadtxt(f"{stem}.S", ndmin=1)
        V = np.loadtxt(f"{stem}.V", ndmin=2)
        A = np.loadtxt(dense_file, ndmin=2)
        np.testing.assert_allclose((U * S) @ V.T, A, atol=1e-4)

    def test_pca_sparse(self, sparse_file, tmp_path):
        stem = tmp_path / "out"

        assert main(["-i", str(sparse_file), "-o", str(stem), "-r", "2", "-f", "sparse", "-m", "PCA"]) == 0

        assert np.loadtxt(f"{stem}.pc", ndmin=2).shape == (3, 2)
        assert np.loadtxt(f"{stem}.score", ndmin=2).shape == (2, 2)

    def test_sym_eigen(self, tmp_path):
        path = tmp_path / "sym.txt"
        path.write_text("2 1\n1 2\n")
        stem = tmp_path / "out"

        assert main(["-i", str(path), "-o", str(stem), "-m", "SymEigen", "-q"]) == 0

        np.testing.assert_allclose(np.loadtxt(f"{stem}.eval", ndmin=1), [1.0, 3.0], atol=1e-4)

    def test_missing_input(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            code = main(["-i", str(tmp_path / "missing.txt"), "-o", str(tmp_path / "out")])

        assert code == 1
        assert "failed to open" in caplog.text

    def test_negative_rank(self, dense_file, tmp_path):
        assert main(["-i", str(dense_file), "-o", str(tmp_path / "out"), "-r", "-1"]) == 1

    def test_run_records_phases(self, dense_file, tmp_path):
        timer = run(str(dense_file), str(tmp_path / "out"), 2, method="PCA", seed=1)

        assert list(timer.times) == ["read matrix", "compute PCA", "write"]
        assert all(t >= 0.0 for t in timer.times.values())


class TestTimer:

    def test_phase(self, caplog):
        timer = Timer()
        with caplog.at_level(logging.INFO):
            with timer.phase("compute"):
                pass

        assert "compute" in timer.times
        assert timer.total == pytest.approx(timer.times["compute"])
        assert "compute:" in caplog.text

    def test_phase_recorded_on_error(self):
        timer = Timer()
        with pytest.raises(RuntimeError):
            with timer.phase("read"):
                raise RuntimeError("boom")

        assert "read" in timer.times
