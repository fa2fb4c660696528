"""
Gaussian random matrices for the range finders.
"""
import numpy as np

from numpy.typing import NDArray


def sample_gaussian(out: NDArray, rng: np.random.Generator) -> NDArray:
    """
    Fill `out` in place with independent standard normal samples, using the
    Box-Muller transform on pairs of uniform draws from `rng`.
    """
    size = out.size
    n_pairs = (size + 1) // 2

    # 1 - U(0, 1) lies in (0, 1], keeping the log finite
    u1 = 1.0 - rng.random(n_pairs)
    u2 = rng.random(n_pairs)

    radius = np.sqrt(-2.0 * np.log(u1))
    theta = 2.0 * np.pi * u2
    samples = np.concatenate([radius * np.cos(theta), radius * np.sin(theta)])

    out[...] = samples[:size].reshape(out.shape)
    return out
