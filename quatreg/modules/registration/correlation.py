"""
Construction of the 4x4 correlation matrix M = sum_i P_i^T Q_i.

P_i and Q_i are the quaternion multiplication matrices of the domain and range
deviation vectors. The quaternion q that maximises q^T M q is the optimal
rotation, so M is all the pipeline needs from the point pairs.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np


def _domain_matrices(d: np.ndarray) -> np.ndarray:
    """Stack of P matrices, shape (N, 4, 4), for (N, 3) domain deviations."""
    d1, d2, d3 = d[:, 0], d[:, 1], d[:, 2]
    z = np.zeros_like(d1)
    return np.stack([
        np.stack([z, -d1, -d2, -d3], axis=-1),
        np.stack([d1, z, d3, -d2], axis=-1),
        np.stack([d2, -d3, z, d1], axis=-1),
        np.stack([d3, d2, -d1, z], axis=-1),
    ], axis=1)


def _range_matrices(r: np.ndarray) -> np.ndarray:
    """Stack of Q matrices, shape (N, 4, 4), for (N, 3) range deviations."""
    r1, r2, r3 = r[:, 0], r[:, 1], r[:, 2]
    z = np.zeros_like(r1)
    return np.stack([
        np.stack([z, -r1, -r2, -r3], axis=-1),
        np.stack([r1, z, -r3, r2], axis=-1),
        np.stack([r2, r3, z, -r1], axis=-1),
        np.stack([r3, -r2, r1, z], axis=-1),
    ], axis=1)


def domain_matrix(d) -> np.ndarray:
    """P matrix for a single domain deviation vector (d1, d2, d3)."""
    return _domain_matrices(np.asarray(d, dtype=np.float64).reshape(1, 3))[0]


def range_matrix(r) -> np.ndarray:
    """Q matrix for a single range deviation vector (r1, r2, r3)."""
    return _range_matrices(np.asarray(r, dtype=np.float64).reshape(1, 3))[0]


def _partial_sum(domain_dev: np.ndarray, range_dev: np.ndarray) -> np.ndarray:
    P = _domain_matrices(domain_dev)
    Q = _range_matrices(range_dev)
    # sum_i P_i^T @ Q_i
    return np.einsum("nji,njk->ik", P, Q)


def correlation_matrix(
    domain_dev: np.ndarray,
    range_dev: np.ndarray,
    chunk_size: Optional[int] = None,
    workers: int = 1
) -> np.ndarray:
    """
    Accumulate M = sum_i P_i^T Q_i over all point pairs.

    Args:
        domain_dev: (N, 3) domain deviation vectors
        range_dev: (N, 3) range deviation vectors
        chunk_size: Split the sum into consecutive chunks of this many points.
            Partial sums are always combined in chunk order, so the result
            does not depend on `workers`.
        workers: Number of threads evaluating chunks (only with chunk_size)

    Returns:
        4x4 correlation matrix

    Raises:
        ValueError: chunk_size < 1 or workers < 1
    """
    if chunk_size is not None and chunk_size < 1:
        raise ValueError(f"chunk_size must be a positive integer or None, got {chunk_size}")
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    num_points = domain_dev.shape[0]
    if chunk_size is None or chunk_size >= num_points:
        return _partial_sum(domain_dev, range_dev)

    starts = range(0, num_points, chunk_size)

    def _chunk(start: int) -> np.ndarray:
        stop = start + chunk_size
        return _partial_sum(domain_dev[start:stop], range_dev[start:stop])

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            partials = list(pool.map(_chunk, starts))
    else:
        partials = [_chunk(start) for start in starts]

    M = np.zeros((4, 4), dtype=np.float64)
    for partial in partials:
        M += partial
    return M
