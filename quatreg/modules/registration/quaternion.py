"""
Quaternion extraction from the correlation matrix and conversion to SO(3).
"""
import numpy as np

from .errors import EigenDecompositionFailure


def dominant_eigen_quaternion(M: np.ndarray) -> np.ndarray:
    """
    Return the eigenvector of M with the largest eigenvalue as a quaternion.

    M is symmetric by construction, so the symmetric solver is used. Its
    eigenvectors are unit norm. When several eigenvalues equal the maximum,
    the one with the lowest solver index is selected. The sign of the
    returned quaternion is whatever the solver produced.

    Args:
        M: 4x4 correlation matrix

    Returns:
        Quaternion (w, x, y, z) as a length-4 array

    Raises:
        EigenDecompositionFailure: M is not finite or the solver does not converge
    """
    if not np.all(np.isfinite(M)):
        raise EigenDecompositionFailure("Correlation matrix contains NaN or Inf values")

    # Rounding can leave M a few ulps off symmetric
    symmetric = 0.5 * (M + M.T)
    try:
        eigenvalues, eigenvectors = np.linalg.eigh(symmetric)
    except np.linalg.LinAlgError as e:
        raise EigenDecompositionFailure(f"Eigen-decomposition did not converge: {e}") from e

    max_id = int(np.argmax(eigenvalues))
    return eigenvectors[:, max_id]


def quaternion_to_rotation(q) -> np.ndarray:
    """
    Convert a unit quaternion (w, x, y, z) to a 3x3 rotation matrix.

    No normalisation is applied; a non-unit q gives a non-orthogonal matrix.
    q and -q give the same matrix.
    """
    q0, q1, q2, q3 = (float(v) for v in q)

    R = np.empty((3, 3), dtype=np.float64)
    R[0, 0] = 1.0 - 2.0 * (q2 * q2 + q3 * q3)
    R[1, 1] = 1.0 - 2.0 * (q1 * q1 + q3 * q3)
    R[2, 2] = 1.0 - 2.0 * (q1 * q1 + q2 * q2)

    R[0, 1] = 2.0 * (q1 * q2 - q0 * q3)
    R[0, 2] = 2.0 * (q1 * q3 + q0 * q2)
    R[1, 0] = 2.0 * (q1 * q2 + q0 * q3)
    R[1, 2] = 2.0 * (q2 * q3 - q0 * q1)
    R[2, 0] = 2.0 * (q1 * q3 - q0 * q2)
    R[2, 1] = 2.0 * (q2 * q3 + q0 * q1)
    return R
