"""
Assembly of the homogeneous SE(3) transform and its residual error.
"""
import numpy as np


def compose_transform(
    R: np.ndarray,
    domain_centroid: np.ndarray,
    range_centroid: np.ndarray
) -> np.ndarray:
    """
    Build the 4x4 transform [R | t] with t = range_centroid - R @ domain_centroid.

    Args:
        R: 3x3 rotation matrix
        domain_centroid: (3,) centroid of the domain points
        range_centroid: (3,) centroid of the range points

    Returns:
        4x4 homogeneous matrix with bottom row [0, 0, 0, 1]
    """
    T = np.eye(4)
    T[:3, :3] = R
    T[:3, 3] = range_centroid - R @ domain_centroid
    return T


def apply_transform(T: np.ndarray, points) -> np.ndarray:
    """Apply a 4x4 transform to (N, 3) points, returning a new array."""
    points = np.asarray(points, dtype=np.float64)
    # points_transformed = points * R^T + t
    return points @ T[:3, :3].T + T[:3, 3]


def registration_error(T: np.ndarray, domain: np.ndarray, range_: np.ndarray) -> float:
    """
    Root mean square residual of a registration.

    residual_i = R @ domain_i + t - range_i, and the error is
    sqrt(sum_i |residual_i|^2 / N) over every point pair.
    """
    residuals = apply_transform(T, domain) - range_
    sum_squared = float(np.einsum("ij,ij->", residuals, residuals))
    return float(np.sqrt(sum_squared / domain.shape[0]))
