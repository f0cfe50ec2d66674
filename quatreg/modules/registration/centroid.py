from typing import Tuple

import numpy as np


def centroid_deviation(points: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a point set into its centroid and per-point deviation vectors.

    Args:
        points: (N, 3) array

    Returns:
        (centroid, deviations) with shapes (3,) and (N, 3)
    """
    centroid = points.mean(axis=0)
    return centroid, points - centroid
