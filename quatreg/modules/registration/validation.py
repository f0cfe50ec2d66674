"""
Structural checks on a domain/range correspondence.
"""
from typing import Tuple

import numpy as np

from .errors import DimensionError, IllPosedCorrespondenceError, ShapeMismatchError


def _as_point_array(points, name: str) -> np.ndarray:
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise DimensionError(f"{name} points must be numeric vectors of equal length") from e

    if arr.ndim == 1 and arr.size == 0:
        arr = arr.reshape(0, 3)
    if arr.ndim != 2:
        raise DimensionError(
            f"{name} points should be an (N, 3) array, got shape {arr.shape}"
        )
    return arr


def validate_point_sets(domain, range_) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate a correspondence and return both sets as float64 (N, 3) arrays.

    Args:
        domain: Domain points {a_i}, any (N, 3) array-like
        range_: Range points {A_i}, any (N, 3) array-like

    Returns:
        Tuple of (domain, range) arrays. Inputs are never modified.

    Raises:
        ShapeMismatchError: Point counts differ, or the sets are empty
        DimensionError: Points are not 3-dimensional
    """
    domain_arr = _as_point_array(domain, "domain")
    range_arr = _as_point_array(range_, "range")

    if domain_arr.shape[0] != range_arr.shape[0]:
        raise ShapeMismatchError(
            "Number of points in two coordinate systems should be the same "
            f"(domain: {domain_arr.shape[0]}, range: {range_arr.shape[0]})"
        )

    if domain_arr.shape[1] != 3 or range_arr.shape[1] != 3:
        raise DimensionError(
            "The points should be in 3D space, i.e. point arrays must be Nx3 "
            f"(domain: {domain_arr.shape}, range: {range_arr.shape})"
        )

    if domain_arr.shape[0] == 0:
        raise ShapeMismatchError("Point sets must contain at least one point")

    return domain_arr, range_arr


def _deviation_rank(points: np.ndarray, tolerance: float) -> int:
    deviations = points - points.mean(axis=0)
    singular_values = np.linalg.svd(deviations, compute_uv=False)
    if singular_values[0] == 0.0:
        return 0
    return int(np.count_nonzero(singular_values > tolerance * singular_values[0]))


def check_well_posed(domain: np.ndarray, range_: np.ndarray, tolerance: float = 1e-9) -> None:
    """
    Check that a validated correspondence determines a unique rotation.

    A rotation is only pinned down by at least 3 points whose deviations
    span a plane. Rank is measured from the singular values of each
    deviation set, relative to the largest one.

    Args:
        domain: Validated (N, 3) domain array
        range_: Validated (N, 3) range array
        tolerance: Relative singular value threshold

    Raises:
        IllPosedCorrespondenceError: Fewer than 3 points, or coincident/collinear points
    """
    num_points = domain.shape[0]
    if num_points < 3:
        raise IllPosedCorrespondenceError(
            f"At least 3 non-collinear points are required, got {num_points}"
        )

    for name, points in (("domain", domain), ("range", range_)):
        # NaN/Inf are rejected later by the eigen-decomposition
        if not np.all(np.isfinite(points)):
            continue
        rank = _deviation_rank(points, tolerance)
        if rank == 0:
            raise IllPosedCorrespondenceError(f"All {name} points are coincident")
        if rank < 2:
            raise IllPosedCorrespondenceError(f"All {name} points are collinear")
