"""
Closed-form point set registration with the unit quaternion method.

Given corresponding point sets {a_i} (domain) and {A_i} (range), finds the
rigid transform [R, t] in SE(3) minimising sum_i |R a_i + t - A_i|^2:

    1. centroids and deviation vectors of both sets
    2. correlation matrix M = sum_i P_i^T Q_i
    3. quaternion = eigenvector of M with the largest eigenvalue
    4. rotation matrix from the quaternion
    5. t = range_centroid - R @ domain_centroid, and the RMS residual

`register` is the pure pipeline. `RegistrationEngine` wraps it with
configuration, logging and quality grading for the CLI and API.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional
import asyncio
import numpy as np

from quatreg.core.config import settings
from quatreg.core.logging_config import get_logger

from .centroid import centroid_deviation
from .correlation import correlation_matrix
from .quality import QualityEvaluator
from .quaternion import dominant_eigen_quaternion, quaternion_to_rotation
from .transform import compose_transform, registration_error
from .validation import check_well_posed, validate_point_sets

logger = get_logger(__name__)


def _read_only(arr) -> np.ndarray:
    arr = np.array(arr, dtype=np.float64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class RegistrationResult:
    """Result from quaternion registration"""
    transformation: np.ndarray  # 4x4 transformation matrix
    mean_error: float
    quaternion: Optional[np.ndarray] = None  # (w, x, y, z) the rotation was built from
    num_points: int = 0
    quality: str = "unrated"  # "excellent", "good", "poor" once graded

    def __post_init__(self):
        # Read-only copies so the result cannot change after construction
        object.__setattr__(self, "transformation", _read_only(self.transformation))
        if self.quaternion is not None:
            object.__setattr__(self, "quaternion", _read_only(self.quaternion))

    @property
    def rotation(self) -> np.ndarray:
        return self.transformation[:3, :3]

    @property
    def translation(self) -> np.ndarray:
        return self.transformation[:3, 3]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "transformation": self.transformation.tolist(),
            "rotation": self.rotation.tolist(),
            "translation": self.translation.tolist(),
            "quaternion": None if self.quaternion is None else self.quaternion.tolist(),
            "mean_error": float(self.mean_error),
            "num_points": self.num_points,
            "quality": self.quality,
        }


def register(
    domain,
    range_,
    strict: Optional[bool] = None,
    tolerance: float = 1e-9,
    chunk_size: Optional[int] = None,
    workers: int = 1
) -> RegistrationResult:
    """
    Find the rigid transform mapping domain points onto range points.

    Args:
        domain: (N, 3) domain points {a_i}
        range_: (N, 3) range points {A_i}, range_[i] corresponds to domain[i]
        strict: Reject correspondences that cannot fix a unique rotation.
            Defaults to the QUATREG_STRICT setting. When False, degenerate
            input returns an arbitrary rotation without error.
        tolerance: Relative singular value threshold for the strict check
        chunk_size: Optional chunk size for the correlation reduction
        workers: Threads used for chunked reduction

    Returns:
        RegistrationResult with the 4x4 transform and RMS error

    Raises:
        ShapeMismatchError: Point counts differ or are zero
        DimensionError: Points are not 3D
        IllPosedCorrespondenceError: Degenerate input in strict mode
        EigenDecompositionFailure: Eigensolver failure on the correlation matrix
    """
    domain_arr, range_arr = validate_point_sets(domain, range_)

    if strict is None:
        strict = settings.QUATREG_STRICT
    if strict:
        check_well_posed(domain_arr, range_arr, tolerance)

    domain_centroid, domain_dev = centroid_deviation(domain_arr)
    range_centroid, range_dev = centroid_deviation(range_arr)

    M = correlation_matrix(domain_dev, range_dev, chunk_size=chunk_size, workers=workers)
    q = dominant_eigen_quaternion(M)
    R = quaternion_to_rotation(q)

    T = compose_transform(R, domain_centroid, range_centroid)
    mean_error = registration_error(T, domain_arr, range_arr)

    return RegistrationResult(
        transformation=T,
        mean_error=mean_error,
        quaternion=q,
        num_points=int(domain_arr.shape[0]),
    )


class RegistrationEngine:
    """
    Configured registration front end used by the CLI and the HTTP API.

    Runs `register`, logs the outcome and grades the mean error.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize registration engine.

        Args:
            config: Configuration dict with:
                - strict: Run the well-posedness check (default: QUATREG_STRICT)
                - tolerance: Relative rank tolerance for the check (default: 1e-9)
                - chunk_size: Chunk size for the correlation sum (default: None)
                - workers: Threads for the chunked sum (default: 1)
                - excellent_error: Max error for "excellent" quality (default: 1e-6)
                - max_error: Max error for "good" quality (default: 0.05)
        """
        config = config or {}
        self.strict = config.get("strict", settings.QUATREG_STRICT)
        self.tolerance = config.get("tolerance", 1e-9)
        self.chunk_size = config.get("chunk_size")
        self.workers = config.get("workers", 1)
        if self.chunk_size is not None and self.chunk_size < 1:
            raise ValueError(f"chunk_size must be a positive integer or None, got {self.chunk_size}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

        self.quality_evaluator = QualityEvaluator(
            excellent_error=config.get("excellent_error", 1e-6),
            max_error=config.get("max_error", 0.05)
        )

    def register(self, domain, range_, strict: Optional[bool] = None) -> RegistrationResult:
        """
        Register two point sets and grade the result.

        Args:
            domain: (N, 3) domain points
            range_: (N, 3) range points
            strict: Override the engine's strict setting for this call

        Returns:
            RegistrationResult with quality set
        """
        strict = self.strict if strict is None else strict
        logger.debug(f"Registering point sets (strict={strict}, chunk_size={self.chunk_size})")

        try:
            result = register(
                domain,
                range_,
                strict=strict,
                tolerance=self.tolerance,
                chunk_size=self.chunk_size,
                workers=self.workers
            )
        except Exception as e:
            logger.warning(f"Registration failed: {type(e).__name__}: {e}")
            raise

        metrics = self.quality_evaluator.evaluate(result.mean_error)
        logger.info(
            f"Registered {result.num_points} points: mean_error={result.mean_error:.6g}, "
            f"quality={metrics.quality}"
        )
        return replace(result, quality=metrics.quality)

    async def register_async(self, domain, range_, strict: Optional[bool] = None) -> RegistrationResult:
        """Run `register` off the event loop."""
        return await asyncio.to_thread(self.register, domain, range_, strict)
