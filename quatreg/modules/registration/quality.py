"""
Quality evaluation for registration results.
"""
from dataclasses import dataclass


@dataclass
class QualityMetrics:
    """Metrics for evaluating registration quality"""
    mean_error: float
    quality: str  # "excellent", "good", "poor"


class QualityEvaluator:
    """
    Evaluates the quality of a registration from its mean error.

    The error is the RMS residual between transformed domain points and
    their range counterparts, in the units of the input coordinates.
    """

    def __init__(self, excellent_error: float = 1e-6, max_error: float = 0.05):
        """
        Initialize quality evaluator.

        Args:
            excellent_error: Maximum error for "excellent" quality (default: 1e-6)
            max_error: Maximum error for "good" quality (default: 0.05)
        """
        self.excellent_error = excellent_error
        self.max_error = max_error

    def evaluate(self, mean_error: float) -> QualityMetrics:
        """Classify a mean error into QualityMetrics."""
        return QualityMetrics(
            mean_error=mean_error,
            quality=self._classify_quality(mean_error)
        )

    def _classify_quality(self, mean_error: float) -> str:
        if mean_error <= self.excellent_error:
            return "excellent"
        elif mean_error <= self.max_error:
            return "good"
        else:
            return "poor"

    def is_acceptable(self, mean_error: float) -> bool:
        """True if quality is good or excellent."""
        return self._classify_quality(mean_error) in ["excellent", "good"]
