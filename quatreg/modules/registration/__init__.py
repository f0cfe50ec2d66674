"""
Quaternion-based registration of corresponding 3D point sets.
"""

from .engine import RegistrationEngine, RegistrationResult, register
from .errors import (
    DimensionError,
    EigenDecompositionFailure,
    IllPosedCorrespondenceError,
    RegistrationError,
    ShapeMismatchError,
)
from .quality import QualityEvaluator

__all__ = [
    "RegistrationEngine",
    "RegistrationResult",
    "register",
    "RegistrationError",
    "ShapeMismatchError",
    "DimensionError",
    "EigenDecompositionFailure",
    "IllPosedCorrespondenceError",
    "QualityEvaluator",
]
