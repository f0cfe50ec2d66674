"""
Exceptions raised by the registration pipeline.
"""


class RegistrationError(Exception):
    """Base class for all registration failures."""


class ShapeMismatchError(RegistrationError, ValueError):
    """Domain and range point sets do not hold the same number of points."""


class DimensionError(RegistrationError, ValueError):
    """A point set is not made of 3-dimensional points."""


class EigenDecompositionFailure(RegistrationError, ArithmeticError):
    """The symmetric eigensolver could not decompose the correlation matrix."""


class IllPosedCorrespondenceError(RegistrationError, ValueError):
    """
    The correspondence cannot determine a unique rotation.

    Raised only in strict mode: fewer than 3 points, or a point set whose
    deviations are coincident or collinear.
    """
