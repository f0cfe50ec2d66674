"""
Text rendering of registration results for the console.
"""
import numpy as np

from quatreg.modules.registration import RegistrationResult

TRANSFORM_HEADING = (
    "The SE(3) group element relating the two coordinate systems is in projective representation:"
)


def format_matrix(matrix: np.ndarray, precision: int = 12) -> str:
    """Right-aligned fixed point rows, one line per matrix row."""
    width = precision + 6
    return "\n".join(
        "".join(f"{value:{width}.{precision}f}" for value in row)
        for row in np.asarray(matrix, dtype=np.float64)
    )


def format_result(result: RegistrationResult, precision: int = 12) -> str:
    """Render a RegistrationResult the way the command line prints it."""
    lines = [
        TRANSFORM_HEADING,
        "",
        format_matrix(result.transformation, precision),
        "",
        f"Mean error of registration algorithm = {result.mean_error:15.12f}",
    ]
    if result.quality != "unrated":
        lines.append(f"Registration quality: {result.quality}")
    return "\n".join(lines)
