"""
Point set input and result output for the registration core.
"""

from .formatting import format_matrix, format_result
from .point_file import (
    PointFileError,
    read_cloud_file,
    read_frame_file,
    read_point_file,
    write_cloud_file,
    write_frame_file,
    write_point_file,
)

__all__ = [
    "format_matrix",
    "format_result",
    "PointFileError",
    "read_cloud_file",
    "read_frame_file",
    "read_point_file",
    "write_cloud_file",
    "write_frame_file",
    "write_point_file",
]
