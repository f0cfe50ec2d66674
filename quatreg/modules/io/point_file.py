"""
Readers and writers for corresponding point sets.

Frame files hold one coordinate frame's points in a small text layout:

    <header line, ignored>
    <N, number of 3D points>
    <header line, ignored>
    x , y , z        (N lines, comma and/or whitespace separated)

Point cloud files (.pcd, .ply, .xyz, .pts) are read through Open3D; point
order in the file is the correspondence order.
"""
import os
import re
from typing import Optional

import numpy as np
import open3d as o3d

FRAME_EXTENSIONS = {".txt", ".csv", ".dat"}
CLOUD_EXTENSIONS = {".pcd", ".ply", ".xyz", ".xyzn", ".xyzrgb", ".pts"}

_SEPARATOR = re.compile(r"[,\s]+")


class PointFileError(ValueError):
    """A point file is missing or malformed."""


def _parse_count(line: str, path: str) -> int:
    tokens = [t for t in _SEPARATOR.split(line.strip()) if t]
    try:
        count = int(tokens[0])
    except (IndexError, ValueError):
        count = 0
    if count < 1:
        raise PointFileError(
            f"{path}: the second line of input file must be the number of 3D points, got {line.strip()!r}"
        )
    return count


def _parse_point(line: str, path: str, line_no: int) -> list:
    tokens = [t for t in _SEPARATOR.split(line.strip()) if t]
    if len(tokens) != 3:
        raise PointFileError(f"{path}:{line_no}: expected 3 coordinates, got {len(tokens)}")
    try:
        return [float(t) for t in tokens]
    except ValueError as e:
        raise PointFileError(f"{path}:{line_no}: invalid coordinate in {line.strip()!r}") from e


def read_frame_file(path: str) -> np.ndarray:
    """
    Read a frame file into an (N, 3) float64 array.

    Raises:
        PointFileError: File cannot be opened, or its content is malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except UnicodeDecodeError as e:
        raise PointFileError(f"{path}: not a UTF-8 text file ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise PointFileError(f"cannot open input file: {path}") from e

    if len(lines) < 2:
        raise PointFileError(f"{path}: missing header and point count lines")

    count = _parse_count(lines[1], path)
    rows = lines[3:3 + count]
    if len(rows) < count:
        raise PointFileError(f"{path}: expected {count} points, found {len(rows)}")

    points = [_parse_point(line, path, i + 4) for i, line in enumerate(rows)]
    return np.array(points, dtype=np.float64)


def read_cloud_file(path: str) -> np.ndarray:
    """Read a point cloud file with Open3D into an (N, 3) float64 array."""
    if not os.path.exists(path):
        raise PointFileError(f"cannot open input file: {path}")

    pcd = o3d.io.read_point_cloud(path)
    points = np.asarray(pcd.points, dtype=np.float64)
    if len(points) == 0:
        raise PointFileError(f"{path}: point cloud is empty or unreadable")
    return points


def read_point_file(path: str) -> np.ndarray:
    """Read points from `path`, choosing the reader by file extension."""
    ext = os.path.splitext(path)[1].lower()
    if ext in CLOUD_EXTENSIONS:
        return read_cloud_file(path)
    if ext in FRAME_EXTENSIONS or ext == "":
        return read_frame_file(path)
    raise PointFileError(f"{path}: unsupported file extension {ext!r}")


def write_frame_file(path: str, points, header: Optional[str] = None) -> None:
    """Write (N, 3) points in the frame file layout."""
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    header = header or "3D points of a coordinate frame"
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"{header}\n")
        f.write(f"{len(points)}\n")
        f.write("x , y , z\n")
        for x, y, z in points.tolist():
            f.write(f"{x!r} , {y!r} , {z!r}\n")


def write_cloud_file(path: str, points, binary: bool = False) -> None:
    """
    Write (N, 3) points as a point cloud; Open3D picks the format from the extension.

    Raises:
        PointFileError: Open3D could not write the file
    """
    cloud = o3d.geometry.PointCloud()
    cloud.points = o3d.utility.Vector3dVector(np.asarray(points, dtype=np.float64).reshape(-1, 3))
    if not o3d.io.write_point_cloud(path, cloud, write_ascii=not binary):
        raise PointFileError(f"cannot write point cloud: {path}")


def write_point_file(path: str, points, header: Optional[str] = None) -> None:
    """Write points to `path`, choosing the writer by file extension."""
    ext = os.path.splitext(path)[1].lower()
    if ext in CLOUD_EXTENSIONS:
        write_cloud_file(path, points)
    elif ext in FRAME_EXTENSIONS or ext == "":
        try:
            write_frame_file(path, points, header=header)
        except OSError as e:
            raise PointFileError(f"cannot write output file: {path}") from e
    else:
        raise PointFileError(f"{path}: unsupported file extension {ext!r}")
