import os

# Keep test runs from writing rotating log files into the repo
os.environ.setdefault("LOG_TO_FILE", "false")

import numpy as np
import pytest
from fastapi.testclient import TestClient


def _random_rotation(rng: np.random.Generator) -> np.ndarray:
    """Uniformly random proper rotation built from a random unit quaternion."""
    q = rng.normal(size=4)
    q /= np.linalg.norm(q)
    w, x, y, z = q
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ])


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def random_rotation(rng):
    """Callable returning a fresh random rotation on each call."""
    return lambda: _random_rotation(rng)


@pytest.fixture
def tetrahedron():
    """Unit tetrahedron corner points."""
    return np.array([
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ])


@pytest.fixture
def rot_z_90():
    return np.array([
        [0.0, -1.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0],
    ])


@pytest.fixture
def client():
    from quatreg.app import app

    with TestClient(app) as test_client:
        yield test_client
