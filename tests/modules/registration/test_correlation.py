"""
Unit tests for centroid/deviation and correlation matrix construction.
"""
import numpy as np
import pytest

from quatreg.modules.registration.centroid import centroid_deviation
from quatreg.modules.registration.correlation import (
    correlation_matrix,
    domain_matrix,
    range_matrix,
)


class TestCentroidDeviation:
    """Tests for centroid_deviation function"""

    def test_centroid_is_mean(self, tetrahedron):
        centroid, deviations = centroid_deviation(tetrahedron)
        np.testing.assert_array_almost_equal(centroid, [0.25, 0.25, 0.25])
        np.testing.assert_array_almost_equal(deviations, tetrahedron - 0.25)

    def test_deviations_sum_to_zero(self, rng):
        points = rng.normal(size=(50, 3)) * 10.0 + 100.0
        _, deviations = centroid_deviation(points)
        np.testing.assert_allclose(deviations.sum(axis=0), 0.0, atol=1e-9)

    def test_coincident_points(self):
        """Test that identical points give all-zero deviations"""
        points = np.tile([4.0, -2.0, 7.0], (5, 1))
        centroid, deviations = centroid_deviation(points)
        np.testing.assert_array_equal(centroid, [4.0, -2.0, 7.0])
        assert not deviations.any()


class TestQuaternionMatrices:
    """Tests for the per-point P and Q matrices"""

    def test_domain_matrix_layout(self):
        P = domain_matrix([1.0, 2.0, 3.0])
        expected = np.array([
            [0.0, -1.0, -2.0, -3.0],
            [1.0, 0.0, 3.0, -2.0],
            [2.0, -3.0, 0.0, 1.0],
            [3.0, 2.0, -1.0, 0.0],
        ])
        np.testing.assert_array_equal(P, expected)

    def test_range_matrix_layout(self):
        Q = range_matrix([1.0, 2.0, 3.0])
        expected = np.array([
            [0.0, -1.0, -2.0, -3.0],
            [1.0, 0.0, -3.0, 2.0],
            [2.0, 3.0, 0.0, -1.0],
            [3.0, -2.0, 1.0, 0.0],
        ])
        np.testing.assert_array_equal(Q, expected)

    def test_matrices_are_antisymmetric(self, rng):
        v = rng.normal(size=3)
        P = domain_matrix(v)
        Q = range_matrix(v)
        np.testing.assert_array_equal(P, -P.T)
        np.testing.assert_array_equal(Q, -Q.T)

    def test_scaled_orthogonal(self, rng):
        """P^T P = |d|^2 I for a quaternion multiplication matrix"""
        v = rng.normal(size=3)
        P = domain_matrix(v)
        np.testing.assert_allclose(P.T @ P, np.dot(v, v) * np.eye(4), atol=1e-12)


class TestCorrelationMatrix:
    """Tests for correlation_matrix function"""

    def test_matches_explicit_sum(self, rng):
        """Test the batched reduction against a per-point loop"""
        domain_dev = rng.normal(size=(20, 3))
        range_dev = rng.normal(size=(20, 3))

        expected = np.zeros((4, 4))
        for d, r in zip(domain_dev, range_dev):
            expected += domain_matrix(d).T @ range_matrix(r)

        M = correlation_matrix(domain_dev, range_dev)
        np.testing.assert_allclose(M, expected, atol=1e-12)

    def test_symmetric(self, rng):
        M = correlation_matrix(rng.normal(size=(30, 3)), rng.normal(size=(30, 3)))
        np.testing.assert_allclose(M, M.T, atol=1e-12)

    def test_zero_deviations(self):
        """Test that coincident points give a zero matrix"""
        zeros = np.zeros((4, 3))
        M = correlation_matrix(zeros, zeros)
        np.testing.assert_array_equal(M, np.zeros((4, 4)))

    def test_single_point(self):
        d = np.array([[1.0, 2.0, 3.0]])
        r = np.array([[-1.0, 0.5, 2.0]])
        M = correlation_matrix(d, r)
        np.testing.assert_allclose(M, domain_matrix(d[0]).T @ range_matrix(r[0]))

    def test_chunked_matches_single_batch(self, rng):
        domain_dev = rng.normal(size=(103, 3))
        range_dev = rng.normal(size=(103, 3))
        M = correlation_matrix(domain_dev, range_dev)
        M_chunked = correlation_matrix(domain_dev, range_dev, chunk_size=10)
        np.testing.assert_allclose(M_chunked, M, rtol=1e-12, atol=1e-12)

    def test_chunked_reproducible_across_workers(self, rng):
        """Test that thread count does not change the chunked result"""
        domain_dev = rng.normal(size=(257, 3))
        range_dev = rng.normal(size=(257, 3))
        M_serial = correlation_matrix(domain_dev, range_dev, chunk_size=16, workers=1)
        M_threaded = correlation_matrix(domain_dev, range_dev, chunk_size=16, workers=4)
        np.testing.assert_array_equal(M_serial, M_threaded)

    def test_chunk_larger_than_input(self, rng):
        domain_dev = rng.normal(size=(5, 3))
        range_dev = rng.normal(size=(5, 3))
        np.testing.assert_array_equal(
            correlation_matrix(domain_dev, range_dev, chunk_size=100),
            correlation_matrix(domain_dev, range_dev),
        )

    def test_rejects_non_positive_chunk_size(self, rng):
        """Test that a chunk size below 1 is an error, not an empty sum"""
        domain_dev = rng.normal(size=(6, 3))
        range_dev = rng.normal(size=(6, 3))
        for chunk_size in (0, -1, -5):
            with pytest.raises(ValueError, match="chunk_size"):
                correlation_matrix(domain_dev, range_dev, chunk_size=chunk_size)

    def test_rejects_non_positive_workers(self, rng):
        domain_dev = rng.normal(size=(6, 3))
        range_dev = rng.normal(size=(6, 3))
        with pytest.raises(ValueError, match="workers"):
            correlation_matrix(domain_dev, range_dev, chunk_size=2, workers=0)
