"""
Unit tests for the Bernstein basis and its derivatives.
"""

import pytest
import numpy as np
from numpy.testing import assert_almost_equal, assert_array_almost_equal

from plateIGA.discretization.bernstein import (
    _bernstein_basis, bernstein_basis_ders, BernsteinBasis
)


class TestBernstein1D:
    """Tests for univariate Bernstein polynomials."""

    def test_partition_of_unity(self):
        for p in [0, 1, 2, 3, 4]:
            for t in [0.0, 0.3, 0.5, 1.0]:
                assert_almost_equal(np.sum(_bernstein_basis(p, t)), 1.0, decimal=14)

    def test_quadratic_values(self):
        # B_{0,2} = (1-t)^2, B_{1,2} = 2t(1-t), B_{2,2} = t^2
        t = 0.3
        assert_array_almost_equal(_bernstein_basis(2, t),
                                  [(1 - t)**2, 2 * t * (1 - t), t**2])

    def test_quadratic_derivatives(self):
        t = 0.3
        ders = bernstein_basis_ders(2, t, n_ders=2)
        assert ders.shape == (3, 3)
        assert_array_almost_equal(ders[1], [-2 * (1 - t), 2 - 4 * t, 2 * t])
        assert_array_almost_equal(ders[2], [2.0, -4.0, 2.0])

    def test_derivatives_sum_to_zero(self):
        for p in [1, 2, 3, 4]:
            ders = bernstein_basis_ders(p, 0.37, n_ders=2)
            assert_almost_equal(np.sum(ders[1]), 0.0, decimal=12)
            assert_almost_equal(np.sum(ders[2]), 0.0, decimal=12)

    def test_second_derivative_matches_finite_difference(self):
        p, t, h = 4, 0.41, 1e-4
        ders = bernstein_basis_ders(p, t, n_ders=2)
        fd = (_bernstein_basis(p, t + h) - 2 * _bernstein_basis(p, t)
              + _bernstein_basis(p, t - h)) / h**2
        assert_array_almost_equal(ders[2], fd, decimal=5)

    def test_linear_has_zero_second_derivative(self):
        ders = bernstein_basis_ders(1, 0.5, n_ders=2)
        assert_array_almost_equal(ders[2], [0.0, 0.0])

    def test_third_derivative_rejected(self):
        with pytest.raises(ValueError):
            bernstein_basis_ders(3, 0.5, n_ders=3)


class TestBernsteinBasis2D:
    """Tests for tensor-product Bernstein basis."""

    def test_n_basis(self):
        assert BernsteinBasis((2, 3)).n_basis == 12

    def test_ordering_xi_fastest(self):
        basis = BernsteinBasis((1, 1))
        B = basis.eval((1.0, 0.0))
        # Only the basis function at corner (xi=1, eta=0) is nonzero
        assert_array_almost_equal(B, [0.0, 1.0, 0.0, 0.0])

    def test_shapes(self):
        B, dB, d2B = BernsteinBasis((2, 2)).eval_ders((0.2, 0.7))
        assert B.shape == (9,)
        assert dB.shape == (9, 2)
        assert d2B.shape == (9, 2, 2)

    def test_hessian_symmetric(self):
        _, _, d2B = BernsteinBasis((3, 2)).eval_ders((0.2, 0.7))
        assert_array_almost_equal(d2B, np.transpose(d2B, (0, 2, 1)))

    def test_bilinear_twist(self):
        # N = xi*eta for the last bilinear function: d2N/dxi deta = 1
        _, _, d2B = BernsteinBasis((1, 1)).eval_ders((0.3, 0.6))
        assert_array_almost_equal(d2B[:, 0, 1], [1.0, -1.0, -1.0, 1.0])
        assert_array_almost_equal(d2B[:, 0, 0], np.zeros(4))

    def test_reproduces_quadratic(self):
        """Coefficients [0, 0, 1] in xi represent xi^2."""
        basis = BernsteinBasis((2, 2))
        coeffs = np.tile([0.0, 0.0, 1.0], 3)
        B, dB, d2B = basis.eval_ders((0.4, 0.8))
        assert_almost_equal(B @ coeffs, 0.16)
        assert_almost_equal(dB[:, 0] @ coeffs, 0.8)
        assert_almost_equal(d2B[:, 0, 0] @ coeffs, 2.0)
        assert_almost_equal(d2B[:, 1, 1] @ coeffs, 0.0)

    def test_1d_basis(self):
        B, dB, d2B = BernsteinBasis((2,)).eval_ders((0.5,))
        assert dB.shape == (3, 1)
        assert_array_almost_equal(d2B[:, 0, 0], [2.0, -4.0, 2.0])
