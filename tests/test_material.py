"""
Unit tests for material models.
"""

import pytest
import numpy as np
from numpy.testing import assert_almost_equal, assert_array_almost_equal

from plateIGA.solver.material import LinearIsotropic, ConstantMaterial


X0 = np.zeros(3)


class TestLinearIsotropic:
    """Tests for the isotropic plane-stress material."""

    def test_plane_stress(self):
        mat = LinearIsotropic(E=1.0, nu=0.0)
        assert_array_almost_equal(mat.evaluate(X0), np.diag([1.0, 1.0, 0.5]))

    def test_inverse(self, tolerance):
        mat = LinearIsotropic(E=2.1e11, nu=0.3)
        product = mat.evaluate(X0) @ mat.evaluate(X0, inverse=True)
        assert np.max(np.abs(product - np.eye(3))) < tolerance

    def test_shear_modulus(self):
        mat = LinearIsotropic(E=260.0, nu=0.3)
        assert_almost_equal(mat.G, 100.0)
        assert_almost_equal(mat.evaluate(X0)[2, 2], mat.G)

    def test_beam_uncoupled(self):
        mat = LinearIsotropic(E=100.0, nu=0.25, nsd=1)
        C = mat.evaluate(X0)
        assert_array_almost_equal(C, np.diag([100.0, 100.0, 40.0]))
        assert_array_almost_equal(C @ mat.evaluate(X0, inverse=True), np.eye(3))

    def test_mass_density(self):
        assert LinearIsotropic(rho=2500.0).get_mass_density(X0) == 2500.0


class TestConstantMaterial:
    """Tests for prescribed constitutive operators."""

    def test_evaluate(self):
        C = np.array([[4.0, 1.0, 0.0], [1.0, 3.0, 0.0], [0.0, 0.0, 1.0]])
        mat = ConstantMaterial(C, rho=5.0)
        assert_array_almost_equal(mat.evaluate(X0), C)
        assert_array_almost_equal(mat.evaluate(X0, inverse=True) @ C, np.eye(3))
        assert mat.get_mass_density(X0) == 5.0

    def test_returns_copy(self):
        mat = ConstantMaterial(np.eye(3))
        mat.evaluate(X0)[0, 0] = 10.0
        assert mat.evaluate(X0)[0, 0] == 1.0

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            ConstantMaterial(np.eye(2))

    def test_unsymmetric(self):
        with pytest.raises(ValueError):
            ConstantMaterial(np.array([[1.0, 2.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]))
