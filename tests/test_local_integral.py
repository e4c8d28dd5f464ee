"""
Unit tests for element accumulators.
"""

import numpy as np
from numpy.testing import assert_array_almost_equal

from plateIGA.solver.base import gather_element_vector
from plateIGA.solver.local_integral import ElmMats, ElmNorm


class TestElmMats:
    """Tests for element matrices and vectors."""

    def test_sizes(self):
        elm = ElmMats(6, n_matrices=2, n_vectors=1)
        assert len(elm.A) == 2
        assert elm.A[1].shape == (6, 6)
        assert elm.b[0].shape == (6,)
        assert not elm.rhs_only

    def test_handles_are_one_based(self):
        elm = ElmMats(3, n_matrices=2)
        elm.add_to_matrix(2, np.eye(3))
        assert_array_almost_equal(elm.A[0], 0.0)
        assert_array_almost_equal(elm.matrix(2), np.eye(3))

    def test_zero_handle_ignored(self):
        elm = ElmMats(3)
        elm.add_to_matrix(0, np.ones((3, 3)))
        elm.add_to_vector(0, np.ones(3))
        elm.add_to_vector(5, np.ones(3))
        assert_array_almost_equal(elm.A[0], 0.0)
        assert_array_almost_equal(elm.b[0], 0.0)
        assert elm.matrix(0) is None
        assert elm.vector(2) is None

    def test_accumulates(self):
        elm = ElmMats(2, n_matrices=0)
        for _ in range(3):
            elm.add_to_vector(1, np.array([1.0, 2.0]))
        assert_array_almost_equal(elm.vector(1), [3.0, 6.0])
        assert not elm.has_matrix(1)


class TestElmNorm:
    """Tests for element norm storage."""

    def test_indexing(self):
        norm = ElmNorm(3)
        assert len(norm) == 3
        norm[1] += 2.5
        norm[1] += 0.5
        assert norm[1] == 3.0
        assert norm.vec == []
        assert norm.psol is None


def test_gather_element_vector():
    u = np.arange(15, dtype=float)
    eV = gather_element_vector(u, [4, 1])
    assert_array_almost_equal(eV, [12, 13, 14, 3, 4, 5])
