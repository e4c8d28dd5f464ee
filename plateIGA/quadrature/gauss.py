"""
Gauss-Legendre quadrature on the reference element.

The reference domain is [0, 1]^d, matching the Bernstein basis used by
the Bezier elements. Standard Gauss points on [-1, 1] are mapped
accordingly.

For Kirchhoff-Love plates the stiffness integrand only involves second
derivatives, so (p+1) points per direction integrate both the stiffness
and the consistent mass matrix of a polynomial element of degree p
exactly on affine geometries.

Usage:
    points, weights = gauss_legendre_1d(n)
    points, weights = gauss_legendre_2d(n_xi, n_eta)
    quadrature = GaussQuadrature.for_degree((2, 2))
"""

import numpy as np
from typing import Tuple
from functools import lru_cache


@lru_cache(maxsize=16)
def gauss_legendre_1d(n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Gauss-Legendre points and weights on [0, 1].

    Parameters:
        n: Number of quadrature points

    Returns:
        (points, weights), each of shape (n,). The weights sum to 1.
    """
    if n < 1:
        raise ValueError("Need at least 1 quadrature point")

    points_std, weights_std = np.polynomial.legendre.leggauss(n)

    # x = (xi + 1) / 2, dx = dxi / 2
    return 0.5 * (points_std + 1.0), 0.5 * weights_std


def gauss_legendre_2d(n_xi: int, n_eta: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Tensor-product Gauss-Legendre rule on [0,1]^2.

    Points are ordered with xi running fastest, i.e. the same ordering
    as the tensor-product Bernstein basis.

    Returns:
        (points, weights) with shapes (n_xi*n_eta, 2) and (n_xi*n_eta,)
    """
    xi_pts, xi_wts = gauss_legendre_1d(n_xi)
    eta_pts, eta_wts = gauss_legendre_1d(n_eta)

    xi_grid, eta_grid = np.meshgrid(xi_pts, eta_pts)
    points = np.column_stack([xi_grid.ravel(), eta_grid.ravel()])
    weights = np.kron(eta_wts, xi_wts)

    return points, weights


class GaussQuadrature:
    """
    Gauss quadrature rule for 1D (beam) and 2D (plate) elements.

    Attributes:
        n_points_per_dir: Number of quadrature points per parametric direction
    """

    def __init__(self, n_points_per_dir: Tuple[int, ...]):
        self.n_points_per_dir = tuple(n_points_per_dir)
        self.n_dim = len(self.n_points_per_dir)

        if self.n_dim == 1:
            pts, self._weights = gauss_legendre_1d(self.n_points_per_dir[0])
            self._points = pts.reshape(-1, 1)
        elif self.n_dim == 2:
            self._points, self._weights = gauss_legendre_2d(*self.n_points_per_dir)
        else:
            raise ValueError(f"Unsupported dimension: {self.n_dim}")

    @property
    def n_points(self) -> int:
        """Total number of quadrature points."""
        return len(self._weights)

    @property
    def points(self) -> np.ndarray:
        """Quadrature points on [0,1]^d, shape (n_points, n_dim)."""
        return self._points

    @property
    def weights(self) -> np.ndarray:
        """Quadrature weights, shape (n_points,)."""
        return self._weights

    def __iter__(self):
        return zip(self._points, self._weights)

    @classmethod
    def for_degree(cls, degrees: Tuple[int, ...],
                   rule: str = "full") -> 'GaussQuadrature':
        """
        Create a quadrature rule for the given polynomial degrees.

        Parameters:
            degrees: Polynomial degrees in each direction
            rule: "full" for (p+1) points, "reduced" for p points

        Returns:
            GaussQuadrature instance
        """
        if rule == "full":
            n_pts = tuple(p + 1 for p in degrees)
        elif rule == "reduced":
            n_pts = tuple(max(p, 1) for p in degrees)
        else:
            raise ValueError(f"Unknown rule: {rule}")

        return cls(n_pts)
