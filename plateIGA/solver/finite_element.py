"""
Finite element data at a single integration point.

A FiniteElement bundles everything an integrand needs at one point:
the physical position, basis function values and their physical
derivatives, and the integration weight. Instances are created by the
element evaluator (see discretization.element) and are read-only for
the integrands.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FiniteElement:
    """
    Integration point data.

    Attributes:
        X: Cartesian coordinates of the point, shape (3,)
        N: Basis function values, shape (nen,)
        dNdX: Basis function first derivatives, shape (nen, nsd)
        d2NdX2: Basis function second derivatives, shape (nen, nsd, nsd).
                None if the geometry mapping is singular at this point.
        detJxW: Jacobian determinant times the quadrature weight
        normal: Outward normal (boundary points only), shape (3,)
        iGP: Globally unique integration point index (boundary points only)
    """
    X: np.ndarray
    N: np.ndarray
    dNdX: Optional[np.ndarray] = None
    d2NdX2: Optional[np.ndarray] = None
    detJxW: float = 0.0
    normal: Optional[np.ndarray] = None
    iGP: int = 0

    @property
    def nen(self) -> int:
        """Number of element nodes (basis functions)."""
        return len(self.N)
