"""
Bezier element for plate and beam analysis.

A BezierElement carries everything needed to produce integration point
data for the integrands:
- control point coordinates of its Bernstein (Bezier) representation
- an optional extraction operator C_e mapping Bernstein to spline basis
- the global node numbers of its basis functions (mnpc)

Shape functions are N = C_e @ B, with B the tensor-product Bernstein
basis. Physical second derivatives include the curvature of the
geometry mapping:

    d2N/dX2 = J^{-T} (d2N/dxi2 - sum_i dN/dX_i d2X_i/dxi2) J^{-1}

which reduces to J^{-T} d2N/dxi2 J^{-1} on affine elements.

Integration points on the loaded plate surface are numbered globally
by the caller (first_index), so that concurrent element loops never
write to the same pressure buffer slot.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from .bernstein import BernsteinBasis
from ..quadrature.gauss import GaussQuadrature
from ..solver.finite_element import FiniteElement

# Relative tolerance for detecting a collapsed geometry mapping
SINGULAR_TOL = 1.0e-12


@dataclass
class BezierElement:
    """
    Plate (2D) or beam (1D) element in Bezier form.

    Attributes:
        id: Element identifier
        degrees: Polynomial degrees, one per parametric direction
        control_points: Control point coordinates, shape (n_basis, nsd)
        mnpc: Global node number of each local basis function
        extraction_operator: C_e, shape (n_local, n_basis). Identity if None.
    """
    id: int
    degrees: Tuple[int, ...]
    control_points: np.ndarray
    mnpc: List[int] = field(default_factory=list)
    extraction_operator: Optional[np.ndarray] = None

    def __post_init__(self):
        self.degrees = tuple(self.degrees)
        self.control_points = np.asarray(self.control_points, dtype=float)
        if self.control_points.ndim == 1:
            self.control_points = self.control_points.reshape(-1, 1)

        self._basis = BernsteinBasis(self.degrees)
        if self.control_points.shape != (self._basis.n_basis, self.n_dim):
            raise ValueError(
                f"Expected {self._basis.n_basis} control points with {self.n_dim} "
                f"coordinates, got array of shape {self.control_points.shape}")

        if self.extraction_operator is None:
            self.extraction_operator = np.eye(self._basis.n_basis)
        if not self.mnpc:
            self.mnpc = list(range(self.n_nodes))
        if len(self.mnpc) != self.n_nodes:
            raise ValueError("mnpc length must match the number of local basis functions")

    @property
    def n_dim(self) -> int:
        """Number of parametric (and spatial) dimensions."""
        return len(self.degrees)

    @property
    def n_nodes(self) -> int:
        """Number of local basis functions (element nodes)."""
        return self.extraction_operator.shape[0]

    def eval_point(self, t_ref: Sequence[float], weight: float = 1.0,
                   second_derivatives: bool = True) -> FiniteElement:
        """
        Evaluate basis functions and geometry at a reference point.

        Parameters:
            t_ref: Reference coordinates in [0,1]^d
            weight: Quadrature weight
            second_derivatives: Whether d2NdX2 is needed by the integrand

        Returns:
            FiniteElement at the point. If the Jacobian is singular,
            dNdX and d2NdX2 are None and detJxW is zero.
        """
        B, dB, d2B = self._basis.eval_ders(tuple(t_ref), n_ders=2)

        # Geometry from the Bernstein representation
        P = self.control_points
        x = B @ P
        jac = P.T @ dB                                # J[i,k] = dX_i/dxi_k
        hess = np.einsum('ai,akl->ikl', P, d2B)       # d2X_i/dxi_k dxi_l

        X = np.zeros(3)
        X[:self.n_dim] = x

        C_e = self.extraction_operator
        N = C_e @ B

        det_jac = np.linalg.det(jac)
        scale = max(np.max(np.abs(jac)), 1.0e-300) ** self.n_dim
        if abs(det_jac) <= SINGULAR_TOL * scale:
            return FiniteElement(X=X, N=N)

        inv_jac = np.linalg.inv(jac)
        dNdX = (C_e @ dB) @ inv_jac

        d2NdX2 = None
        if second_derivatives:
            d2N = np.einsum('ab,bkl->akl', C_e, d2B)
            d2N -= np.einsum('ai,ikl->akl', dNdX, hess)
            d2NdX2 = np.einsum('ki,akl,lj->aij', inv_jac, d2N, inv_jac)

        return FiniteElement(X=X, N=N, dNdX=dNdX, d2NdX2=d2NdX2,
                             detJxW=abs(det_jac) * weight)

    def interior_points(self, quadrature: GaussQuadrature,
                        second_derivatives: bool = True) -> Iterator[FiniteElement]:
        """Yield integration point data for all interior quadrature points."""
        for t_ref, w_q in quadrature:
            yield self.eval_point(t_ref, w_q, second_derivatives)

    def surface_points(self, quadrature: GaussQuadrature, first_index: int = 0,
                       second_derivatives: bool = False) -> Iterator[FiniteElement]:
        """
        Yield integration points on the loaded plate surface.

        The plate surface coincides with the element domain, with the
        outward normal along the global z-axis. Points are numbered
        first_index, first_index+1, ...

        Parameters:
            quadrature: Quadrature rule on the element
            first_index: Global index of the first point on this element
            second_derivatives: Whether d2NdX2 is needed by the integrand
        """
        normal = np.array([0.0, 0.0, 1.0])
        for q, (t_ref, w_q) in enumerate(quadrature):
            fe = self.eval_point(t_ref, w_q, second_derivatives)
            yield FiniteElement(X=fe.X, N=fe.N, dNdX=fe.dNdX, d2NdX2=fe.d2NdX2,
                                detJxW=fe.detJxW, normal=normal,
                                iGP=first_index + q)


def make_rectangle_element(x_range: Tuple[float, float] = (0.0, 1.0),
                           y_range: Tuple[float, float] = (0.0, 1.0),
                           p: int = 1, element_id: int = 0,
                           mnpc: Optional[List[int]] = None) -> BezierElement:
    """
    Create an affine rectangular plate element of degree p.

    The control points are evenly spaced, which makes the geometry
    mapping linear for any degree.

    Parameters:
        x_range: (x_min, x_max)
        y_range: (y_min, y_max)
        p: Polynomial degree in both directions
        element_id: Element identifier
        mnpc: Global node numbers (defaults to 0, 1, ...)

    Returns:
        BezierElement
    """
    xs = np.linspace(x_range[0], x_range[1], p + 1)
    ys = np.linspace(y_range[0], y_range[1], p + 1)
    xx, yy = np.meshgrid(xs, ys)
    control_points = np.column_stack([xx.ravel(), yy.ravel()])
    return BezierElement(id=element_id, degrees=(p, p),
                         control_points=control_points, mnpc=mnpc or [])


def make_line_element(x_range: Tuple[float, float] = (0.0, 1.0), p: int = 2,
                      element_id: int = 0,
                      mnpc: Optional[List[int]] = None) -> BezierElement:
    """Create an affine beam element of degree p."""
    control_points = np.linspace(x_range[0], x_range[1], p + 1).reshape(-1, 1)
    return BezierElement(id=element_id, degrees=(p,),
                         control_points=control_points, mnpc=mnpc or [])
