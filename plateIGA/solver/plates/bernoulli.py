"""
Kirchhoff-Love (Bernoulli) thin plate integrand.

Solves the Kirchhoff-Love plate bending equation:
    D nabla^4 w = q    in Omega

where:
    w = transverse deflection
    q = transverse load (surface pressure plus self-weight)
    D = E t^3 / [12(1-nu^2)] = flexural rigidity

Weak form:
    int_Omega kappa(v)^T D kappa(w) dOmega = int_Omega q v dOmega

with the curvature vector
    kappa = [d2w/dx2, d2w/dy2, 2 d2w/dxdy]

The formulation needs second derivatives of the basis functions and
C1-continuous discretizations, which splines of degree p >= 2 provide.

Nodal unknowns are ordered node by node as (w, theta_x, theta_y). The
rotations are slaved to the deflection by the Kirchhoff constraint
(theta_x = dw/dy, theta_y = -dw/dx), so they carry no bending stiffness
of their own; they only receive rotary inertia when it is switched on.

Element arrays (1-based handles, see ElasticBase):
    eK: K_e = int B^T D B dOmega
    eM: M_e = int rho t N^T N dOmega      (deflection DOFs)
                + int rho t^3/12 N^T N dOmega  (rotation DOFs, optional)
    eS: f_e = int rho t g N dOmega + int p N dGamma

Stress resultants (bending moments) are recovered as m = D kappa.
"""

import logging
import numpy as np
from typing import List, Optional, Sequence, Tuple

from ..base import IntegrandType, gather_element_vector
from ..elasticity import ElasticBase
from ..finite_element import FiniteElement
from ..local_integral import ElmMats, LocalIntegral
from ..material import Material
from ...functions import LocalSystem

logger = logging.getLogger(__name__)

# Number of unknowns per node: deflection and two rotations
NPV = 3


class KirchhoffLovePlate(ElasticBase):
    """
    Integrand of linear Kirchhoff-Love thin plate (or Euler-Bernoulli beam)
    problems.

    Example usage:
        plate = KirchhoffLovePlate()
        plate.set_thickness(0.1)
        plate.set_material(LinearIsotropic(E=2.1e11, nu=0.3, rho=7850.0))
        plate.set_pressure(ConstantFunc(1.0e3))

        ok, elm_mats = integrate_element(plate, element, quadrature)

    The material, pressure field and local system are borrowed
    references. They are never modified and must outlive the integrand.
    """

    FIELD1_NAMES = ("w", "theta_x", "theta_y")
    FIELD2_NAMES = ("M_xx", "M_yy", "M_xy")

    def __init__(self, nsd: int = 2, rotary_inertia: bool = False):
        """
        Parameters:
            nsd: Number of spatial dimensions (1=beam, 2=plate)
            rotary_inertia: Whether the mass matrix includes rotary inertia
        """
        if nsd not in (1, 2):
            raise ValueError(f"Invalid number of spatial dimensions: {nsd}")
        super().__init__(nsd)
        self.material: Optional[Material] = None
        self.thickness = 0.1
        self.rotary_inertia = rotary_inertia

        self.loc_sys: Optional[LocalSystem] = None
        self.pres_fld = None
        self.pres_val: List[Optional[Tuple[np.ndarray, float]]] = []

    def print_log(self) -> None:
        """Log the problem definition."""
        logger.info("KirchhoffLovePlate: thickness = %g, gravity = %g", self.thickness, self.gravity)
        if self.material is not None:
            self.material.print_log()
        if self.pres_fld is not None:
            logger.info("Pressure field: %r", self.pres_fld)

    def set_thickness(self, t: float) -> None:
        self.thickness = t

    def set_material(self, mat: Material) -> None:
        self.material = mat

    def set_pressure(self, pf) -> None:
        """Define the pressure field, a callable of the point coordinates."""
        self.pres_fld = pf

    def set_local_system(self, cs: Optional[LocalSystem]) -> None:
        """Define the local coordinate system for stress resultant output."""
        self.loc_sys = cs

    def get_integrand_type(self) -> IntegrandType:
        return IntegrandType.SECOND_DERIVATIVES

    def has_boundary_terms(self) -> bool:
        return self.pres_fld is not None

    def init_integration(self, n_gp: int, n_bp: int) -> None:
        """Allocate one pressure buffer slot per boundary integration point."""
        self.pres_val = [None] * n_bp

    def get_local_integral(self, nen: int, neumann: bool = False) -> ElmMats:
        """
        Return a new element accumulator with 3*nen DOFs.

        Boundary (Neumann) contributions only need the load vector.
        """
        if neumann:
            return ElmMats(NPV * nen, n_matrices=0, n_vectors=1 if self.eS else 0,
                           rhs_only=True)

        return ElmMats(NPV * nen, n_matrices=max(self.eK, self.eM),
                       n_vectors=1 if self.eS else 0)

    def eval_int(self, elm_int: LocalIntegral, fe: FiniteElement) -> bool:
        """
        Evaluate the integrand at an interior point.

        Parameters:
            elm_int: Element accumulator
            fe: Finite element data of the current integration point

        Returns:
            False if the curvature or constitutive operator cannot be formed
        """
        if self.thickness <= 0.0:
            logger.error("KirchhoffLovePlate: invalid plate thickness %g", self.thickness)
            return False

        if self.eK:
            B = self.form_bmatrix(fe.d2NdX2)
            D = self.form_cmatrix(fe.X)
            if B is None or D is None:
                return False

            elm_int.add_to_matrix(self.eK, B.T @ D @ B * fe.detJxW)

        if self.eM:
            EM = self.form_mass_matrix(fe.N, fe.X, fe.detJxW)
            if EM is None:
                return False
            elm_int.add_to_matrix(self.eM, EM)

        if self.eS and self.gravity != 0.0:
            ES = self.form_body_force(fe.N, fe.X, fe.detJxW)
            if ES is None:
                return False
            elm_int.add_to_vector(self.eS, ES)

        return True

    def eval_bou(self, elm_int: LocalIntegral, fe: FiniteElement,
                 normal: np.ndarray) -> bool:
        """
        Evaluate the pressure load at a point on the loaded surface.

        The pressure value is also stored in the pressure buffer at the
        global point index fe.iGP.
        """
        p = self.get_pressure(fe.X)

        if 0 <= fe.iGP < len(self.pres_val):
            self.pres_val[fe.iGP] = (np.array(fe.X, dtype=float), p)

        if self.eS and p != 0.0:
            ES = np.zeros(NPV * fe.nen)
            ES[0::NPV] = p * fe.N * fe.detJxW
            elm_int.add_to_vector(self.eS, ES)

        return True

    def form_mass_matrix(self, N: np.ndarray, X: np.ndarray,
                         detJW: float) -> Optional[np.ndarray]:
        """
        Integration point mass matrix contribution.

        Consistent translational mass on the deflection DOFs, plus
        rotary inertia on the rotation DOFs if enabled.
        """
        if self.material is None:
            logger.error("KirchhoffLovePlate: no material defined")
            return None

        rho = self.material.get_mass_density(X)
        NN = np.outer(N, N) * detJW

        EM = np.zeros((NPV * len(N), NPV * len(N)))
        EM[0::NPV, 0::NPV] = rho * self.thickness * NN
        if self.rotary_inertia:
            J = rho * self.thickness ** 3 / 12.0
            EM[1::NPV, 1::NPV] = J * NN
            EM[2::NPV, 2::NPV] = J * NN

        return EM

    def form_body_force(self, N: np.ndarray, X: np.ndarray,
                        detJW: float) -> Optional[np.ndarray]:
        """Integration point self-weight load contribution."""
        if self.material is None:
            logger.error("KirchhoffLovePlate: no material defined")
            return None

        q = self.material.get_mass_density(X) * self.thickness * self.gravity
        ES = np.zeros(NPV * len(N))
        ES[0::NPV] = q * N * detJW
        return ES

    def form_bmatrix(self, d2NdX2: Optional[np.ndarray]) -> Optional[np.ndarray]:
        """
        Form the curvature-displacement matrix B at the current point.

        Parameters:
            d2NdX2: Basis function second derivatives, shape (nen, nsd, nsd)

        Returns:
            B of shape (3, 3*nen), or None if the second derivatives are
            missing or degenerate
        """
        if d2NdX2 is None:
            logger.error("KirchhoffLovePlate: no second derivatives "
                         "(singular geometry mapping?)")
            return None

        d2NdX2 = np.asarray(d2NdX2)
        if d2NdX2.ndim != 3 or d2NdX2.shape[1:] != (self.nsd, self.nsd) \
                or not np.all(np.isfinite(d2NdX2)):
            logger.error("KirchhoffLovePlate: invalid second derivatives, shape %s",
                         d2NdX2.shape)
            return None

        nen = d2NdX2.shape[0]
        B = np.zeros((3, NPV * nen))
        B[0, 0::NPV] = d2NdX2[:, 0, 0]
        if self.nsd > 1:
            B[1, 0::NPV] = d2NdX2[:, 1, 1]
            B[2, 0::NPV] = 2.0 * d2NdX2[:, 0, 1]

        return B

    def form_cmatrix(self, X: np.ndarray, inverse: bool = False) -> Optional[np.ndarray]:
        """
        Set up the bending rigidity operator at the current point.

        Parameters:
            X: Cartesian coordinates of the current point
            inverse: If True, the inverse (compliance) operator is returned

        Returns:
            D = C t^3/12 (or its inverse 12/t^3 C^-1), or None on failure
        """
        if self.material is None:
            logger.error("KirchhoffLovePlate: no material defined")
            return None
        if self.thickness <= 0.0:
            logger.error("KirchhoffLovePlate: invalid plate thickness %g", self.thickness)
            return None

        C = self.material.evaluate(X, inverse)
        factor = self.thickness ** 3 / 12.0
        return C / factor if inverse else C * factor

    def eval_sol(self, fe: FiniteElement, eV: Sequence[float],
                 to_local: bool = False) -> Tuple[bool, np.ndarray]:
        """
        Evaluate the stress resultants from an element solution vector.

        Parameters:
            fe: Finite element data at the current point
            eV: Element solution vector, 3 values per node
            to_local: If True, transform to the local system (if defined)

        Returns:
            (ok, m) with the bending moments m, 3 components for plates
            and 1 for beams
        """
        n_out = self.get_no_fields(2)

        B = self.form_bmatrix(fe.d2NdX2)
        D = self.form_cmatrix(fe.X)
        if B is None or D is None:
            return False, np.zeros(n_out)

        eV = np.asarray(eV, dtype=float)
        if len(eV) != B.shape[1]:
            logger.error("KirchhoffLovePlate: element vector of length %d, expected %d",
                         len(eV), B.shape[1])
            return False, np.zeros(n_out)

        kappa = B @ eV
        m = D @ kappa

        if to_local and self.loc_sys is not None and self.nsd == 2:
            T = self.loc_sys.transform(fe.X)[:2, :2]
            M = np.array([[m[0], m[2]],
                          [m[2], m[1]]])
            M = T @ M @ T.T
            m = np.array([M[0, 0], M[1, 1], M[0, 1]])

        return True, m[:n_out]

    def eval_sol_global(self, fe: FiniteElement, solution: Sequence[float],
                        mnpc: Sequence[int], to_local: bool = True) -> Tuple[bool, np.ndarray]:
        """
        Evaluate the stress resultants from a global solution vector.

        Parameters:
            fe: Finite element data at the current point
            solution: Global nodal vector, 3 values per node
            mnpc: Global node numbers of the element basis functions
            to_local: If True, transform to the local system (if defined)
        """
        if len(mnpc) and NPV * (max(mnpc) + 1) > len(solution):
            logger.error("KirchhoffLovePlate: node number out of range of solution vector")
            return False, np.zeros(self.get_no_fields(2))

        return self.eval_sol(fe, gather_element_vector(solution, mnpc, NPV), to_local)

    def get_pressure(self, X: np.ndarray) -> float:
        """Evaluate the pressure field (if any) at the point."""
        return float(self.pres_fld(X)) if self.pres_fld is not None else 0.0

    def have_loads(self) -> bool:
        """Return whether an external load is defined."""
        return self.pres_fld is not None or self.gravity != 0.0

    def has_traction_values(self) -> bool:
        return any(v is not None for v in self.pres_val)

    def write_glv_t(self, writer, i_step: int, counters) -> bool:
        """
        Write the surface pressure of a load/time step for visualization.

        Parameters:
            writer: Visualization writer with a write_point_values method
            i_step: Load/time step identifier
            counters: Running geometry/result block counters
        """
        if not self.has_traction_values():
            return True

        pairs = [v for v in self.pres_val if v is not None]
        return writer.write_point_values(pairs, i_step, counters, name="Pressure")

    def get_norm_integrand(self, anasol=None, projected: bool = False):
        """
        Return a new integrand for energy norm evaluation.

        Parameters:
            anasol: Analytical stress resultant field (optional)
            projected: Whether recovered nodal resultants will be supplied,
                       enabling the error estimate and effectivity index

        Returns:
            KirchhoffLovePlateNorm, owned by the caller
        """
        from .norms import KirchhoffLovePlateNorm
        return KirchhoffLovePlateNorm(self, anasol, projected)

    def get_no_fields(self, fld: int = 2) -> int:
        """
        Return the number of primary (fld=1) or secondary (fld=2)
        solution field components.
        """
        if fld < 2:
            return NPV
        return self.nsd * (self.nsd + 1) // 2

    def get_field1_name(self, i: int, prefix: Optional[str] = None) -> str:
        if i >= NPV:
            return ""
        return _prefixed(self.FIELD1_NAMES[i], prefix)

    def get_field2_name(self, i: int, prefix: Optional[str] = None) -> str:
        if i >= self.get_no_fields(2):
            return ""
        return _prefixed(self.FIELD2_NAMES[i], prefix)


def _prefixed(name: str, prefix: Optional[str]) -> str:
    return f"{prefix} {name}" if prefix else name
