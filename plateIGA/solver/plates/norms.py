"""
Energy norms and error estimates for Kirchhoff-Love plates.

The energy norm of a moment field m is

    a(w,w) = int_Omega m^T D^{-1} m dOmega

with D the bending rigidity operator. The norm integrand accumulates
squared norms per element; the derived quantities (relative error and
effectivity index) are computed once per element in finalize_element.

Norm group 1 (always present):
    a(w^h,w^h)           energy norm of the FE solution
    (q,w^h)              external energy
    a(w,w)               energy norm of the analytical solution   [anasol]
    a(e,e), e=w-w^h      exact error                              [anasol]
    relative error [%]   100 sqrt(a(e,e)/a(w,w))                  [anasol]

Norm group 2 (recovered resultants w^r supplied):
    a(w^r,w^r)           energy norm of the recovered solution
    a(e,e), e=w^r-w^h    estimated error
    a(e,e), e=w-w^r      error of the recovered solution          [anasol]
    effectivity index    estimated / exact error                  [anasol]
"""

import logging
import math
import numpy as np
from typing import List, Optional, Tuple

from ..base import NormBase, IntegrandType, TimeDomain
from ..finite_element import FiniteElement
from ..local_integral import ElmNorm, LocalIntegral

logger = logging.getLogger(__name__)

# Squared norms below this fraction of the largest element energy count as zero
ZERO_TOL = 1.0e-20

GROUP1_NAMES = (
    "a(w^h,w^h)^0.5",
    "(q,w^h)^0.5",
    "a(w,w)^0.5",
    "a(e,e)^0.5, e=w-w^h",
    "(a(e,e)/a(w,w))^0.5 [%]",
)

GROUP2_NAMES = (
    "a(w^r,w^r)^0.5",
    "a(e,e)^0.5, e=w^r-w^h",
    "a(e,e)^0.5, e=w-w^r",
    "effectivity index",
)


class KirchhoffLovePlateNorm(NormBase):
    """
    Integrand of Kirchhoff-Love energy norms.

    The plate integrand and the analytical field are borrowed references
    that must outlive this object.

    Parameters:
        problem: The plate integrand to evaluate norms for
        anasol: Analytical stress resultant field (optional), a callable
                returning [m_xx, m_yy, m_xy] at X
        projected: Whether recovered nodal resultants are supplied
                   (ElmNorm.psol), enabling the error estimate group
    """

    def __init__(self, problem, anasol=None, projected: bool = False):
        super().__init__(problem.nsd)
        self.problem = problem
        self.anasol = anasol
        self.projected = projected

    def get_integrand_type(self) -> IntegrandType:
        return self.problem.get_integrand_type() | IntegrandType.ELEMENT_SOLUTION

    def has_boundary_terms(self) -> bool:
        return True

    def get_no_fields(self, group: int = 0) -> int:
        """
        Return the number of norm groups (group=0) or the size of a group.
        """
        if group == 0:
            return 2 if self.projected else 1
        if group == 1:
            return 5 if self.anasol is not None else 2
        if group == 2 and self.projected:
            return 4 if self.anasol is not None else 2
        return 0

    def get_name(self, i: int, j: int, prefix: Optional[str] = None) -> str:
        """
        Return the name of a norm quantity.

        Parameters:
            i: The norm group (one-based index)
            j: The norm number (one-based index)
            prefix: Common prefix for all norm names
        """
        if i == 1 and 1 <= j <= self.get_no_fields(1):
            names = GROUP1_NAMES
        elif i == 2 and 1 <= j <= self.get_no_fields(2):
            names = GROUP2_NAMES
        else:
            return super().get_name(i, j, prefix)

        return f"{prefix} {names[j - 1]}" if prefix else names[j - 1]

    def eval_int(self, elm_int: LocalIntegral, fe: FiniteElement) -> bool:
        """
        Accumulate the energy norms at an interior point.
        """
        pnorm: ElmNorm = elm_int
        if not pnorm.vec:
            logger.error("KirchhoffLovePlateNorm: no element solution vector")
            return False

        eV = pnorm.vec[0]
        Cinv = self.problem.form_cmatrix(fe.X, inverse=True)
        if Cinv is None:
            return False

        ok, mh = self.problem.eval_sol(fe, eV)
        if not ok:
            return False

        n = len(mh)
        Cinv = Cinv[:n, :n]
        w = fe.detJxW

        pnorm[0] += mh @ Cinv @ mh * w

        # Self-weight part of the external energy
        g = self.problem.gravity
        if g != 0.0:
            rho = self.problem.material.get_mass_density(fe.X)
            wh = fe.N @ eV[0::3]
            pnorm[1] += rho * self.problem.thickness * g * wh * w

        m = None
        if self.anasol is not None:
            m = np.asarray(self.anasol(fe.X), dtype=float)[:n]
            e = m - mh
            pnorm[2] += m @ Cinv @ m * w
            pnorm[3] += e @ Cinv @ e * w

        if self.projected:
            if pnorm.psol is None:
                logger.error("KirchhoffLovePlateNorm: no recovered solution")
                return False

            mr = (fe.N @ np.asarray(pnorm.psol, dtype=float))[:n]
            o = self.get_no_fields(1)
            e = mr - mh
            pnorm[o] += mr @ Cinv @ mr * w
            pnorm[o + 1] += e @ Cinv @ e * w
            if m is not None:
                e = m - mr
                pnorm[o + 2] += e @ Cinv @ e * w

        return True

    def eval_bou(self, elm_int: LocalIntegral, fe: FiniteElement,
                 normal: np.ndarray) -> bool:
        """
        Accumulate the pressure part of the external energy (q,w^h).
        """
        pnorm: ElmNorm = elm_int
        if not pnorm.vec:
            logger.error("KirchhoffLovePlateNorm: no element solution vector")
            return False

        p = self.problem.get_pressure(fe.X)
        if p != 0.0:
            wh = fe.N @ pnorm.vec[0][0::3]
            pnorm[1] += p * wh * fe.detJxW

        return True

    def finalize_element(self, elm_int: LocalIntegral,
                         time: Optional[TimeDomain] = None) -> bool:
        """
        Compute the relative error and the effectivity index of the element.
        """
        if self.anasol is None:
            return True

        pnorm: ElmNorm = elm_int
        exact_sq, error_sq = pnorm[2], pnorm[3]
        scale = max(exact_sq, error_sq, pnorm[0])
        if self.projected:
            o = self.get_no_fields(1)
            scale = max(scale, pnorm[o], pnorm[o + 1])
        tol = ZERO_TOL * scale

        if exact_sq > tol:
            pnorm[4] = 100.0 * math.sqrt(max(error_sq, 0.0) / exact_sq)
        else:
            pnorm[4] = 0.0

        if self.projected:
            estimate_sq = pnorm[o + 1]
            if error_sq > tol:
                pnorm[o + 3] = math.sqrt(max(estimate_sq, 0.0) / error_sq)
            elif estimate_sq <= tol:
                # Both the estimate and the exact error vanish
                pnorm[o + 3] = 1.0
            else:
                pnorm[o + 3] = 0.0

        return True

    def norm_result(self, elm_int: ElmNorm,
                    prefix: Optional[str] = None) -> List[List[Tuple[str, float]]]:
        """
        Return the named norm values of an element, group by group.

        The energy norms are reported as square roots of the accumulated
        quantities, keeping the sign of the external energy.
        """
        derived = set()
        if self.anasol is not None:
            derived.add(4)
            if self.projected:
                derived.add(self.get_no_fields(1) + 3)

        result = []
        offset = 0
        for i in range(1, self.get_no_fields(0) + 1):
            group = []
            for j in range(1, self.get_no_fields(i) + 1):
                value = elm_int[offset + j - 1]
                if offset + j - 1 not in derived:
                    value = math.copysign(math.sqrt(abs(value)), value)
                group.append((self.get_name(i, j, prefix), value))
            result.append(group)
            offset += self.get_no_fields(i)

        return result
