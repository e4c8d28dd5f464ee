"""
Base classes for element integrands.

An integrand defines what is integrated at each point of an element;
the element loop defines where. The loop for one element is:

    integrand.set_mode(mode)                   # once, before all elements
    integrand.init_integration(n_gp, n_bp)     # once, sizes shared buffers
    for element in elements:                   # may run concurrently
        elm_int = integrand.get_local_integral(nen, neumann=False)
        for fe in element.interior_points(quadrature):
            integrand.eval_int(elm_int, fe)
        integrand.finalize_element(elm_int, time)

Boundary (Neumann) terms are integrated in a separate pass with their
own accumulator. The integrand type must be consulted before the basis
derivatives are computed, since second derivatives are only needed by
some integrands.

All evaluation methods report failure by returning False. The element
loop decides whether to skip the element or abort the analysis.
"""

import logging
import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Optional, Sequence, Tuple

from .finite_element import FiniteElement
from .local_integral import LocalIntegral, ElmNorm
from ..quadrature.gauss import GaussQuadrature

logger = logging.getLogger(__name__)


class SolutionMode(Enum):
    """What the element loop is currently integrating for."""
    STATIC = "static"
    DYNAMIC = "dynamic"
    VIBRATION = "vibration"
    STIFF_ONLY = "stiff_only"
    RHS_ONLY = "rhs_only"
    RECOVERY = "recovery"


class IntegrandType(IntFlag):
    """Finite element quantities an integrand needs at each point."""
    STANDARD = 0
    SECOND_DERIVATIVES = 1
    ELEMENT_SOLUTION = 2


@dataclass
class TimeDomain:
    """
    Time level parameters for dynamic simulations.

    Attributes:
        dt: Current time step size
    """
    dt: float = 0.0


class Integrand(ABC):
    """
    Abstract base class of element integrands.

    Subclasses implement eval_int (and optionally eval_bou) for a specific
    problem. The remaining methods have neutral defaults.
    """

    def __init__(self, nsd: int = 2):
        self.nsd = nsd
        self.mode = SolutionMode.STATIC

    def set_mode(self, mode: SolutionMode) -> None:
        """Define the solution mode before element assembly starts."""
        self.mode = mode

    def get_integrand_type(self) -> IntegrandType:
        """Return which finite element quantities are needed."""
        return IntegrandType.STANDARD

    def init_integration(self, n_gp: int, n_bp: int) -> None:
        """
        Initialize the integrand with the total number of integration points.

        Parameters:
            n_gp: Total number of interior integration points
            n_bp: Total number of boundary integration points
        """

    @abstractmethod
    def get_local_integral(self, nen: int, neumann: bool = False) -> LocalIntegral:
        """Return a new element accumulator for an element with nen nodes."""

    @abstractmethod
    def eval_int(self, elm_int: LocalIntegral, fe: FiniteElement) -> bool:
        """Evaluate the integrand at an interior point."""

    def eval_bou(self, elm_int: LocalIntegral, fe: FiniteElement,
                 normal: np.ndarray) -> bool:
        """Evaluate the integrand at a boundary point."""
        logger.error("%s: boundary integrand not implemented", type(self).__name__)
        return False

    def finalize_element(self, elm_int: LocalIntegral,
                         time: Optional[TimeDomain] = None) -> bool:
        """Finalize the element quantities after numerical integration."""
        return True

    def has_boundary_terms(self) -> bool:
        return False

    def get_no_fields(self, fld: int = 2) -> int:
        """Return the number of primary/secondary solution field components."""
        return 0

    def get_norm_integrand(self, anasol=None,
                           projected: bool = False) -> Optional['NormBase']:
        """Return a new integrand for solution norm evaluation, if any."""
        return None


class NormBase(Integrand):
    """
    Base class of integrands computing solution norms.

    Norm quantities are grouped; get_no_fields(0) returns the number of
    groups and get_no_fields(g) the number of quantities in group g.
    """

    def get_integrand_type(self) -> IntegrandType:
        return IntegrandType.ELEMENT_SOLUTION

    def get_local_integral(self, nen: int, neumann: bool = False) -> ElmNorm:
        n_norms = sum(self.get_no_fields(g)
                      for g in range(1, self.get_no_fields(0) + 1))
        return ElmNorm(n_norms)

    def get_no_fields(self, group: int = 0) -> int:
        return 0

    def get_name(self, i: int, j: int, prefix: Optional[str] = None) -> str:
        """
        Return the name of norm quantity j in group i (both 1-based).
        """
        name = f"norm_{i}.{j}"
        return f"{prefix} {name}" if prefix else name


def integrate_element(integrand: Integrand, element, quadrature: GaussQuadrature,
                      time: Optional[TimeDomain] = None,
                      solution: Optional[Sequence[float]] = None,
                      projection: Optional[np.ndarray] = None,
                      finalize: bool = True) -> Tuple[bool, LocalIntegral]:
    """
    Integrate the interior terms of one element.

    Parameters:
        integrand: The integrand to evaluate
        element: Element providing interior_points() and mnpc
        quadrature: Quadrature rule
        time: Time level parameters (dynamic simulations)
        solution: Global solution vector, gathered into the element
                  accumulator for integrands needing the element solution
        projection: Recovered nodal resultants of this element (norms)
        finalize: Whether to call finalize_element after the point loop

    Returns:
        (ok, elm_int)
    """
    itype = integrand.get_integrand_type()
    second = bool(itype & IntegrandType.SECOND_DERIVATIVES)

    elm_int = integrand.get_local_integral(element.n_nodes, neumann=False)
    if itype & IntegrandType.ELEMENT_SOLUTION:
        if solution is None:
            logger.error("Element %d: no solution vector for %s",
                         element.id, type(integrand).__name__)
            return False, elm_int
        elm_int.vec.append(gather_element_vector(solution, element.mnpc))
        elm_int.psol = projection

    for fe in element.interior_points(quadrature, second):
        if not integrand.eval_int(elm_int, fe):
            logger.warning("Element %d: interior integration failed at X = %s",
                           element.id, fe.X)
            return False, elm_int

    if finalize and not integrand.finalize_element(elm_int, time):
        return False, elm_int

    return True, elm_int


def integrate_boundary(integrand: Integrand, element, quadrature: GaussQuadrature,
                       first_index: int = 0,
                       elm_int: Optional[LocalIntegral] = None,
                       solution: Optional[Sequence[float]] = None) -> Tuple[bool, LocalIntegral]:
    """
    Integrate the surface (Neumann) terms of one element.

    Parameters:
        integrand: The integrand to evaluate
        element: Element providing surface_points() and mnpc
        quadrature: Quadrature rule
        first_index: Global index of the first boundary point of this element
        elm_int: Accumulator to add to. A new boundary accumulator is
                 created if None.
        solution: Global solution vector, gathered into a new accumulator
                  for integrands needing the element solution

    Returns:
        (ok, elm_int)
    """
    itype = integrand.get_integrand_type()
    second = bool(itype & IntegrandType.SECOND_DERIVATIVES)
    if elm_int is None:
        elm_int = integrand.get_local_integral(element.n_nodes, neumann=True)
        if itype & IntegrandType.ELEMENT_SOLUTION:
            if solution is None:
                logger.error("Element %d: no solution vector for %s",
                             element.id, type(integrand).__name__)
                return False, elm_int
            elm_int.vec.append(gather_element_vector(solution, element.mnpc))

    for fe in element.surface_points(quadrature, first_index, second):
        if not integrand.eval_bou(elm_int, fe, fe.normal):
            logger.warning("Element %d: boundary integration failed at X = %s",
                           element.id, fe.X)
            return False, elm_int

    return True, elm_int


def gather_element_vector(solution: Sequence[float], mnpc: Sequence[int],
                          npv: int = 3) -> np.ndarray:
    """
    Extract the element vector from a global nodal vector.

    Parameters:
        solution: Global vector with npv consecutive values per node
        mnpc: Global node numbers of the element
        npv: Number of unknowns per node

    Returns:
        Element vector of length npv*len(mnpc)
    """
    solution = np.asarray(solution, dtype=float)
    dofs = (npv * np.asarray(mnpc, dtype=int)[:, None] + np.arange(npv)).ravel()
    return solution[dofs]
