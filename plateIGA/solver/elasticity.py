"""
Common base for elasticity integrands.

ElasticBase holds what all structural integrands share:
- the gravitation constant
- the slot handles of the element stiffness, mass and load arrays,
  derived from the solution mode
- the time integration parameters of dynamic simulations

In dynamic simulations with the Newmark scheme, the element matrices
are combined into the effective stiffness

    K_eff = (1 + gamma*alpha2/(beta*dt)) K + (1/(beta*dt^2) + gamma*alpha1/(beta*dt)) M

where alpha1 and alpha2 are the mass- and stiffness-proportional
Rayleigh damping coefficients.
"""

import logging
import numpy as np
from typing import Optional

from .base import Integrand, SolutionMode, TimeDomain
from .local_integral import ElmMats, LocalIntegral

logger = logging.getLogger(__name__)

# Indices into the integration parameter array
ALPHA1, ALPHA2, BETA, GAMMA = 0, 1, 2, 3


class ElasticBase(Integrand):
    """
    Base class of elasticity integrands.

    The slot handles eK, eM and eS are 1-based indices into the element
    matrices and vectors, zero meaning "not requested". They are the same
    for all elements, and are only changed by set_mode() before the
    element loop starts.
    """

    def __init__(self, nsd: int = 2):
        super().__init__(nsd)
        self.gravity = 0.0
        self.intPrm = np.zeros(5)
        self.eK = self.eM = self.eS = 0
        self.set_mode(SolutionMode.STATIC)

    def set_gravity(self, g: float) -> None:
        """Define the gravitation constant (acting along the plate normal)."""
        self.gravity = g

    def set_mode(self, mode: SolutionMode) -> None:
        """
        Define the solution mode and the element array handles.

        STATIC: stiffness and load
        DYNAMIC: stiffness, mass and load
        VIBRATION: stiffness and mass
        STIFF_ONLY: stiffness
        RHS_ONLY: load
        RECOVERY: nothing (secondary solution evaluation only)
        """
        super().set_mode(mode)
        self.eK = self.eM = self.eS = 0
        if mode in (SolutionMode.STATIC, SolutionMode.DYNAMIC,
                    SolutionMode.VIBRATION, SolutionMode.STIFF_ONLY):
            self.eK = 1
        if mode in (SolutionMode.DYNAMIC, SolutionMode.VIBRATION):
            self.eM = 2
        if mode in (SolutionMode.STATIC, SolutionMode.DYNAMIC, SolutionMode.RHS_ONLY):
            self.eS = 1

    def set_integration_prm(self, i: int, prm: float) -> None:
        """
        Define time integration parameter number i.

        0: alpha1 (mass-proportional damping), 1: alpha2 (stiffness-
        proportional damping), 2: Newmark beta, 3: Newmark gamma.
        """
        if 0 <= i < len(self.intPrm):
            self.intPrm[i] = prm

    def get_integration_prm(self, i: int) -> float:
        return self.intPrm[i] if 0 <= i < len(self.intPrm) else 0.0

    def finalize_element(self, elm_int: LocalIntegral,
                         time: Optional[TimeDomain] = None) -> bool:
        """
        Finalize the element matrices after the numerical integration.

        In dynamic mode the stiffness slot is replaced by the Newmark
        effective stiffness. Other modes leave the element untouched.
        """
        if self.mode != SolutionMode.DYNAMIC or not isinstance(elm_int, ElmMats) \
                or elm_int.rhs_only:
            return True

        K = elm_int.matrix(self.eK)
        M = elm_int.matrix(self.eM)
        if K is None or M is None:
            logger.error("Dynamic analysis requires both stiffness and mass matrices")
            return False

        dt = time.dt if time is not None else 0.0
        beta, gamma = self.intPrm[BETA], self.intPrm[GAMMA]
        if dt <= 0.0 or beta <= 0.0 or gamma < 0.0:
            logger.error("Invalid time integration parameters: dt = %g, beta = %g, "
                         "gamma = %g", dt, beta, gamma)
            return False

        alpha1, alpha2 = self.intPrm[ALPHA1], self.intPrm[ALPHA2]
        k_fac = 1.0 + gamma * alpha2 / (beta * dt)
        m_fac = 1.0 / (beta * dt * dt) + gamma * alpha1 / (beta * dt)
        elm_int.A[self.eK - 1] = k_fac * K + m_fac * M
        return True
