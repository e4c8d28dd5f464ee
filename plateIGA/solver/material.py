"""
Material models for plate bending.

A material provides the constitutive operator C relating the in-plane
strains to the stresses, as a 3x3 matrix in Voigt notation
[xx, yy, xy] with engineering shear strain. The plate integrand scales
it by t^3/12 to obtain the bending rigidity operator D.

The material is a stateless function of position, so one instance may
be shared by all elements and threads.
"""

import logging
import numpy as np
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Material(ABC):
    """Abstract linear material with a symmetric 3x3 constitutive operator."""

    @abstractmethod
    def evaluate(self, X: np.ndarray, inverse: bool = False) -> np.ndarray:
        """
        Evaluate the constitutive operator at a point.

        Parameters:
            X: Cartesian coordinates of the point
            inverse: If True, return the compliance (inverse) operator

        Returns:
            Symmetric 3x3 matrix
        """

    def get_mass_density(self, X: np.ndarray) -> float:
        """Mass density at the point."""
        return 0.0

    def print_log(self) -> None:
        """Log the material parameters."""


class LinearIsotropic(Material):
    """
    Isotropic linear elastic material.

    For plates (nsd=2) the plane-stress operator

        C = E/(1-nu^2) [[1, nu, 0], [nu, 1, 0], [0, 0, (1-nu)/2]]

    is used. For beams (nsd=1) the directions are uncoupled,
    C = diag(E, E, G), so that the bending moment only depends on the
    axial curvature.

    Parameters:
        E: Young's modulus
        nu: Poisson's ratio
        rho: Mass density
        nsd: Number of spatial dimensions (1=beam, 2=plate)
    """

    def __init__(self, E: float = 2.1e11, nu: float = 0.3, rho: float = 7.85e3,
                 nsd: int = 2):
        self.E = E
        self.nu = nu
        self.rho = rho
        self.nsd = nsd

    @property
    def G(self) -> float:
        """Shear modulus."""
        return 0.5 * self.E / (1.0 + self.nu)

    def evaluate(self, X: np.ndarray, inverse: bool = False) -> np.ndarray:
        E, nu = self.E, self.nu

        if self.nsd == 1:
            diag = np.array([E, E, self.G])
            return np.diag(1.0 / diag if inverse else diag)

        if inverse:
            return np.array([[1.0, -nu, 0.0],
                             [-nu, 1.0, 0.0],
                             [0.0, 0.0, 2.0 * (1.0 + nu)]]) / E

        return E / (1.0 - nu * nu) * np.array([[1.0, nu, 0.0],
                                               [nu, 1.0, 0.0],
                                               [0.0, 0.0, 0.5 * (1.0 - nu)]])

    def get_mass_density(self, X: np.ndarray) -> float:
        return self.rho

    def print_log(self) -> None:
        logger.info("LinearIsotropic: E = %g, nu = %g, rho = %g", self.E, self.nu, self.rho)


class ConstantMaterial(Material):
    """
    Material with a prescribed, spatially constant constitutive operator.

    Useful for anisotropic laminates where C is computed elsewhere.
    """

    def __init__(self, C: np.ndarray, rho: float = 0.0):
        C = np.asarray(C, dtype=float)
        if C.shape != (3, 3):
            raise ValueError(f"Constitutive operator must be 3x3, got {C.shape}")
        if not np.allclose(C, C.T):
            raise ValueError("Constitutive operator must be symmetric")
        self.C = C
        self.rho = rho
        self._Cinv = np.linalg.inv(C)

    def evaluate(self, X: np.ndarray, inverse: bool = False) -> np.ndarray:
        return (self._Cinv if inverse else self.C).copy()

    def get_mass_density(self, X: np.ndarray) -> float:
        return self.rho

    def print_log(self) -> None:
        logger.info("ConstantMaterial: rho = %g, C =\n%s", self.rho, self.C)
