"""
Navier solution of a simply supported rectangular plate.

For the doubly sinusoidal load q = q0 sin(pi x/a) sin(pi y/b) on
[0,a]x[0,b], the Navier series reduces to its first term:

    w = W sin(pi x/a) sin(pi y/b),   W = q0 / (D pi^4 (1/a^2 + 1/b^2)^2)

The bending moments follow the sign convention of the plate integrand,
m = D [w,xx + nu w,yy,  w,yy + nu w,xx,  (1-nu) w,xy].
"""

import numpy as np

from ...functions import SineLoad


class NavierPlate:
    """
    Analytical solution of the sinusoidally loaded, simply supported plate.

    Instances are callable and return the bending moments, so they can
    be passed directly as the analytical field of the norm integrand.

    Parameters:
        a, b: Plate side lengths
        thickness: Plate thickness
        E: Young's modulus
        nu: Poisson's ratio
        q0: Load amplitude
    """

    def __init__(self, a: float = 1.0, b: float = 1.0, thickness: float = 0.1,
                 E: float = 2.1e11, nu: float = 0.3, q0: float = 1.0):
        self.a = a
        self.b = b
        self.thickness = thickness
        self.E = E
        self.nu = nu
        self.q0 = q0

        self.D = E * thickness ** 3 / (12.0 * (1.0 - nu * nu))
        self.W = q0 / (self.D * np.pi ** 4 * (1.0 / a ** 2 + 1.0 / b ** 2) ** 2)

    @property
    def pressure(self) -> SineLoad:
        """The load field, usable as the pressure of the plate integrand."""
        return SineLoad(self.q0, self.a, self.b)

    def deflection(self, X: np.ndarray) -> float:
        sx, sy = np.sin(np.pi * X[0] / self.a), np.sin(np.pi * X[1] / self.b)
        return self.W * sx * sy

    def moments(self, X: np.ndarray) -> np.ndarray:
        """Bending moments [m_xx, m_yy, m_xy] at X."""
        kx, ky = np.pi / self.a, np.pi / self.b
        sx, sy = np.sin(kx * X[0]), np.sin(ky * X[1])
        cx, cy = np.cos(kx * X[0]), np.cos(ky * X[1])

        w_xx = -kx * kx * self.W * sx * sy
        w_yy = -ky * ky * self.W * sx * sy
        w_xy = kx * ky * self.W * cx * cy

        return self.D * np.array([w_xx + self.nu * w_yy,
                                  w_yy + self.nu * w_xx,
                                  (1.0 - self.nu) * w_xy])

    def __call__(self, X: np.ndarray) -> np.ndarray:
        return self.moments(X)
