"""
Spatial field capabilities used by the integrands.

Any callable taking the Cartesian coordinates X (array of length 3) can
serve as a field: pressure fields return a scalar, analytical
stress-resultant fields return a vector [m_xx, m_yy, m_xy]. The classes
here cover the common cases.

Local coordinate systems provide transform(X), a 3x3 matrix whose rows
are the local base vectors expressed in global coordinates.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Callable, Sequence


class ConstantFunc:
    """Spatially constant scalar field."""

    def __init__(self, value: float):
        self.value = float(value)

    def __call__(self, X: np.ndarray) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantFunc({self.value})"


class SineLoad:
    """
    Doubly sinusoidal load q0 sin(pi x/a) sin(pi y/b) on [0,a]x[0,b].
    """

    def __init__(self, q0: float, a: float, b: float):
        self.q0 = q0
        self.a = a
        self.b = b

    def __call__(self, X: np.ndarray) -> float:
        return self.q0 * np.sin(np.pi * X[0] / self.a) * np.sin(np.pi * X[1] / self.b)


class ConstantVectorFunc:
    """Spatially constant vector field, e.g. a uniform moment distribution."""

    def __init__(self, values: Sequence[float]):
        self.values = np.asarray(values, dtype=float)

    def __call__(self, X: np.ndarray) -> np.ndarray:
        return self.values.copy()


class LocalSystem(ABC):
    """Local coordinate system for result output."""

    @abstractmethod
    def transform(self, X: np.ndarray) -> np.ndarray:
        """Return the 3x3 global-to-local rotation matrix at X."""


class PlanarLocalSystem(LocalSystem):
    """
    Local system rotated by a constant angle about the global z-axis.

    Parameters:
        angle: Rotation angle in degrees, measured from the global x-axis
    """

    def __init__(self, angle: float = 0.0):
        self.angle = angle

    def transform(self, X: np.ndarray) -> np.ndarray:
        phi = np.radians(self.angle)
        c, s = np.cos(phi), np.sin(phi)
        return np.array([[c, s, 0.0],
                         [-s, c, 0.0],
                         [0.0, 0.0, 1.0]])


class PolarLocalSystem(LocalSystem):
    """
    Local system with the first axis pointing radially from a centre.

    Used for circular plates, where the radial and tangential moments
    are the quantities of interest.
    """

    def __init__(self, centre: Sequence[float] = (0.0, 0.0)):
        self.centre = np.asarray(centre, dtype=float)

    def transform(self, X: np.ndarray) -> np.ndarray:
        d = np.asarray(X[:2], dtype=float) - self.centre
        r = np.hypot(d[0], d[1])
        if r == 0.0:
            return np.eye(3)
        c, s = d / r
        return np.array([[c, s, 0.0],
                         [-s, c, 0.0],
                         [0.0, 0.0, 1.0]])


def as_field(value) -> Callable[[np.ndarray], float]:
    """Wrap a number as ConstantFunc; return callables unchanged."""
    if callable(value):
        return value
    return ConstantFunc(value)
