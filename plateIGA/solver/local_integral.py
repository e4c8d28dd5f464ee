"""
Element-level accumulators.

Integrands never write directly into global arrays. Each element gets
its own local integral object, and every integration point adds its
contribution to it. Matrices and vectors are addressed by 1-based
handles; a handle of zero means "not requested" and is silently
ignored, which lets an integrand switch contributions on and off
through its solution mode alone.

Since each element owns its accumulator, element loops may run
concurrently without locking.
"""

import numpy as np
from typing import List, Optional


class LocalIntegral:
    """Base class of all element accumulators."""


class ElmMats(LocalIntegral):
    """
    Element matrices and vectors of a linear problem.

    Attributes:
        A: Element matrices, A[h-1] is addressed by handle h
        b: Element vectors, b[h-1] is addressed by handle h
        rhs_only: True if only vectors are integrated (boundary pass)
    """

    def __init__(self, n_dof: int, n_matrices: int = 1, n_vectors: int = 1,
                 rhs_only: bool = False):
        self.n_dof = n_dof
        self.A: List[np.ndarray] = [np.zeros((n_dof, n_dof)) for _ in range(n_matrices)]
        self.b: List[np.ndarray] = [np.zeros(n_dof) for _ in range(n_vectors)]
        self.rhs_only = rhs_only

    def has_matrix(self, handle: int) -> bool:
        return 0 < handle <= len(self.A)

    def has_vector(self, handle: int) -> bool:
        return 0 < handle <= len(self.b)

    def add_to_matrix(self, handle: int, contribution: np.ndarray) -> None:
        """Add a contribution to matrix number handle (1-based)."""
        if self.has_matrix(handle):
            self.A[handle - 1] += contribution

    def add_to_vector(self, handle: int, contribution: np.ndarray) -> None:
        """Add a contribution to vector number handle (1-based)."""
        if self.has_vector(handle):
            self.b[handle - 1] += contribution

    def matrix(self, handle: int) -> Optional[np.ndarray]:
        return self.A[handle - 1] if self.has_matrix(handle) else None

    def vector(self, handle: int) -> Optional[np.ndarray]:
        return self.b[handle - 1] if self.has_vector(handle) else None


class ElmNorm(LocalIntegral):
    """
    Element norm values.

    The norm quantities are stored in one flat array; the norm integrand
    knows how the entries are grouped.

    Attributes:
        values: Norm quantities, accumulated additively
        vec: Element solution vectors the norms are evaluated for
        psol: Recovered (projected) nodal resultants, shape (nen, ncomp)
    """

    def __init__(self, n_norms: int):
        self.values = np.zeros(n_norms)
        self.vec: List[np.ndarray] = []
        self.psol: Optional[np.ndarray] = None

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i: int) -> float:
        return self.values[i]

    def __setitem__(self, i: int, value: float) -> None:
        self.values[i] = value
