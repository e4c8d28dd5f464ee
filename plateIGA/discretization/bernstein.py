"""
Bernstein polynomial basis on the reference element [0,1]^d.

Kirchhoff-Love plates need the basis functions up to second
derivatives. The univariate derivatives follow from the degree
elevation identities

    d/dt   B_{i,p} = p (B_{i-1,p-1} - B_{i,p-1})
    d2/dt2 B_{i,p} = p (p-1) (B_{i-2,p-2} - 2 B_{i-1,p-2} + B_{i,p-2})

with B_{j,q} = 0 for j outside [0, q].

Tensor-product ordering: the first parametric direction runs fastest,
B_{i,j}(xi, eta) = B_i(xi) * B_j(eta) is stored at index j*(p_xi+1) + i.
"""

import numpy as np
from typing import Tuple


def _bernstein_basis(p: int, t: float) -> np.ndarray:
    """
    Evaluate all Bernstein polynomials of degree p at t in [0,1].

    Returns:
        Array of shape (p+1,) with B_{0,p}(t), ..., B_{p,p}(t)
    """
    if p < 0:
        raise ValueError(f"Negative polynomial degree: {p}")

    B = np.zeros(p + 1)
    B[0] = 1.0

    # de Casteljau-like recurrence for numerical stability
    for j in range(1, p + 1):
        saved = 0.0
        for k in range(j):
            temp = B[k]
            B[k] = saved + (1.0 - t) * temp
            saved = t * temp
        B[j] = saved

    return B


def _padded(values: np.ndarray, n: int, shift: int) -> np.ndarray:
    """Place values at offset shift in a zero array of length n."""
    out = np.zeros(n)
    out[shift:shift + len(values)] = values
    return out


def bernstein_basis_ders(p: int, t: float, n_ders: int = 2) -> np.ndarray:
    """
    Evaluate Bernstein polynomials and their derivatives at t.

    Parameters:
        p: Polynomial degree
        t: Parameter value in [0, 1]
        n_ders: Number of derivatives to compute (0, 1 or 2)

    Returns:
        Array of shape (n_ders+1, p+1) where result[k, i] is
        d^k/dt^k B_{i,p}(t)
    """
    if n_ders > 2:
        raise ValueError("Only derivatives up to second order are supported")

    n = p + 1
    result = np.zeros((n_ders + 1, n))
    result[0] = _bernstein_basis(p, t)

    if n_ders >= 1 and p >= 1:
        lower = _bernstein_basis(p - 1, t)
        result[1] = p * (_padded(lower, n, 1) - _padded(lower, n, 0))

    if n_ders >= 2 and p >= 2:
        lower = _bernstein_basis(p - 2, t)
        result[2] = p * (p - 1) * (_padded(lower, n, 2)
                                   - 2.0 * _padded(lower, n, 1)
                                   + _padded(lower, n, 0))

    return result


class BernsteinBasis:
    """
    Tensor-product Bernstein basis on [0,1]^d for d = 1 or 2.
    """

    def __init__(self, degrees: Tuple[int, ...]):
        self.degrees = tuple(degrees)
        self.n_dim = len(self.degrees)

    @property
    def n_basis(self) -> int:
        """Total number of tensor-product basis functions."""
        return int(np.prod([p + 1 for p in self.degrees]))

    def eval(self, xi: Tuple[float, ...]) -> np.ndarray:
        """Evaluate all basis functions at a point, shape (n_basis,)."""
        return self.eval_ders(xi, n_ders=0)[0]

    def eval_ders(self, xi: Tuple[float, ...],
                  n_ders: int = 2) -> Tuple[np.ndarray, ...]:
        """
        Evaluate the basis and its parametric derivatives at a point.

        Parameters:
            xi: Parameter values in [0,1]^d
            n_ders: Highest derivative order (0, 1 or 2)

        Returns:
            (B,) for n_ders=0, (B, dB) for n_ders=1 and (B, dB, d2B)
            for n_ders=2, with shapes (n,), (n, d) and (n, d, d).
        """
        ders_1d = [bernstein_basis_ders(p, xi[d], n_ders)
                   for d, p in enumerate(self.degrees)]

        def tensor(orders):
            # orders[d] is the derivative order in direction d
            result = ders_1d[-1][orders[-1]]
            for d in range(self.n_dim - 2, -1, -1):
                result = np.outer(result, ders_1d[d][orders[d]]).ravel()
            return result

        B = tensor([0] * self.n_dim)
        if n_ders == 0:
            return (B,)

        dB = np.zeros((len(B), self.n_dim))
        for k in range(self.n_dim):
            orders = [0] * self.n_dim
            orders[k] = 1
            dB[:, k] = tensor(orders)
        if n_ders == 1:
            return B, dB

        d2B = np.zeros((len(B), self.n_dim, self.n_dim))
        for k in range(self.n_dim):
            for l in range(k, self.n_dim):
                orders = [0] * self.n_dim
                orders[k] += 1
                orders[l] += 1
                d2B[:, k, l] = d2B[:, l, k] = tensor(orders)

        return B, dB, d2B
