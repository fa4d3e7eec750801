"""Continuous-time LQR gain via the Arimoto-Potter Riccati solution."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


def _matrix(value: ArrayLike) -> np.ndarray:
    return np.atleast_2d(np.asarray(value, dtype=float))


def solve_riccati_arimoto_potter(a: ArrayLike, b: ArrayLike, q: ArrayLike, r: ArrayLike) -> np.ndarray:
    """Solve the continuous algebraic Riccati equation for P."""
    a, b, q, r = (_matrix(m) for m in (a, b, q, r))
    n = a.shape[0]
    ham = np.block([[a, -b @ np.linalg.inv(r) @ b.T], [-q, -a.T]])
    eigenvalues, eigenvectors = np.linalg.eig(ham)
    stable = eigenvectors[:, eigenvalues.real < 0.0]
    if stable.shape[1] != n:
        raise ValueError("Hamiltonian matrix does not have enough stable eigenvalues")
    vs_1 = stable[:n, :]
    vs_2 = stable[n:, :]
    return (vs_2 @ np.linalg.inv(vs_1)).real


class Lqr:
    """Linear quadratic regulator for ``x' = A x + B u``."""

    def __init__(self, a: ArrayLike, b: ArrayLike, q: ArrayLike, r: ArrayLike) -> None:
        self._a, self._b, self._q, self._r = (_matrix(m) for m in (a, b, q, r))
        rows, cols = self._a.shape
        if rows != cols:
            raise ValueError("lqr: A should be square matrix")
        if self._b.shape[0] != rows:
            raise ValueError("lqr: B rows should be equal to A rows")
        if self._q.shape != self._a.shape:
            raise ValueError("lqr: The rows and columns of Q should be equal to A")
        inputs = self._b.shape[1]
        if self._r.shape != (inputs, inputs):
            raise ValueError("lqr: The rows and columns of R should be equal to the cols of B")
        self._k = np.zeros((inputs, rows))

    def compute_k(self) -> bool:
        """Compute the gain; return False if Q or R are not admissible."""
        if np.any(np.linalg.eigvalsh(self._q) < 0):
            return False
        if np.any(np.linalg.eigvalsh(self._r) <= 0):
            return False
        if not (np.array_equal(self._q, self._q.T) and np.array_equal(self._r, self._r.T)):
            return False
        p = solve_riccati_arimoto_potter(self._a, self._b, self._q, self._r)
        self._k = np.linalg.inv(self._r) @ (self._b.T @ p.T)
        return True

    def k(self) -> np.ndarray:
        """Return a copy of the current feedback gain."""
        return self._k.copy()