"""Linear Kalman filter over numpy arrays."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike


def _matrix(value: ArrayLike, name: str) -> np.ndarray:
    m = np.atleast_2d(np.asarray(value, dtype=float))
    if m.ndim != 2:
        raise ValueError(f"{name} must be a 2-D matrix")
    return m


def _vector(value: ArrayLike) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(-1)


class KalmanFilter:
    """Discrete Kalman filter ``x' = A x + B u``, ``z = H x``.

    The filter does nothing until :meth:`clear` sets its initial state.
    """

    def __init__(self, a: ArrayLike, b: ArrayLike, h: ArrayLike, q: ArrayLike, r: ArrayLike) -> None:
        self._a = _matrix(a, "A")
        self._b = _matrix(b, "B")
        self._h = _matrix(h, "H")
        self._q = _matrix(q, "Q")
        self._r = _matrix(r, "R")
        n = self._a.shape[0]
        m = self._h.shape[0]
        if self._a.shape != (n, n):
            raise ValueError("A should be a square matrix")
        if self._h.shape[1] != n:
            raise ValueError("H columns should be equal to A columns")
        if self._b.shape[0] != n:
            raise ValueError("B rows should be equal to A columns")
        if self._q.shape != (n, n):
            raise ValueError("the rows and columns of Q should be equal to the columns of A")
        if self._r.shape != (m, m):
            raise ValueError("the rows and columns of R should be equal to the rows of H")
        self._n = n
        self._m = m
        self._x = np.zeros(n)
        self._p = np.zeros((n, n))
        self._p_new = np.zeros((n, n))
        self._k = np.zeros((n, m))
        self._i = np.eye(n)
        self._inited = False

    def clear(self, x: ArrayLike) -> None:
        """Set the state to ``x`` and reset the covariances."""
        x = _vector(x)
        if x.shape != (self._n,):
            raise ValueError(f"state must have {self._n} elements")
        self._x = x.copy()
        self._inited = True
        self._k = np.zeros((self._n, self._m))
        self._p = np.zeros((self._n, self._n))
        self._p_new = np.zeros((self._n, self._n))

    def update(self, z: ArrayLike, r: Optional[ArrayLike] = None) -> None:
        """Correct the state with measurement ``z``; ``r`` replaces R if given."""
        if not self._inited:
            return
        if r is not None:
            r = _matrix(r, "R")
            if r.shape != (self._m, self._m):
                raise ValueError("the rows and columns of R should be equal to the rows of H")
            self._r = r
        z = _vector(z)
        h = self._h
        s = h @ self._p_new @ h.T + self._r
        self._k = self._p_new @ h.T @ np.linalg.inv(s)
        self._x = self._x + self._k @ (z - h @ self._x)
        self._p = (self._i - self._k @ h) @ self._p_new

    def predict(self, u: ArrayLike, q: Optional[ArrayLike] = None) -> None:
        """Propagate the state with input ``u``; ``q`` replaces Q if given."""
        if not self._inited:
            return
        if q is not None:
            q = _matrix(q, "Q")
            if q.shape != (self._n, self._n):
                raise ValueError("the rows and columns of Q should be equal to the columns of A")
            self._q = q
        u = _vector(u)
        self._x = self._a @ self._x + self._b @ u
        self._p_new = self._a @ self._p @ self._a.T + self._q

    def state(self) -> np.ndarray:
        """Return a copy of the current state estimate."""
        return self._x.copy()