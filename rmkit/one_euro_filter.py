"""The One Euro adaptive low-pass filter."""

from __future__ import annotations

from rmkit.mathutil import alpha


class OneEuroFilter:
    """Low-pass filter whose cutoff rises with the signal's speed."""

    def __init__(self, freq: float, mincutoff: float, beta: float, dcutoff: float) -> None:
        self.freq = freq
        self.mincutoff = mincutoff
        self.beta = beta
        self.dcutoff = dcutoff
        self._first_time = True
        self._x_prev = 0.0
        self._hatx_prev = 0.0
        self._dhatx_prev = 0.0
        self._filtered = 0.0

    def input(self, value: float) -> None:
        dx = 0.0 if self._first_time else (value - self._x_prev) * self.freq
        if self._first_time:
            self._dhatx_prev = dx
        a_d = alpha(self.dcutoff, self.freq)
        edx = a_d * dx + (1 - a_d) * self._dhatx_prev
        self._dhatx_prev = edx
        cutoff = self.mincutoff + self.beta * abs(edx)

        if self._first_time:
            self._hatx_prev = value
        a = alpha(cutoff, self.freq)
        self._filtered = a * value + (1 - a) * self._hatx_prev
        self._hatx_prev = self._filtered
        self._first_time = False

    def output(self) -> float:
        return self._filtered

    def clear(self) -> None:
        self._first_time = True
        self._x_prev = 0.0
        self._hatx_prev = 0.0
        self._dhatx_prev = 0.0