"""Piecewise-linear interpolation over a sorted table of points."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rmkit.params import as_float


class LinearInterp:
    """Maps an input to an output by linear interpolation between points.

    Inputs outside the table are clamped to the first or last output.
    """

    def __init__(self) -> None:
        self._inputs: list[float] = []
        self._outputs: list[float] = []

    def init(self, config: Iterable[Sequence[float]]) -> None:
        """Append ``[x, y]`` points; abscissas must not decrease."""
        if isinstance(config, (str, bytes)) or not isinstance(config, Iterable):
            raise TypeError("config must be a list of [x, y] pairs")
        for point in config:
            if isinstance(point, (str, bytes)) or not isinstance(point, Sequence) or len(point) != 2:
                raise ValueError(f"each point must be an [x, y] pair, got {point!r}")
            x, y = as_float(point[0]), as_float(point[1])
            if self._inputs and x < self._inputs[-1]:
                raise ValueError(
                    "points must be sorted by abscissa from smallest to largest: "
                    f"{x} < {self._inputs[-1]}"
                )
            self._inputs.append(x)
            self._outputs.append(y)

    def output(self, input_value: float) -> float:
        """Return the interpolated output for ``input_value``."""
        if not self._inputs:
            raise ValueError("no interpolation points configured")
        if input_value >= self._inputs[-1]:
            return self._outputs[-1]
        if input_value <= self._inputs[0]:
            return self._outputs[0]
        pairs = zip(
            zip(self._inputs, self._outputs),
            zip(self._inputs[1:], self._outputs[1:]),
        )
        for (x0, y0), (x1, y1) in pairs:
            if x0 <= input_value <= x1:
                return y0 + (y1 - y0) / (x1 - x0) * (input_value - x0)
        raise ValueError(f"cannot interpolate input {input_value!r}")