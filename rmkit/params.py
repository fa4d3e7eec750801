"""Helpers for reading numeric values out of parameter trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union


def get_param(params: Mapping, name: str, default: Any) -> Any:
    """Return ``params[name]``, or ``default`` when the name is absent."""
    return params.get(name, default)


def as_float(value: Any) -> float:
    """Return a numeric parameter as float; integers are converted."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


def get_float(value: Any, field: Union[int, str], default: Optional[float] = None) -> float:
    """Read a numeric field from a list (by index) or a mapping (by key).

    For a mapping a missing key yields ``default``; if no default is given a
    ``KeyError`` is raised. The field, when present, must be numeric.
    """
    if isinstance(value, Mapping):
        if field in value:
            return as_float(value[field])
        if default is None:
            raise KeyError(field)
        return default
    return as_float(value[field])