"""Coordinate-wise matrix arithmetic with explicit dimension checks."""

from __future__ import annotations

import numpy as np

from .matrix_products import DimensionError


def _matrix(m) -> np.ndarray:
    array = np.asarray(m, dtype=np.float64)
    if array.ndim != 2:
        raise DimensionError(f"expected a two-dimensional matrix, got {array.ndim} dimensions")
    return array


def _pair(a, b, operation: str) -> tuple[np.ndarray, np.ndarray]:
    a, b = _matrix(a), _matrix(b)
    if a.shape != b.shape:
        raise DimensionError(
            f"When calling {operation}(A,B), the dimensions of both matrices must be "
            f"equal. In this case, the dimensions of A and B are "
            f"{a.shape[0]}x{a.shape[1]} and {b.shape[0]}x{b.shape[1]}"
        )
    return a, b


def add(a, b) -> np.ndarray:
    """Return A + B."""
    a, b = _pair(a, b, "sum")
    return a + b


def diff(a, b) -> np.ndarray:
    """Return A - B."""
    a, b = _pair(a, b, "diff")
    return a - b


def coordwise_mult(a, b) -> np.ndarray:
    """Return the coordinate-wise product of A and B."""
    a, b = _pair(a, b, "coordwise_mult")
    return a * b


def coordwise_div(a, b) -> np.ndarray:
    """Return the coordinate-wise quotient A / B; B must have no zero entries."""
    a, b = _pair(a, b, "coordwise_div")
    if np.any(b == 0.0):
        raise ZeroDivisionError("Right hand matrix has zero elements. Divide by zero error")
    return a / b


def add_scalar(m, s: float) -> np.ndarray:
    """Return M with s added to every entry."""
    return _matrix(m) + float(s)


def subtract_scalar(m, s: float) -> np.ndarray:
    """Return M with s subtracted from every entry."""
    return _matrix(m) - float(s)


def scalar_minus(s: float, m) -> np.ndarray:
    """Return the matrix whose entries are s minus the entries of M."""
    return float(s) - _matrix(m)


def multiply_scalar(m, s: float) -> np.ndarray:
    """Return M with every entry multiplied by s."""
    return _matrix(m) * float(s)


def divide_scalar(m, s: float) -> np.ndarray:
    """Return M with every entry divided by s."""
    if float(s) == 0.0:
        raise ZeroDivisionError("Divide by zero error")
    return _matrix(m) / float(s)


def scalar_divide(s: float, m) -> np.ndarray:
    """Return the matrix whose entries are s divided by the entries of M."""
    m = _matrix(m)
    if np.any(m == 0.0):
        raise ZeroDivisionError("Divide by zero error")
    return float(s) / m