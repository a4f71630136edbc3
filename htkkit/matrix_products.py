"""Matrix-matrix products with explicit dimension checks."""

from __future__ import annotations

import numpy as np


class DimensionError(ValueError):
    """Raised when matrix dimensions do not allow the requested product."""


def _as_matrix(m) -> np.ndarray:
    array = np.asarray(m, dtype=np.float64)
    if array.ndim != 2:
        raise DimensionError(f"expected a two-dimensional matrix, got {array.ndim} dimensions")
    return array


def _shape(m: np.ndarray) -> str:
    return f"{m.shape[0]}x{m.shape[1]}"


def prod(a, b) -> np.ndarray:
    """Return the product A * B."""
    a, b = _as_matrix(a), _as_matrix(b)
    if a.shape[1] != b.shape[0]:
        raise DimensionError(
            "The dimensions of the matrices A and B are inadequate for matrix "
            f"multiplication. The dimensions of A and B are {_shape(a)} and {_shape(b)}"
        )
    return a @ b


def t_prod(a, b) -> np.ndarray:
    """Return the product of the transpose of A with B: A^T * B."""
    a, b = _as_matrix(a), _as_matrix(b)
    if a.shape[0] != b.shape[0]:
        raise DimensionError(
            "The dimensions of the matrices A and B are inadequate for matrix "
            "multiplication with A transposed. The dimensions of A and B are "
            f"{_shape(a)} and {_shape(b)}"
        )
    return a.T @ b


def prod_t(a, b) -> np.ndarray:
    """Return the product of A with the transpose of B: A * B^T."""
    a, b = _as_matrix(a), _as_matrix(b)
    if a.shape[1] != b.shape[1]:
        raise DimensionError(
            "The dimensions of the matrices A and B are inadequate for matrix "
            "multiplication with B transposed. The dimensions of A and B are "
            f"{_shape(a)} and {_shape(b)}"
        )
    return a @ b.T