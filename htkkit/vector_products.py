"""Matrix-vector and vector-matrix products with explicit dimension checks."""

from __future__ import annotations

import numpy as np

from .matrix_products import DimensionError


def _matrix(m) -> np.ndarray:
    array = np.asarray(m, dtype=np.float64)
    if array.ndim != 2:
        raise DimensionError(f"expected a two-dimensional matrix, got {array.ndim} dimensions")
    return array


def _vector(v) -> np.ndarray:
    array = np.asarray(v, dtype=np.float64)
    if array.ndim != 1:
        raise DimensionError(f"expected a one-dimensional vector, got {array.ndim} dimensions")
    return array


def _check_mat_vec(m: np.ndarray, v: np.ndarray, outcome_size: int | None, name: str) -> None:
    height, width = m.shape
    if width != v.size or (outcome_size is not None and height != outcome_size):
        sizes = f"{v.size}" if outcome_size is None else f"{outcome_size} and {v.size}"
        raise DimensionError(
            f"When calling {name}, the dimensions of M must equal the sizes of "
            f"outcome and v respectively. In this case, the dimensions of M are "
            f"{height}x{width} and the sizes of outcome and v are {sizes}"
        )


def _check_vec_mat(v: np.ndarray, m: np.ndarray, outcome_size: int | None, name: str) -> None:
    height, width = m.shape
    if height != v.size or (outcome_size is not None and width != outcome_size):
        sizes = f"{v.size}" if outcome_size is None else f"{v.size} and {outcome_size}"
        raise DimensionError(
            f"When calling {name}, the dimensions of M must equal the sizes of "
            f"v and outcome respectively. In this case, the dimensions of M are "
            f"{height}x{width} and the sizes of v and outcome are {sizes}"
        )


def mat_vec(m, v) -> np.ndarray:
    """Return the product M * v."""
    m, v = _matrix(m), _vector(v)
    _check_mat_vec(m, v, None, "prod(M,v)")
    return m @ v


def vec_mat(v, m) -> np.ndarray:
    """Return the product v * M."""
    v, m = _vector(v), _matrix(m)
    _check_vec_mat(v, m, None, "prod(v,M)")
    return v @ m


def add_mat_vec(outcome, m, v) -> np.ndarray:
    """Return outcome + M * v as a new vector."""
    outcome, m, v = _vector(outcome), _matrix(m), _vector(v)
    _check_mat_vec(m, v, outcome.size, "add_prod(M,v,outcome)")
    return outcome + m @ v


def add_vec_mat(outcome, v, m) -> np.ndarray:
    """Return outcome + v * M as a new vector."""
    outcome, v, m = _vector(outcome), _vector(v), _matrix(m)
    _check_vec_mat(v, m, outcome.size, "add_prod(v,M,outcome)")
    return outcome + v @ m


def subtract_mat_vec(outcome, m, v) -> np.ndarray:
    """Return outcome - M * v as a new vector."""
    outcome, m, v = _vector(outcome), _matrix(m), _vector(v)
    _check_mat_vec(m, v, outcome.size, "subtract_prod(M,v,outcome)")
    return outcome - m @ v


def subtract_vec_mat(outcome, v, m) -> np.ndarray:
    """Return outcome - v * M as a new vector."""
    outcome, v, m = _vector(outcome), _vector(v), _matrix(m)
    _check_vec_mat(v, m, outcome.size, "subtract_prod(v,M,outcome)")
    return outcome - v @ m