"""Numeric helpers: polynomial fits and checked dense/iterative linear solves."""
from __future__ import annotations

from .numeric import (
    gmres_solve,
    invert_checked,
    log_derivative,
    log_temperature_powers,
    lu_factor_checked,
    lu_solve_factored,
    max_relative_error,
    poly_eval,
    polyfit_relative,
)

__all__ = [
    "gmres_solve",
    "invert_checked",
    "log_derivative",
    "log_temperature_powers",
    "lu_factor_checked",
    "lu_solve_factored",
    "max_relative_error",
    "poly_eval",
    "polyfit_relative",
]
