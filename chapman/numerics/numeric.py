from __future__ import annotations

import logging
import math
import warnings
from typing import Callable, Tuple

import numpy as np
from numpy.polynomial import polynomial as P
from scipy import linalg
from scipy.sparse import linalg as sparse_linalg

from .. import constants
from ..exceptions import ConvergenceError, ModelParameterException, SingularMatrixError

logger = logging.getLogger(__name__)

LUFactors = Tuple[np.ndarray, np.ndarray]


def poly_eval(x, coeffs: np.ndarray):
    """Evaluate c[0] + c[1]*x + c[2]*x**2 + ... (ascending coefficients)."""
    return P.polyval(x, coeffs)


def log_temperature_powers(log_t: float, size: int = 5) -> np.ndarray:
    """Return the vector [1, ln T, (ln T)^2, ...] of the given length."""
    return np.power(log_t, np.arange(size, dtype=float))


def polyfit_relative(x: np.ndarray, y: np.ndarray, degree: int) -> np.ndarray:
    """Least-squares fit in x with residuals weighted by 1/|y|, ascending coefficients."""
    y = np.asarray(y, dtype=float)
    return P.polyfit(np.asarray(x, dtype=float), y, degree, w=1.0 / np.abs(y))


def max_relative_error(x: np.ndarray, y: np.ndarray, coeffs: np.ndarray) -> float:
    y = np.asarray(y, dtype=float)
    return float(np.max(np.abs(P.polyval(x, coeffs) - y) / np.abs(y)))


def log_derivative(
    func: Callable[[float], float],
    log_x: float,
    step: float = constants.K_CONST_OMEGA_D_STEP_SIZE,
) -> float:
    """Central-difference estimate of d ln f / d ln x at x = exp(log_x)."""
    upper = func(math.exp(log_x + step))
    lower = func(math.exp(log_x - step))
    return (math.log(upper) - math.log(lower)) / (2.0 * step)


def lu_factor_checked(matrix: np.ndarray, *, overwrite: bool = False, what: str = "matrix") -> LUFactors:
    """
    LU factorisation with partial pivoting that raises SingularMatrixError on a
    zero pivot instead of returning a factorisation that cannot be used.

    With overwrite=True and a Fortran-ordered float64 input the factors are
    written over the input matrix.
    """
    with warnings.catch_warnings():
        # scipy only warns on an exactly singular factor; reported below instead
        warnings.simplefilter("ignore", linalg.LinAlgWarning)
        lu, piv = linalg.lu_factor(matrix, overwrite_a=overwrite, check_finite=False)
    zero_pivots = np.flatnonzero(np.diag(lu) == 0.0)
    if zero_pivots.size:
        raise SingularMatrixError(f"Error in factorising the {what}: pivot {int(zero_pivots[0])} is exactly zero")
    return lu, piv


def lu_solve_factored(factors: LUFactors, rhs: np.ndarray) -> np.ndarray:
    return linalg.lu_solve(factors, rhs, check_finite=False)


def invert_checked(matrix: np.ndarray, *, what: str = "matrix") -> np.ndarray:
    try:
        with warnings.catch_warnings():
            # near-singular blocks are expected in the pure-species limit
            warnings.simplefilter("ignore", linalg.LinAlgWarning)
            return linalg.inv(matrix, check_finite=False)
    except linalg.LinAlgError as exc:
        raise SingularMatrixError(f"Error in inverting the {what}: {exc}") from exc


def gmres_solve(
    matvec: Callable[[np.ndarray], np.ndarray],
    rhs: np.ndarray,
    x0: np.ndarray,
    *,
    max_iterations: int,
    tolerance: float,
) -> Tuple[np.ndarray, int]:
    """
    Solve A x = rhs with GMRES for the operator given by ``matvec``.

    A single restart cycle of length ``max_iterations`` is run, so the number of
    inner iterations never exceeds ``max_iterations``. Convergence means
    ||rhs - A x|| <= tolerance * ||rhs||; otherwise ConvergenceError is raised.
    Returns the solution and the number of iterations used.
    """
    n = rhs.size
    operator = sparse_linalg.LinearOperator((n, n), matvec=matvec, dtype=float)
    iterations = 0

    def count(_residual: float) -> None:
        nonlocal iterations
        iterations += 1

    x, info = sparse_linalg.gmres(
        operator,
        rhs,
        x0=x0,
        rtol=tolerance,
        atol=0.0,
        restart=max_iterations,
        maxiter=1,
        callback=count,
        callback_type="pr_norm",
    )
    if info < 0:
        raise ModelParameterException(f"GMRES received illegal input or broke down (info={info})")
    if info > 0:
        rhs_norm = float(np.linalg.norm(rhs))
        residual = float(np.linalg.norm(rhs - matvec(x))) / rhs_norm if rhs_norm else float("inf")
        raise ConvergenceError(
            f"GMRES did not converge in {max_iterations} iterations (relative residual {residual:.3e}, tolerance {tolerance:.3e})",
            iterations=iterations,
            residual=residual,
        )
    logger.debug("GMRES converged in %d iterations", iterations)
    return x, iterations
