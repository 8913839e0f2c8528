from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .. import constants
from ..numerics import gmres_solve, invert_checked, lu_factor_checked, lu_solve_factored

logger = logging.getLogger(__name__)


@dataclass
class ThermalState:
    """Temperature-dependent inputs of the L-matrix blocks.

    ``bdiff`` holds unit-pressure binary diffusion coefficients whose diagonal
    is the self-diffusion coefficient 1.2 R T eta_k A*_kk / M_k.
    """

    T: float
    mw: np.ndarray
    bdiff: np.ndarray
    visc: np.ndarray
    astar: np.ndarray
    bstar: np.ndarray
    cstar: np.ndarray
    crot: np.ndarray
    rotrelax: np.ndarray
    cinternal: np.ndarray
    internal_modes: np.ndarray


class LMatrix:
    """
    The 3N x 3N system of the Chapman-Enskog thermal conductivity and
    thermal diffusion problem, stored in Fortran order so that the dense
    factorisation can work in place.

    Block (r, c) with r, c in {0, 1, 2} spans rows r*N..(r+1)*N and columns
    c*N..(c+1)*N. In the usual notation the blocks are L00,00 L00,10 L00,01
    (first block row), L10,00 L10,10 L10,01 and L01,00 L01,10 L01,01; L00,01
    and L01,00 are identically zero.
    """

    def __init__(self, n_species: int) -> None:
        self.n = n_species
        self.matrix = np.zeros((3 * n_species, 3 * n_species), order="F")
        self.b = np.zeros(3 * n_species)
        self.a = np.ones(3 * n_species)

    # ---------------- block evaluation ---------------- #
    def eval_l0000(self, T: float, x: np.ndarray, mw: np.ndarray, bdiff: np.ndarray) -> None:
        n = self.n
        L = self.matrix
        prefactor = 16.0 * T / 25.0
        for i in range(n):
            # the k = i term is excluded from the sum
            total = -x[i] / bdiff[i, i]
            for k in range(n):
                total += x[k] / bdiff[i, k]
            total /= mw[i]
            for j in range(n):
                L[i, j] = prefactor * x[j] * (mw[j] * total + x[i] / bdiff[i, j])
            L[i, i] = 0.0

    def eval_l0010(self, T: float, x: np.ndarray, mw: np.ndarray, bdiff: np.ndarray, cstar: np.ndarray) -> None:
        n = self.n
        L = self.matrix
        prefactor = 1.6 * T
        for j in range(n):
            total = 0.0
            for i in range(n):
                L[i, j + n] = (
                    -prefactor * x[i] * x[j] * mw[i] * (1.2 * cstar[j, i] - 1.0) / ((mw[j] + mw[i]) * bdiff[j, i])
                )
                total -= L[i, j + n]
            L[j, j + n] += total

    def eval_l1000(self) -> None:
        n = self.n
        self.matrix[n : 2 * n, :n] = self.matrix[:n, n : 2 * n].T

    def eval_l1010(self, x: np.ndarray, state: ThermalState) -> None:
        n = self.n
        L = self.matrix
        mw = state.mw
        five_over_3pi = 5.0 / (3.0 * constants.K_CONST_PI)
        prefactor = 16.0 * state.T / 25.0
        for j in range(n):
            constant1 = prefactor * x[j]
            wj_sq = mw[j] * mw[j]
            constant2 = 13.75 * wj_sq
            constant3 = state.crot[j] / state.rotrelax[j]
            constant4 = 7.5 * wj_sq
            total = 0.0
            for i in range(n):
                sum_w = mw[i] + mw[j]
                term1 = state.bdiff[i, j] * sum_w * sum_w
                term2 = (
                    4.0
                    * mw[j]
                    * state.astar[i, j]
                    * (1.0 + five_over_3pi * (constant3 + state.crot[i] / state.rotrelax[i]))
                )
                L[i + n, j + n] = (
                    constant1
                    * x[i]
                    * mw[i]
                    / (mw[j] * term1)
                    * (constant2 - 3.0 * wj_sq * state.bstar[i, j] - term2 * mw[j])
                )
                total += x[i] / term1 * (constant4 + mw[i] * mw[i] * (6.25 - 3.0 * state.bstar[i, j]) + term2 * mw[i])
            L[j + n, j + n] -= total * constant1

    def eval_l1001(self, x: np.ndarray, state: ThermalState) -> None:
        n = self.n
        L = self.matrix
        mw = state.mw
        prefactor = 32.0 * state.T / (5.0 * constants.K_CONST_PI)
        for j in range(n):
            if not state.internal_modes[j]:
                L[n : 2 * n, j + 2 * n] = 0.0
                continue
            constant = prefactor * mw[j] * x[j] * state.crot[j] / (state.cinternal[j] * state.rotrelax[j])
            total = 0.0
            for i in range(n):
                L[i + n, j + 2 * n] = constant * state.astar[j, i] * x[i] / ((mw[j] + mw[i]) * state.bdiff[j, i])
                total += L[i + n, j + 2 * n]
            L[j + n, j + 2 * n] += total

    def eval_l0110(self) -> None:
        n = self.n
        self.matrix[2 * n :, n : 2 * n] = self.matrix[n : 2 * n, 2 * n :].T

    def eval_l0101(self, x: np.ndarray, state: ThermalState) -> None:
        n = self.n
        L = self.matrix
        mw = state.mw
        eight_over_pi = 8.0 / constants.K_CONST_PI
        five_pi = 5.0 * constants.K_CONST_PI
        L[2 * n :, 2 * n :] = 0.0
        for i in range(n):
            if not state.internal_modes[i]:
                L[i + 2 * n, i + 2 * n] = 1.0
                continue
            cint = state.cinternal[i]
            constant1 = 4.0 * state.T * x[i] / cint
            constant2 = 12.0 * mw[i] * state.crot[i] / (five_pi * cint * state.rotrelax[i])
            total = 0.0
            for k in range(n):
                total += x[k] / state.bdiff[i, k]
                if k != i:
                    total += x[k] * state.astar[i, k] * constant2 / (mw[k] * state.bdiff[i, k])
            L[i + 2 * n, i + 2 * n] = (
                -eight_over_pi
                * mw[i]
                * x[i]
                * x[i]
                * state.crot[i]
                / (cint * cint * constants.K_CONST_R * state.visc[i] * state.rotrelax[i])
                - constant1 * total
            )

    def eval_zero_blocks(self) -> None:
        n = self.n
        self.matrix[:n, 2 * n :] = 0.0
        self.matrix[2 * n :, :n] = 0.0

    def set_rhs(self, x: np.ndarray, internal_modes: np.ndarray) -> None:
        n = self.n
        self.b[:n] = 0.0
        self.b[n : 2 * n] = x
        self.b[2 * n :] = np.where(internal_modes, x, 0.0)

    def assemble(self, x: np.ndarray, state: ThermalState) -> None:
        self.set_rhs(x, state.internal_modes)
        self.eval_l0000(state.T, x, state.mw, state.bdiff)
        self.eval_l0010(state.T, x, state.mw, state.bdiff, state.cstar)
        self.eval_zero_blocks()
        self.eval_l1000()
        self.eval_l1010(x, state)
        self.eval_l1001(x, state)
        self.eval_l0110()
        self.eval_l0101(x, state)

    # ---------------- products and solves ---------------- #
    def mult(self, v: np.ndarray) -> np.ndarray:
        """Product with the assembled matrix using only its seven non-zero blocks."""
        n = self.n
        L = self.matrix
        v = np.ravel(v)
        prod = np.empty(3 * n)
        prod[:n] = L[:n, : 2 * n] @ v[: 2 * n]
        prod[n : 2 * n] = L[n : 2 * n, :] @ v
        prod[2 * n :] = L[2 * n :, n : 2 * n] @ v[n : 2 * n] + np.diagonal(L)[2 * n :] * v[2 * n :]
        return prod

    def solve_direct(self) -> np.ndarray:
        """LU solve; the matrix storage is overwritten by its factors."""
        factors = lu_factor_checked(self.matrix, overwrite=True, what="L matrix")
        self.a = lu_solve_factored(factors, self.b)
        logger.debug("Solved the %dx%d L matrix by LU factorisation", 3 * self.n, 3 * self.n)
        return self.a

    def solve_iterative(self, max_iterations: int, tolerance: float) -> np.ndarray:
        """GMRES from the previous solution; the matrix is left untouched."""
        a, iterations = gmres_solve(
            self.mult,
            self.b,
            self.a.copy(),
            max_iterations=max_iterations,
            tolerance=tolerance,
        )
        self.a = a
        logger.debug("Solved the %dx%d L matrix by GMRES in %d iterations", 3 * self.n, 3 * self.n, iterations)
        return self.a

    def invert_l0000(self) -> np.ndarray:
        """Replace the L00,00 block by its inverse and return a view of it."""
        n = self.n
        self.matrix[:n, :n] = invert_checked(self.matrix[:n, :n], what="L00,00 block")
        logger.debug("Inverted the L00,00 block")
        return self.matrix[:n, :n]
