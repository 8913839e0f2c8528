from __future__ import annotations

import logging
import math

import numpy as np

from .. import constants
from ..exceptions import IncorrectValueException, ModelParameterException
from ..models import ModelsFit, ModelsTransport
from ..numerics import log_temperature_powers, lu_factor_checked, lu_solve_factored
from ..thermo import IdealGasPhase
from .cache import CacheEntry, PropertyCache
from .config import IterativeSolve, TransportConfig
from .fitting import TransportParams
from .lmatrix import LMatrix, ThermalState

logger = logging.getLogger(__name__)


def frot(tr: float | np.ndarray, sqtr: float | np.ndarray):
    """Parker temperature correction of the rotational collision number.

    ``tr`` is epsilon/kT and ``sqtr`` its square root.
    """
    c1 = 0.5 * constants.K_CONST_SQRT_PI * constants.K_CONST_PI
    c2 = 0.25 * constants.K_CONST_PI * constants.K_CONST_PI + 2.0
    c3 = constants.K_CONST_SQRT_PI * constants.K_CONST_PI
    return 1.0 + c1 * sqtr + c2 * tr + c3 * sqtr * tr


class MultiTransport:
    """
    Multicomponent Chapman-Enskog transport for an ideal-gas mixture.

    Properties are evaluated lazily from the temperature and composition of
    the attached phase. Quantities that depend only on temperature (species
    viscosities, binary diffusion coefficients, collision integrals) survive
    composition changes; everything is tracked by a ``PropertyCache`` whose
    ``recompute_counts`` shows what was actually recomputed.

    Binary diffusion coefficients are kept at unit pressure internally and
    divided by the phase pressure on output.
    """

    def __init__(self, phase: IdealGasPhase, params: TransportParams, config: TransportConfig | None = None) -> None:
        if [s.name for s in params.species] != list(phase.species_names):
            raise ModelParameterException("Transport fits and phase have different species")
        if config is not None and config.fit_mode != params.fit_mode:
            raise ModelParameterException(
                f"Transport fits were made in {params.fit_mode.name} mode, configuration requests {config.fit_mode.name}"
            )
        self._phase = phase
        self._params = params
        self._config = config or TransportConfig(fit_mode=params.fit_mode)
        n = params.n_species
        self._n = n
        self._mw = params.molecular_weights
        self._crot = params.crot
        self._zrot = np.maximum(1.0, params.zrot)
        self._internal_modes = params.internal_modes
        eps_k = params.well_depth_k
        self._eps_k = eps_k
        self._sqrt_eps_k = np.sqrt(eps_k)
        ref_t = constants.K_CONST_ZROT_REFERENCE_T
        self._frot_298 = frot(eps_k / ref_t, self._sqrt_eps_k / math.sqrt(ref_t))

        self._cache = PropertyCache()
        self._lmatrix = LMatrix(n)

        self._temp = -1.0
        self._logt = 0.0
        self._sqrt_t = 0.0
        self._t32 = 0.0
        self._polytempvec = np.zeros(5)
        self._raw_x: np.ndarray | None = None
        self._molefracs = np.zeros(n)
        self._visc = np.zeros(n)
        self._phi = np.zeros((n, n))
        self._bdiff = np.zeros((n, n))
        self._om22 = np.zeros((n, n))
        self._astar = np.zeros((n, n))
        self._bstar = np.zeros((n, n))
        self._cstar = np.zeros((n, n))
        self._thermal: ThermalState | None = None

    # ---------------- accessors ---------------- #
    @property
    def model(self) -> ModelsTransport:
        return ModelsTransport.MULTICOMPONENT

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def phase(self) -> IdealGasPhase:
        return self._phase

    @property
    def params(self) -> TransportParams:
        return self._params

    @property
    def n_species(self) -> int:
        return self._n

    @property
    def cache(self) -> PropertyCache:
        return self._cache

    # ---------------- public properties ---------------- #
    def viscosity(self) -> float:
        """Mixture viscosity from the Wilke mixing rule, Pa s."""
        self._update_visc_T()
        self._update_transport_C()
        x = self._molefracs
        vismix = 0.0
        for k in range(self._n):
            denom = float(np.dot(self._phi[k], x))
            vismix += x[k] * self._visc[k] / denom
        return vismix

    def get_species_viscosities(self) -> np.ndarray:
        self._update_species_visc_T()
        return self._visc.copy()

    def get_binary_diff_coeffs(self, out: np.ndarray | None = None) -> np.ndarray:
        """Binary diffusion coefficients D_ij at the phase pressure, m^2/s."""
        self._update_diff_T()
        return self._fill(out, self._bdiff / self._phase.pressure, (self._n, self._n))

    def thermal_conductivity(self) -> float:
        """Thermal conductivity, W/(m K)."""
        self._solve_lmatrix_equation()
        n = self._n
        return -4.0 * float(np.dot(self._lmatrix.b[n:], self._lmatrix.a[n:]))

    def get_thermal_diff_coeffs(self, out: np.ndarray | None = None) -> np.ndarray:
        """Thermal diffusion coefficients, kg/(m s)."""
        self._solve_lmatrix_equation()
        c = 1.6 / constants.K_CONST_R
        dt = c * self._mw * self._molefracs * self._lmatrix.a[: self._n]
        return self._fill(out, dt, (self._n,))

    def get_multi_diff_coeffs(self, out: np.ndarray | None = None) -> np.ndarray:
        """Multicomponent diffusion coefficients from the inverse of L00,00, m^2/s."""
        p = self._phase.pressure
        self._update_transport_C()
        self._update_diff_T()
        if not self._cache.is_valid(CacheEntry.L0000):
            self._lmatrix.eval_l0000(self._temp, self._molefracs, self._mw, self._bdiff)
            self._cache.mark_valid(CacheEntry.L0000)
        try:
            linv = self._lmatrix.invert_l0000()
        finally:
            # the block now holds its inverse
            self._cache.invalidate(CacheEntry.L0000)

        prefactor = 16.0 * self._temp * self._phase.mean_molecular_weight / (25.0 * p)
        x = self._molefracs
        d = np.empty((self._n, self._n))
        for i in range(self._n):
            for j in range(self._n):
                d[i, j] = prefactor / self._mw[j] * x[i] * (linv[i, j] - linv[i, i])
        return self._fill(out, d, (self._n, self._n))

    def get_species_fluxes(self, grad_T, grad_X, out: np.ndarray | None = None) -> np.ndarray:
        """
        Diffusive mass fluxes, kg/(m^2 s), for temperature gradients ``grad_T``
        of shape (ndim,) and mole fraction gradients ``grad_X`` of shape
        (ndim, N). Returns an (ndim, N) array whose rows sum to zero.

        The flux equation of the species with the largest mole fraction
        gradient in the first direction is replaced by sum_k Y_k V_k = 0 in
        every direction.
        """
        grad_T = np.atleast_1d(np.asarray(grad_T, dtype=float))
        grad_X = np.atleast_2d(np.asarray(grad_X, dtype=float))
        ndim = grad_T.size
        if grad_X.shape != (ndim, self._n):
            raise IncorrectValueException(
                f"Mole fraction gradients must have shape ({ndim}, {self._n}), got {grad_X.shape}"
            )
        self._update_diff_T()
        self._update_transport_C()

        add_thermal_diffusion = bool(np.any(grad_T != 0.0))
        if add_thermal_diffusion:
            dt = self.get_thermal_diff_coeffs()

        y = self._phase.mass_fractions
        rho = self._phase.density
        p = self._phase.pressure
        x = self._molefracs

        aa = np.outer(x, x) / self._bdiff
        aa[np.diag_indices(self._n)] -= aa.sum(axis=1)

        jmax = int(np.argmax(np.abs(grad_X[0])))
        aa[jmax, :] = y
        rhs = grad_X.T.copy()
        rhs[jmax, :] = 0.0

        factors = lu_factor_checked(np.asfortranarray(aa), overwrite=True, what="species flux matrix")
        velocities = lu_solve_factored(factors, rhs)
        fluxes = (velocities * (rho * y / p)[:, np.newaxis]).T

        if add_thermal_diffusion:
            fluxes -= np.outer(grad_T / self._temp, dt)
        return self._fill(out, fluxes, (ndim, self._n))

    # ---------------- state updates ---------------- #
    def _update_transport_T(self) -> None:
        T = self._phase.temperature
        if T != self._temp:
            self._cache.invalidate(CacheEntry.TEMPERATURE)
        if self._cache.is_valid(CacheEntry.TEMPERATURE):
            return
        self._temp = T
        self._logt = math.log(T)
        self._sqrt_t = math.sqrt(T)
        self._t32 = T * self._sqrt_t
        self._polytempvec = log_temperature_powers(self._logt, 5)
        if not self._params.tmin <= T <= self._params.tmax:
            logger.debug(
                "T = %.1f K is outside the fitted range [%.1f, %.1f] K; extrapolating",
                T,
                self._params.tmin,
                self._params.tmax,
            )
        self._cache.mark_valid(CacheEntry.TEMPERATURE)

    def _update_transport_C(self) -> None:
        x = self._phase.mole_fractions
        if self._raw_x is None or not np.array_equal(x, self._raw_x):
            self._cache.invalidate(CacheEntry.MOLE_FRACTIONS)
        if self._cache.is_valid(CacheEntry.MOLE_FRACTIONS):
            return
        self._raw_x = x
        # no renormalisation after clamping
        self._molefracs = np.maximum(x, self._config.min_mole_fraction)
        self._cache.mark_valid(CacheEntry.MOLE_FRACTIONS)

    def _update_species_visc_T(self) -> None:
        self._update_transport_T()
        if self._cache.is_valid(CacheEntry.SPECIES_VISCOSITY):
            return
        coeffs = self._params.visc_coeffs
        if self._params.fit_mode == ModelsFit.CK:
            self._visc = np.exp(coeffs @ self._polytempvec[:4])
        else:
            self._visc = self._sqrt_t * (coeffs @ self._polytempvec)
        self._cache.mark_valid(CacheEntry.SPECIES_VISCOSITY)

    def _update_visc_T(self) -> None:
        self._update_species_visc_T()
        if self._cache.is_valid(CacheEntry.VISCOSITY_WEIGHTS):
            return
        mw = self._mw
        for j in range(self._n):
            for k in range(j, self._n):
                vratiokj = self._visc[k] / self._visc[j]
                wratiojk = mw[j] / mw[k]
                factor1 = 1.0 + math.sqrt(vratiokj * math.sqrt(wratiojk))
                self._phi[k, j] = factor1 * factor1 / (constants.K_CONST_SQRT_EIGHT * math.sqrt(1.0 + mw[k] / mw[j]))
                self._phi[j, k] = self._phi[k, j] / (vratiokj * wratiojk)
        self._cache.mark_valid(CacheEntry.VISCOSITY_WEIGHTS)

    def _update_diff_T(self) -> None:
        self._update_transport_T()
        if self._cache.is_valid(CacheEntry.BINARY_DIFFUSION):
            return
        coeffs = self._params.diff_coeffs
        for i in range(self._n):
            for j in range(i, self._n):
                if self._params.fit_mode == ModelsFit.CK:
                    value = math.exp(float(np.dot(self._polytempvec[:4], coeffs[i, j])))
                else:
                    value = self._t32 * float(np.dot(self._polytempvec, coeffs[i, j]))
                self._bdiff[i, j] = self._bdiff[j, i] = value
        self._cache.mark_valid(CacheEntry.BINARY_DIFFUSION)

    def _update_collision_integrals_T(self) -> None:
        self._update_transport_T()
        if self._cache.is_valid(CacheEntry.COLLISION_INTEGRALS):
            return
        self._om22, self._astar, self._bstar, self._cstar = self._params.collision_fits.evaluate(self._logt)
        self._cache.mark_valid(CacheEntry.COLLISION_INTEGRALS)

    def _update_thermal_T(self) -> None:
        self._update_species_visc_T()
        self._update_diff_T()
        self._update_collision_integrals_T()
        if self._cache.is_valid(CacheEntry.THERMAL):
            return
        T = self._temp
        tr = self._eps_k / T
        sqtr = self._sqrt_eps_k / self._sqrt_t
        rotrelax = self._zrot * self._frot_298 / frot(tr, sqtr)

        # self-diffusion coefficients replace the fitted diagonal for the L matrix only
        bdiff = self._bdiff.copy()
        c = 1.2 * constants.K_CONST_R * T
        for k in range(self._n):
            bdiff[k, k] = c * self._visc[k] * self._astar[k, k] / self._mw[k]

        cinternal = self._phase.cp_R() - 2.5
        bad = [
            self._params.species[k].name
            for k in range(self._n)
            if self._internal_modes[k] and not cinternal[k] > 0.0
        ]
        if bad:
            raise ModelParameterException(
                f"Species {', '.join(bad)} have internal modes but no internal heat capacity at T = {T} K"
            )
        self._thermal = ThermalState(
            T=T,
            mw=self._mw,
            bdiff=bdiff,
            visc=self._visc.copy(),
            astar=self._astar,
            bstar=self._bstar,
            cstar=self._cstar,
            crot=self._crot,
            rotrelax=rotrelax,
            cinternal=cinternal,
            internal_modes=self._internal_modes,
        )
        self._cache.mark_valid(CacheEntry.THERMAL)

    def _solve_lmatrix_equation(self) -> None:
        self._update_thermal_T()
        self._update_transport_C()
        if self._cache.is_valid(CacheEntry.LMATRIX_SOLUTION):
            return
        self._lmatrix.assemble(self._molefracs, self._thermal)
        self._cache.mark_valid(CacheEntry.L0000)

        solver = self._config.solver
        if isinstance(solver, IterativeSolve):
            self._lmatrix.solve_iterative(solver.max_iterations, solver.tolerance)
        else:
            try:
                self._lmatrix.solve_direct()
            finally:
                # storage now holds the LU factors
                self._cache.invalidate(CacheEntry.L0000)
        self._cache.mark_valid(CacheEntry.LMATRIX_SOLUTION)

    @staticmethod
    def _fill(out: np.ndarray | None, values: np.ndarray, shape) -> np.ndarray:
        if out is None:
            return values
        if out.shape != shape:
            raise IncorrectValueException(f"Output array must have shape {shape}, got {out.shape}")
        out[...] = values
        return out
