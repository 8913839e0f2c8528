from __future__ import annotations

import math

from .. import constants
from ..exceptions import ModelParameterException
from ..models import ModelsOmega
from ..numerics import log_derivative


class CollisionIntegrals:
    """
    Reduced collision integrals Omega*(l,s) of the (Stockmayer-corrected)
    Lennard-Jones potential as functions of the reduced temperature
    T* = kT/epsilon and the reduced dipole moment delta*.

    Omega*(1,1) and Omega*(2,2) come from a closed-form correlation
    (LENNARD_JONES, valid for T* >= 0.3, or NEUFELD) plus the Brokaw polar
    term. Higher integrals follow from

        Omega*(l,s+1) = Omega*(l,s) * (1 + d ln Omega*(l,s) / d ln T* / (s+2))

    with the derivative taken by central differences in ln T*. The recursion
    always runs on the Neufeld correlation; with LENNARD_JONES the ratios
    Omega*(l,s)/Omega*(l,l) are applied to the Lennard-Jones base integrals,
    whose log-derivative is unusable near T* = 0.3.
    """

    def __init__(self, model: ModelsOmega = ModelsOmega.LENNARD_JONES) -> None:
        if model not in (ModelsOmega.LENNARD_JONES, ModelsOmega.NEUFELD):
            raise ModelParameterException(f"Unsupported collision integral model {model}")
        self.model = model

    # ---------------- base correlations ---------------- #
    @staticmethod
    def omega11_lennard_jones(t_star: float) -> float:
        log_t = math.log(t_star) + 1.4
        return 1.0 / (
            -0.16845
            - 0.02258 / (log_t * log_t)
            + 0.19779 / log_t
            + 0.64373 * log_t
            - 0.09267 * log_t * log_t
            + 0.00711 * log_t * log_t * log_t
        )

    @staticmethod
    def omega22_lennard_jones(t_star: float) -> float:
        log_t = math.log(t_star) + 1.5
        return 1.0 / (
            -0.40811
            - 0.05086 / (log_t * log_t)
            + 0.34010 / log_t
            + 0.70375 * log_t
            - 0.10699 * log_t * log_t
            + 0.00763 * log_t * log_t * log_t
        )

    @staticmethod
    def omega11_neufeld(t_star: float) -> float:
        return (
            1.06036 / t_star**0.15610
            + 0.19300 * math.exp(-0.47635 * t_star)
            + 1.03587 * math.exp(-1.52996 * t_star)
            + 1.76474 * math.exp(-3.89411 * t_star)
        )

    @staticmethod
    def omega22_neufeld(t_star: float) -> float:
        return (
            1.16145 / t_star**0.14874
            + 0.52487 * math.exp(-0.77320 * t_star)
            + 2.16178 * math.exp(-2.43787 * t_star)
        )

    # ---------------- public interface ---------------- #
    def omega11(self, t_star: float, delta: float = 0.0) -> float:
        if self.model == ModelsOmega.NEUFELD:
            base = self.omega11_neufeld(t_star)
        else:
            base = self.omega11_lennard_jones(t_star)
        return base + 0.19 * delta * delta / t_star

    def omega22(self, t_star: float, delta: float = 0.0) -> float:
        if self.model == ModelsOmega.NEUFELD:
            base = self.omega22_neufeld(t_star)
        else:
            base = self.omega22_lennard_jones(t_star)
        return base + 0.2 * delta * delta / t_star

    def omega(self, t_star: float, l: int, s: int, delta: float = 0.0) -> float:
        """Omega*(l,s) for l in {1, 2} and s >= l."""
        if t_star <= 0.0:
            raise ModelParameterException(f"Reduced temperature must be positive, got {t_star}")
        if l == 1 and s == 1:
            return self.omega11(t_star, delta)
        if l == 2 and s == 2:
            return self.omega22(t_star, delta)
        if l not in (1, 2) or s <= l:
            raise ModelParameterException(f"Omega integral ({l},{s}) is not available")
        if self.model == ModelsOmega.NEUFELD:
            return self._omega_recursive(t_star, l, s, delta)
        base = self._omega_recursive(t_star, l, l, delta)
        return self.omega(t_star, l, l, delta) * self._omega_recursive(t_star, l, s, delta) / base

    def _omega_recursive(self, t_star: float, l: int, s: int, delta: float) -> float:
        if s == l:
            if l == 1:
                return self.omega11_neufeld(t_star) + 0.19 * delta * delta / t_star
            return self.omega22_neufeld(t_star) + 0.2 * delta * delta / t_star

        def lower(temp: float) -> float:
            return self._omega_recursive(temp, l, s - 1, delta)

        slope = log_derivative(lower, math.log(t_star), constants.K_CONST_OMEGA_D_STEP_SIZE)
        return lower(t_star) * (1.0 + slope / (s + 1))

    def astar(self, t_star: float, delta: float = 0.0) -> float:
        return self.omega22(t_star, delta) / self.omega11(t_star, delta)

    def bstar(self, t_star: float, delta: float = 0.0) -> float:
        omega11 = self.omega11(t_star, delta)
        return (5.0 * self.omega(t_star, 1, 2, delta) - 4.0 * self.omega(t_star, 1, 3, delta)) / omega11

    def cstar(self, t_star: float, delta: float = 0.0) -> float:
        return self.omega(t_star, 1, 2, delta) / self.omega11(t_star, delta)
