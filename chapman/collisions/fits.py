from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from ..exceptions import ModelParameterException
from ..interactions import Interaction
from ..models import ModelsFit, ModelsOmega
from ..numerics import max_relative_error, poly_eval, polyfit_relative
from .collision_integrals import CollisionIntegrals

logger = logging.getLogger(__name__)

# reduced dipole moments closer than this share one set of star-function fits
DELTA_TOLERANCE = 0.01

TSTAR_MIN = 0.3
TSTAR_MAX = 500.0
N_TSTAR_POINTS = 60

STAR_DEGREES = {ModelsFit.CK: 6, ModelsFit.STANDARD: 8}


@dataclass
class CollisionFits:
    """
    Polynomial fits of Omega*(2,2), A*, B* and C* in ln T*.

    Each row of the coefficient tables belongs to one distinct reduced dipole
    moment; ``poly_index[i, j]`` selects the row used by the pair (i, j) and
    ``log_eps_k[i, j]`` is ln(epsilon_ij / k_B).
    """

    degree: int
    omega22_poly: np.ndarray
    astar_poly: np.ndarray
    bstar_poly: np.ndarray
    cstar_poly: np.ndarray
    poly_index: np.ndarray
    log_eps_k: np.ndarray
    deltas: List[float] = field(default_factory=list)

    @property
    def n_species(self) -> int:
        return self.poly_index.shape[0]

    def evaluate(self, log_t: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Return the (N, N) matrices Omega*(2,2), A*, B*, C* at ln T = log_t."""
        n = self.n_species
        omega22 = np.empty((n, n))
        astar = np.empty((n, n))
        bstar = np.empty((n, n))
        cstar = np.empty((n, n))
        for i in range(n):
            for j in range(i, n):
                z = log_t - self.log_eps_k[i, j]
                ipoly = self.poly_index[i, j]
                omega22[i, j] = omega22[j, i] = poly_eval(z, self.omega22_poly[ipoly])
                astar[i, j] = astar[j, i] = poly_eval(z, self.astar_poly[ipoly])
                bstar[i, j] = bstar[j, i] = poly_eval(z, self.bstar_poly[ipoly])
                cstar[i, j] = cstar[j, i] = poly_eval(z, self.cstar_poly[ipoly])
        return omega22, astar, bstar, cstar

    @classmethod
    def build(
        cls,
        interactions: Sequence[Sequence[Interaction]],
        fit_mode: ModelsFit = ModelsFit.CK,
        omega_model: ModelsOmega = ModelsOmega.LENNARD_JONES,
        tmin: float = 300.0,
        tmax: float = 3500.0,
    ) -> "CollisionFits":
        n = len(interactions)
        if n == 0:
            raise ModelParameterException("Collision fits need at least one species")
        degree = STAR_DEGREES[fit_mode]
        integrals = CollisionIntegrals(omega_model)

        eps_k = np.array([[interactions[i][j].epsilon_k for j in range(n)] for i in range(n)])
        tstar_min = max(TSTAR_MIN, 0.5 * tmin / eps_k.max())
        tstar_max = min(TSTAR_MAX, 1.5 * tmax / eps_k.min())
        if tstar_max <= tstar_min:
            raise ModelParameterException(
                f"Empty reduced temperature range [{tstar_min}, {tstar_max}] for the collision integral fits"
            )
        tstar = np.exp(np.linspace(math.log(tstar_min), math.log(tstar_max), N_TSTAR_POINTS))
        log_tstar = np.log(tstar)

        deltas: List[float] = []
        tables: List[List[np.ndarray]] = [[], [], [], []]
        poly_index = np.zeros((n, n), dtype=np.int64)
        for i in range(n):
            for j in range(i, n):
                delta = interactions[i][j].reduced_dipole
                match = next((k for k, d in enumerate(deltas) if abs(d - delta) < DELTA_TOLERANCE), None)
                if match is None:
                    match = len(deltas)
                    deltas.append(delta)
                    values = (
                        np.array([integrals.omega22(t, delta) for t in tstar]),
                        np.array([integrals.astar(t, delta) for t in tstar]),
                        np.array([integrals.bstar(t, delta) for t in tstar]),
                        np.array([integrals.cstar(t, delta) for t in tstar]),
                    )
                    for table, name, y in zip(tables, ("omega22", "astar", "bstar", "cstar"), values):
                        coeffs = polyfit_relative(log_tstar, y, degree)
                        table.append(coeffs)
                        logger.debug(
                            "delta*=%.4f %s fit: max relative error %.3e",
                            delta,
                            name,
                            max_relative_error(log_tstar, y, coeffs),
                        )
                poly_index[i, j] = poly_index[j, i] = match

        logger.debug(
            "Fitted collision integrals for %d reduced dipole values over T* in [%.3f, %.3f]",
            len(deltas),
            tstar_min,
            tstar_max,
        )
        return cls(
            degree=degree,
            omega22_poly=np.vstack(tables[0]),
            astar_poly=np.vstack(tables[1]),
            bstar_poly=np.vstack(tables[2]),
            cstar_poly=np.vstack(tables[3]),
            poly_index=poly_index,
            log_eps_k=np.log(eps_k),
            deltas=deltas,
        )
