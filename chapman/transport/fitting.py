from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from numpy.polynomial import polynomial as P

from .. import constants
from ..collisions import CollisionFits, CollisionIntegrals
from ..exceptions import ModelParameterException
from ..interactions import Interaction
from ..models import ModelsFit
from ..numerics import max_relative_error, polyfit_relative
from ..species import SpeciesTransport
from .config import TransportConfig

logger = logging.getLogger(__name__)

# polynomial degree in ln T of the species viscosity and binary diffusion fits
FIT_DEGREES = {ModelsFit.CK: 3, ModelsFit.STANDARD: 4}


@dataclass
class TransportParams:
    """Everything a mixture transport model needs once the species set is fixed."""

    species: List[SpeciesTransport]
    fit_mode: ModelsFit
    visc_coeffs: np.ndarray
    diff_coeffs: np.ndarray
    collision_fits: CollisionFits
    tmin: float
    tmax: float

    @property
    def n_species(self) -> int:
        return len(self.species)

    @property
    def molecular_weights(self) -> np.ndarray:
        return np.array([s.molecular_weight for s in self.species])

    @property
    def well_depth_k(self) -> np.ndarray:
        return np.array([s.well_depth_k for s in self.species])

    @property
    def zrot(self) -> np.ndarray:
        return np.array([s.rot_relax for s in self.species])

    @property
    def crot(self) -> np.ndarray:
        return np.array([s.crot for s in self.species])

    @property
    def internal_modes(self) -> np.ndarray:
        return np.array([s.internal_modes for s in self.species], dtype=bool)


def species_viscosity(T: float, species: SpeciesTransport, interaction: Interaction, integrals: CollisionIntegrals) -> float:
    """Chapman-Enskog viscosity of a pure species, Pa s."""
    omega22 = integrals.omega22(interaction.reduced_temperature(T), interaction.reduced_dipole)
    sigma = interaction.collision_diameter
    return (
        5.0
        / 16.0
        * math.sqrt(constants.K_CONST_PI * species.mass * constants.K_CONST_K * T)
        / (constants.K_CONST_PI * sigma * sigma * omega22)
    )


def binary_diffusion_unit_pressure(T: float, interaction: Interaction, integrals: CollisionIntegrals) -> float:
    """Chapman-Enskog binary diffusion coefficient times pressure, m^2 Pa/s."""
    omega11 = integrals.omega11(interaction.reduced_temperature(T), interaction.reduced_dipole)
    sigma = interaction.collision_diameter
    return (
        3.0
        / 16.0
        * math.sqrt(2.0 * constants.K_CONST_PI / interaction.reduced_mass)
        * (constants.K_CONST_K * T) ** 1.5
        / (constants.K_CONST_PI * sigma * sigma * omega11)
    )


def _fit(log_t: np.ndarray, y: np.ndarray, scale: np.ndarray, fit_mode: ModelsFit) -> np.ndarray:
    """CK: ln y as a cubic in ln T. STANDARD: y / scale as a quartic in ln T."""
    if fit_mode == ModelsFit.CK:
        return P.polyfit(log_t, np.log(y), FIT_DEGREES[fit_mode])
    return polyfit_relative(log_t, y / scale, FIT_DEGREES[fit_mode])


def _fit_error(log_t: np.ndarray, y: np.ndarray, scale: np.ndarray, coeffs: np.ndarray, fit_mode: ModelsFit) -> float:
    if fit_mode == ModelsFit.CK:
        return float(np.max(np.abs(np.exp(P.polyval(log_t, coeffs)) - y) / y))
    return max_relative_error(log_t, y / scale, coeffs)


def fit_transport(species: Sequence[SpeciesTransport], config: TransportConfig | None = None) -> TransportParams:
    """
    Fit species viscosities, unit-pressure binary diffusion coefficients and
    reduced collision integrals over the configured temperature range.
    """
    config = config or TransportConfig()
    species = list(species)
    n = len(species)
    if n == 0:
        raise ModelParameterException("Transport fits need at least one species")
    integrals = CollisionIntegrals(config.omega_model)
    interactions = [[Interaction(species[i], species[j]) for j in range(n)] for i in range(n)]

    temperatures = np.linspace(config.tmin, config.tmax, config.n_fit_points)
    log_t = np.log(temperatures)
    degree = FIT_DEGREES[config.fit_mode]

    visc_coeffs = np.zeros((n, degree + 1))
    sqrt_t = np.sqrt(temperatures)
    for k in range(n):
        visc = np.array([species_viscosity(T, species[k], interactions[k][k], integrals) for T in temperatures])
        visc_coeffs[k] = _fit(log_t, visc, sqrt_t, config.fit_mode)
        logger.debug(
            "%s viscosity fit: max relative error %.3e",
            species[k].name,
            _fit_error(log_t, visc, sqrt_t, visc_coeffs[k], config.fit_mode),
        )

    diff_coeffs = np.zeros((n, n, degree + 1))
    t_15 = temperatures**1.5
    for i in range(n):
        for j in range(i, n):
            diff = np.array([binary_diffusion_unit_pressure(T, interactions[i][j], integrals) for T in temperatures])
            diff_coeffs[i, j] = diff_coeffs[j, i] = _fit(log_t, diff, t_15, config.fit_mode)
            logger.debug(
                "%s-%s diffusion fit: max relative error %.3e",
                species[i].name,
                species[j].name,
                _fit_error(log_t, diff, t_15, diff_coeffs[i, j], config.fit_mode),
            )

    collision_fits = CollisionFits.build(
        interactions,
        fit_mode=config.fit_mode,
        omega_model=config.omega_model,
        tmin=config.tmin,
        tmax=config.tmax,
    )
    logger.info(
        "Built %s transport fits for %d species over %.1f-%.1f K",
        config.fit_mode.name,
        n,
        config.tmin,
        config.tmax,
    )
    return TransportParams(
        species=species,
        fit_mode=config.fit_mode,
        visc_coeffs=visc_coeffs,
        diff_coeffs=diff_coeffs,
        collision_fits=collision_fits,
        tmin=config.tmin,
        tmax=config.tmax,
    )
