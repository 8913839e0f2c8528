from __future__ import annotations

import math
from dataclasses import dataclass

from .. import constants
from ..species import SpeciesTransport


@dataclass
class Interaction:
    """Combined Lennard-Jones parameters of a species pair."""

    species1_name: str
    species2_name: str
    reduced_mass: float
    collision_diameter: float
    epsilon: float
    reduced_dipole: float
    polar_correction: float

    def __init__(self, species1: SpeciesTransport, species2: SpeciesTransport) -> None:
        self.species1_name = species1.name
        self.species2_name = species2.name
        m1 = species1.molecular_weight
        m2 = species2.molecular_weight
        self.reduced_mass = m1 * m2 / (constants.K_CONST_NA * (m1 + m2))
        sigma = 0.5 * (species1.diameter + species2.diameter)
        epsilon = math.sqrt(species1.well_depth * species2.well_depth)
        # reduced dipole uses the uncorrected mixing rules
        self.reduced_dipole = (
            0.5
            * species1.dipole
            * species2.dipole
            / (4.0 * constants.K_CONST_PI * constants.K_CONST_E0 * epsilon * sigma**3)
        )
        self.polar_correction = self._polar_correction(species1, species2)
        self.collision_diameter = sigma * self.polar_correction ** (-1.0 / 6.0)
        self.epsilon = epsilon * self.polar_correction**2

    @staticmethod
    def _polar_correction(species1: SpeciesTransport, species2: SpeciesTransport) -> float:
        """Induced dipole factor xi, 1 unless exactly one species of the pair is polar."""
        if species1.is_polar == species2.is_polar:
            return 1.0
        polar, nonpolar = (species1, species2) if species1.is_polar else (species2, species1)
        alpha_star = nonpolar.polarizability / nonpolar.diameter**3
        mu_star = polar.dipole / math.sqrt(
            4.0 * constants.K_CONST_PI * constants.K_CONST_E0 * polar.diameter**3 * polar.well_depth
        )
        return 1.0 + 0.25 * alpha_star * mu_star**2 * math.sqrt(polar.well_depth / nonpolar.well_depth)

    @property
    def epsilon_k(self) -> float:
        """Well depth over the Boltzmann constant, K."""
        return self.epsilon / constants.K_CONST_K

    def reduced_temperature(self, T: float) -> float:
        return constants.K_CONST_K * T / self.epsilon
