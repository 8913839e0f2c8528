from __future__ import annotations

from typing import Callable, Dict, Mapping, Sequence, Union

import numpy as np

from .. import constants
from ..exceptions import DataNotFoundException, IncorrectValueException
from ..species import SpeciesTransport

# ideal-gas cp/R of the translational and fully excited rotational modes
_DEFAULT_CP_R = {"atom": 2.5, "linear": 3.5, "nonlinear": 4.0}

Composition = Union[Sequence[float], np.ndarray, Mapping[str, float]]
CpModel = Union[Sequence[float], np.ndarray, Callable[[float], np.ndarray]]


class IdealGasPhase:
    """
    Minimal ideal-gas state holder: temperature, pressure and composition of a
    fixed set of species, with the derived quantities transport needs.

    ``cp_R`` may be a per-species array, a callable of temperature returning
    such an array, or None for the translational + rotational value implied by
    each species' geometry.
    """

    def __init__(
        self,
        species: Sequence[SpeciesTransport],
        T: float = 300.0,
        P: float = constants.K_CONST_ONE_ATM,
        X: Composition | None = None,
        cp_R: CpModel | None = None,
    ) -> None:
        if len(species) == 0:
            raise IncorrectValueException("A phase needs at least one species")
        self.species = list(species)
        self.species_names = [s.name for s in self.species]
        self._index: Dict[str, int] = {name: k for k, name in enumerate(self.species_names)}
        if len(self._index) != len(self.species_names):
            raise IncorrectValueException("Duplicate species names in phase definition")
        self._mw = np.array([s.molecular_weight for s in self.species])
        if cp_R is None:
            self._cp_R: CpModel = np.array([_DEFAULT_CP_R[s.geometry] for s in self.species])
        elif callable(cp_R):
            self._cp_R = cp_R
        else:
            self._cp_R = self._check_size(np.asarray(cp_R, dtype=float), "cp/R")
        self._T = 0.0
        self._P = 0.0
        self._X = np.zeros(self.n_species)
        if X is None:
            X = np.full(self.n_species, 1.0 / self.n_species)
        self.set_TPX(T, P, X)

    # ---------------- accessors ---------------- #
    @property
    def n_species(self) -> int:
        return len(self.species)

    @property
    def temperature(self) -> float:
        return self._T

    @property
    def pressure(self) -> float:
        return self._P

    @property
    def mole_fractions(self) -> np.ndarray:
        return self._X.copy()

    @property
    def mass_fractions(self) -> np.ndarray:
        return self._X * self._mw / self.mean_molecular_weight

    @property
    def molecular_weights(self) -> np.ndarray:
        return self._mw.copy()

    @property
    def mean_molecular_weight(self) -> float:
        return float(np.dot(self._X, self._mw))

    @property
    def density(self) -> float:
        """Mass density, kg/m^3."""
        return self._P * self.mean_molecular_weight / (constants.K_CONST_R * self._T)

    def cp_R(self) -> np.ndarray:
        if callable(self._cp_R):
            return self._check_size(np.asarray(self._cp_R(self._T), dtype=float), "cp/R")
        return self._cp_R.copy()

    def species_index(self, name: str) -> int:
        if name not in self._index:
            raise DataNotFoundException(f"Species {name} is not part of the phase")
        return self._index[name]

    # ---------------- state setters ---------------- #
    def set_temperature(self, T: float) -> None:
        if not T > 0.0:
            raise IncorrectValueException(f"Temperature must be positive, got {T}")
        self._T = float(T)

    def set_pressure(self, P: float) -> None:
        if not P > 0.0:
            raise IncorrectValueException(f"Pressure must be positive, got {P}")
        self._P = float(P)

    def set_mole_fractions(self, X: Composition) -> None:
        self._X = self._normalise(self._as_array(X), "mole")

    def set_mass_fractions(self, Y: Composition) -> None:
        y = self._normalise(self._as_array(Y), "mass")
        x = y / self._mw
        self._X = x / x.sum()

    def set_TPX(self, T: float, P: float, X: Composition) -> None:
        self.set_temperature(T)
        self.set_pressure(P)
        self.set_mole_fractions(X)

    def set_TPY(self, T: float, P: float, Y: Composition) -> None:
        self.set_temperature(T)
        self.set_pressure(P)
        self.set_mass_fractions(Y)

    # ---------------- helpers ---------------- #
    def _as_array(self, values: Composition) -> np.ndarray:
        if isinstance(values, Mapping):
            result = np.zeros(self.n_species)
            for name, value in values.items():
                result[self.species_index(name)] = float(value)
            return result
        return self._check_size(np.asarray(values, dtype=float), "composition")

    def _check_size(self, values: np.ndarray, what: str) -> np.ndarray:
        if values.shape != (self.n_species,):
            raise IncorrectValueException(
                f"Incorrect size of {what} vector: expected {self.n_species}, got {values.shape}"
            )
        return values

    @staticmethod
    def _normalise(values: np.ndarray, kind: str) -> np.ndarray:
        if np.any(values < 0.0):
            raise IncorrectValueException(f"Negative {kind} fraction encountered")
        total = values.sum()
        if total == 0.0:
            raise IncorrectValueException(f"Total {kind} fraction is zero")
        return values / total
