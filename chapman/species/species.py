from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from .. import constants
from ..exceptions import DataNotFoundException, ModelParameterException
from ..yaml_loader import load_yaml_file, parse_flag

DEFAULT_DATABASE = Path(__file__).resolve().parent.parent / "data" / "transport.yaml"

GEOMETRIES = ("atom", "linear", "nonlinear")

# rotational heat capacity / R by molecular geometry
_ROTATIONAL_CAPACITY = {"atom": 0.0, "linear": 1.0, "nonlinear": 1.5}


@dataclass
class SpeciesTransport:
    """
    Kinetic-theory transport parameters of a single species, all in SI units:
    molecular weight in kg/kmol, Lennard-Jones diameter in m and well depth in J,
    dipole moment in C m, polarizability in m^3. ``rot_relax`` is the rotational
    relaxation collision number at 298 K.
    """

    name: str
    molecular_weight: float
    geometry: str
    diameter: float
    well_depth: float
    dipole: float
    polarizability: float
    rot_relax: float
    internal_modes: bool

    def __init__(
        self,
        name: str,
        molecular_weight: float,
        geometry: str,
        diameter: float,
        well_depth: float,
        dipole: float = 0.0,
        polarizability: float = 0.0,
        rot_relax: float = 0.0,
        internal_modes: bool | None = None,
    ) -> None:
        if geometry not in GEOMETRIES:
            raise ModelParameterException(f"Unknown geometry '{geometry}' for species {name}")
        if molecular_weight <= 0.0 or diameter <= 0.0 or well_depth <= 0.0:
            raise ModelParameterException(
                f"Species {name} needs a positive molecular weight, collision diameter and well depth"
            )
        self.name = name
        self.molecular_weight = float(molecular_weight)
        self.geometry = geometry
        self.diameter = float(diameter)
        self.well_depth = float(well_depth)
        self.dipole = float(dipole)
        self.polarizability = float(polarizability)
        self.rot_relax = float(rot_relax)
        self.internal_modes = geometry != "atom" if internal_modes is None else bool(internal_modes)

    @property
    def crot(self) -> float:
        return _ROTATIONAL_CAPACITY[self.geometry]

    @property
    def is_polar(self) -> bool:
        return self.dipole > 0.0

    @property
    def well_depth_k(self) -> float:
        """Well depth over the Boltzmann constant, K."""
        return self.well_depth / constants.K_CONST_K

    @property
    def mass(self) -> float:
        """Mass of one molecule, kg."""
        return self.molecular_weight / constants.K_CONST_NA

    @classmethod
    def from_mapping(cls, name: str, entry: Mapping[str, Any]) -> "SpeciesTransport":
        """Build from one database entry (Angstrom, Kelvin and Debye units)."""
        try:
            molecular_weight = float(entry["Molecular weight, kg/kmol"])
            geometry = str(entry["Geometry"])
            diameter = float(entry["Diameter, A"]) * constants.K_CONST_ANGSTROM
            well_depth = float(entry["Well depth, K"]) * constants.K_CONST_K
        except KeyError as exc:
            raise DataNotFoundException(f"No {exc.args[0]} data found for {name} in the database") from exc
        internal_modes = entry.get("Internal modes")
        return cls(
            name,
            molecular_weight,
            geometry,
            diameter,
            well_depth,
            dipole=float(entry.get("Dipole moment, D", 0.0)) * constants.K_CONST_DEBYE,
            polarizability=float(entry.get("Polarizability, A^3", 0.0)) * constants.K_CONST_ANGSTROM**3,
            rot_relax=float(entry.get("Rotational relaxation", 0.0)),
            internal_modes=None if internal_modes is None else parse_flag(internal_modes),
        )

    @classmethod
    def from_yaml(cls, name: str, filename: str | Path = DEFAULT_DATABASE) -> "SpeciesTransport":
        return load_species([name], filename)[0]


def load_species(names: Sequence[str], filename: str | Path = DEFAULT_DATABASE) -> List[SpeciesTransport]:
    """Read the transport parameters of the named species, in the given order."""
    database: Dict[str, Any] = load_yaml_file(filename) or {}
    result = []
    for name in names:
        if name not in database:
            raise DataNotFoundException(f"No data found for {name} in the database")
        result.append(SpeciesTransport.from_mapping(name, database[name]))
    return result
