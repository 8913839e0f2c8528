from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Union

from .. import constants
from ..exceptions import ModelParameterException
from ..models import FIT_NAMES, OMEGA_NAMES, ModelsFit, ModelsOmega
from ..yaml_loader import load_yaml_file


@dataclass(frozen=True)
class DirectSolve:
    """Dense LU factorisation of the full L-matrix."""


@dataclass(frozen=True)
class IterativeSolve:
    """Restarted GMRES with a matrix-free product, starting from the previous solution."""

    max_iterations: int = 100
    tolerance: float = 1.0e-4

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ModelParameterException(f"max_iterations must be at least 1, got {self.max_iterations}")
        if not self.tolerance > 0.0:
            raise ModelParameterException(f"GMRES tolerance must be positive, got {self.tolerance}")


Solver = Union[DirectSolve, IterativeSolve]


@dataclass(frozen=True)
class TransportConfig:
    fit_mode: ModelsFit = ModelsFit.CK
    omega_model: ModelsOmega = ModelsOmega.LENNARD_JONES
    solver: Solver = field(default_factory=DirectSolve)
    min_mole_fraction: float = constants.K_CONST_MIN_X
    tmin: float = 300.0
    tmax: float = 3500.0
    n_fit_points: int = 50

    def __post_init__(self) -> None:
        if not isinstance(self.solver, (DirectSolve, IterativeSolve)):
            raise ModelParameterException(f"Unknown solver variant {self.solver!r}")
        if not 0.0 < self.tmin < self.tmax:
            raise ModelParameterException(f"Invalid fit temperature range [{self.tmin}, {self.tmax}]")
        if self.n_fit_points < 5:
            raise ModelParameterException("At least 5 fit temperatures are needed for the quartic fits")
        if not self.min_mole_fraction > 0.0:
            raise ModelParameterException("min_mole_fraction must be positive")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TransportConfig":
        """
        Build from a mapping, either the ``transport:`` section itself or a
        document containing it. Recognised keys::

            transport:
              fit-mode: ck | standard
              collision-model: lennard-jones | neufeld
              solver:
                method: direct | iterative
                max-iterations: 100
                tolerance: 1.0e-4
              temperature-range: [300.0, 3500.0]
              min-mole-fraction: 1.0e-20
              fit-points: 50
        """
        section = data.get("transport", data) if data else {}
        if not isinstance(section, Mapping):
            raise ModelParameterException("The transport section must be a mapping")
        kwargs: dict = {}
        if "fit-mode" in section:
            kwargs["fit_mode"] = _lookup(FIT_NAMES, section["fit-mode"], "fit mode")
        if "collision-model" in section:
            kwargs["omega_model"] = _lookup(OMEGA_NAMES, section["collision-model"], "collision model")
        if "solver" in section:
            kwargs["solver"] = _solver_from_dict(section["solver"])
        if "temperature-range" in section:
            trange = section["temperature-range"]
            if not isinstance(trange, (list, tuple)) or len(trange) != 2:
                raise ModelParameterException("temperature-range must be a list [tmin, tmax]")
            kwargs["tmin"], kwargs["tmax"] = float(trange[0]), float(trange[1])
        if "min-mole-fraction" in section:
            kwargs["min_mole_fraction"] = float(section["min-mole-fraction"])
        if "fit-points" in section:
            kwargs["n_fit_points"] = int(section["fit-points"])
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, filename: str | Path) -> "TransportConfig":
        return cls.from_dict(load_yaml_file(filename) or {})


def _lookup(names: Mapping[str, Any], value: Any, what: str):
    key = str(value).strip().lower()
    if key not in names:
        raise ModelParameterException(f"Unknown {what} '{value}', expected one of {sorted(names)}")
    return names[key]


def _solver_from_dict(data: Any) -> Solver:
    if isinstance(data, str):
        data = {"method": data}
    if not isinstance(data, Mapping):
        raise ModelParameterException("solver must be a method name or a mapping")
    method = str(data.get("method", "direct")).strip().lower()
    if method == "direct":
        return DirectSolve()
    if method == "iterative":
        return IterativeSolve(
            max_iterations=int(data.get("max-iterations", 100)),
            tolerance=float(data.get("tolerance", 1.0e-4)),
        )
    raise ModelParameterException(f"Unknown solver method '{method}', expected 'direct' or 'iterative'")
