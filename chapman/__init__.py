"""Multicomponent Chapman-Enskog transport properties of ideal-gas mixtures."""

from . import constants, exceptions, models, numerics
from .collisions import CollisionFits, CollisionIntegrals
from .interactions import Interaction
from .species import SpeciesTransport, load_species
from .thermo import IdealGasPhase
from .transport import (
    DirectSolve,
    IterativeSolve,
    MultiTransport,
    TransportConfig,
    fit_transport,
    new_transport,
)

__all__ = [
    "constants",
    "exceptions",
    "models",
    "numerics",
    "CollisionFits",
    "CollisionIntegrals",
    "Interaction",
    "SpeciesTransport",
    "load_species",
    "IdealGasPhase",
    "DirectSolve",
    "IterativeSolve",
    "MultiTransport",
    "TransportConfig",
    "fit_transport",
    "new_transport",
]
