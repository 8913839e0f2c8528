"""Multicomponent transport model."""
from __future__ import annotations

from .cache import CacheEntry, PropertyCache, TRANSPORT_DEPENDENCIES
from .config import DirectSolve, IterativeSolve, TransportConfig
from .factory import new_transport
from .fitting import TransportParams, fit_transport
from .lmatrix import LMatrix, ThermalState
from .multi_transport import MultiTransport

__all__ = [
    "CacheEntry",
    "PropertyCache",
    "TRANSPORT_DEPENDENCIES",
    "DirectSolve",
    "IterativeSolve",
    "TransportConfig",
    "new_transport",
    "TransportParams",
    "fit_transport",
    "LMatrix",
    "ThermalState",
    "MultiTransport",
]
