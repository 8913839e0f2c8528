"""Thermodynamic state of an ideal-gas mixture."""
from __future__ import annotations

from .phase import IdealGasPhase

__all__ = ["IdealGasPhase"]
