"""Pair interaction parameters."""
from __future__ import annotations

from .interaction import Interaction

__all__ = ["Interaction"]
