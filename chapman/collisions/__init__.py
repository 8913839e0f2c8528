"""Reduced collision integrals and their temperature fits."""
from __future__ import annotations

from .collision_integrals import CollisionIntegrals
from .fits import CollisionFits

__all__ = ["CollisionIntegrals", "CollisionFits"]
