"""Species transport parameters."""
from __future__ import annotations

from .species import DEFAULT_DATABASE, SpeciesTransport, load_species

__all__ = ["DEFAULT_DATABASE", "SpeciesTransport", "load_species"]
