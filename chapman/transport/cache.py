from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple

from ..exceptions import ChapmanError, ModelParameterException

logger = logging.getLogger(__name__)


class CacheEntry(Enum):
    TEMPERATURE = "temperature"
    MOLE_FRACTIONS = "mole_fractions"
    SPECIES_VISCOSITY = "species_viscosity"
    VISCOSITY_WEIGHTS = "viscosity_weights"
    BINARY_DIFFUSION = "binary_diffusion"
    COLLISION_INTEGRALS = "collision_integrals"
    THERMAL = "thermal"
    L0000 = "l0000"
    LMATRIX_SOLUTION = "lmatrix_solution"


# entry -> entries it is computed from
TRANSPORT_DEPENDENCIES: Dict[CacheEntry, Tuple[CacheEntry, ...]] = {
    CacheEntry.TEMPERATURE: (),
    CacheEntry.MOLE_FRACTIONS: (),
    CacheEntry.SPECIES_VISCOSITY: (CacheEntry.TEMPERATURE,),
    CacheEntry.VISCOSITY_WEIGHTS: (CacheEntry.SPECIES_VISCOSITY,),
    CacheEntry.BINARY_DIFFUSION: (CacheEntry.TEMPERATURE,),
    CacheEntry.COLLISION_INTEGRALS: (CacheEntry.TEMPERATURE,),
    CacheEntry.THERMAL: (
        CacheEntry.SPECIES_VISCOSITY,
        CacheEntry.BINARY_DIFFUSION,
        CacheEntry.COLLISION_INTEGRALS,
    ),
    CacheEntry.L0000: (CacheEntry.BINARY_DIFFUSION, CacheEntry.MOLE_FRACTIONS),
    CacheEntry.LMATRIX_SOLUTION: (CacheEntry.THERMAL, CacheEntry.MOLE_FRACTIONS),
}


class PropertyCache:
    """
    Valid/invalid flags for a set of derived quantities connected by an acyclic
    dependency graph. Invalidating an entry invalidates everything computed
    from it; an entry can only be marked valid once all its prerequisites are.
    """

    def __init__(self, dependencies: Mapping[CacheEntry, Iterable[CacheEntry]] | None = None) -> None:
        dependencies = TRANSPORT_DEPENDENCIES if dependencies is None else dependencies
        self._prerequisites: Dict[CacheEntry, Tuple[CacheEntry, ...]] = {}
        for entry, prerequisites in dependencies.items():
            self._prerequisites[entry] = tuple(prerequisites)
            for prerequisite in self._prerequisites[entry]:
                self._prerequisites.setdefault(prerequisite, ())
        self._direct_dependents: Dict[CacheEntry, Tuple[CacheEntry, ...]] = {
            entry: tuple(e for e, pre in self._prerequisites.items() if entry in pre) for entry in self._prerequisites
        }
        self._check_acyclic()
        self._valid: Dict[CacheEntry, bool] = {entry: False for entry in self._prerequisites}
        self.recompute_counts: Counter = Counter()

    def _check_acyclic(self) -> None:
        # Kahn's algorithm: every entry must be removable in topological order
        remaining = {entry: len(pre) for entry, pre in self._prerequisites.items()}
        ready = [entry for entry, count in remaining.items() if count == 0]
        visited = 0
        while ready:
            entry = ready.pop()
            visited += 1
            for dependent in self._direct_dependents[entry]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    ready.append(dependent)
        if visited != len(self._prerequisites):
            cyclic = sorted(entry.name for entry, count in remaining.items() if count > 0)
            raise ModelParameterException(f"Cyclic cache dependencies among {cyclic}")

    @property
    def entries(self) -> Tuple[CacheEntry, ...]:
        return tuple(self._prerequisites)

    def prerequisites(self, entry: CacheEntry) -> Tuple[CacheEntry, ...]:
        return self._prerequisites[entry]

    def dependents(self, entry: CacheEntry) -> FrozenSet[CacheEntry]:
        """All entries computed, directly or transitively, from ``entry``."""
        result = set()
        stack = list(self._direct_dependents[entry])
        while stack:
            current = stack.pop()
            if current not in result:
                result.add(current)
                stack.extend(self._direct_dependents[current])
        return frozenset(result)

    def is_valid(self, entry: CacheEntry) -> bool:
        return self._valid[entry]

    def invalidate(self, entry: CacheEntry) -> None:
        self._valid[entry] = False
        for dependent in self.dependents(entry):
            self._valid[dependent] = False

    def invalidate_all(self) -> None:
        for entry in self._valid:
            self._valid[entry] = False

    def mark_valid(self, entry: CacheEntry) -> None:
        stale = [pre.name for pre in self._prerequisites[entry] if not self._valid[pre]]
        if stale:
            raise ChapmanError(f"Cannot mark {entry.name} valid while {', '.join(stale)} is stale")
        self._valid[entry] = True
        self.recompute_counts[entry] += 1
        logger.debug("Recomputed %s", entry.name)
