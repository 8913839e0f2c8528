import pytest

from chapman.exceptions import ChapmanError, ModelParameterException
from chapman.transport import CacheEntry, PropertyCache


def make_valid(cache, *entries):
    for entry in entries:
        cache.mark_valid(entry)


def all_entries_valid():
    cache = PropertyCache()
    make_valid(
        cache,
        CacheEntry.TEMPERATURE,
        CacheEntry.MOLE_FRACTIONS,
        CacheEntry.SPECIES_VISCOSITY,
        CacheEntry.VISCOSITY_WEIGHTS,
        CacheEntry.BINARY_DIFFUSION,
        CacheEntry.COLLISION_INTEGRALS,
        CacheEntry.THERMAL,
        CacheEntry.L0000,
        CacheEntry.LMATRIX_SOLUTION,
    )
    return cache


def test_new_cache_is_all_invalid():
    cache = PropertyCache()
    assert len(cache.entries) == len(CacheEntry)
    assert not any(cache.is_valid(entry) for entry in cache.entries)


def test_temperature_invalidates_everything_derived_from_it():
    cache = all_entries_valid()
    cache.invalidate(CacheEntry.TEMPERATURE)
    for entry in CacheEntry:
        assert cache.is_valid(entry) == (entry == CacheEntry.MOLE_FRACTIONS)


def test_composition_invalidates_only_composition_tier():
    cache = all_entries_valid()
    cache.invalidate(CacheEntry.MOLE_FRACTIONS)
    stale = {entry for entry in CacheEntry if not cache.is_valid(entry)}
    assert stale == {CacheEntry.MOLE_FRACTIONS, CacheEntry.L0000, CacheEntry.LMATRIX_SOLUTION}


def test_binary_diffusion_dependents():
    cache = PropertyCache()
    assert cache.dependents(CacheEntry.BINARY_DIFFUSION) == {
        CacheEntry.THERMAL,
        CacheEntry.L0000,
        CacheEntry.LMATRIX_SOLUTION,
    }
    assert cache.dependents(CacheEntry.L0000) == frozenset()


def test_mark_valid_requires_prerequisites():
    cache = PropertyCache()
    with pytest.raises(ChapmanError):
        cache.mark_valid(CacheEntry.SPECIES_VISCOSITY)
    cache.mark_valid(CacheEntry.TEMPERATURE)
    cache.mark_valid(CacheEntry.SPECIES_VISCOSITY)
    assert cache.recompute_counts[CacheEntry.SPECIES_VISCOSITY] == 1


def test_invalidate_all():
    cache = all_entries_valid()
    cache.invalidate_all()
    assert not any(cache.is_valid(entry) for entry in CacheEntry)


def test_cyclic_graph_is_rejected():
    with pytest.raises(ModelParameterException):
        PropertyCache(
            {
                CacheEntry.TEMPERATURE: (CacheEntry.THERMAL,),
                CacheEntry.THERMAL: (CacheEntry.TEMPERATURE,),
            }
        )
