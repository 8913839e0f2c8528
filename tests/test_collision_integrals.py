import math

import numpy as np
import pytest

from chapman import CollisionFits, CollisionIntegrals, Interaction, load_species
from chapman.models import ModelsFit, ModelsOmega

# tabulated Lennard-Jones reduced collision integrals (Hirschfelder, Curtiss & Bird)
LJ_TABLE = [
    # T*, Omega(1,1), Omega(2,2)
    (1.0, 1.439, 1.587),
    (2.0, 1.075, 1.175),
    (5.0, 0.8422, 0.9268),
    (10.0, 0.7424, 0.8244),
]


@pytest.mark.parametrize("model", [ModelsOmega.LENNARD_JONES, ModelsOmega.NEUFELD])
@pytest.mark.parametrize("t_star, omega11, omega22", LJ_TABLE)
def test_correlations_match_table(model, t_star, omega11, omega22):
    integrals = CollisionIntegrals(model)
    assert integrals.omega11(t_star) == pytest.approx(omega11, rel=0.02)
    assert integrals.omega22(t_star) == pytest.approx(omega22, rel=0.02)


def test_polar_correction_raises_integrals():
    integrals = CollisionIntegrals()
    assert integrals.omega11(2.0, 0.5) == pytest.approx(integrals.omega11(2.0) + 0.19 * 0.25 / 2.0)
    assert integrals.omega22(2.0, 0.5) == pytest.approx(integrals.omega22(2.0) + 0.2 * 0.25 / 2.0)


def test_star_functions_in_physical_range():
    integrals = CollisionIntegrals()
    for t_star in np.geomspace(2.0, 50.0, 12):
        assert 1.05 < integrals.astar(t_star) < 1.2
        assert 1.0 < integrals.bstar(t_star) < 1.3
        assert 0.85 < integrals.cstar(t_star) < 1.0


def test_recursion_uses_log_derivative():
    integrals = CollisionIntegrals(ModelsOmega.NEUFELD)
    t_star = 3.0
    h = 1.0e-4
    slope = (math.log(integrals.omega11(t_star * math.exp(h))) - math.log(integrals.omega11(t_star * math.exp(-h)))) / (2 * h)
    assert integrals.omega(t_star, 1, 2) == pytest.approx(integrals.omega11(t_star) * (1 + slope / 3), rel=1e-6)


@pytest.mark.parametrize("delta", [0.0, 1.2])
def test_lennard_jones_higher_integrals_scale_neufeld_ratios(delta):
    lj = CollisionIntegrals()
    neufeld = CollisionIntegrals(ModelsOmega.NEUFELD)
    for t_star in (0.3, 0.4, 1.0, 10.0):
        assert lj.cstar(t_star, delta) == pytest.approx(neufeld.cstar(t_star, delta), rel=1e-10)
        assert lj.bstar(t_star, delta) == pytest.approx(neufeld.bstar(t_star, delta), rel=1e-10)
        assert lj.omega(t_star, 1, 2, delta) == pytest.approx(lj.omega11(t_star, delta) * lj.cstar(t_star, delta))


@pytest.mark.parametrize("model", [ModelsOmega.LENNARD_JONES, ModelsOmega.NEUFELD])
def test_star_functions_physical_at_low_reduced_temperature(model):
    integrals = CollisionIntegrals(model)
    for t_star in np.linspace(0.3, 0.5, 5):
        for delta in (0.0, 1.2):
            assert integrals.omega(t_star, 1, 2, delta) > 0.0
            assert integrals.omega(t_star, 1, 3, delta) > 0.0
            assert 0.9 < integrals.astar(t_star, delta) < 1.3
            assert 0.9 < integrals.bstar(t_star, delta) < 1.6
            assert 0.6 < integrals.cstar(t_star, delta) < 1.0


def _interactions(names):
    species = load_species(names)
    return [[Interaction(a, b) for b in species] for a in species]


@pytest.mark.parametrize("fit_mode", [ModelsFit.CK, ModelsFit.STANDARD])
def test_fits_reproduce_direct_evaluation(fit_mode):
    interactions = _interactions(["H2", "N2"])
    fits = CollisionFits.build(interactions, fit_mode=fit_mode)
    integrals = CollisionIntegrals()
    for T in (400.0, 1000.0, 2500.0):
        omega22, astar, bstar, cstar = fits.evaluate(math.log(T))
        for i in range(2):
            for j in range(2):
                t_star = interactions[i][j].reduced_temperature(T)
                assert omega22[i, j] == pytest.approx(integrals.omega22(t_star), rel=5e-3)
                assert astar[i, j] == pytest.approx(integrals.astar(t_star), rel=5e-3)
                assert bstar[i, j] == pytest.approx(integrals.bstar(t_star), rel=5e-3)
                assert cstar[i, j] == pytest.approx(integrals.cstar(t_star), rel=5e-3)
        np.testing.assert_array_equal(astar, astar.T)


def test_star_fits_shared_by_reduced_dipole():
    fits = CollisionFits.build(_interactions(["H2", "N2", "H2O"]))
    # every non-polar pair shares the delta* = 0 fit; H2O-H2O gets its own
    assert len(fits.deltas) == 2
    assert fits.poly_index[0, 1] == fits.poly_index[0, 2] == fits.poly_index[1, 2]
    assert fits.poly_index[2, 2] != fits.poly_index[0, 0]
    assert fits.omega22_poly.shape == (2, 7)


@pytest.mark.parametrize("fit_mode", [ModelsFit.CK, ModelsFit.STANDARD])
def test_polar_fits_physical_near_lower_reduced_temperature(fit_mode):
    interactions = _interactions(["H2", "N2", "H2O"])
    water = interactions[2][2]
    fits = CollisionFits.build(interactions, fit_mode=fit_mode)
    for t_star in np.linspace(0.3, 0.5, 5):
        omega22, astar, bstar, cstar = fits.evaluate(math.log(t_star * water.epsilon_k))
        assert omega22[2, 2] > 0.0
        assert 0.9 < astar[2, 2] < 1.3
        assert 0.9 < bstar[2, 2] < 1.6
        assert 0.6 < cstar[2, 2] < 1.0
