import numpy as np
import pytest
import yaml

from chapman import IdealGasPhase, Interaction, SpeciesTransport, constants, load_species
from chapman.exceptions import (
    DataNotFoundException,
    IncorrectValueException,
    ModelParameterException,
    UnopenedFileException,
)

DATABASE = """
NO:
  Molecular weight, kg/kmol: 30.006
  Geometry: linear
  Diameter, A: 3.621
  Well depth, K: 97.53
  Polarizability, A^3: 1.76
  Rotational relaxation: 4.0

O:
  Molecular weight, kg/kmol: 15.999
  Geometry: atom
  Diameter, A: 2.75
  Well depth, K: 80.0
  Internal modes: yes

BROKEN:
  Geometry: atom
  Diameter, A: 2.75
"""


@pytest.fixture
def database(tmp_path):
    path = tmp_path / "species.yaml"
    path.write_text(DATABASE)
    return path


def test_units_are_converted_to_si():
    n2 = SpeciesTransport.from_yaml("N2")
    assert n2.molecular_weight == pytest.approx(28.014)
    assert n2.diameter == pytest.approx(3.621e-10)
    assert n2.well_depth_k == pytest.approx(97.53)
    assert n2.polarizability == pytest.approx(1.76e-30)
    assert n2.crot == 1.0
    assert n2.internal_modes
    assert not n2.is_polar


def test_dipole_in_debye():
    h2o = SpeciesTransport.from_yaml("H2O")
    assert h2o.dipole == pytest.approx(1.844 * 3.33564e-30, rel=1e-5)
    assert h2o.is_polar
    assert h2o.crot == 1.5


def test_species_named_no_stays_a_string(database):
    (no,) = load_species(["NO"], database)
    assert no.name == "NO"
    assert no.rot_relax == 4.0


def test_plain_yaml_loading_is_unaffected(database):
    load_species(["NO"], database)
    assert yaml.safe_load("NO: 1") == {False: 1}


def test_internal_modes_override_for_atoms(database):
    (o,) = load_species(["O"], database)
    assert o.geometry == "atom"
    assert o.crot == 0.0
    assert o.internal_modes
    assert not SpeciesTransport.from_yaml("AR").internal_modes


def test_missing_data(database):
    with pytest.raises(DataNotFoundException):
        load_species(["XE"], database)
    with pytest.raises(DataNotFoundException):
        load_species(["BROKEN"], database)
    with pytest.raises(UnopenedFileException):
        load_species(["N2"], database.parent / "missing.yaml")


def test_unknown_geometry():
    with pytest.raises(ModelParameterException):
        SpeciesTransport("X", 10.0, "ring", 3.0e-10, 1.0e-21)


def test_nonpolar_pair_mixing():
    h2, n2 = load_species(["H2", "N2"])
    pair = Interaction(h2, n2)
    assert pair.collision_diameter == pytest.approx(0.5 * (h2.diameter + n2.diameter))
    assert pair.epsilon_k == pytest.approx(np.sqrt(38.0 * 97.53))
    assert pair.reduced_mass == pytest.approx(2.016 * 28.014 / (2.016 + 28.014) / constants.K_CONST_NA)
    assert pair.reduced_dipole == 0.0
    assert pair.polar_correction == 1.0


def test_polar_nonpolar_pair_correction():
    h2o, n2 = load_species(["H2O", "N2"])
    pair = Interaction(h2o, n2)
    assert pair.polar_correction > 1.0
    assert pair.collision_diameter < 0.5 * (h2o.diameter + n2.diameter)
    assert pair.epsilon > np.sqrt(h2o.well_depth * n2.well_depth)
    assert Interaction(n2, h2o).polar_correction == pytest.approx(pair.polar_correction)
    self_pair = Interaction(h2o, h2o)
    assert self_pair.polar_correction == 1.0
    assert self_pair.reduced_dipole == pytest.approx(1.22, rel=0.01)


class TestIdealGasPhase:
    def test_normalises_composition(self):
        phase = IdealGasPhase(load_species(["H2", "N2"]), T=500.0, X=[1.0, 3.0])
        np.testing.assert_allclose(phase.mole_fractions, [0.25, 0.75])
        assert phase.mass_fractions.sum() == pytest.approx(1.0)

    def test_density_and_mass_fractions(self):
        species = load_species(["H2", "N2"])
        phase = IdealGasPhase(species, T=1000.0, P=constants.K_CONST_ONE_ATM, X={"H2": 0.5, "N2": 0.5})
        mbar = 0.5 * (2.016 + 28.014)
        assert phase.mean_molecular_weight == pytest.approx(mbar)
        assert phase.density == pytest.approx(constants.K_CONST_ONE_ATM * mbar / (constants.K_CONST_R * 1000.0))
        np.testing.assert_allclose(phase.mass_fractions, [0.5 * 2.016 / mbar, 0.5 * 28.014 / mbar])

    def test_set_mass_fractions(self):
        phase = IdealGasPhase(load_species(["H2", "N2"]))
        phase.set_TPY(800.0, 2.0e5, [0.5, 0.5])
        np.testing.assert_allclose(phase.mass_fractions, [0.5, 0.5])
        assert phase.temperature == 800.0
        assert phase.pressure == 2.0e5

    def test_default_heat_capacities(self):
        phase = IdealGasPhase(load_species(["AR", "N2", "H2O"]))
        np.testing.assert_allclose(phase.cp_R(), [2.5, 3.5, 4.0])
        phase = IdealGasPhase(load_species(["AR", "N2"]), cp_R=lambda T: np.array([2.5, 3.5 + T / 1000.0]))
        phase.set_temperature(500.0)
        np.testing.assert_allclose(phase.cp_R(), [2.5, 4.0])

    @pytest.mark.parametrize("X", [[-0.1, 1.1], [0.0, 0.0], [1.0, 0.0, 0.0]])
    def test_bad_composition(self, X):
        phase = IdealGasPhase(load_species(["H2", "N2"]))
        with pytest.raises(IncorrectValueException):
            phase.set_mole_fractions(X)

    def test_bad_state(self):
        phase = IdealGasPhase(load_species(["H2", "N2"]))
        with pytest.raises(IncorrectValueException):
            phase.set_temperature(0.0)
        with pytest.raises(IncorrectValueException):
            phase.set_pressure(-1.0)
        with pytest.raises(DataNotFoundException):
            phase.species_index("AR")
