import pytest

from chapman import IdealGasPhase, MultiTransport, fit_transport, load_species
from chapman.constants import K_CONST_ONE_ATM


@pytest.fixture(scope="session")
def h2_n2_species():
    return load_species(["H2", "N2"])


@pytest.fixture(scope="session")
def h2_n2_params(h2_n2_species):
    return fit_transport(h2_n2_species)


@pytest.fixture
def h2_n2_phase(h2_n2_species):
    return IdealGasPhase(h2_n2_species, T=1000.0, P=K_CONST_ONE_ATM, X=[0.5, 0.5])


@pytest.fixture
def h2_n2_transport(h2_n2_phase, h2_n2_params):
    return MultiTransport(h2_n2_phase, h2_n2_params)


@pytest.fixture(scope="session")
def h2_n2_o2_species():
    return load_species(["H2", "N2", "O2"])


@pytest.fixture(scope="session")
def h2_n2_o2_params(h2_n2_o2_species):
    return fit_transport(h2_n2_o2_species)


@pytest.fixture
def h2_n2_o2_phase(h2_n2_o2_species):
    return IdealGasPhase(h2_n2_o2_species, T=1200.0, P=K_CONST_ONE_ATM, X=[0.3, 0.5, 0.2])
