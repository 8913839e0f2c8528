import pytest

from chapman.exceptions import ModelParameterException
from chapman.models import ModelsFit, ModelsOmega
from chapman.transport import DirectSolve, IterativeSolve, TransportConfig

CONFIG = """
transport:
  fit-mode: standard
  collision-model: neufeld
  solver:
    method: iterative
    max-iterations: 40
    tolerance: 1.0e-8
  temperature-range: [250.0, 3000.0]
  min-mole-fraction: 1.0e-16
  fit-points: 30
"""


def test_defaults():
    config = TransportConfig()
    assert config.fit_mode == ModelsFit.CK
    assert config.omega_model == ModelsOmega.LENNARD_JONES
    assert config.solver == DirectSolve()
    assert config.min_mole_fraction == 1.0e-20
    assert (config.tmin, config.tmax, config.n_fit_points) == (300.0, 3500.0, 50)
    assert IterativeSolve() == IterativeSolve(max_iterations=100, tolerance=1.0e-4)


def test_from_yaml(tmp_path):
    path = tmp_path / "transport.yaml"
    path.write_text(CONFIG)
    config = TransportConfig.from_yaml(path)
    assert config.fit_mode == ModelsFit.STANDARD
    assert config.omega_model == ModelsOmega.NEUFELD
    assert config.solver == IterativeSolve(max_iterations=40, tolerance=1.0e-8)
    assert (config.tmin, config.tmax) == (250.0, 3000.0)
    assert config.min_mole_fraction == 1.0e-16
    assert config.n_fit_points == 30


def test_from_dict_solver_shorthand():
    config = TransportConfig.from_dict({"solver": "direct", "fit-mode": "CK"})
    assert config.solver == DirectSolve()
    assert config.fit_mode == ModelsFit.CK


@pytest.mark.parametrize(
    "section",
    [
        {"fit-mode": "spline"},
        {"collision-model": "hard-sphere"},
        {"solver": {"method": "cholesky"}},
        {"solver": {"method": "iterative", "max-iterations": 0}},
        {"temperature-range": [3000.0, 300.0]},
        {"temperature-range": 300.0},
    ],
)
def test_invalid_values(section):
    with pytest.raises(ModelParameterException):
        TransportConfig.from_dict({"transport": section})


def test_config_is_frozen():
    config = TransportConfig()
    with pytest.raises(AttributeError):
        config.tmin = 200.0
