"""Diffusive mass fluxes with and without thermal diffusion in a 2-D gradient field."""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

from chapman import IdealGasPhase, load_species, new_transport  # noqa: E402
from chapman.constants import K_CONST_ONE_ATM  # noqa: E402


def main() -> None:
    species = load_species(["H2", "O2", "H2O", "N2"])
    phase = IdealGasPhase(species, T=1200.0, P=K_CONST_ONE_ATM, X=[0.1, 0.1, 0.2, 0.6])
    transport = new_transport(phase)

    # 1/m, columns follow the phase species order
    grad_X = np.array(
        [
            [-20.0, -5.0, 25.0, 0.0],
            [2.0, 1.0, -3.0, 0.0],
        ]
    )
    grad_T = np.array([5.0e4, 0.0])

    no_soret = transport.get_species_fluxes(np.zeros(2), grad_X)
    with_soret = transport.get_species_fluxes(grad_T, grad_X)

    np.set_printoptions(precision=5)
    print("Species:", phase.species_names)
    print("Fluxes without thermal diffusion [kg/m^2/s]:")
    print(no_soret)
    print("Fluxes with thermal diffusion [kg/m^2/s]:")
    print(with_soret)
    print("Net mass flux per direction:", with_soret.sum(axis=1))


if __name__ == "__main__":
    main()
