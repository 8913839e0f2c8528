"""Binary, multicomponent and thermal diffusion coefficients for an H2/N2/O2 mixture."""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

from chapman import IdealGasPhase, IterativeSolve, TransportConfig, load_species, new_transport  # noqa: E402
from chapman.constants import K_CONST_ONE_ATM  # noqa: E402


def main() -> None:
    species = load_species(["H2", "N2", "O2"])
    phase = IdealGasPhase(species, T=1500.0, P=K_CONST_ONE_ATM, X=[0.2, 0.6, 0.2])

    direct = new_transport(phase)
    iterative = new_transport(
        phase,
        config=TransportConfig(solver=IterativeSolve(max_iterations=50, tolerance=1.0e-10)),
    )

    np.set_printoptions(precision=5)
    print(f"Temperature: {phase.temperature} K, pressure: {phase.pressure} Pa")
    print("Species:", phase.species_names)
    print("Binary diffusion coefficients [m^2/s]:")
    print(direct.get_binary_diff_coeffs())
    print("Multicomponent diffusion coefficients [m^2/s]:")
    print(direct.get_multi_diff_coeffs())
    print("Thermal diffusion coefficients (LU) [kg/m/s]:", direct.get_thermal_diff_coeffs())
    print("Thermal diffusion coefficients (GMRES) [kg/m/s]:", iterative.get_thermal_diff_coeffs())
    print(f"Thermal conductivity (LU / GMRES): {direct.thermal_conductivity():.6e} / {iterative.thermal_conductivity():.6e}")


if __name__ == "__main__":
    main()
