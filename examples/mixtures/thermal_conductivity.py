"""Viscosity and thermal conductivity of an H2/N2 mixture over a temperature sweep."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

from chapman import IdealGasPhase, load_species, new_transport  # noqa: E402
from chapman.constants import K_CONST_ONE_ATM  # noqa: E402
from chapman.species import DEFAULT_DATABASE  # noqa: E402


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    database = Path(os.environ.get("CHAPMAN_SPECIES_DATABASE", DEFAULT_DATABASE))

    species = load_species(["H2", "N2"], database)
    phase = IdealGasPhase(species, T=500.0, P=K_CONST_ONE_ATM, X=[0.5, 0.5])
    transport = new_transport(phase)

    temperature = 500.0
    tmax = 3000.0

    out_dir = Path.cwd() / "TRANSPORT_COEFFICIENTS" / "thermal_conductivity"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / "H2_N2.txt"

    with out_file.open("w") as fh:
        fh.write(f"{'Temperature [K]':>20s}{'mu [Pa s]':>20s}{'k [W/m/K]':>20s}\n")
        while temperature <= tmax:
            phase.set_temperature(temperature)
            mu = transport.viscosity()
            th_c = transport.thermal_conductivity()
            print(f"{temperature:20.1f} {mu:20.8e} {th_c:20.8e}")
            fh.write(f"{temperature:20.1f}{mu:20.8e}{th_c:20.8e}\n")
            temperature += 250.0

    print("Thermal diffusion coefficients at", phase.temperature, "K:", transport.get_thermal_diff_coeffs())
    print(f"Wrote thermal conductivity to {out_file}")


if __name__ == "__main__":
    main()
