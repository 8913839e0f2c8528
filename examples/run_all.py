"""Run all Python example scripts."""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

EXAMPLE_ROOT = Path(__file__).resolve().parent


def main() -> None:
    scripts = [
        EXAMPLE_ROOT / "collisions" / "omega_table.py",
        EXAMPLE_ROOT / "mixtures" / "thermal_conductivity.py",
        EXAMPLE_ROOT / "mixtures" / "mixture_diffusion.py",
        EXAMPLE_ROOT / "mixtures" / "species_fluxes.py",
    ]
    for script in scripts:
        print(f"Running {script} ...")
        result = subprocess.run([sys.executable, str(script)], check=False)
        if result.returncode != 0:
            raise SystemExit(f"{script} failed with exit code {result.returncode}")


if __name__ == "__main__":
    main()
