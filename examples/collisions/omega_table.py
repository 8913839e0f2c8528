"""Reduced collision integrals and star functions for both correlations."""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

from chapman.collisions import CollisionIntegrals  # noqa: E402
from chapman.models import ModelsOmega  # noqa: E402


def write_block(integrals: CollisionIntegrals, t_vals: np.ndarray, out_path: Path, delta: float) -> None:
    with out_path.open("w") as fh:
        fh.write(f"{'T*':>12s}{'Omega(1,1)':>16s}{'Omega(2,2)':>16s}{'A*':>16s}{'B*':>16s}{'C*':>16s}\n")
        for t_star in t_vals:
            fh.write(
                f"{t_star:12.4f}"
                f"{integrals.omega11(t_star, delta):16.8e}"
                f"{integrals.omega22(t_star, delta):16.8e}"
                f"{integrals.astar(t_star, delta):16.8e}"
                f"{integrals.bstar(t_star, delta):16.8e}"
                f"{integrals.cstar(t_star, delta):16.8e}\n"
            )


def main() -> None:
    t_vals = np.geomspace(0.3, 100.0, 25)
    out_dir = Path.cwd() / "COLLISION_INTEGRALS"
    out_dir.mkdir(parents=True, exist_ok=True)

    for model in (ModelsOmega.LENNARD_JONES, ModelsOmega.NEUFELD):
        integrals = CollisionIntegrals(model)
        for delta in (0.0, 0.5):
            out_path = out_dir / f"{model.name.lower()}_delta{delta:.1f}.txt"
            write_block(integrals, t_vals, out_path, delta)
            print(f"Wrote {out_path}")

    integrals = CollisionIntegrals()
    print(f"{'T*':>8s}{'Omega(1,1)':>14s}{'Omega(2,2)':>14s}")
    for t_star in (1.0, 2.0, 5.0, 10.0):
        print(f"{t_star:8.1f}{integrals.omega11(t_star):14.5f}{integrals.omega22(t_star):14.5f}")


if __name__ == "__main__":
    main()
