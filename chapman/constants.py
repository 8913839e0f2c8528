"""Physical constants and unit conversions (SI, molar quantities per kmol)."""
from __future__ import annotations

import math

K_CONST_PI = math.pi
K_CONST_SQRT_PI = math.sqrt(math.pi)
K_CONST_SQRT_EIGHT = math.sqrt(8.0)

# Boltzmann constant, J/K
K_CONST_K = 1.380649e-23
# Avogadro number, 1/kmol
K_CONST_NA = 6.02214076e26
# universal gas constant, J/(kmol K)
K_CONST_R = K_CONST_K * K_CONST_NA
# vacuum permittivity, F/m
K_CONST_E0 = 8.8541878128e-12
K_CONST_C = 299792458.0

K_CONST_ANGSTROM = 1.0e-10
K_CONST_DEBYE = 1.0e-21 / K_CONST_C
K_CONST_ONE_ATM = 101325.0

# mole fractions are clamped to this value before any transport evaluation
K_CONST_MIN_X = 1.0e-20

# step in ln(T*) for numerical derivatives of reduced collision integrals
K_CONST_OMEGA_D_STEP_SIZE = 1.0e-3

# temperature at which rotational collision numbers are tabulated
K_CONST_ZROT_REFERENCE_T = 298.0
