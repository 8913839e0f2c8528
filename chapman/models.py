"""Enum definitions used to select transport models."""
from __future__ import annotations

from enum import Enum


class ModelsTransport(Enum):
    MULTICOMPONENT = "model_transport_multicomponent"
    MIXTURE_AVERAGED = "model_transport_mixture_averaged"


class ModelsFit(Enum):
    """Parameterisation of the temperature fits.

    CK: exponential of a cubic in ln T for species viscosities and binary
    diffusion coefficients, degree 6 polynomials in ln T* for the star
    functions. STANDARD: sqrt(T) (T^1.5 for diffusion) times a quartic in
    ln T, degree 8 polynomials for the star functions.
    """

    CK = "model_fit_ck"
    STANDARD = "model_fit_standard"


class ModelsOmega(Enum):
    LENNARD_JONES = "model_omega_lennardjones"
    NEUFELD = "model_omega_neufeld"


FIT_NAMES = {"ck": ModelsFit.CK, "standard": ModelsFit.STANDARD}

OMEGA_NAMES = {
    "lennard-jones": ModelsOmega.LENNARD_JONES,
    "neufeld": ModelsOmega.NEUFELD,
}

TRANSPORT_NAMES = {
    "multicomponent": ModelsTransport.MULTICOMPONENT,
    "mixture-averaged": ModelsTransport.MIXTURE_AVERAGED,
}
