from __future__ import annotations

import logging
from typing import Sequence

from ..exceptions import ModelParameterException, UnsupportedModelError
from ..models import TRANSPORT_NAMES, ModelsTransport
from ..species import SpeciesTransport
from ..thermo import IdealGasPhase
from .config import TransportConfig
from .fitting import fit_transport
from .multi_transport import MultiTransport

logger = logging.getLogger(__name__)


def new_transport(
    phase: IdealGasPhase,
    species: Sequence[SpeciesTransport] | None = None,
    *,
    model: ModelsTransport | str = ModelsTransport.MULTICOMPONENT,
    config: TransportConfig | None = None,
    with_soret: bool = False,
) -> MultiTransport:
    """
    Fit the transport parameters of the phase species and return a transport
    model attached to ``phase``. ``species`` overrides the parameters stored
    on the phase and must list the same species in the same order.
    """
    if isinstance(model, str):
        key = model.strip().lower()
        if key not in TRANSPORT_NAMES:
            raise ModelParameterException(f"Unknown transport model '{model}', expected one of {sorted(TRANSPORT_NAMES)}")
        model = TRANSPORT_NAMES[key]
    if model == ModelsTransport.MIXTURE_AVERAGED:
        if with_soret:
            raise UnsupportedModelError("Thermal diffusion requires a multicomponent transport model")
        raise UnsupportedModelError("Mixture-averaged transport is not implemented; use the multicomponent model")
    if model != ModelsTransport.MULTICOMPONENT:
        raise ModelParameterException(f"Unknown transport model {model}")

    config = config or TransportConfig()
    species = list(phase.species if species is None else species)
    params = fit_transport(species, config)
    transport = MultiTransport(phase, params, config)
    logger.info(
        "Created multicomponent transport for %d species (%s solver)",
        transport.n_species,
        type(config.solver).__name__,
    )
    return transport
