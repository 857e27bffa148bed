from .params import (
    ENV_PREFIX,
    AggregatorParams,
    ConsensusParams,
    DecayParams,
    EscalatorParams,
    WindowParams,
    DEFAULT_CONSENSUS_PARAMS,
    get_consensus_params,
)

__all__ = [
    "ENV_PREFIX",
    "AggregatorParams",
    "ConsensusParams",
    "DecayParams",
    "EscalatorParams",
    "WindowParams",
    "DEFAULT_CONSENSUS_PARAMS",
    "get_consensus_params",
]
