from swisspairing.testing.simulation import (
    PlayerFactory,
    RatingDistribution,
    ResultPattern,
    ResultSimulator,
    SimulationConfig,
    SimulationResult,
    TournamentSimulator,
    create_small_simulation,
)

__all__ = [
    "PlayerFactory",
    "RatingDistribution",
    "ResultPattern",
    "ResultSimulator",
    "SimulationConfig",
    "SimulationResult",
    "TournamentSimulator",
    "create_small_simulation",
]
