from swisspairing.pairing.bye import ByeAssigner, ByeSelection
from swisspairing.pairing.colors import ColorAllocator
from swisspairing.pairing.dutch_swiss import SwissPairer
from swisspairing.pairing.score_groups import ScoreGroup, ScoreGroupBuilder, rank_players
from swisspairing.pairing.search import (
    ColourRule,
    PairingSearch,
    SearchBudget,
    SearchOutcome,
)

__all__ = [
    "ByeAssigner",
    "ByeSelection",
    "ColorAllocator",
    "ColourRule",
    "PairingSearch",
    "ScoreGroup",
    "ScoreGroupBuilder",
    "SearchBudget",
    "SearchOutcome",
    "SwissPairer",
    "rank_players",
]
