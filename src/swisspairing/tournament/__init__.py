from swisspairing.tournament.result_recorder import ResultRecorder
from swisspairing.tournament.tournament_state import TournamentState

__all__ = [
    "ResultRecorder",
    "TournamentState",
]
