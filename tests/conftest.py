import pytest

from swisspairing import GameResult, Player, SwissConfig, SwissPairer, TournamentState


def make_players(ratings):
    """Players named A, B, C ... with the given ratings, in registration order."""
    return [
        Player(id=chr(ord("A") + i), name=f"Player {chr(ord('A') + i)}", rating=r)
        for i, r in enumerate(ratings)
    ]


def play_round(state, pairer, white_result=GameResult.WIN):
    """Pair the next round and resolve every board with ``white_result``."""
    pairing_set = pairer.pair_round(state)
    results = []
    for pairing in pairing_set.pairings:
        results.extend(pairing.outcomes(white_result))
    if pairing_set.bye is not None:
        results.extend(pairing_set.bye.outcomes())
    state.apply_round_results(results)
    return pairing_set


@pytest.fixture
def four_player_state():
    return TournamentState(make_players([2000, 1900, 1800, 1700]), total_rounds=3)


@pytest.fixture
def five_player_state():
    return TournamentState(
        make_players([2000, 1900, 1800, 1700, 1600]), total_rounds=3
    )


@pytest.fixture
def pairer():
    return SwissPairer(SwissConfig(total_rounds=3))
