from conftest import make_players, play_round
from swisspairing import Pairing, PairingSet, TournamentState
from swisspairing.models import PairingMetadata
from swisspairing.validation import (
    CriterionStatus,
    PairingChecker,
    ViolationType,
    check_tournament_feasibility,
)


def _criterion(report, name):
    return next(r for r in report.criteria_results if r.criterion == name)


def test_engine_round_passes_every_criterion(five_player_state, pairer):
    pairing_set = pairer.preview_round(five_player_state)
    report = PairingChecker().validate_round(pairing_set, five_player_state)

    assert report.is_valid
    assert not report.quality_warnings
    assert _criterion(report, "C2").status is CriterionStatus.COMPLIANT


def test_repeat_pairing_is_an_absolute_violation(four_player_state, pairer):
    first = play_round(four_player_state, pairer)
    white, black = first.as_id_tuples()[0]
    other = [pid for pid in four_player_state.players if pid not in (white, black)]
    repeat = PairingSet(
        round_number=2,
        pairings=(
            Pairing(2, white_id=white, black_id=black),
            Pairing(2, white_id=other[0], black_id=other[1]),
        ),
    )

    report = PairingChecker().validate_round(repeat, four_player_state)

    assert not report.is_valid
    assert _criterion(report, "C1").violation_type is ViolationType.ABSOLUTE


def test_accepted_forced_repeat_is_only_a_warning(four_player_state, pairer):
    first = play_round(four_player_state, pairer)
    white, black = first.as_id_tuples()[0]
    other = [pid for pid in four_player_state.players if pid not in (white, black)]
    boards = (
        Pairing(2, white_id=white, black_id=black),
        Pairing(2, white_id=other[0], black_id=other[1]),
    )
    forced = PairingSet(
        round_number=2,
        pairings=boards,
        metadata=PairingMetadata(forced_repeats=tuple(b.match_key for b in boards)),
    )

    report = PairingChecker().validate_round(forced, four_player_state)

    assert _criterion(report, "C1").violation_type is ViolationType.QUALITY


def test_repeat_bye_and_missing_player_detected():
    state = TournamentState(make_players([1500, 1400, 1300, 1200, 1100]), 3)
    for player in state.players.values():
        if player.id == "E":
            player.add_bye()
        else:
            player.add_absence()
    state.current_round = 1

    bad = PairingSet(
        round_number=2,
        pairings=(Pairing(2, white_id="A", black_id="B"),),
        bye=Pairing.bye("E", 2),
    )
    report = PairingChecker().validate_round(bad, state)

    failed = {v.criterion for v in report.violations}
    assert failed == {"C2", "C3"}
    assert _criterion(report, "C3").details["missing"] == ["C", "D"]


def test_colour_difference_warning():
    state = TournamentState(make_players([1500, 1400]), 3)
    white = state.get_player("A")
    white.color_history.extend(["White", "White"])

    pairing_set = PairingSet(1, pairings=(Pairing(1, white_id="A", black_id="B"),))
    report = PairingChecker().validate_round(pairing_set, state)

    assert report.is_valid
    assert [w.criterion for w in report.quality_warnings] == ["C4"]


def test_tournament_feasibility():
    assert check_tournament_feasibility(8, 5) is None
    infeasible = check_tournament_feasibility(3, 4)
    assert infeasible is not None
    assert infeasible.details["min_repeat_pairings"] == 1
    assert check_tournament_feasibility(1, 4) is None
