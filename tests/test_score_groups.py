import pytest

from conftest import make_players
from swisspairing import NoValidByeCandidate
from swisspairing.models import ByePolicy
from swisspairing.pairing import ByeAssigner, ScoreGroupBuilder, rank_players


def _with_scores(players, scores):
    for player, score in zip(players, scores):
        player.score = score
        player.pairing_number = ord(player.id) - ord("A") + 1
    return players


def test_groups_ordered_by_score_then_rating():
    players = _with_scores(
        make_players([1500, 2100, 1800, 1900, 1600]), [1.0, 0.0, 1.0, 0.5, 1.0]
    )
    groups = ScoreGroupBuilder().build(players, rating_importance=0.1)

    assert [g.score for g in groups] == [1.0, 0.5, 0.0]
    assert [p.id for p in groups[0].players] == ["C", "E", "A"]
    assert groups[0].is_odd
    assert [p.id for p in rank_players(groups)] == ["C", "E", "A", "D", "B"]


def test_registration_order_breaks_rating_ties():
    players = _with_scores(make_players([1500, 1500, 1500]), [0, 0, 0])
    groups = ScoreGroupBuilder().build(reversed(players), rating_importance=0.1)
    assert groups[0].player_ids == ("A", "B", "C")


def test_zero_rating_importance_uses_registration_order():
    players = _with_scores(make_players([1200, 2400, 1800]), [0, 0, 0])
    groups = ScoreGroupBuilder().build(players, rating_importance=0.0)
    assert groups[0].player_ids == ("A", "B", "C")


def test_builder_is_pure():
    players = _with_scores(make_players([1500, 1600]), [0.5, 0.0])
    before = [p.to_dict() for p in players]
    ScoreGroupBuilder().build(players, rating_importance=0.1)
    assert [p.to_dict() for p in players] == before


def test_bye_goes_to_lowest_ranked_without_bye():
    ranked = make_players([2000, 1900, 1800])
    ranked[2].add_bye()
    ranked[1].add_absence()
    ranked[0].add_absence()

    selection = ByeAssigner().select(ranked)

    assert selection.player.id == "B"
    assert selection.policy is ByePolicy.NO_PREVIOUS_BYE


def test_bye_fallback_when_everyone_had_one(caplog):
    ranked = make_players([2000, 1900, 1800])
    for player in ranked:
        player.add_bye()
    ranked[2].add_bye()

    candidates = ByeAssigner().candidates(ranked)

    assert [c.player.id for c in candidates] == ["B", "A", "C"]
    assert all(c.policy is ByePolicy.REPEAT_BYE_FALLBACK for c in candidates)
    assert ByeAssigner().select(ranked).player.id == "B"
    assert "already had a bye" in caplog.text


def test_bye_needs_a_pool():
    with pytest.raises(NoValidByeCandidate):
        ByeAssigner().select([])


def test_rating_weight_only_switches_rating_on():
    players = _with_scores(make_players([1500, 2100, 1800]), [0, 0, 0])
    light = ScoreGroupBuilder().build(players, rating_importance=0.01)
    heavy = ScoreGroupBuilder().build(players, rating_importance=1.0)
    assert light[0].player_ids == heavy[0].player_ids == ("B", "C", "A")
