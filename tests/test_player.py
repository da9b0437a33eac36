import uuid

import pytest

from swisspairing import BLACK, WHITE, FloatType, InvalidPlayerDataException, Player
from swisspairing.models import ColourStrength


def test_player_id_is_normalised_to_string():
    raw = uuid.uuid4()
    player = Player(id=raw, name="Anna", rating=1500)
    assert player.id == str(raw)
    assert Player(id=7, name="Bob").id == "7"


def test_unrated_player_gets_zero():
    assert Player(id="x", name="Unrated").rating == 0


@pytest.mark.parametrize("rating", [-5, 4000, "strong", True])
def test_invalid_rating_rejected(rating):
    with pytest.raises(InvalidPlayerDataException):
        Player(id="x", name="Bad", rating=rating)


def test_blank_name_rejected():
    with pytest.raises(InvalidPlayerDataException):
        Player(id="x", name="   ")


def test_game_result_updates_history():
    player = Player(id="a", name="Anna", rating=1500)
    player.add_game_result("b", WHITE, 1.0, FloatType.FLOAT_DOWN)

    assert player.score == 1.0
    assert player.color_history == [WHITE]
    assert player.opponent_ids == ["b"]
    assert player.has_played("b")
    assert player.rounds_played == 1
    assert player.last_float is FloatType.FLOAT_DOWN


def test_cannot_record_game_against_self():
    player = Player(id="a", name="Anna")
    with pytest.raises(InvalidPlayerDataException):
        player.add_game_result("a", WHITE, 1.0)


def test_bye_counts_as_down_float():
    player = Player(id="a", name="Anna")
    player.add_bye()

    assert player.has_received_bye
    assert player.bye_count == 1
    assert player.score == 1.0
    assert player.color_history == [None]
    assert player.opponent_ids == [None]
    assert player.float_history == [FloatType.FLOAT_DOWN]


def test_absence_keeps_history_aligned():
    player = Player(id="a", name="Anna")
    player.add_absence()

    assert player.rounds_played == 1
    assert player.score == 0.0
    assert not player.has_received_bye
    assert player.last_float is FloatType.FLOAT_NONE


def test_colour_preference_levels():
    fresh = Player(id="a", name="Fresh")
    assert fresh.color_preference().strength is ColourStrength.NONE

    mild = Player(id="b", name="Mild")
    mild.add_game_result("x", WHITE, 0.5)
    mild.add_game_result("y", BLACK, 0.5)
    need = mild.color_preference()
    assert (need.colour, need.strength) == (WHITE, ColourStrength.MILD)

    strong = Player(id="c", name="Strong")
    strong.add_game_result("x", WHITE, 0.5)
    need = strong.color_preference()
    assert (need.colour, need.strength) == (BLACK, ColourStrength.STRONG)

    absolute = Player(id="d", name="Absolute")
    absolute.add_game_result("x", BLACK, 0.5)
    absolute.add_game_result("y", BLACK, 0.5)
    need = absolute.color_preference()
    assert (need.colour, need.strength) == (WHITE, ColourStrength.ABSOLUTE)
    assert need.signed == 3


def test_colour_preference_ignores_byes():
    player = Player(id="a", name="Anna")
    player.add_game_result("x", WHITE, 1.0)
    player.add_bye()
    player.add_game_result("y", WHITE, 1.0)

    need = player.color_preference()
    assert need.colour == BLACK
    assert need.strength is ColourStrength.ABSOLUTE


def test_player_round_trips_through_dict():
    player = Player(id="a", name="Anna", rating=1800, pairing_number=3)
    player.add_game_result("b", BLACK, 0.5, FloatType.FLOAT_UP)
    player.add_bye()

    restored = Player.from_dict(player.to_dict())

    assert restored.to_dict() == player.to_dict()
    assert restored.opponent_history == {"b"}
    assert restored.float_history == [FloatType.FLOAT_UP, FloatType.FLOAT_DOWN]


def test_from_dict_requires_identity():
    with pytest.raises(InvalidPlayerDataException):
        Player.from_dict({"name": "No id"})
