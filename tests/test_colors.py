from conftest import make_players
from swisspairing import BLACK, WHITE, SwissConfig
from swisspairing.pairing import ColorAllocator
from swisspairing.pairing.colors import have_clashing_colour_needs


def test_higher_rating_gets_white_without_history():
    a, b = make_players([2000, 1800])
    pairing = ColorAllocator(SwissConfig()).allocate(b, a, round_number=1)
    assert (pairing.white_id, pairing.black_id) == ("A", "B")


def test_absolute_need_beats_mild_need():
    first, second = make_players([2000, 1500])
    first.add_game_result("x", WHITE, 1.0)
    first.add_game_result("y", WHITE, 1.0)
    second.add_game_result("x", BLACK, 1.0)
    second.add_game_result("y", WHITE, 1.0)

    pairing = ColorAllocator(SwissConfig()).allocate(first, second, round_number=3)

    assert pairing.white_id == second.id
    assert pairing.black_id == first.id


def test_colour_weight_zero_lets_rating_decide():
    first, second = make_players([2000, 1500])
    first.add_game_result("x", WHITE, 1.0)
    first.add_game_result("y", WHITE, 1.0)
    second.add_game_result("x", BLACK, 1.0)
    second.add_game_result("y", BLACK, 1.0)

    config = SwissConfig(color_balance_weight=0.0, rating_importance=0.5)
    pairing = ColorAllocator(config).allocate(first, second, round_number=3)

    assert pairing.white_id == first.id


def test_white_score_combines_weights():
    first, second = make_players([2200, 1800])
    first.add_game_result("x", WHITE, 1.0)
    second.add_game_result("y", WHITE, 1.0)
    config = SwissConfig(color_balance_weight=0.5, rating_importance=0.25)

    # equal needs cancel, rating difference clamps at 1
    assert ColorAllocator(config).white_score(first, second) == 0.25


def test_tie_alternates_from_last_differing_round():
    first, second = make_players([1500, 1500])
    first.add_game_result("x", WHITE, 1.0)
    second.add_game_result("y", BLACK, 1.0)
    first.add_game_result("z", BLACK, 1.0)
    second.add_game_result("w", WHITE, 1.0)

    config = SwissConfig(color_balance_weight=0.0, rating_importance=0.0)
    pairing = ColorAllocator(config).allocate(first, second, round_number=3)

    assert pairing.white_id == first.id


def test_tie_without_history_gives_lower_id_white():
    first, second = make_players([1500, 1500])
    pairing = ColorAllocator(SwissConfig()).allocate(second, first, round_number=1)
    assert pairing.white_id == "A"


def test_round_one_colours_alternate_by_board():
    a, b = make_players([2000, 1800])
    allocator = ColorAllocator(SwissConfig())

    assert allocator.allocate(a, b, round_number=1, board=1).white_id == "A"
    assert allocator.allocate(a, b, round_number=1, board=2).white_id == "B"

    a.add_game_result("x", WHITE, 1.0)
    b.add_game_result("y", BLACK, 1.0)
    # a played game ends the alternation, the colour need decides
    assert allocator.allocate(a, b, round_number=2, board=2).white_id == "B"


def _with_colours(player, colours):
    for index, colour in enumerate(colours):
        player.add_game_result(f"x{index}", colour, 0.5)
    return player


def test_absolute_need_does_not_excuse_an_off_balance_partner():
    a, b, c = make_players([2000, 1900, 1800])
    # due black after two whites, a black ahead overall
    _with_colours(a, [BLACK, BLACK, BLACK, WHITE, WHITE])
    _with_colours(b, [WHITE])
    _with_colours(c, [BLACK, WHITE])

    # a takes black on need, which would leave b two whites ahead
    assert have_clashing_colour_needs(a, b)
    assert ColorAllocator(SwissConfig()).allocate(a, b, round_number=6).white_id == "B"
    # c is level, so c can take white
    assert not have_clashing_colour_needs(a, c)
