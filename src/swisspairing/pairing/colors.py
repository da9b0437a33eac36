"""Colour allocation for a single board."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Optional

from swisspairing.constants import COLOR_RATING_SCALE
from swisspairing.models import ColourStrength, Pairing, SwissConfig
from swisspairing.player import ColourNeed, Player
from swisspairing.type_hints import WHITE

# scores closer to zero than this count as a tie
_TIE_EPSILON = 1e-9


def needs_conflict(need1: ColourNeed, need2: ColourNeed) -> bool:
    """True when both needs are absolute and for the same colour."""
    return (
        need1.strength is ColourStrength.ABSOLUTE
        and need2.strength is ColourStrength.ABSOLUTE
        and need1.colour == need2.colour
    )


def needs_clash(need1: ColourNeed, need2: ColourNeed) -> bool:
    """True when whoever loses the colour ends up two colours off balance.

    Two players due the same colour who are both already one colour off
    cannot both be served. Absolute conflicts clash as well.
    """
    if needs_conflict(need1, need2):
        return True
    if need1.colour is None or need1.colour != need2.colour:
        return False
    return abs(need1.imbalance) >= 1 and abs(need2.imbalance) >= 1


def have_clashing_colour_needs(p1: Player, p2: Player) -> bool:
    return needs_clash(p1.color_preference(), p2.color_preference())


def _last_differing_colour(p1: Player, p2: Player) -> Optional[str]:
    """p1's colour in the most recent round where the two had different colours."""
    for c1, c2 in zip(reversed(p1.color_history), reversed(p2.color_history)):
        if c1 is not None and c2 is not None and c1 != c2:
            return c1
    return None


class ColorAllocator:
    """Decide who takes white on a board.

    The decision is a weighted score::

        color_balance_weight * (need(p1) - need(p2))
        + rating_importance * clamp((r1 - r2) / 400, -1, 1)

    ``need`` is the signed strength of the colour a player is due (positive
    for white). A positive score gives p1 white, a negative one gives p2
    white. Ties alternate from the last round the two players had different
    colours, and failing that the lower id takes white.

    Boards between two players without a game played follow the initial
    colour sequence: the score decides on odd boards and is reversed on
    even boards, so round one alternates colours down the board order.
    """

    def __init__(self, config: SwissConfig) -> None:
        self.config = config

    def white_score(self, p1: Player, p2: Player) -> float:
        need_term = (
            p1.color_preference().signed - p2.color_preference().signed
        ) * self.config.color_balance_weight
        rating_term = (p1.rating - p2.rating) / COLOR_RATING_SCALE
        rating_term = max(-1.0, min(1.0, rating_term))
        return need_term + rating_term * self.config.rating_importance

    def allocate(
        self, p1: Player, p2: Player, round_number: int, board: int = 1
    ) -> Pairing:
        score = self.white_score(p1, p2)
        if score > _TIE_EPSILON:
            white, black = p1, p2
        elif score < -_TIE_EPSILON:
            white, black = p2, p1
        else:
            white, black = self._break_tie(p1, p2)
        if board % 2 == 0 and not p1.played_colours and not p2.played_colours:
            white, black = black, white
        return Pairing(round_number=round_number, white_id=white.id, black_id=black.id)

    def _break_tie(self, p1: Player, p2: Player):
        previous = _last_differing_colour(p1, p2)
        if previous is not None:
            return (p2, p1) if previous == WHITE else (p1, p2)
        return (p1, p2) if p1.id < p2.id else (p2, p1)
