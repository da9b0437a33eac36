"""Enumerations shared by the models and the pairing engine."""

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

from enum import Enum, IntEnum

from swisspairing.constants import BYE_SCORE, DRAW_SCORE, LOSS_SCORE, WIN_SCORE


class FloatType(Enum):
    """Direction a player was moved between score groups in a round."""

    FLOAT_DOWN = "down"
    FLOAT_UP = "up"
    FLOAT_NONE = "none"


class GameResult(Enum):
    """Outcome of a round from one player's point of view."""

    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"
    BYE = "bye"

    @property
    def points(self) -> float:
        """Points earned for this outcome."""
        return {
            GameResult.WIN: WIN_SCORE,
            GameResult.DRAW: DRAW_SCORE,
            GameResult.LOSS: LOSS_SCORE,
            GameResult.BYE: BYE_SCORE,
        }[self]

    @property
    def opposite(self) -> "GameResult":
        """Outcome the opponent must have had."""
        if self is GameResult.WIN:
            return GameResult.LOSS
        if self is GameResult.LOSS:
            return GameResult.WIN
        if self is GameResult.DRAW:
            return GameResult.DRAW
        raise ValueError("A bye has no opponent outcome")


class ByePolicy(Enum):
    """Which branch of the bye rules produced the bye of a round."""

    NONE = "none"
    NO_PREVIOUS_BYE = "no_previous_bye"
    REPEAT_BYE_FALLBACK = "repeat_bye_fallback"


class ColourStrength(IntEnum):
    """Strength of a colour preference, ordered weakest to strongest."""

    NONE = 0
    MILD = 1
    STRONG = 2
    ABSOLUTE = 3
