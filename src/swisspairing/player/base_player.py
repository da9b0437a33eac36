"""A chess player taking part in a Swiss tournament."""

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

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from swisspairing.constants import ABSENT_SCORE, BYE_SCORE
from swisspairing.exceptions import InvalidPlayerDataException
from swisspairing.models.enums import ColourStrength, FloatType
from swisspairing.type_hints import BLACK, WHITE, Colour, PlayerId
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import (
    validate_non_empty,
    validate_player_id,
    validate_rating_strict,
)

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ColourNeed:
    """The colour a player is due and how badly they need it."""

    colour: Optional[Colour]
    strength: ColourStrength
    imbalance: int = 0

    @property
    def signed(self) -> int:
        """Positive when white is due, negative when black is due."""
        if self.colour is None:
            return 0
        return int(self.strength) if self.colour == WHITE else -int(self.strength)


NO_COLOUR_NEED = ColourNeed(colour=None, strength=ColourStrength.NONE)


class Player:
    """Represents a player in the tournament.

    Identity and rating are fixed for the whole event. Every other field is
    history that grows by exactly one entry per completed round.

    Attributes:
        id: Unique identifier for the player
        name: Player's full name
        rating: Player's chess rating
        pairing_number: Registration order, used as a stable tie-break
        is_active: Whether player is still paired (False once withdrawn)
        score: Current tournament score
        color_history: Colors played per round (None for bye or absence)
        opponent_ids: Opponent per round (None for bye or absence)
        opponent_history: Set of opponent ids already faced
        results: Points earned per round
        bye_count: Number of pairing-allocated byes received
        float_history: Float direction per round
    """

    def __init__(
        self,
        id: Any,
        name: str,
        rating: Optional[int] = None,
        pairing_number: Optional[int] = None,
    ) -> None:
        id_check = validate_player_id(id)
        if not id_check:
            raise InvalidPlayerDataException(id_check.error_message)
        name_check = validate_non_empty(name, "Player name")
        if not name_check:
            raise InvalidPlayerDataException(name_check.error_message)

        # Core attributes
        self.id: PlayerId = id_check.sanitized_value
        self.name: str = name_check.sanitized_value
        self.rating: int = validate_rating_strict(rating)
        self.pairing_number: Optional[int] = pairing_number

        # Tournament participation status
        self.is_active: bool = True

        # Game history - initialized as empty lists
        self.score: float = 0.0
        self.color_history: List[Optional[Colour]] = []
        self.opponent_ids: List[Optional[PlayerId]] = []
        self.opponent_history: Set[PlayerId] = set()
        self.results: List[float] = []
        self.bye_count: int = 0
        self.float_history: List[FloatType] = []

    # ========== History Queries ==========

    @property
    def rounds_played(self) -> int:
        """Number of rounds recorded for this player (games, byes and absences)."""
        return len(self.results)

    @property
    def has_received_bye(self) -> bool:
        return self.bye_count > 0

    @property
    def played_colours(self) -> List[Colour]:
        """Colors of the games actually played, byes and absences skipped."""
        return [c for c in self.color_history if c is not None]

    @property
    def color_balance(self) -> int:
        """Whites minus blacks (positive = more whites)."""
        played = self.played_colours
        return played.count(WHITE) - played.count(BLACK)

    @property
    def last_float(self) -> FloatType:
        """Most recent float that actually happened, FLOAT_NONE if never."""
        for float_type in reversed(self.float_history):
            if float_type is not FloatType.FLOAT_NONE:
                return float_type
        return FloatType.FLOAT_NONE

    def has_played(self, opponent_id: PlayerId) -> bool:
        """Has this player already met ``opponent_id``?"""
        return opponent_id in self.opponent_history

    def color_preference(self) -> ColourNeed:
        """Determine the color this player is due and how strongly.

        Rules:
        1. Absolute: color difference beyond +/-1, or the same color in the
           last two games played
        2. Strong: color difference of exactly +/-1
        3. Mild: balanced colors, alternate from the last game
        4. None: no game played yet
        """
        played = self.played_colours
        if not played:
            return NO_COLOUR_NEED

        imbalance = played.count(WHITE) - played.count(BLACK)
        if imbalance > 1:
            return ColourNeed(BLACK, ColourStrength.ABSOLUTE, imbalance)
        if imbalance < -1:
            return ColourNeed(WHITE, ColourStrength.ABSOLUTE, imbalance)

        if len(played) >= 2 and played[-1] == played[-2]:
            due = BLACK if played[-1] == WHITE else WHITE
            return ColourNeed(due, ColourStrength.ABSOLUTE, imbalance)  # type: ignore[arg-type]

        if imbalance == 1:
            return ColourNeed(BLACK, ColourStrength.STRONG, imbalance)
        if imbalance == -1:
            return ColourNeed(WHITE, ColourStrength.STRONG, imbalance)

        due = BLACK if played[-1] == WHITE else WHITE
        return ColourNeed(due, ColourStrength.MILD, imbalance)  # type: ignore[arg-type]

    # ========== History Updates ==========

    def add_game_result(
        self,
        opponent_id: PlayerId,
        color: Colour,
        points: float,
        float_type: FloatType = FloatType.FLOAT_NONE,
    ) -> None:
        """Record a played game for this player.

        Args:
            opponent_id: Id of the opponent faced
            color: Color this player had
            points: Points earned (1.0=win, 0.5=draw, 0.0=loss)
            float_type: Whether the player floated to meet this opponent
        """
        if opponent_id == self.id:
            raise InvalidPlayerDataException(f"Player {self.id} cannot play itself")
        self.opponent_ids.append(opponent_id)
        self.opponent_history.add(opponent_id)
        self.color_history.append(color)
        self.results.append(points)
        self.float_history.append(float_type)
        self.score += points

    def add_bye(self, points: float = BYE_SCORE) -> None:
        """Record a pairing-allocated bye. A bye counts as a down-float."""
        self.opponent_ids.append(None)
        self.color_history.append(None)
        self.results.append(points)
        self.float_history.append(FloatType.FLOAT_DOWN)
        self.bye_count += 1
        self.score += points
        logger.debug("Player %s received a bye in this round", self.name)

    def add_absence(self) -> None:
        """Record a round the player missed (withdrawn, not paired)."""
        self.opponent_ids.append(None)
        self.color_history.append(None)
        self.results.append(ABSENT_SCORE)
        self.float_history.append(FloatType.FLOAT_NONE)
        self.score += ABSENT_SCORE

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player data to dictionary format.

        Returns:
            Dictionary suitable for JSON serialization
        """
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "pairing_number": self.pairing_number,
            "is_active": self.is_active,
            "score": self.score,
            "color_history": list(self.color_history),
            "opponent_ids": list(self.opponent_ids),
            "results": list(self.results),
            "bye_count": self.bye_count,
            "float_history": [f.value for f in self.float_history],
        }

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player instance from serialized dictionary data.

        The opponent set is rebuilt from ``opponent_ids``; missing history
        lists default to empty.
        """
        try:
            player = cls(
                id=player_data["id"],
                name=player_data["name"],
                rating=player_data.get("rating"),
                pairing_number=player_data.get("pairing_number"),
            )
        except KeyError as exc:
            raise InvalidPlayerDataException(f"Missing player field: {exc}") from exc

        player.is_active = bool(player_data.get("is_active", True))
        player.score = float(player_data.get("score", 0.0))
        player.color_history = list(player_data.get("color_history") or [])
        player.opponent_ids = list(player_data.get("opponent_ids") or [])
        player.opponent_history = {o for o in player.opponent_ids if o is not None}
        player.results = [float(r) for r in player_data.get("results") or []]
        player.bye_count = int(player_data.get("bye_count", 0))
        try:
            player.float_history = [
                FloatType(value) for value in player_data.get("float_history") or []
            ]
        except ValueError as exc:
            raise InvalidPlayerDataException(str(exc)) from exc
        return player

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Player(name='{self.name}', rating={self.rating}, id='{self.id}')"

    def __str__(self) -> str:
        """Return human-readable string representation."""
        return f"{self.name} ({self.rating})"
