"""SwissConfig data class."""

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


from dataclasses import dataclass
from typing import Any, Dict

from swisspairing.constants import (
    DEFAULT_COLOR_BALANCE_WEIGHT,
    DEFAULT_MAX_SEARCH_ITERATIONS,
    DEFAULT_RATING_IMPORTANCE,
    DEFAULT_TOTAL_ROUNDS,
)
from swisspairing.exceptions import InvalidConfigurationException
from swisspairing.utils.validation import (
    require_valid,
    validate_positive_integer,
    validate_unit_weight,
)


@dataclass(frozen=True)
class SwissConfig:
    """Pairing engine configuration.

    Constructed once before the tournament starts and shared read-only by
    every component.

    Attributes
    ----------
    total_rounds : int
        Number of rounds in the tournament.
    rating_importance : float
        Weight in [0, 1] of rating when choosing colours between equally
        needy players. Inside a score group it only acts as a switch: any
        positive value orders players by rating, ``0`` orders them by
        registration alone.
    color_balance_weight : float
        Weight in [0, 1] of colour-balance need when choosing colours.
        ``0`` ignores colour history completely.
    max_search_iterations : int
        Cap on the number of search steps spent pairing one round.
    allow_repeat_pairings : bool
        Permit a repeat opponent as a last resort once the search proved
        no repeat-free pairing exists. Off by default, in which case the
        engine raises ``CannotPairRemainingPlayers``.
    """

    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    rating_importance: float = DEFAULT_RATING_IMPORTANCE
    color_balance_weight: float = DEFAULT_COLOR_BALANCE_WEIGHT
    max_search_iterations: int = DEFAULT_MAX_SEARCH_ITERATIONS
    allow_repeat_pairings: bool = False

    def __post_init__(self) -> None:
        # frozen: normalised values go through object.__setattr__
        object.__setattr__(
            self,
            "total_rounds",
            require_valid(validate_positive_integer(self.total_rounds, "total_rounds")),
        )
        object.__setattr__(
            self,
            "rating_importance",
            require_valid(
                validate_unit_weight(self.rating_importance, "rating_importance")
            ),
        )
        object.__setattr__(
            self,
            "color_balance_weight",
            require_valid(
                validate_unit_weight(self.color_balance_weight, "color_balance_weight")
            ),
        )
        object.__setattr__(
            self,
            "max_search_iterations",
            require_valid(
                validate_positive_integer(
                    self.max_search_iterations, "max_search_iterations"
                )
            ),
        )
        if not isinstance(self.allow_repeat_pairings, bool):
            raise InvalidConfigurationException("allow_repeat_pairings must be a bool")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "total_rounds": self.total_rounds,
            "rating_importance": self.rating_importance,
            "color_balance_weight": self.color_balance_weight,
            "max_search_iterations": self.max_search_iterations,
            "allow_repeat_pairings": self.allow_repeat_pairings,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissConfig":
        """Deserialize configuration from dictionary."""
        if "total_rounds" not in data:
            raise InvalidConfigurationException("total_rounds is required")
        return cls(
            total_rounds=data["total_rounds"],
            rating_importance=data.get("rating_importance", DEFAULT_RATING_IMPORTANCE),
            color_balance_weight=data.get(
                "color_balance_weight", DEFAULT_COLOR_BALANCE_WEIGHT
            ),
            max_search_iterations=data.get(
                "max_search_iterations", DEFAULT_MAX_SEARCH_ITERATIONS
            ),
            allow_repeat_pairings=data.get("allow_repeat_pairings", False),
        )
