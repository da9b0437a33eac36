"""Data model for a tournament round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict

from swisspairing.models.enums import GameResult
from swisspairing.models.pairing import PairingSet
from swisspairing.type_hints import PlayerId


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    pairing_set : PairingSet
        Boards and bye produced by the engine for the round.
    results : dict of str to GameResult
        Outcome per player id. Empty until results are applied.
    is_completed : bool
        Indicates whether the round's results have been applied.
    """

    pairing_set: PairingSet
    results: Dict[PlayerId, GameResult] = field(default_factory=dict)
    is_completed: bool = False

    @property
    def round_number(self) -> int:
        return self.pairing_set.round_number

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "pairing_set": self.pairing_set.to_dict(),
            "results": {pid: r.value for pid, r in self.results.items()},
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            pairing_set=PairingSet.from_dict(data["pairing_set"]),
            results={
                pid: GameResult(value)
                for pid, value in data.get("results", {}).items()
            },
            is_completed=data.get("is_completed", False),
        )
