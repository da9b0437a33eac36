"""Append-only record of every round paired so far."""

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
from typing import Any, Dict, FrozenSet, List, Optional, Set

from swisspairing.models.round_data import RoundData
from swisspairing.type_hints import PlayerId


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    rounds : list of RoundData
        One entry per paired round, in round order.
    previous_matches : set of frozenset of str
        Set containing frozensets of player ID pairs representing
        matches that have already been paired.
    """

    rounds: List[RoundData] = field(default_factory=list)
    previous_matches: Set[FrozenSet[PlayerId]] = field(default_factory=set)

    def add_round(self, round_data: RoundData) -> None:
        """Append a freshly paired round and remember its matches."""
        latest = self.latest
        if latest is not None and round_data.round_number <= latest.round_number:
            raise ValueError(
                f"Round {round_data.round_number} recorded out of order, "
                f"round {latest.round_number} is already recorded"
            )
        self.rounds.append(round_data)
        for pairing in round_data.pairing_set.pairings:
            self.previous_matches.add(pairing.match_key)

    def have_played(self, player1_id: PlayerId, player2_id: PlayerId) -> bool:
        """Check if two players have previously been paired."""
        return frozenset({player1_id, player2_id}) in self.previous_matches

    def get_round(self, round_number: int) -> Optional[RoundData]:
        for round_data in self.rounds:
            if round_data.round_number == round_number:
                return round_data
        return None

    @property
    def latest(self) -> Optional[RoundData]:
        return self.rounds[-1] if self.rounds else None

    def __len__(self) -> int:
        return len(self.rounds)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {"rounds": [r.to_dict() for r in self.rounds]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary.

        Previous matches are rebuilt from the stored rounds.
        """
        history = cls()
        for round_dict in data.get("rounds", []):
            history.add_round(RoundData.from_dict(round_dict))
        return history
