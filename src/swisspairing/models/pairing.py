"""Pairing records produced for a round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from swisspairing.models.enums import ByePolicy, FloatType, GameResult
from swisspairing.type_hints import BLACK, WHITE, Colour, PlayerId


@dataclass(frozen=True)
class Pairing:
    """One board of a round, or the bye record of the round.

    A game has ``white_id`` and ``black_id``; a bye only has ``bye_id``.
    Never mutated after creation, results live in the players' histories.
    """

    round_number: int
    white_id: Optional[PlayerId] = None
    black_id: Optional[PlayerId] = None
    bye_id: Optional[PlayerId] = None

    def __post_init__(self) -> None:
        if self.bye_id is not None:
            if self.white_id is not None or self.black_id is not None:
                raise ValueError("A bye record cannot have colours")
        elif self.white_id is None or self.black_id is None:
            raise ValueError("A game needs both a white and a black player")
        elif self.white_id == self.black_id:
            raise ValueError(f"Player {self.white_id} cannot be paired with itself")

    @classmethod
    def bye(cls, player_id: PlayerId, round_number: int) -> "Pairing":
        return cls(round_number=round_number, bye_id=player_id)

    @property
    def is_bye(self) -> bool:
        return self.bye_id is not None

    @property
    def player_ids(self) -> Tuple[PlayerId, ...]:
        if self.is_bye:
            return (self.bye_id,)  # type: ignore[return-value]
        return (self.white_id, self.black_id)  # type: ignore[return-value]

    @property
    def match_key(self) -> FrozenSet[PlayerId]:
        """Order-free key used for repeat detection."""
        return frozenset(self.player_ids)

    def colour_of(self, player_id: PlayerId) -> Optional[Colour]:
        if player_id == self.white_id:
            return WHITE  # type: ignore[return-value]
        if player_id == self.black_id:
            return BLACK  # type: ignore[return-value]
        return None

    def opponent_of(self, player_id: PlayerId) -> Optional[PlayerId]:
        if player_id == self.white_id:
            return self.black_id
        if player_id == self.black_id:
            return self.white_id
        return None

    def outcomes(
        self, white_result: GameResult = GameResult.BYE
    ) -> List[Tuple[PlayerId, GameResult]]:
        """Build the result entries for this board.

        For a game pass white's result, black gets the opposite. A bye
        always yields ``GameResult.BYE``.
        """
        if self.is_bye:
            return [(self.bye_id, GameResult.BYE)]  # type: ignore[list-item]
        if white_result is GameResult.BYE:
            raise ValueError("A played game cannot end in a bye")
        return [
            (self.white_id, white_result),  # type: ignore[list-item]
            (self.black_id, white_result.opposite),  # type: ignore[list-item]
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "white_id": self.white_id,
            "black_id": self.black_id,
            "bye_id": self.bye_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        return cls(
            round_number=data["round_number"],
            white_id=data.get("white_id"),
            black_id=data.get("black_id"),
            bye_id=data.get("bye_id"),
        )

    def __str__(self) -> str:
        if self.is_bye:
            return f"R{self.round_number}: {self.bye_id} bye"
        return f"R{self.round_number}: {self.white_id} - {self.black_id}"


@dataclass(frozen=True)
class PairingMetadata:
    """How the engine reached a round's pairings.

    Attributes
    ----------
    bye_policy : ByePolicy
        Branch of the bye rules used (``NONE`` when the pool was even).
    floats : dict of str to FloatType
        Float direction of every paired player this round.
    forced_repeats : tuple of frozenset
        Repeat pairings accepted because no alternative existed.
    colour_constraints_relaxed : bool
        True when two players due the same colour had to meet although
        both were already one colour off balance.
    search_iterations : int
        Search steps spent on the round.
    """

    bye_policy: ByePolicy = ByePolicy.NONE
    floats: Dict[PlayerId, FloatType] = field(default_factory=dict)
    forced_repeats: Tuple[FrozenSet[PlayerId], ...] = ()
    colour_constraints_relaxed: bool = False
    search_iterations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bye_policy": self.bye_policy.value,
            "floats": {pid: f.value for pid, f in self.floats.items()},
            "forced_repeats": [sorted(pair) for pair in self.forced_repeats],
            "colour_constraints_relaxed": self.colour_constraints_relaxed,
            "search_iterations": self.search_iterations,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingMetadata":
        return cls(
            bye_policy=ByePolicy(data.get("bye_policy", ByePolicy.NONE.value)),
            floats={
                pid: FloatType(value) for pid, value in data.get("floats", {}).items()
            },
            forced_repeats=tuple(
                frozenset(pair) for pair in data.get("forced_repeats", [])
            ),
            colour_constraints_relaxed=data.get("colour_constraints_relaxed", False),
            search_iterations=data.get("search_iterations", 0),
        )


@dataclass(frozen=True)
class PairingSet:
    """All boards of one round plus the optional bye."""

    round_number: int
    pairings: Tuple[Pairing, ...]
    bye: Optional[Pairing] = None
    metadata: PairingMetadata = field(default_factory=PairingMetadata)

    @property
    def bye_player_id(self) -> Optional[PlayerId]:
        return self.bye.bye_id if self.bye else None

    @property
    def all_records(self) -> Tuple[Pairing, ...]:
        """Games followed by the bye record, if any."""
        return self.pairings + ((self.bye,) if self.bye else ())

    @property
    def player_ids(self) -> List[PlayerId]:
        return [pid for record in self.all_records for pid in record.player_ids]

    def as_id_tuples(self) -> List[Tuple[PlayerId, PlayerId]]:
        """Boards as (white_id, black_id) tuples."""
        return [(p.white_id, p.black_id) for p in self.pairings]  # type: ignore[misc]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "pairings": [p.to_dict() for p in self.pairings],
            "bye": self.bye.to_dict() if self.bye else None,
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingSet":
        bye_data = data.get("bye")
        return cls(
            round_number=data["round_number"],
            pairings=tuple(Pairing.from_dict(p) for p in data.get("pairings", [])),
            bye=Pairing.from_dict(bye_data) if bye_data else None,
            metadata=PairingMetadata.from_dict(data.get("metadata", {})),
        )
