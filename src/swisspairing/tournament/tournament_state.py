"""The mutable state of one tournament."""

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

from typing import Any, Dict, Iterable, List, Optional, Tuple

from swisspairing.exceptions import (
    InsufficientPlayers,
    InvalidPlayerDataException,
    InvalidTournamentState,
)
from swisspairing.models import GameResult, PairingHistory, PairingSet, RoundData
from swisspairing.player import Player
from swisspairing.tournament.result_recorder import ResultRecorder
from swisspairing.type_hints import PlayerId
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import validate_positive_integer

logger = setup_logger(__name__)


class TournamentState:
    """All players, round counters and the pairing history of a tournament.

    ``current_round`` counts rounds whose results have been applied, so the
    round being paired is always ``current_round + 1``. Every player carries
    exactly ``current_round`` history entries.

    The state is passed explicitly to the engine; nothing in the package
    keeps a reference to it between calls.

    The state takes ownership of the ``Player`` objects it is given: players
    without a ``pairing_number`` are numbered in registration order, and
    applying results updates their histories in place. Pass copies to keep
    the originals untouched.
    """

    def __init__(
        self,
        players: Iterable[Player],
        total_rounds: int,
        current_round: int = 0,
        pairing_history: Optional[PairingHistory] = None,
    ) -> None:
        player_list = list(players)
        if len(player_list) < 2:
            raise InsufficientPlayers(
                f"A tournament needs at least 2 players, got {len(player_list)}"
            )

        rounds_check = validate_positive_integer(total_rounds, "total_rounds")
        if not rounds_check:
            raise InvalidTournamentState(rounds_check.error_message)

        self.players: Dict[PlayerId, Player] = {}
        for index, player in enumerate(player_list, start=1):
            if player.id in self.players:
                raise InvalidTournamentState(f"Duplicate player id: {player.id}")
            if player.pairing_number is None:
                player.pairing_number = index
            self.players[player.id] = player

        self.total_rounds: int = rounds_check.sanitized_value
        self.current_round: int = current_round
        self.pairing_history: PairingHistory = pairing_history or PairingHistory()
        self._recorder = ResultRecorder()
        self._check_consistency()

    def _check_consistency(self) -> None:
        if not 0 <= self.current_round <= self.total_rounds:
            raise InvalidTournamentState(
                f"current_round {self.current_round} outside 0..{self.total_rounds}"
            )
        completed = sum(1 for r in self.pairing_history.rounds if r.is_completed)
        if self.pairing_history.rounds and completed != self.current_round:
            raise InvalidTournamentState(
                f"Pairing history holds {completed} completed rounds "
                f"but current_round is {self.current_round}"
            )
        for player in self.players.values():
            if player.rounds_played != self.current_round:
                raise InvalidTournamentState(
                    f"Player {player.id} has {player.rounds_played} rounds of "
                    f"history, expected {self.current_round}"
                )

    # ========== Round Status ==========

    @property
    def next_round_number(self) -> int:
        return self.current_round + 1

    @property
    def pending_round(self) -> Optional[RoundData]:
        """The round that has been paired but whose results are not in yet."""
        latest = self.pairing_history.latest
        if latest is not None and not latest.is_completed:
            return latest
        return None

    @property
    def is_complete(self) -> bool:
        return self.current_round >= self.total_rounds

    # ========== Player Queries ==========

    def get_player(self, player_id: PlayerId) -> Player:
        try:
            return self.players[str(player_id)]
        except KeyError:
            raise InvalidTournamentState(f"Unknown player id: {player_id}") from None

    def get_active_players(self) -> List[Player]:
        """Active players in registration order."""
        return [p for p in self.players.values() if p.is_active]

    def get_players_sorted_by_score_then_rating(self) -> List[Player]:
        """Standings: score, then rating, then registration order."""
        return sorted(
            self.players.values(),
            key=lambda p: (-p.score, -p.rating, p.pairing_number or 0, p.id),
        )

    def set_player_active(self, player_id: PlayerId, is_active: bool) -> None:
        """Withdraw a player from (or return a player to) future pairings."""
        player = self.get_player(player_id)
        player.is_active = bool(is_active)
        logger.info(
            "Player %s is now %s", player.name, "active" if is_active else "withdrawn"
        )

    # ========== Round Lifecycle ==========

    def record_pairing_set(self, pairing_set: PairingSet) -> RoundData:
        """Store a freshly computed round as the pending round."""
        if self.pending_round is not None:
            raise InvalidTournamentState(
                f"Round {self.pending_round.round_number} is still awaiting results"
            )
        if self.is_complete:
            raise InvalidTournamentState(
                f"All {self.total_rounds} rounds have already been played"
            )
        if pairing_set.round_number != self.next_round_number:
            raise InvalidTournamentState(
                f"Cannot record round {pairing_set.round_number}, "
                f"next round is {self.next_round_number}"
            )
        for player_id in pairing_set.player_ids:
            self.get_player(player_id)

        round_data = RoundData(pairing_set=pairing_set)
        self.pairing_history.add_round(round_data)
        logger.info(
            "Round %d paired: %d boards%s",
            pairing_set.round_number,
            len(pairing_set.pairings),
            f", bye {pairing_set.bye_player_id}" if pairing_set.bye else "",
        )
        return round_data

    def apply_round_results(
        self, results: Iterable[Tuple[PlayerId, GameResult]]
    ) -> None:
        """Apply the outcomes of the pending round and advance ``current_round``.

        Every paired player needs exactly one entry, the bye player with
        ``GameResult.BYE``. The batch is validated in full before any
        player is touched.
        """
        pending = self.pending_round
        if pending is None:
            raise InvalidTournamentState(
                f"No pairings exist for round {self.next_round_number}"
            )
        self._recorder.record_round_results(pending, results, self.players)
        self.current_round += 1

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self.players.values()],
            "total_rounds": self.total_rounds,
            "current_round": self.current_round,
            "pairing_history": self.pairing_history.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        try:
            players = [Player.from_dict(p) for p in data["players"]]
            total_rounds = data["total_rounds"]
        except KeyError as exc:
            raise InvalidTournamentState(f"Missing tournament field: {exc}") from exc
        except InvalidPlayerDataException as exc:
            raise InvalidTournamentState(str(exc)) from exc
        return cls(
            players,
            total_rounds,
            current_round=data.get("current_round", 0),
            pairing_history=PairingHistory.from_dict(data.get("pairing_history", {})),
        )

    def __repr__(self) -> str:
        return (
            f"TournamentState(players={len(self.players)}, "
            f"round={self.current_round}/{self.total_rounds})"
        )
