"""Applying the results of a round to the players."""

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

from typing import Dict, Iterable, Tuple

from swisspairing.exceptions import InvalidTournamentState
from swisspairing.models import FloatType, GameResult, RoundData
from swisspairing.player import Player
from swisspairing.type_hints import BLACK, WHITE, PlayerId
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating round results.

    This class is responsible for:
    - Checking that the results exactly cover the round's pairings
    - Rejecting inconsistent game outcomes
    - Updating player histories (scores, colours, opponents, floats)
    - Recording an absence for every player left out of the round

    Nothing is mutated unless the whole batch is valid.
    """

    def record_round_results(
        self,
        round_data: RoundData,
        results: Iterable[Tuple[PlayerId, GameResult]],
        players: Dict[PlayerId, Player],
    ) -> None:
        """Record results for every board and the bye of a round.

        Args:
            round_data: The pending round to resolve
            results: (player id, outcome) entries, one per paired player
            players: Dictionary of all players (id -> Player)

        Raises:
            InvalidTournamentState: the batch does not match the pairings
        """
        round_number = round_data.round_number
        if round_data.is_completed:
            raise InvalidTournamentState(
                f"Round {round_number} results have already been applied"
            )

        outcomes = self._collect(round_number, results, players)
        self._validate_against_pairings(round_data, outcomes)

        pairing_set = round_data.pairing_set
        floats = pairing_set.metadata.floats
        for pairing in pairing_set.pairings:
            white = players[pairing.white_id]
            black = players[pairing.black_id]
            white_outcome = outcomes[white.id]
            black_outcome = outcomes[black.id]
            white.add_game_result(
                black.id,
                WHITE,
                white_outcome.points,
                floats.get(white.id, FloatType.FLOAT_NONE),
            )
            black.add_game_result(
                white.id,
                BLACK,
                black_outcome.points,
                floats.get(black.id, FloatType.FLOAT_NONE),
            )
            logger.debug(
                "Recorded: %s (%s) vs %s (%s)",
                white.name,
                white_outcome.value,
                black.name,
                black_outcome.value,
            )

        paired_ids = set(pairing_set.player_ids)
        if pairing_set.bye is not None:
            players[pairing_set.bye_player_id].add_bye(GameResult.BYE.points)

        for player in players.values():
            if player.id not in paired_ids:
                player.add_absence()
                logger.debug(
                    "Recorded absence for %s in round %d", player.name, round_number
                )

        round_data.results = dict(outcomes)
        round_data.is_completed = True
        logger.info("Recorded results for round %d", round_number)

    def _collect(
        self,
        round_number: int,
        results: Iterable[Tuple[PlayerId, GameResult]],
        players: Dict[PlayerId, Player],
    ) -> Dict[PlayerId, GameResult]:
        outcomes: Dict[PlayerId, GameResult] = {}
        for player_id, outcome in results:
            player_id = str(player_id)
            if player_id not in players:
                raise InvalidTournamentState(
                    f"Round {round_number}: unknown player id {player_id}"
                )
            if player_id in outcomes:
                raise InvalidTournamentState(
                    f"Round {round_number}: duplicate result for player {player_id}"
                )
            if not isinstance(outcome, GameResult):
                raise InvalidTournamentState(
                    f"Round {round_number}: invalid outcome {outcome!r} "
                    f"for player {player_id}"
                )
            outcomes[player_id] = outcome
        return outcomes

    def _validate_against_pairings(
        self, round_data: RoundData, outcomes: Dict[PlayerId, GameResult]
    ) -> None:
        round_number = round_data.round_number
        pairing_set = round_data.pairing_set

        expected = set(pairing_set.player_ids)
        missing = expected - set(outcomes)
        if missing:
            raise InvalidTournamentState(
                f"Round {round_number}: missing results for "
                + ", ".join(sorted(missing))
            )
        unpaired = set(outcomes) - expected
        if unpaired:
            raise InvalidTournamentState(
                f"Round {round_number}: results given for unpaired players "
                + ", ".join(sorted(unpaired))
            )

        for pairing in pairing_set.pairings:
            white_outcome = outcomes[pairing.white_id]
            black_outcome = outcomes[pairing.black_id]
            if GameResult.BYE in (white_outcome, black_outcome):
                raise InvalidTournamentState(
                    f"Round {round_number}: a played game cannot end in a bye "
                    f"({pairing.white_id} vs {pairing.black_id})"
                )
            if white_outcome.opposite is not black_outcome:
                raise InvalidTournamentState(
                    f"Round {round_number}: inconsistent outcomes "
                    f"{white_outcome.value}/{black_outcome.value} for "
                    f"{pairing.white_id} vs {pairing.black_id}"
                )

        bye_id = pairing_set.bye_player_id
        if bye_id is not None and outcomes[bye_id] is not GameResult.BYE:
            raise InvalidTournamentState(
                f"Round {round_number}: bye player {bye_id} must be recorded "
                f"as a bye, got {outcomes[bye_id].value}"
            )
