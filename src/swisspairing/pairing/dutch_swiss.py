"""Dutch System Swiss pairing of one round."""

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


from typing import Dict, List, Optional, Sequence

from swisspairing.exceptions import (
    CannotPairRemainingPlayers,
    InsufficientPlayers,
    InvalidTournamentState,
    SearchLimitExceeded,
)
from swisspairing.models import (
    ByePolicy,
    FloatType,
    Pairing,
    PairingMetadata,
    PairingSet,
    SwissConfig,
)
from swisspairing.pairing.bye import ByeAssigner, ByeSelection
from swisspairing.pairing.colors import ColorAllocator, have_clashing_colour_needs
from swisspairing.pairing.score_groups import ScoreGroupBuilder, rank_players
from swisspairing.pairing.search import (
    ColourRule,
    PairingSearch,
    SearchBudget,
    SearchOutcome,
)
from swisspairing.player import Player
from swisspairing.tournament import TournamentState
from swisspairing.type_hints import PlayerId, PlayerPair
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

_COLOUR_PASSES = (ColourRule.BALANCED, ColourRule.ABSOLUTE, ColourRule.RELAXED)


def _compute_floats(
    pairs: Sequence[PlayerPair], bye_player: Optional[Player]
) -> Dict[PlayerId, FloatType]:
    """Float direction of every player this round.

    In a game between different scores the higher scorer floats down and
    the lower scorer floats up. A bye is a down-float.
    """
    floats: Dict[PlayerId, FloatType] = {}
    for p1, p2 in pairs:
        if p1.score > p2.score:
            floats[p1.id], floats[p2.id] = FloatType.FLOAT_DOWN, FloatType.FLOAT_UP
        elif p2.score > p1.score:
            floats[p1.id], floats[p2.id] = FloatType.FLOAT_UP, FloatType.FLOAT_DOWN
        else:
            floats[p1.id] = floats[p2.id] = FloatType.FLOAT_NONE
    if bye_player is not None:
        floats[bye_player.id] = FloatType.FLOAT_DOWN
    return floats


class SwissPairer:
    """Pair the next round of a tournament with the Dutch System.

    Attempts run from the most to the least demanding rule set:

    1. repeat opponents refused (allowed only in a last pass when
       ``config.allow_repeat_pairings`` is set)
    2. each bye candidate in priority order
    3. colour rules from balanced through absolute to relaxed

    The round's iteration budget is shared out between the colour passes
    of an attempt, so running out on a strict pass moves on to the next
    one instead of ending the round.
    """

    def __init__(self, config: Optional[SwissConfig] = None) -> None:
        self.config = config or SwissConfig()
        self.group_builder = ScoreGroupBuilder()
        self.bye_assigner = ByeAssigner()
        self.color_allocator = ColorAllocator(self.config)

    def preview_round(self, state: TournamentState) -> PairingSet:
        """Compute the next round without touching ``state``."""
        self._check_can_pair(state)
        round_number = state.next_round_number
        players = state.get_active_players()
        if len(players) < 2:
            raise InsufficientPlayers(
                f"Round {round_number} needs at least 2 active players, "
                f"got {len(players)}"
            )

        groups = self.group_builder.build(players, self.config.rating_importance)
        ranked = rank_players(groups)
        bye_options = self._bye_options(ranked)

        budget = SearchBudget(self.config.max_search_iterations)
        repeat_passes = (False, True) if self.config.allow_repeat_pairings else (False,)
        last_error: Optional[CannotPairRemainingPlayers] = None
        limit_error: Optional[SearchLimitExceeded] = None

        for allow_repeats in repeat_passes:
            if allow_repeats:
                logger.warning(
                    "Round %d: no pairing without repeat opponents exists, "
                    "allowing repeats",
                    round_number,
                )
            for selection in bye_options:
                pool = [p for p in ranked if selection is None or p is not selection.player]
                pool_groups = self.group_builder.build(
                    pool, self.config.rating_importance
                )
                for step, rule in enumerate(_COLOUR_PASSES):
                    if budget.exhausted:
                        raise limit_error or SearchLimitExceeded(
                            [p.id for p in pool], budget.used
                        )
                    share = budget.share(1 / (len(_COLOUR_PASSES) - step))
                    search = PairingSearch(share, allow_repeats, rule)
                    try:
                        outcome = search.search(pool_groups)
                    except SearchLimitExceeded as exc:
                        logger.warning(
                            "Round %d: %s colour pass stopped after %d iterations",
                            round_number,
                            rule.value,
                            exc.iterations,
                        )
                        limit_error = exc
                        continue
                    except CannotPairRemainingPlayers as exc:
                        logger.debug(
                            "Round %d attempt failed (bye=%s, repeats=%s, colours=%s): %s",
                            round_number,
                            selection.player.id if selection else None,
                            allow_repeats,
                            rule.value,
                            exc,
                        )
                        last_error = exc
                        continue
                    return self._build_pairing_set(
                        round_number, outcome, selection, budget.used
                    )

        # an exhausted pass proves nothing, report it over a plain failure
        error = limit_error or last_error
        if error is None:
            error = CannotPairRemainingPlayers([p.id for p in ranked])
        logger.error("Round %d cannot be paired: %s", round_number, error)
        raise error

    def pair_round(self, state: TournamentState) -> PairingSet:
        """Compute the next round and record it as the pending round."""
        pairing_set = self.preview_round(state)
        state.record_pairing_set(pairing_set)
        return pairing_set

    def _bye_options(self, ranked: List[Player]) -> List[Optional[ByeSelection]]:
        if len(ranked) % 2 == 0:
            return [None]
        first = self.bye_assigner.select(ranked)
        others = [
            s for s in self.bye_assigner.candidates(ranked) if s.player is not first.player
        ]
        return [first] + others

    def _check_can_pair(self, state: TournamentState) -> None:
        if state.pending_round is not None:
            raise InvalidTournamentState(
                f"Round {state.pending_round.round_number} is still awaiting results"
            )
        if state.is_complete:
            raise InvalidTournamentState(
                f"All {state.total_rounds} rounds have already been paired and played"
            )
        if self.config.total_rounds != state.total_rounds:
            logger.warning(
                "Configured total_rounds %d differs from the tournament's %d, "
                "using the tournament's value",
                self.config.total_rounds,
                state.total_rounds,
            )

    def _build_pairing_set(
        self,
        round_number: int,
        outcome: SearchOutcome,
        selection: Optional[ByeSelection],
        iterations: int,
    ) -> PairingSet:
        boards: List[Pairing] = []
        forced_repeats = []
        relaxed = False
        for board, (p1, p2) in enumerate(outcome.pairs, start=1):
            boards.append(self.color_allocator.allocate(p1, p2, round_number, board))
            if p1.has_played(p2.id):
                forced_repeats.append(frozenset({p1.id, p2.id}))
            if have_clashing_colour_needs(p1, p2):
                relaxed = True

        bye_player = selection.player if selection else None
        policy = selection.policy if selection else ByePolicy.NONE
        if relaxed:
            logger.warning(
                "Round %d: players due the same colour had to meet",
                round_number,
            )
        for pair in forced_repeats:
            logger.warning(
                "Round %d: forced repeat pairing %s", round_number, " - ".join(sorted(pair))
            )

        metadata = PairingMetadata(
            bye_policy=policy,
            floats=_compute_floats(outcome.pairs, bye_player),
            forced_repeats=tuple(forced_repeats),
            colour_constraints_relaxed=relaxed,
            search_iterations=iterations,
        )
        logger.debug(
            "Round %d paired after %d search iterations",
            round_number,
            iterations,
        )
        return PairingSet(
            round_number=round_number,
            pairings=tuple(boards),
            bye=Pairing.bye(bye_player.id, round_number) if bye_player else None,
            metadata=metadata,
        )
