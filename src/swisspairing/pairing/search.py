"""Backtracking search for a complete set of boards.

Brackets are processed from the top score group down. Each bracket is the
players moved down from above followed by the residents of the group. For
every bracket the search picks which players to move on (down-floaters) or
which player to pull up from the group below, pairs the rest, and recurses.
A bracket that cannot be completed sends the search back into the choices
made above it.

Which players leave a bracket is the only thing the brackets below depend
on, so one pairing of the remaining players is enough per choice and failed
states are remembered. Before a bracket is expanded, a maximum matching of
all players still to be paired must be perfect, so a choice that leaves the
brackets below unpairable is rejected at once instead of being explored.
"""

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
from enum import Enum
from itertools import combinations
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Set, Tuple

from swisspairing.exceptions import CannotPairRemainingPlayers, SearchLimitExceeded
from swisspairing.models import FloatType
from swisspairing.pairing.colors import needs_clash, needs_conflict
from swisspairing.pairing.matching import has_perfect_matching, unmatched_players
from swisspairing.pairing.score_groups import ScoreGroup
from swisspairing.player import ColourNeed, Player
from swisspairing.type_hints import PlayerId, PlayerPair
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

_StateKey = Tuple[int, FrozenSet[PlayerId], FrozenSet[PlayerId]]


class ColourRule(Enum):
    """How much colour history restricts who may meet."""

    # nobody may end up two colours off balance
    BALANCED = "balanced"
    # only players absolutely due the same colour are kept apart
    ABSOLUTE = "absolute"
    RELAXED = "relaxed"


class SearchBudget:
    """Iteration allowance for the search of one round.

    A budget can hand out a share of what it has left; steps spent on the
    share are charged to both.
    """

    def __init__(self, limit: int, parent: Optional["SearchBudget"] = None) -> None:
        self.limit = limit
        self.used = 0
        self.parent = parent

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.used)

    @property
    def exhausted(self) -> bool:
        if self.parent is not None and self.parent.exhausted:
            return True
        return self.used >= self.limit

    def spend(self) -> bool:
        """Consume one step, False once the allowance is gone."""
        if self.exhausted:
            return False
        self.used += 1
        if self.parent is not None:
            self.parent.spend()
        return True

    def share(self, fraction: float) -> "SearchBudget":
        """A child allowance of ``fraction`` of the steps left."""
        return SearchBudget(max(1, int(self.remaining * fraction)), parent=self)


@dataclass(frozen=True)
class SearchOutcome:
    """Boards found by a successful search, in bracket order."""

    pairs: Tuple[PlayerPair, ...]
    iterations: int


def _has_perfect_bipartite(
    left: Sequence[Player], right: Sequence[Player], compatible
) -> bool:
    """Kuhn's augmenting path check for a perfect left/right matching."""
    if len(left) != len(right):
        return False
    owner: Dict[int, int] = {}

    def augment(i: int, seen: Set[int]) -> bool:
        for j, candidate in enumerate(right):
            if j in seen or not compatible(left[i], candidate):
                continue
            seen.add(j)
            if j not in owner or augment(owner[j], seen):
                owner[j] = i
                return True
        return False

    return all(augment(i, set()) for i in range(len(left)))


class PairingSearch:
    """Find a complete pairing of ordered score groups.

    Parameters
    ----------
    budget : SearchBudget
        Iteration allowance. Running out raises ``SearchLimitExceeded``.
    allow_repeats : bool
        Accept players who already met, preferring fresh opponents.
    colour_rule : ColourRule
        Which colour histories keep two players apart.
    """

    def __init__(
        self,
        budget: SearchBudget,
        allow_repeats: bool = False,
        colour_rule: ColourRule = ColourRule.ABSOLUTE,
    ) -> None:
        self.budget = budget
        self.allow_repeats = allow_repeats
        self.colour_rule = colour_rule

        self._groups: List[Tuple[Player, ...]] = []
        self._rank: Dict[PlayerId, int] = {}
        self._needs: Dict[PlayerId, ColourNeed] = {}
        self._failed: Set[_StateKey] = set()
        self._matchings: Dict[tuple, Optional[List[PlayerPair]]] = {}
        self._stuck: Tuple[int, Tuple[PlayerId, ...]] = (-1, ())

    # ========== Public API ==========

    def search(self, groups: Sequence[ScoreGroup]) -> SearchOutcome:
        """Pair every player of ``groups``.

        Raises:
            CannotPairRemainingPlayers: no complete pairing exists under the
                current compatibility rules
            SearchLimitExceeded: the iteration budget ran out first
        """
        self._reset(groups)
        total = sum(len(g) for g in self._groups)
        if total % 2:
            raise CannotPairRemainingPlayers(
                [p.id for g in self._groups for p in g],
                f"Cannot pair an odd number of players ({total})",
            )

        pairs = self._solve(0, (), frozenset())
        if pairs is None:
            raise CannotPairRemainingPlayers(self._stuck_ids())
        return SearchOutcome(pairs=tuple(pairs), iterations=self.budget.used)

    def compatible(self, p1: Player, p2: Player) -> bool:
        if p1.id == p2.id:
            return False
        if not self.allow_repeats and p1.has_played(p2.id):
            return False
        if self.colour_rule is ColourRule.RELAXED:
            return True
        need1, need2 = self._needs[p1.id], self._needs[p2.id]
        if self.colour_rule is ColourRule.BALANCED:
            return not needs_clash(need1, need2)
        return not needs_conflict(need1, need2)

    # ========== Bracket Recursion ==========

    def _reset(self, groups: Sequence[ScoreGroup]) -> None:
        self._groups = [tuple(g.players) for g in groups if len(g)]
        ranked = [p for g in self._groups for p in g]
        self._rank = {p.id: index for index, p in enumerate(ranked)}
        self._needs = {p.id: p.color_preference() for p in ranked}
        self._failed = set()
        self._matchings = {}
        self._stuck = (-1, tuple(p.id for p in ranked))

    def _tick(self) -> None:
        if not self.budget.spend():
            raise SearchLimitExceeded(self._stuck_ids(), self.budget.used)

    def _stuck_ids(self) -> Tuple[PlayerId, ...]:
        return self._stuck[1]

    def _record_stuck(self, index: int, players: Sequence[Player]) -> None:
        if index >= self._stuck[0]:
            self._stuck = (index, tuple(p.id for p in players))

    def _solve(
        self,
        index: int,
        carried: Tuple[Player, ...],
        pulled: FrozenSet[PlayerId],
    ) -> Optional[List[PlayerPair]]:
        """Pair bracket ``index`` and everything below it, or return None."""
        if index >= len(self._groups):
            return [] if not carried else None

        key = (index, frozenset(p.id for p in carried), pulled)
        if key in self._failed:
            return None
        self._tick()

        residents = tuple(p for p in self._groups[index] if p.id not in pulled)
        bracket = carried + residents
        below = [p for g in self._groups[index + 1 :] for p in g]

        # every choice below must pair these players, give up early if none can
        unpaired = unmatched_players(list(bracket) + below, self.compatible)
        if unpaired:
            self._failed.add(key)
            self._record_stuck(index, unpaired)
            return None

        result = None
        for leftovers, pulled_up in self._options(index, carried, residents):
            self._tick()
            members = bracket + ((pulled_up,) if pulled_up else ())
            remainder = [p for p in members if p not in leftovers]
            matching = self._match(remainder, carried, pulled_up)
            if matching is None:
                continue
            next_pulled = frozenset({pulled_up.id}) if pulled_up else frozenset()
            rest = self._solve(index + 1, leftovers, next_pulled)
            if rest is not None:
                result = matching + rest
                break

        if result is None:
            self._failed.add(key)
            self._record_stuck(index, bracket)
        return result

    def _options(
        self,
        index: int,
        carried: Tuple[Player, ...],
        residents: Tuple[Player, ...],
    ) -> Iterator[Tuple[Tuple[Player, ...], Optional[Player]]]:
        """Leftover/pull-up choices for a bracket, fewest floaters first."""
        bracket = carried + residents
        is_last = index == len(self._groups) - 1
        if is_last:
            if len(bracket) % 2 == 0:
                yield (), None
            return

        carried_ids = {p.id for p in carried}
        floaters = self._leftover_order(bracket, carried_ids)
        pull_up = self._pull_up_candidate(bracket, self._groups[index + 1])

        if len(bracket) % 2 == 0:
            for count in range(0, len(bracket) + 1, 2):
                for leftovers in combinations(floaters, count):
                    yield leftovers, None
            return

        # odd bracket: one down-floater or one up-floater, then more floaters
        pull_first = (
            pull_up is not None
            and floaters[0].last_float is FloatType.FLOAT_DOWN
            and pull_up.last_float is not FloatType.FLOAT_UP
        )
        if pull_first:
            logger.debug(
                "Pulling up %s instead of floating %s down again",
                pull_up.id,
                floaters[0].id,
            )
        for count in range(1, len(bracket) + 1, 2):
            down = ((leftovers, None) for leftovers in combinations(floaters, count))
            up: Iterator = iter(())
            if pull_up is not None:
                up = (
                    (leftovers, pull_up)
                    for leftovers in combinations(floaters, count - 1)
                )
            first, second = (up, down) if pull_first else (down, up)
            yield from first
            yield from second

    def _leftover_order(
        self, bracket: Sequence[Player], carried_ids: Set[PlayerId]
    ) -> List[Player]:
        """Players in the order they should leave the bracket.

        Lowest ranked first; players already moved down and players whose
        last float was down go last.
        """
        return sorted(
            bracket,
            key=lambda p: (
                p.id in carried_ids,
                p.last_float is FloatType.FLOAT_DOWN,
                -self._rank[p.id],
            ),
        )

    def _pull_up_candidate(
        self, bracket: Sequence[Player], next_group: Sequence[Player]
    ) -> Optional[Player]:
        """Highest player of the next group able to meet someone in the bracket."""
        usable = [p for p in next_group if any(self.compatible(p, q) for q in bracket)]
        if not usable:
            return None
        for player in usable:
            if player.last_float is not FloatType.FLOAT_UP:
                return player
        return usable[0]

    # ========== Matching Inside a Bracket ==========

    def _match(
        self,
        players: Sequence[Player],
        carried: Sequence[Player],
        pulled_up: Optional[Player],
    ) -> Optional[List[PlayerPair]]:
        """Pair every player of a bracket remainder, or return None.

        Moved-down players lead, the pulled-up player trails. The fold of
        the upper half against the lower half is tried first, with lower
        half transpositions in lexicographic order. Any other complete
        pairing of the same players is the fallback.
        """
        if not players:
            return []
        carried_ids = {p.id for p in carried}
        ordered = sorted(
            players,
            key=lambda p: (
                p.id not in carried_ids,
                pulled_up is not None and p.id == pulled_up.id,
                self._rank[p.id],
            ),
        )
        key = (tuple(p.id for p in ordered),)
        if key in self._matchings:
            return self._matchings[key]

        for player in ordered:
            if not any(self.compatible(player, other) for other in ordered):
                self._matchings[key] = None
                return None

        half = len(ordered) // 2
        pairs = self._fold(list(ordered[:half]), list(ordered[half:]))
        if pairs is None:
            pairs = self._exchange(list(ordered))
        self._matchings[key] = pairs
        return pairs

    def _partner_order(self, player: Player, candidates: Sequence[Player]) -> List[int]:
        indices = list(range(len(candidates)))
        if self.allow_repeats:
            indices.sort(key=lambda j: (player.has_played(candidates[j].id), j))
        return indices

    def _fold(
        self, upper: List[Player], lower: List[Player]
    ) -> Optional[List[PlayerPair]]:
        if not _has_perfect_bipartite(upper, lower, self.compatible):
            return None

        pairs: List[PlayerPair] = []
        free = list(lower)
        for player in upper:
            self._tick()
            for j in self._partner_order(player, free):
                partner = free[j]
                if not self.compatible(player, partner):
                    continue
                rest = free[:j] + free[j + 1 :]
                if _has_perfect_bipartite(
                    upper[len(pairs) + 1 :], rest, self.compatible
                ):
                    pairs.append((player, partner))
                    free = rest
                    break
            else:
                return None
        return pairs

    def _exchange(self, players: List[Player]) -> Optional[List[PlayerPair]]:
        """Pair ``players`` across the halves, best placed players first.

        Each player in turn takes the earliest partner that still leaves a
        complete pairing of the others, so no choice is ever undone.
        """
        if not has_perfect_matching(players, self.compatible):
            return None

        pairs: List[PlayerPair] = []
        rest = players
        while rest:
            self._tick()
            first, others = rest[0], rest[1:]
            for j in self._partner_order(first, others):
                partner = others[j]
                if not self.compatible(first, partner):
                    continue
                remaining = others[:j] + others[j + 1 :]
                if has_perfect_matching(remaining, self.compatible):
                    pairs.append((first, partner))
                    rest = remaining
                    break
            else:
                return None
        return pairs
