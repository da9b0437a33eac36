"""Score groups and the ranking order used by the pairing engine."""

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
from typing import Callable, Dict, Iterable, List, Tuple

from swisspairing.player import Player
from swisspairing.type_hints import PlayerId


@dataclass(frozen=True)
class ScoreGroup:
    """Players sharing the same score, in pairing order."""

    score: float
    players: Tuple[Player, ...]

    def __len__(self) -> int:
        return len(self.players)

    @property
    def is_odd(self) -> bool:
        return len(self.players) % 2 == 1

    @property
    def player_ids(self) -> Tuple[PlayerId, ...]:
        return tuple(p.id for p in self.players)


def group_sort_key(rating_importance: float) -> Callable[[Player], tuple]:
    """Ordering inside a score group.

    Rating descending, then registration order, then id. The weight itself
    does not change the order, only whether rating takes part: with a zero
    ``rating_importance`` registration order decides.
    """
    if rating_importance > 0:
        return lambda p: (-p.rating, _pairing_number(p), p.id)
    return lambda p: (_pairing_number(p), p.id)


def _pairing_number(player: Player) -> int:
    # unnumbered players sort after every registered one
    if player.pairing_number is None:
        return 1 << 30
    return player.pairing_number


class ScoreGroupBuilder:
    """Partition players into score groups, highest score first."""

    def build(
        self, players: Iterable[Player], rating_importance: float
    ) -> List[ScoreGroup]:
        by_score: Dict[float, List[Player]] = {}
        for player in players:
            by_score.setdefault(player.score, []).append(player)

        key = group_sort_key(rating_importance)
        return [
            ScoreGroup(score=score, players=tuple(sorted(by_score[score], key=key)))
            for score in sorted(by_score, reverse=True)
        ]


def rank_players(groups: Iterable[ScoreGroup]) -> List[Player]:
    """Flatten ordered groups into the full ranking, best player first."""
    return [player for group in groups for player in group.players]
