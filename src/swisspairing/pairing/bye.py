"""Choosing the player who sits out an odd round."""

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
from typing import List, Sequence

from swisspairing.exceptions import NoValidByeCandidate
from swisspairing.models import ByePolicy
from swisspairing.player import Player
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ByeSelection:
    player: Player
    policy: ByePolicy


class ByeAssigner:
    """Pick bye candidates from a ranked pool.

    The pool must be in ranking order (best first), as produced by
    :func:`swisspairing.pairing.score_groups.rank_players`.
    """

    def candidates(self, ranked: Sequence[Player]) -> List[ByeSelection]:
        """Every acceptable bye recipient, most preferred first.

        Players who never had a bye come first, lowest ranked first. Only
        when every player already had one does the list fall back to the
        players with the fewest byes, again lowest ranked first.
        """
        if not ranked:
            raise NoValidByeCandidate("No players available to receive a bye")

        from_bottom = list(reversed(ranked))
        fresh = [p for p in from_bottom if not p.has_received_bye]
        if fresh:
            return [ByeSelection(p, ByePolicy.NO_PREVIOUS_BYE) for p in fresh]

        # stable sort keeps bottom-up order among equal bye counts
        fallback = sorted(from_bottom, key=lambda p: p.bye_count)
        return [ByeSelection(p, ByePolicy.REPEAT_BYE_FALLBACK) for p in fallback]

    def select(self, ranked: Sequence[Player]) -> ByeSelection:
        selection = self.candidates(ranked)[0]
        if selection.policy is ByePolicy.REPEAT_BYE_FALLBACK:
            logger.warning(
                "Every player already had a bye, %s receives another one",
                selection.player.name,
            )
        return selection
