"""Dutch System Swiss pairing engine."""

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

from typing import Iterable, Optional, Tuple

from swisspairing.exceptions import (
    CannotPairRemainingPlayers,
    ConfigurationException,
    InsufficientPlayers,
    InvalidConfigurationException,
    InvalidPlayerDataException,
    InvalidTournamentState,
    NoValidByeCandidate,
    PairingException,
    PlayerException,
    SearchLimitExceeded,
    SwissPairingException,
)
from swisspairing.models import (
    ByePolicy,
    FloatType,
    GameResult,
    Pairing,
    PairingMetadata,
    PairingSet,
    SwissConfig,
)
from swisspairing.pairing import SwissPairer
from swisspairing.player import Player
from swisspairing.tournament import TournamentState
from swisspairing.type_hints import BLACK, WHITE, PlayerId

__version__ = "0.1.0"


def pair_round(
    state: TournamentState, config: Optional[SwissConfig] = None
) -> PairingSet:
    """Pair the next round of ``state`` and record it as pending.

    Without a config, one matching the tournament's round count is used.
    """
    if config is None:
        config = SwissConfig(total_rounds=state.total_rounds)
    return SwissPairer(config).pair_round(state)


def apply_round_results(
    state: TournamentState, results: Iterable[Tuple[PlayerId, GameResult]]
) -> None:
    """Apply the pending round's outcomes to ``state``."""
    state.apply_round_results(results)


__all__ = [
    "BLACK",
    "WHITE",
    "ByePolicy",
    "CannotPairRemainingPlayers",
    "ConfigurationException",
    "FloatType",
    "GameResult",
    "InsufficientPlayers",
    "InvalidConfigurationException",
    "InvalidPlayerDataException",
    "InvalidTournamentState",
    "NoValidByeCandidate",
    "Pairing",
    "PairingException",
    "PairingMetadata",
    "PairingSet",
    "Player",
    "PlayerException",
    "SearchLimitExceeded",
    "SwissConfig",
    "SwissPairer",
    "SwissPairingException",
    "TournamentState",
    "apply_round_results",
    "pair_round",
]
