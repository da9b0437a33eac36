"""Exceptions for use in Swiss Pairing"""

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

from typing import Iterable, Tuple

# ========== Base Application Exception ==========


class SwissPairingException(Exception):
    """Base exception for all Swiss Pairing errors.

    All custom exceptions in the engine inherit from this class.
    This enables catching all engine-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(SwissPairingException):
    """Base exception for pairing-related errors."""

    pass


class InsufficientPlayers(PairingException):
    """Raised when fewer than two players are available to pair."""

    pass


class NoValidByeCandidate(PairingException):
    """Raised when a bye is required but the pool holds nobody to receive it."""

    pass


class CannotPairRemainingPlayers(PairingException):
    """Raised when the pairing search exhausted every fold, float and reorder option.

    The ids of the players left unpaired are kept on the exception so the
    caller can intervene manually (forced pairing, manual bye, ...).
    """

    def __init__(self, stuck_player_ids: Iterable[str], message: str = "") -> None:
        self.stuck_player_ids: Tuple[str, ...] = tuple(stuck_player_ids)
        if not message:
            message = "Cannot pair remaining players: " + ", ".join(
                self.stuck_player_ids
            )
        super().__init__(message)


class SearchLimitExceeded(CannotPairRemainingPlayers):
    """Raised when the search hit the configured iteration cap."""

    def __init__(self, stuck_player_ids: Iterable[str], iterations: int) -> None:
        self.iterations = iterations
        stuck = tuple(stuck_player_ids)
        super().__init__(
            stuck,
            f"Pairing search stopped after {iterations} iterations "
            f"with {len(stuck)} players unresolved",
        )


class InvalidTournamentState(PairingException):
    """Raised when the tournament is in an invalid state for the requested operation."""

    pass


# ========== Player Exceptions ==========


class PlayerException(SwissPairingException):
    """Base exception for player-related errors."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
