"""Seeded random tournaments driven through the pairing engine."""

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

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from swisspairing.models import GameResult, PairingSet, SwissConfig
from swisspairing.pairing import SwissPairer
from swisspairing.player import Player
from swisspairing.tournament import TournamentState
from swisspairing.utils import setup_logger
from swisspairing.validation import PairingChecker, ValidationReport

logger = setup_logger(__name__)


class RatingDistribution(Enum):
    """Rating distribution patterns for generated fields."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    CLUB = "club"


class ResultPattern(Enum):
    """How game outcomes are drawn."""

    REALISTIC = "realistic"
    PREDICTABLE = "predictable"
    RANDOM = "random"
    DRAWS = "draws"


@dataclass
class SimulationConfig:
    """Configuration for a simulated tournament.

    ``withdrawal_round`` withdraws one seeded random player before that
    round is paired.
    """

    num_players: int
    num_rounds: int
    rating_distribution: RatingDistribution = RatingDistribution.NORMAL
    rating_range: Tuple[int, int] = (800, 2800)
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    withdrawal_round: Optional[int] = None
    draw_percentage: int = 30
    swiss_config: Optional[SwissConfig] = None


@dataclass
class SimulationResult:
    state: TournamentState
    pairing_sets: List[PairingSet] = field(default_factory=list)
    reports: List[ValidationReport] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return all(report.is_valid for report in self.reports)


class PlayerFactory:
    """Factory for creating players with seeded ratings."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.random = random.Random(config.seed)

    def create_players(self) -> List[Player]:
        players = []
        for i in range(self.config.num_players):
            rating = self._generate_rating()
            players.append(
                Player(
                    id=f"p{i + 1:03d}",
                    name=self._generate_name(i + 1, rating),
                    rating=rating,
                    pairing_number=i + 1,
                )
            )
        logger.info(
            "Created %s players with %s distribution",
            len(players),
            self.config.rating_distribution.value,
        )
        return players

    def _generate_rating(self) -> int:
        min_rating, max_rating = self.config.rating_range
        if self.config.rating_distribution == RatingDistribution.NORMAL:
            mean = (min_rating + max_rating) / 2
            std_dev = (max_rating - min_rating) / 6
            rating = int(self.random.gauss(mean, std_dev))
            return max(min_rating, min(max_rating, rating))
        if self.config.rating_distribution == RatingDistribution.CLUB:
            base = self.random.choice([1000, 1200, 1400, 1600, 1800])
            return self.random.randint(base - 100, base + 100)
        return self.random.randint(min_rating, max_rating)

    def _generate_name(self, number: int, rating: int) -> str:
        if rating < 1200:
            prefix = "Novice"
        elif rating < 1600:
            prefix = "Club"
        elif rating < 2000:
            prefix = "Expert"
        else:
            prefix = "Master"
        return f"{prefix}-{number:03d}"


class ResultSimulator:
    """Draws game results, seeded for reproducibility."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        # offset keeps the result stream independent of the rating stream
        seed = None if config.seed is None else config.seed + 1
        self.random = random.Random(seed)

    def white_result(self, white: Player, black: Player) -> GameResult:
        pattern = self.config.result_pattern
        if pattern == ResultPattern.DRAWS:
            return GameResult.DRAW
        if pattern == ResultPattern.RANDOM:
            return self.random.choice([GameResult.WIN, GameResult.DRAW, GameResult.LOSS])
        if pattern == ResultPattern.PREDICTABLE:
            return self._predictable_result(white, black)
        return self._realistic_result(white, black)

    def _realistic_result(self, white: Player, black: Player) -> GameResult:
        rating_diff = abs(white.rating - black.rating)
        expected_value = math.erfc(rating_diff * (-7.0 / math.sqrt(2.0) / 2000.0)) / 2.0
        draw_probability = min(
            self.config.draw_percentage / 100.0, 2.0 - expected_value * 2.0
        )

        random_value = self.random.random()
        if random_value < draw_probability:
            return GameResult.DRAW

        stronger_wins = random_value < expected_value + draw_probability / 2.0
        white_wins = stronger_wins if white.rating >= black.rating else not stronger_wins
        return GameResult.WIN if white_wins else GameResult.LOSS

    def _predictable_result(self, white: Player, black: Player) -> GameResult:
        if white.rating == black.rating:
            return GameResult.DRAW
        return GameResult.WIN if white.rating > black.rating else GameResult.LOSS


class TournamentSimulator:
    """Play a whole tournament: pair, validate, simulate results, repeat."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.player_factory = PlayerFactory(config)
        self.result_simulator = ResultSimulator(config)
        self.random = random.Random(config.seed)
        self.swiss_config = config.swiss_config or SwissConfig(
            total_rounds=config.num_rounds
        )
        self.pairer = SwissPairer(self.swiss_config)
        self.checker = PairingChecker()

    def run(self) -> SimulationResult:
        logger.info(
            "Simulating tournament: %s players, %s rounds",
            self.config.num_players,
            self.config.num_rounds,
        )
        state = TournamentState(
            self.player_factory.create_players(), self.config.num_rounds
        )
        result = SimulationResult(state=state)

        for round_number in range(1, self.config.num_rounds + 1):
            if round_number == self.config.withdrawal_round:
                self._withdraw_one(state)
            pairing_set = self.pairer.pair_round(state)
            result.pairing_sets.append(pairing_set)
            result.reports.append(self.checker.validate_round(pairing_set, state))
            state.apply_round_results(self._simulate_results(pairing_set, state))

        logger.info("Simulation complete")
        return result

    def _withdraw_one(self, state: TournamentState) -> None:
        active = state.get_active_players()
        if len(active) <= 2:
            return
        leaving = self.random.choice(active)
        state.set_player_active(leaving.id, False)

    def _simulate_results(
        self, pairing_set: PairingSet, state: TournamentState
    ) -> List[Tuple[str, GameResult]]:
        results: List[Tuple[str, GameResult]] = []
        for pairing in pairing_set.pairings:
            white = state.get_player(pairing.white_id)
            black = state.get_player(pairing.black_id)
            results.extend(
                pairing.outcomes(self.result_simulator.white_result(white, black))
            )
        if pairing_set.bye is not None:
            results.extend(pairing_set.bye.outcomes())
        return results


def create_small_simulation(
    num_players: int = 8, seed: Optional[int] = None
) -> TournamentSimulator:
    """Small field for quick property checks."""
    return TournamentSimulator(
        SimulationConfig(
            num_players=num_players,
            num_rounds=max(3, min(5, num_players - 1)),
            seed=seed,
        )
    )
