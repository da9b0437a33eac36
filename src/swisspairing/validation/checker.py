"""Independent checks of a produced round."""

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

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from swisspairing.models import PairingSet
from swisspairing.tournament import TournamentState
from swisspairing.type_hints import BLACK, WHITE
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

# largest acceptable |whites - blacks| once the round is played
MAX_COLOUR_DIFFERENCE = 2


class CriterionStatus(Enum):
    """Status of a criterion check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """How serious a violation is."""

    ABSOLUTE = "ABSOLUTE"  # C1-C3: must not happen
    QUALITY = "QUALITY"  # C4 and accepted relaxations: should be rare


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def is_violation(self) -> bool:
        return self.status is CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for one round."""

    round_number: int
    violations: List[CriterionResult]
    quality_warnings: List[CriterionResult]
    criteria_results: List[CriterionResult]
    summary: str

    @property
    def is_valid(self) -> bool:
        """True when no absolute criterion is violated."""
        return not self.violations


class PairingChecker:
    """Validate a round against the hard pairing rules.

    ``state`` is the tournament as it was when the round was paired, i.e.
    before the round's results are applied.
    """

    def check_c1_no_repeats(
        self, pairing_set: PairingSet, state: TournamentState
    ) -> CriterionResult:
        """C1: Players shall not play against each other more than once."""
        accepted = set(pairing_set.metadata.forced_repeats)
        repeats = []
        forced = []
        for pairing in pairing_set.pairings:
            white = state.get_player(pairing.white_id)
            if not white.has_played(pairing.black_id):
                continue
            if pairing.match_key in accepted:
                forced.append([pairing.white_id, pairing.black_id])
            else:
                repeats.append([pairing.white_id, pairing.black_id])

        if repeats:
            return CriterionResult(
                criterion="C1",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description=f"Repeat pairings: {len(repeats)}",
                details={"pairs": repeats},
            )
        if forced:
            return CriterionResult(
                criterion="C1",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.QUALITY,
                description=f"Forced repeat pairings accepted: {len(forced)}",
                details={"pairs": forced},
            )
        return CriterionResult(
            criterion="C1",
            status=CriterionStatus.COMPLIANT,
            description="No repeat pairings found",
        )

    def check_c2_no_repeat_bye(
        self, pairing_set: PairingSet, state: TournamentState
    ) -> CriterionResult:
        """C2: No repeat bye while someone is still without one."""
        bye_id = pairing_set.bye_player_id
        if bye_id is None:
            return CriterionResult(
                criterion="C2",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No bye assigned in this round",
            )

        bye_player = state.get_player(bye_id)
        if not bye_player.has_received_bye:
            return CriterionResult(
                criterion="C2",
                status=CriterionStatus.COMPLIANT,
                description=f"Bye assignment valid: {bye_player.name}",
            )

        without_bye = [
            p.id for p in state.get_active_players() if not p.has_received_bye
        ]
        if without_bye:
            return CriterionResult(
                criterion="C2",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description=f"Repeat bye: {bye_player.name}",
                details={"player_id": bye_id, "players_without_bye": without_bye},
            )
        return CriterionResult(
            criterion="C2",
            status=CriterionStatus.COMPLIANT,
            description=f"Repeat bye for {bye_player.name}, every player had one",
        )

    def check_c3_every_player_once(
        self, pairing_set: PairingSet, state: TournamentState
    ) -> CriterionResult:
        """C3: Every active player appears exactly once, nobody else appears."""
        counts = Counter(pairing_set.player_ids)
        active = {p.id for p in state.get_active_players()}
        duplicates = sorted(pid for pid, n in counts.items() if n > 1)
        missing = sorted(active - set(counts))
        unexpected = sorted(set(counts) - active)

        if duplicates or missing or unexpected:
            return CriterionResult(
                criterion="C3",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description="Round does not cover the active players exactly once",
                details={
                    "duplicates": duplicates,
                    "missing": missing,
                    "unexpected": unexpected,
                },
            )
        return CriterionResult(
            criterion="C3",
            status=CriterionStatus.COMPLIANT,
            description=f"All {len(active)} active players placed once",
        )

    def check_c4_colour_difference(
        self, pairing_set: PairingSet, state: TournamentState
    ) -> CriterionResult:
        """C4: Colour difference stays within +/-2 after the round."""
        offenders = []
        for pairing in pairing_set.pairings:
            for player_id, colour in (
                (pairing.white_id, WHITE),
                (pairing.black_id, BLACK),
            ):
                player = state.get_player(player_id)
                difference = player.color_balance + (1 if colour == WHITE else -1)
                if abs(difference) > MAX_COLOUR_DIFFERENCE:
                    offenders.append({"player_id": player_id, "difference": difference})

        if offenders:
            return CriterionResult(
                criterion="C4",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.QUALITY,
                description=f"Colour difference beyond {MAX_COLOUR_DIFFERENCE}",
                details={"players": offenders},
            )
        return CriterionResult(
            criterion="C4",
            status=CriterionStatus.COMPLIANT,
            description="Colour differences within limits",
        )

    def validate_round(
        self, pairing_set: PairingSet, state: TournamentState
    ) -> ValidationReport:
        """Run every criterion against ``pairing_set``."""
        results = [
            self.check_c1_no_repeats(pairing_set, state),
            self.check_c2_no_repeat_bye(pairing_set, state),
            self.check_c3_every_player_once(pairing_set, state),
            self.check_c4_colour_difference(pairing_set, state),
        ]
        violations = [
            r
            for r in results
            if r.is_violation and r.violation_type is ViolationType.ABSOLUTE
        ]
        quality_warnings = [
            r
            for r in results
            if r.is_violation and r.violation_type is ViolationType.QUALITY
        ]

        if violations:
            summary = (
                f"Absolute violations detected - {len(violations)} criteria "
                f"failed; {len(quality_warnings)} quality warnings"
            )
            logger.warning("Round %d: %s", pairing_set.round_number, summary)
        else:
            summary = (
                f"Absolute criteria satisfied; {len(quality_warnings)} "
                "quality criteria flagged"
            )
            logger.debug("Round %d: %s", pairing_set.round_number, summary)

        return ValidationReport(
            round_number=pairing_set.round_number,
            violations=violations,
            quality_warnings=quality_warnings,
            criteria_results=results,
            summary=summary,
        )


def check_tournament_feasibility(
    num_players: int, num_rounds: int
) -> Optional[CriterionResult]:
    """Check whether a tournament can avoid repeat pairings at all.

    With N players there are at most N*(N-1)/2 distinct pairings, while R
    rounds need R * floor(N/2) of them. When the second number is larger,
    repeats are inevitable.

    Returns:
        CriterionResult if the configuration is infeasible, None otherwise.
    """
    if num_players < 2 or num_rounds < 1:
        return None

    max_unique_pairings = num_players * (num_players - 1) // 2
    total_pairings_needed = num_rounds * (num_players // 2)
    if total_pairings_needed <= max_unique_pairings:
        return None

    min_repeats = total_pairings_needed - max_unique_pairings
    return CriterionResult(
        criterion="C1",
        status=CriterionStatus.VIOLATION,
        violation_type=ViolationType.ABSOLUTE,
        description=(
            f"{num_players} players over {num_rounds} rounds need "
            f"{total_pairings_needed} pairings, but only {max_unique_pairings} "
            f"distinct pairings exist (at least {min_repeats} repeats)"
        ),
        details={
            "num_players": num_players,
            "num_rounds": num_rounds,
            "max_unique_pairings": max_unique_pairings,
            "total_pairings_needed": total_pairings_needed,
            "min_repeat_pairings": min_repeats,
        },
    )
