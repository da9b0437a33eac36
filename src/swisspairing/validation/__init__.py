from swisspairing.validation.checker import (
    CriterionResult,
    CriterionStatus,
    PairingChecker,
    ValidationReport,
    ViolationType,
    check_tournament_feasibility,
)

__all__ = [
    "CriterionResult",
    "CriterionStatus",
    "PairingChecker",
    "ValidationReport",
    "ViolationType",
    "check_tournament_feasibility",
]
