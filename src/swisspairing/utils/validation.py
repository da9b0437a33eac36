"""Validation utilities for Swiss Pairing.

This module provides reusable validation functions with consistent error handling.
"""

import math
from typing import Optional

from swisspairing.constants import MAX_RATING, MIN_RATING
from swisspairing.exceptions import (
    InvalidConfigurationException,
    InvalidPlayerDataException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[object] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Rating Validation ==========


def validate_rating(
    rating: Optional[int], min_rating: int = MIN_RATING, max_rating: int = MAX_RATING
) -> ValidationResult:
    """Validate a chess rating.

    Args:
        rating: Rating value to validate, None means unrated (0)
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        ValidationResult with the rating as an int
    """
    if rating is None:
        return ValidationResult(is_valid=True, sanitized_value=0)

    if isinstance(rating, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a number: {rating}",
        )

    try:
        rating_int = int(rating)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a number: {rating}",
        )

    if rating_int < min_rating or rating_int > max_rating:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be between {min_rating} and {max_rating}: {rating_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=rating_int)


def validate_rating_strict(
    rating: Optional[int], min_rating: int = MIN_RATING, max_rating: int = MAX_RATING
) -> int:
    """Validate rating and return integer or raise exception.

    Raises:
        InvalidPlayerDataException: If rating is invalid
    """
    result = validate_rating(rating, min_rating, max_rating)
    if not result.is_valid:
        raise InvalidPlayerDataException(result.error_message)
    return int(result.sanitized_value)


# ========== Identity Validation ==========


def validate_player_id(player_id: object) -> ValidationResult:
    """Validate a player id and normalise it to ``str``.

    UUIDs and integers are accepted and converted with ``str()``.
    """
    if player_id is None or isinstance(player_id, bool):
        return ValidationResult(
            is_valid=False, error_message=f"Invalid player id: {player_id!r}"
        )
    player_id_str = str(player_id).strip()
    if not player_id_str:
        return ValidationResult(is_valid=False, error_message="Player id is required")
    return ValidationResult(is_valid=True, sanitized_value=player_id_str)


def validate_non_empty(
    value: Optional[str], field_name: str = "Field"
) -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if not value or not str(value).strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=str(value).strip())


# ========== Configuration Validation ==========


def validate_positive_integer(
    value: Optional[int], field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is required",
        )
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number",
        )

    try:
        int_value = int(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )
    if int_value <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be positive",
        )
    return ValidationResult(is_valid=True, sanitized_value=int_value)


def validate_unit_weight(value: Optional[float], field_name: str = "Weight") -> ValidationResult:
    """Validate a weight in the closed interval [0, 1]."""
    if value is None or isinstance(value, bool):
        return ValidationResult(
            is_valid=False, error_message=f"{field_name} must be a number"
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False, error_message=f"{field_name} must be a number"
        )
    if math.isnan(float_value) or not 0.0 <= float_value <= 1.0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be between 0 and 1: {value}",
        )
    return ValidationResult(is_valid=True, sanitized_value=float_value)


def require_valid(result: ValidationResult) -> object:
    """Return the sanitized value or raise InvalidConfigurationException."""
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)
    return result.sanitized_value
