"""Custom exception hierarchy for Aquarium Arena.

All exceptions inherit from AquariumArenaError so callers can handle every
engine failure at a single boundary while keeping domain context in
``details``.

Gameplay commands never raise during normal play: they guard and return
the previous snapshot. These exceptions signal configuration defects (a
malformed catalog, invalid settings) or a caller that bypassed a guard.

Example:
    >>> from aquarium_arena.core.exceptions import CatalogError
    >>> raise CatalogError("Footprint must not be empty", piece_id="java-fern")
"""

from __future__ import annotations

from typing import Any


class AquariumArenaError(Exception):
    """Base exception for all Aquarium Arena errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(AquariumArenaError):
    """Raised when application configuration is invalid.

    This includes invalid setting values and incompatible combinations
    of settings.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class CatalogError(ConfigurationError):
    """Raised when the piece catalog contains malformed data.

    A broken catalog is a startup defect, so it is raised while the
    catalog loads and never mid-game.
    """

    def __init__(
        self,
        message: str,
        *,
        piece_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with the offending piece id.

        Args:
            message: Human-readable error description.
            piece_id: Identifier of the malformed catalog entry.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if piece_id:
            combined_details["piece_id"] = piece_id
        super().__init__(message, config_key="catalog", details=combined_details)


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(AquariumArenaError):
    """Base exception for all game engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when an operation is applied to a state that cannot accept it."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class InsufficientGoldError(GameEngineError):
    """Raised when a ledger debit exceeds the side's balance."""

    def __init__(
        self,
        message: str,
        *,
        required: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize insufficient gold error with balance context.

        Args:
            message: Human-readable error description.
            required: Gold the action would cost.
            available: Gold the side currently holds.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if required is not None:
            combined_details["required"] = required
        if available is not None:
            combined_details["available"] = available
        super().__init__(message, details=combined_details)


class BattleError(GameEngineError):
    """Raised when battle resolution is driven incorrectly."""

    def __init__(
        self,
        message: str,
        *,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize battle error with round context.

        Args:
            message: Human-readable error description.
            round_number: Battle round when the error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


__all__ = [
    "AquariumArenaError",
    "ConfigurationError",
    "CatalogError",
    "GameEngineError",
    "InvalidGameStateError",
    "InsufficientGoldError",
    "BattleError",
]
