"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        AquariumArenaError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        CatalogError: Malformed piece catalog data.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from aquarium_arena.core.config import (
    BattleSettings,
    CampaignSettings,
    EconomySettings,
    OpponentSettings,
    Settings,
    ShopSettings,
    clear_settings_cache,
    get_settings,
)
from aquarium_arena.core.exceptions import (
    AquariumArenaError,
    BattleError,
    CatalogError,
    ConfigurationError,
    GameEngineError,
    InsufficientGoldError,
    InvalidGameStateError,
)
from aquarium_arena.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "AquariumArenaError",
    "ConfigurationError",
    "CatalogError",
    "GameEngineError",
    "InvalidGameStateError",
    "InsufficientGoldError",
    "BattleError",
    # Configuration
    "Settings",
    "ShopSettings",
    "EconomySettings",
    "BattleSettings",
    "CampaignSettings",
    "OpponentSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
