"""Configuration management for Aquarium Arena.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.
Every tunable rules number (shop size, reward amounts, battle round cap,
opponent heuristics) lives here so tests and alternate rule sets can
override it without touching engine code.

Example:
    >>> from aquarium_arena.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.battle.round_cap
    10

Environment Variables:
    AQUARIUM_ARENA_DEBUG: Render logs for the console instead of as JSON
    AQUARIUM_ARENA_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    AQUARIUM_ARENA_SEED: Optional seed for reproducible campaigns
    AQUARIUM_ARENA_SHOP_WEIGHTED_SAMPLING: Draw shop pieces by rarity weight
    AQUARIUM_ARENA_BATTLE_ROUND_CAP: Maximum rounds in a single battle
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aquarium_arena.core.exceptions import ConfigurationError


class ShopSettings(BaseSettings):
    """Configuration for shop generation.

    Attributes:
        slot_count: Number of slots in each side's shop.
        weighted_sampling: Draw by catalog rarity weight instead of uniformly.
    """

    model_config = SettingsConfigDict(
        env_prefix="AQUARIUM_ARENA_SHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    slot_count: int = Field(default=5, ge=1, le=10, description="Shop slots per side")
    weighted_sampling: bool = Field(
        default=False,
        description="Weight draws by rarity instead of drawing uniformly",
    )


class EconomySettings(BaseSettings):
    """Configuration for gold income and costs.

    Attributes:
        starting_gold: Gold each side starts the campaign with.
        base_reroll_cost: Cost of each of the first rerolls in a round.
        flat_reroll_count: Rerolls per round charged at the base cost.
        sale_ratio: Fraction of the acquisition cost refunded on sale.
        win_base_reward: Win reward before the round number is added.
        loss_reward: Flat reward for a loss.
        draw_base_reward: Draw reward before half the round number is added.
        loss_streak_bonus_per_loss: Catch-up gold per loss in the streak.
        loss_streak_bonus_cap: Maximum catch-up bonus.
        interest_divisor: Gold held per point of interest.
        interest_cap: Maximum interest per round.
    """

    model_config = SettingsConfigDict(
        env_prefix="AQUARIUM_ARENA_ECONOMY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    starting_gold: int = Field(default=10, ge=0, description="Starting gold")
    base_reroll_cost: int = Field(default=2, ge=0, description="Base reroll cost")
    flat_reroll_count: int = Field(default=5, ge=0, description="Rerolls at base cost")
    sale_ratio: float = Field(default=0.75, description="Refund ratio on sale")
    win_base_reward: int = Field(default=5, ge=0)
    loss_reward: int = Field(default=3, ge=0)
    draw_base_reward: int = Field(default=4, ge=0)
    loss_streak_bonus_per_loss: int = Field(default=2, ge=0)
    loss_streak_bonus_cap: int = Field(default=10, ge=0)
    interest_divisor: int = Field(default=10, ge=1)
    interest_cap: int = Field(default=5, ge=0)

    @model_validator(mode="after")
    def validate_sale_ratio(self) -> "EconomySettings":
        """Ensure sales never refund more than the purchase price.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If sale_ratio is outside (0, 1].
        """
        if not 0 < self.sale_ratio <= 1:
            raise ConfigurationError(
                f"sale_ratio ({self.sale_ratio}) must be in the range (0, 1]",
                config_key="sale_ratio",
            )
        return self


class BattleSettings(BaseSettings):
    """Configuration for battle resolution.

    Attributes:
        round_cap: Maximum rounds before totals decide the battle.
        low_water_threshold: Water quality below this weakens and poisons a side.
        high_water_threshold: Water quality above this strengthens a side.
        low_water_damage_percent: Damage percentage in poor water.
        high_water_damage_percent: Damage percentage in excellent water.
    """

    model_config = SettingsConfigDict(
        env_prefix="AQUARIUM_ARENA_BATTLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    round_cap: int = Field(default=10, ge=1, le=100, description="Battle round cap")
    low_water_threshold: int = Field(default=3, ge=0, le=10)
    high_water_threshold: int = Field(default=7, ge=0, le=10)
    low_water_damage_percent: int = Field(default=70, ge=0)
    high_water_damage_percent: int = Field(default=120, ge=0)

    @model_validator(mode="after")
    def validate_thresholds(self) -> "BattleSettings":
        """Ensure the low water threshold sits below the high one.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If low_water_threshold >= high_water_threshold.
        """
        if self.low_water_threshold >= self.high_water_threshold:
            raise ConfigurationError(
                f"low_water_threshold ({self.low_water_threshold}) must be less than "
                f"high_water_threshold ({self.high_water_threshold})",
                config_key="low_water_threshold",
            )
        return self


class CampaignSettings(BaseSettings):
    """Configuration for the campaign as a whole.

    Attributes:
        final_round: Round after which the campaign resets.
        plant_amplification: Double flora bonuses next to an amplifier.
    """

    model_config = SettingsConfigDict(
        env_prefix="AQUARIUM_ARENA_CAMPAIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    final_round: int = Field(default=15, ge=1, description="Last campaign round")
    plant_amplification: bool = Field(
        default=False,
        description="Amplifier apparatus doubles adjacent flora bonuses",
    )


class OpponentSettings(BaseSettings):
    """Configuration for the opponent drafting heuristics.

    Attributes:
        reroll_gold_divisor: Gold per permitted reroll.
        max_rerolls: Reroll ceiling per round.
        early_max_rerolls: Reroll ceiling in the early rounds.
        early_round_limit: Last round considered early.
        mid_round_limit: Last round considered mid-game.
        minimum_spend: Minimum gold the opponent tries to spend.
        spend_ratio: Fraction of held gold the opponent tries to spend.
        improvement_ratio: Score gain a fresh shop must offer to be taken.
        shared_tag_bonus: Priority bonus per tag already on the board.
        early_reroll_threshold: Shop score below which an early round rerolls.
        mid_reroll_threshold: Shop score below which a mid round rerolls.
        late_reroll_threshold: Shop score below which a late round rerolls.
    """

    model_config = SettingsConfigDict(
        env_prefix="AQUARIUM_ARENA_OPPONENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    reroll_gold_divisor: int = Field(default=6, ge=1)
    max_rerolls: int = Field(default=2, ge=0)
    early_max_rerolls: int = Field(default=1, ge=0)
    early_round_limit: int = Field(default=3, ge=1)
    mid_round_limit: int = Field(default=6, ge=1)
    minimum_spend: int = Field(default=6, ge=0)
    spend_ratio: float = Field(default=0.7, gt=0, le=1)
    improvement_ratio: float = Field(default=1.1, ge=1)
    shared_tag_bonus: int = Field(default=2, ge=0)
    early_reroll_threshold: float = Field(default=2.5, ge=0)
    mid_reroll_threshold: float = Field(default=3.0, ge=0)
    late_reroll_threshold: float = Field(default=3.5, ge=0)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        debug: Enable debug mode (human-readable console logs).
        log_level: Application logging level.
        seed: Optional seed for a reproducible campaign.
        shop: Shop settings.
        economy: Economy settings.
        battle: Battle settings.
        campaign: Campaign settings.
        opponent: Opponent AI settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="AQUARIUM_ARENA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    seed: int | None = Field(default=None, description="Seed for reproducible campaigns")

    shop: ShopSettings = Field(default_factory=ShopSettings)
    economy: EconomySettings = Field(default_factory=EconomySettings)
    battle: BattleSettings = Field(default_factory=BattleSettings)
    campaign: CampaignSettings = Field(default_factory=CampaignSettings)
    opponent: OpponentSettings = Field(default_factory=OpponentSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "ShopSettings",
    "EconomySettings",
    "BattleSettings",
    "CampaignSettings",
    "OpponentSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
