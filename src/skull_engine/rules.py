"""
Game rule configuration and validation.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .constants import MAX_NAME_LENGTH, MIN_PLAYERS


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    max_name_length: int = Field(
        default=MAX_NAME_LENGTH,
        ge=1,
        le=MAX_NAME_LENGTH,
        description="Longest player name accepted by the roster"
    )
    min_players: int = Field(
        default=MIN_PLAYERS,
        ge=MIN_PLAYERS,
        description="Minimum number of playing members required to start"
    )
    max_players: Optional[int] = Field(
        default=None,
        ge=MIN_PLAYERS,
        description="Maximum number of playing members (None = unlimited)"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't undercut minimum."""
        if v is None:
            return v
        min_players = info.data.get('min_players', MIN_PLAYERS)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        if player_count < self.min_players:
            return False
        return self.max_players is None or player_count <= self.max_players


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
