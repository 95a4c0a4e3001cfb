"""
Rules engine for Skull, the bluffing card game.
"""

__version__ = "0.1.0"

from .errors import GameError
from .models import PASS, Bid, Card, Hand, Player, PlayerID, Score
from .roster import Roster
from .rules import RuleConfig, create_rules, default_rules
from .phases import (
    Bidding,
    Complete,
    Failed,
    GameState,
    KeepBidding,
    More,
    Placement,
    Selection,
    Setup,
    StartSelection,
    phase_of,
)

__all__ = [
    "GameError",
    "PASS",
    "Bid",
    "Card",
    "Hand",
    "Player",
    "PlayerID",
    "Score",
    "Roster",
    "RuleConfig",
    "create_rules",
    "default_rules",
    "Bidding",
    "Complete",
    "Failed",
    "GameState",
    "KeepBidding",
    "More",
    "Placement",
    "Selection",
    "Setup",
    "StartSelection",
    "phase_of",
]
