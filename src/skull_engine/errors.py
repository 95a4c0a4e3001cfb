# src/skull_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class RosterError(GameError):
    """Raised by roster operations."""


class HandError(GameError):
    """Raised when a hand would break its card limits."""


class PlacementError(GameError):
    """Raised by the placement phase."""


class BiddingError(GameError):
    """Raised by the bidding phase."""


class SelectionError(GameError):
    """Raised by the selection phase."""


# Specific error codes
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
NAME_TOO_LONG = "NAME_TOO_LONG"
MISMATCHED_IDS = "MISMATCHED_IDS"
ALREADY_WON = "ALREADY_WON"
INSUFFICIENT_PLAYERS = "INSUFFICIENT_PLAYERS"
TOO_MANY_PLAYERS = "TOO_MANY_PLAYERS"
OUT_OF_CARDS = "OUT_OF_CARDS"
CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
TOO_MANY_CARDS = "TOO_MANY_CARDS"
EMPTY_HAND = "EMPTY_HAND"
ALREADY_PASSED = "ALREADY_PASSED"
BID_TOO_LOW = "BID_TOO_LOW"
BID_TOO_HIGH = "BID_TOO_HIGH"
BIDDING_INCOMPLETE = "BIDDING_INCOMPLETE"
INCORRECT_DRAW_ORDER = "INCORRECT_DRAW_ORDER"
NO_CARDS_LEFT = "NO_CARDS_LEFT"
GOAL_UNREACHABLE = "GOAL_UNREACHABLE"
INVALID_SNAPSHOT = "INVALID_SNAPSHOT"

