"""
Phase states of a round. Each phase is an immutable snapshot; every move
returns a new one.
"""

from typing import Union

from ..constants import PHASE_BIDDING, PHASE_PLACEMENT, PHASE_SELECTION, PHASE_SETUP
from .bidding import Bidding, BiddingResult, KeepBidding, StartSelection
from .placement import Placement
from .selection import Complete, Failed, More, Selection, SelectionResult
from .setup import Setup

GameState = Union[Setup, Placement, Bidding, Selection]

PHASES = {
    PHASE_SETUP: Setup,
    PHASE_PLACEMENT: Placement,
    PHASE_BIDDING: Bidding,
    PHASE_SELECTION: Selection,
}


def phase_of(state: GameState) -> str:
    """The phase name for a state."""
    for name, cls in PHASES.items():
        if type(state) is cls:
            return name
    raise TypeError(f"Not a game state: {type(state).__name__}")


__all__ = [
    "GameState",
    "PHASES",
    "phase_of",
    "Setup",
    "Placement",
    "Bidding",
    "BiddingResult",
    "KeepBidding",
    "StartSelection",
    "Selection",
    "SelectionResult",
    "Complete",
    "More",
    "Failed",
]
