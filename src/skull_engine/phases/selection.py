"""
Selection phase: the winning bidder turns cards over to meet their bid.

The selector must empty their own stack before drawing from anyone else's.
Drawing a skull ends the round in failure; drawing ``goal`` flowers wins it.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Tuple, Union

from ..errors import (
    GOAL_UNREACHABLE,
    INCORRECT_DRAW_ORDER,
    NO_CARDS_LEFT,
    PLAYER_NOT_FOUND,
    SelectionError,
)
from ..models import Card, Hand, PlayerID, copy_stacks
from ..roster import Roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=True)
class Selection:
    __hash__ = None

    roster: Roster
    selector: PlayerID
    goal: int
    found: int
    cards: Dict[PlayerID, Tuple[Card, ...]]
    hands: Dict[PlayerID, Hand]

    def __post_init__(self):
        object.__setattr__(self, "cards", copy_stacks(self.cards))
        object.__setattr__(self, "hands", dict(self.hands))
        if self.selector not in self.roster.player_ids:
            raise SelectionError(PLAYER_NOT_FOUND, f"Player {self.selector} is not playing")
        if not 0 <= self.found < self.goal:
            raise SelectionError(GOAL_UNREACHABLE, f"Found {self.found} of {self.goal} cards")

    @classmethod
    def start(
        cls,
        selector: PlayerID,
        goal: int,
        roster: Roster,
        cards: Dict[PlayerID, Tuple[Card, ...]],
        hands: Dict[PlayerID, Hand],
    ) -> 'Selection':
        total = sum(len(stack) for stack in cards.values())
        if goal < 1 or goal > total:
            raise SelectionError(GOAL_UNREACHABLE, f"Cannot reveal {goal} of {total} cards")
        return cls(roster=roster, selector=selector, goal=goal, found=0, cards=cards, hands=hands)

    @property
    def own_stack_empty(self) -> bool:
        return not self.cards.get(self.selector)

    def pick_card(self, from_player: PlayerID) -> 'SelectionResult':
        """
        Reveal the top card of ``from_player``'s stack.

        Returns:
            Failed(from_player) on a skull, Complete(selector) once the goal
            is met, otherwise More with the updated selection

        Raises:
            SelectionError: INCORRECT_DRAW_ORDER, PLAYER_NOT_FOUND or
                NO_CARDS_LEFT
        """
        if from_player != self.selector and not self.own_stack_empty:
            raise SelectionError(INCORRECT_DRAW_ORDER, "Selector must draw their own cards first")

        card, cards = self._draw_card(from_player)
        if card == Card.SKULL:
            logger.info(f"Player {from_player} revealed a skull, {self.selector} failed")
            return Failed(from_player)
        if self.found + 1 == self.goal:
            logger.info(f"Player {self.selector} revealed {self.goal} flowers")
            return Complete(self.selector)
        return More(replace(self, found=self.found + 1, cards=cards))

    def _draw_card(self, player_id: PlayerID) -> Tuple[Card, Dict[PlayerID, Tuple[Card, ...]]]:
        if player_id not in self.cards:
            raise SelectionError(PLAYER_NOT_FOUND, f"Player {player_id} has no stack")
        stack = self.cards[player_id]
        if not stack:
            raise SelectionError(NO_CARDS_LEFT, f"Player {player_id} doesn't have any cards left")
        cards = dict(self.cards)
        # Exhausted stacks stay as empty entries
        cards[player_id] = stack[:-1]
        return stack[-1], cards


@dataclass(frozen=True)
class Complete:
    player_id: PlayerID


@dataclass(frozen=True)
class More:
    selection: Selection


@dataclass(frozen=True)
class Failed:
    player_id: PlayerID


SelectionResult = Union[Complete, More, Failed]
