"""
Placement phase: players take turns laying a card face down on their stack.

A round stays in placement until somebody opens the bidding.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from ..errors import (
    CARD_NOT_IN_HAND,
    OUT_OF_CARDS,
    PLAYER_NOT_FOUND,
    HandError,
    PlacementError,
    RosterError,
)
from ..models import Card, Hand, PlayerID, copy_stacks
from ..roster import Roster
from .bidding import Bidding

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=True)
class Placement:
    """
    Placement state. Compares by value. The mappings are private copies,
    so instances are not hashable and should be treated as read-only.
    """
    __hash__ = None

    roster: Roster
    hands: Dict[PlayerID, Hand]
    cards: Dict[PlayerID, Tuple[Card, ...]]
    current_player: PlayerID

    def __post_init__(self):
        object.__setattr__(self, "hands", dict(self.hands))
        object.__setattr__(self, "cards", copy_stacks(self.cards))
        if self.current_player not in self.roster.player_ids:
            raise PlacementError(PLAYER_NOT_FOUND, f"Player {self.current_player} is not playing")

    @classmethod
    def new(
        cls,
        roster: Roster,
        hands: Optional[Dict[PlayerID, Hand]] = None,
        first_player: Optional[PlayerID] = None,
    ) -> 'Placement':
        """
        Open a placement round with no cards on the table.

        Args:
            roster: Players taking part in the round
            hands: Remaining hands; defaults to a full hand per playing member
            first_player: Who places first; defaults to the head of turn order

        Returns:
            The opening placement state
        """
        if hands is None:
            hands = {player_id: Hand.full() for player_id in roster.player_ids}
        if first_player is None:
            if not roster.player_ids:
                raise PlacementError(PLAYER_NOT_FOUND, "Nobody is playing")
            first_player = roster.player_ids[0]
        elif first_player not in roster.player_ids:
            raise PlacementError(PLAYER_NOT_FOUND, f"Player {first_player} is not playing")
        return cls(roster=roster, hands=dict(hands), cards={}, current_player=first_player)

    @property
    def total_cards(self) -> int:
        return sum(len(stack) for stack in self.cards.values())

    def stack(self, player_id: PlayerID) -> Tuple[Card, ...]:
        return self.cards.get(player_id, ())

    def place_card(self, player_id: PlayerID, card: Card) -> 'Placement':
        """
        Move one card from a player's hand onto their stack.

        Raises:
            PlacementError: PLAYER_NOT_FOUND, OUT_OF_CARDS or CARD_NOT_IN_HAND
        """
        try:
            card = Card.parse(card)
        except HandError as e:
            raise PlacementError(CARD_NOT_IN_HAND, e.message) from e

        try:
            next_player = self.roster.next_player(player_id)
        except RosterError as e:
            raise PlacementError(PLAYER_NOT_FOUND, e.message) from e

        hand = self.hands.get(player_id)
        if hand is None:
            raise PlacementError(OUT_OF_CARDS, "No cards remaining to place")
        try:
            remaining = hand.remove_card(card)
        except HandError as e:
            raise PlacementError(CARD_NOT_IN_HAND, f"Couldn't play card: {e.message}") from e

        hands = dict(self.hands)
        if remaining is None:
            del hands[player_id]
        else:
            hands[player_id] = remaining

        cards = dict(self.cards)
        cards[player_id] = cards.get(player_id, ()) + (card,)

        logger.debug(f"Player {player_id} placed a card, {next_player} is next")
        return replace(self, hands=hands, cards=cards, current_player=next_player)

    def bid(self, player_id: PlayerID, amount: int) -> Bidding:
        """Open the bidding with ``player_id`` offering ``amount`` cards."""
        return Bidding.start(self.roster, self.hands, self.cards, (player_id, amount))
