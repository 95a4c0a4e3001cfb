"""Game models and data structures"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, NewType, Optional, Tuple

from .constants import HAND_SIZE, MAX_FLOWERS, MAX_SKULLS
from .errors import (
    BID_TOO_LOW,
    CARD_NOT_IN_HAND,
    EMPTY_HAND,
    TOO_MANY_CARDS,
    BiddingError,
    HandError,
)

PlayerID = NewType("PlayerID", int)


class Score(str, Enum):
    """Score tiers. Only one player may hold WON_GAME at a time."""
    ZERO = "zero"
    WON_ONE = "won_one"
    WON_GAME = "won_game"


class Card(str, Enum):
    """A face-down card. Cards of the same kind are interchangeable."""
    FLOWER = "flower"
    SKULL = "skull"

    @classmethod
    def parse(cls, value) -> 'Card':
        """Coerce ``value`` to a card kind, rejecting anything else."""
        try:
            return cls(value)
        except ValueError:
            raise HandError(CARD_NOT_IN_HAND, f"Not a card: {value!r}") from None


@dataclass(frozen=True)
class Player:
    player_id: PlayerID
    name: str
    score: Score = Score.ZERO


@dataclass(frozen=True)
class Hand:
    """
    The cards a player has not placed yet, tracked as counts only.

    A hand holds at most one skull and at most four cards. An empty hand is
    never represented; a player without cards has no hand entry at all.
    """
    num_cards: int
    has_skull: bool

    def __post_init__(self):
        if self.num_cards < 1:
            raise HandError(EMPTY_HAND, "A hand must hold at least one card")
        if self.num_cards > HAND_SIZE or self.num_flowers > MAX_FLOWERS:
            raise HandError(TOO_MANY_CARDS, "Too many cards in the hand")

    @classmethod
    def full(cls) -> 'Hand':
        """The hand every player starts a round with."""
        return cls(num_cards=HAND_SIZE, has_skull=True)

    @classmethod
    def from_single_card(cls, card: Card) -> 'Hand':
        return cls(num_cards=1, has_skull=card == Card.SKULL)

    @property
    def num_skulls(self) -> int:
        return 1 if self.has_skull else 0

    @property
    def num_flowers(self) -> int:
        return self.num_cards - self.num_skulls

    def cards(self) -> Iterator[Card]:
        for _ in range(self.num_skulls):
            yield Card.SKULL
        for _ in range(self.num_flowers):
            yield Card.FLOWER

    def has_card(self, card: Card) -> bool:
        card = Card.parse(card)
        if card == Card.SKULL:
            return self.has_skull
        return self.num_flowers > 0

    def remove_card(self, card: Card) -> Optional['Hand']:
        """
        Take one card of the given kind out of the hand.

        Returns:
            The remaining hand, or None if that was the last card.

        Raises:
            HandError: CARD_NOT_IN_HAND if the hand holds no such card.
        """
        card = Card.parse(card)
        if not self.has_card(card):
            raise HandError(CARD_NOT_IN_HAND, f"No {card.value} in the hand")
        if self.num_cards == 1:
            return None
        return Hand(
            num_cards=self.num_cards - 1,
            has_skull=self.has_skull and card != Card.SKULL,
        )

    def add_card(self, card: Card) -> 'Hand':
        card = Card.parse(card)
        if self.num_cards >= HAND_SIZE:
            raise HandError(TOO_MANY_CARDS, "Too many cards in the hand")
        if card == Card.SKULL:
            if self.num_skulls >= MAX_SKULLS:
                raise HandError(TOO_MANY_CARDS, "A hand holds at most one skull")
            return Hand(num_cards=self.num_cards + 1, has_skull=True)
        if self.num_flowers >= MAX_FLOWERS:
            raise HandError(TOO_MANY_CARDS, "Too many flowers in the hand")
        return Hand(num_cards=self.num_cards + 1, has_skull=self.has_skull)


@dataclass(frozen=True)
class Bid:
    """Either a pass (no amount) or a positive number of cards to reveal."""
    amount: Optional[int] = None

    def __post_init__(self):
        if self.amount is not None and self.amount < 1:
            raise BiddingError(BID_TOO_LOW, "Bid must be at least 1")

    @classmethod
    def of(cls, amount: int) -> 'Bid':
        return cls(amount=amount)

    @property
    def is_pass(self) -> bool:
        return self.amount is None

    def __str__(self) -> str:
        return "pass" if self.is_pass else str(self.amount)


PASS = Bid()


def copy_stacks(cards) -> Dict[PlayerID, Tuple[Card, ...]]:
    """A private copy of per-player stacks, each stack as a tuple."""
    return {player_id: tuple(stack) for player_id, stack in cards.items()}
