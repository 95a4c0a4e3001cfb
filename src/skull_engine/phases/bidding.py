"""
Bidding phase: players raise or pass until one bidder is left.

A pass is final. The phase resolves once exactly one player holds an amount
and every other playing member has passed.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Tuple, Union

from ..constants import MIN_PLAYERS
from ..errors import (
    ALREADY_PASSED,
    BID_TOO_HIGH,
    BID_TOO_LOW,
    BIDDING_INCOMPLETE,
    INSUFFICIENT_PLAYERS,
    PLAYER_NOT_FOUND,
    BiddingError,
    SelectionError,
)
from ..models import Bid, Card, Hand, PlayerID, copy_stacks
from ..roster import Roster
from .selection import Selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=True)
class Bidding:
    __hash__ = None

    roster: Roster
    hands: Dict[PlayerID, Hand]
    cards: Dict[PlayerID, Tuple[Card, ...]]
    # Players without an entry have not bid yet
    bids: Dict[PlayerID, Bid]
    current_player: PlayerID

    def __post_init__(self):
        object.__setattr__(self, "hands", dict(self.hands))
        object.__setattr__(self, "cards", copy_stacks(self.cards))
        object.__setattr__(self, "bids", dict(self.bids))
        if self.current_player not in self.roster.player_ids:
            raise BiddingError(PLAYER_NOT_FOUND, f"Player {self.current_player} is not playing")
        if not set(self.bids) <= set(self.roster.player_ids):
            raise BiddingError(PLAYER_NOT_FOUND, "Bids recorded for players who are not playing")

    @classmethod
    def start(
        cls,
        roster: Roster,
        hands: Dict[PlayerID, Hand],
        cards: Dict[PlayerID, Tuple[Card, ...]],
        first_bid: Tuple[PlayerID, int],
    ) -> 'Bidding':
        """
        Open the bidding with a single amount.

        Args:
            roster: Players taking part in the round
            hands: Remaining hands
            cards: Stacks committed during placement
            first_bid: The opening bidder and their amount

        Returns:
            Bidding state with the turn passed to the opener's successor

        Raises:
            BiddingError: BID_TOO_HIGH, BID_TOO_LOW, PLAYER_NOT_FOUND or
                INSUFFICIENT_PLAYERS
        """
        player_id, amount = first_bid
        total = sum(len(stack) for stack in cards.values())
        if amount > total:
            raise BiddingError(BID_TOO_HIGH, f"Bid {amount} exceeds the {total} cards on the table")
        if amount < 1:
            raise BiddingError(BID_TOO_LOW, "Bid must be at least 1")
        if player_id not in roster.player_ids:
            raise BiddingError(PLAYER_NOT_FOUND, f"Player {player_id} is not playing")
        if roster.num_players < MIN_PLAYERS:
            raise BiddingError(INSUFFICIENT_PLAYERS, "Insufficient number of players")

        logger.debug(f"Player {player_id} opened the bidding at {amount}")
        return cls(
            roster=roster,
            hands=hands,
            cards=cards,
            bids={player_id: Bid.of(amount)},
            current_player=roster.next_player(player_id),
        )

    @property
    def total_cards(self) -> int:
        return sum(len(stack) for stack in self.cards.values())

    @property
    def highest_bid(self) -> int:
        """The largest amount on record, or 0 if there is none."""
        return max((b.amount for b in self.bids.values() if not b.is_pass), default=0)

    def make_bid(self, player_id: PlayerID, bid: Bid) -> 'BiddingResult':
        """
        Record a bid or a pass and hand the turn on.

        The turn goes to the first player after ``player_id`` who has not
        passed. If that leaves a single bidder, selection begins.

        Returns:
            KeepBidding with the new state, or StartSelection

        Raises:
            BiddingError: PLAYER_NOT_FOUND, ALREADY_PASSED, BID_TOO_LOW or
                BID_TOO_HIGH
        """
        if player_id not in self.roster.player_ids:
            raise BiddingError(PLAYER_NOT_FOUND, f"Player {player_id} is not playing")

        existing = self.bids.get(player_id)
        if existing is not None and existing.is_pass:
            raise BiddingError(ALREADY_PASSED, "Player has already passed")

        if not bid.is_pass:
            if bid.amount <= self.highest_bid:
                raise BiddingError(BID_TOO_LOW, f"Bid must be higher than {self.highest_bid}")
            if bid.amount > self.total_cards:
                raise BiddingError(BID_TOO_HIGH, f"Bid {bid.amount} exceeds the {self.total_cards} cards on the table")

        bids = dict(self.bids)
        bids[player_id] = bid
        new_bidding = replace(self, bids=bids, current_player=self._next_bidder(player_id, bids))
        logger.debug(f"Player {player_id} bid {bid}, {new_bidding.current_player} is next")

        try:
            selection = new_bidding.finish_bidding()
        except BiddingError as e:
            if e.code != BIDDING_INCOMPLETE:
                raise
            return KeepBidding(new_bidding)
        return StartSelection(selection)

    def _next_bidder(self, player_id: PlayerID, bids: Dict[PlayerID, Bid]) -> PlayerID:
        player_ids = self.roster.player_ids
        offset = player_ids.index(player_id)
        for i in range(1, len(player_ids) + 1):
            candidate = player_ids[(offset + i) % len(player_ids)]
            bid = bids.get(candidate)
            if bid is None or not bid.is_pass:
                return candidate
        # Everybody has passed
        return player_id

    def _winning_bid(self) -> Tuple[PlayerID, int]:
        """The sole remaining bidder and their amount, once all others passed."""
        remaining = []
        for player_id in self.roster.player_ids:
            bid = self.bids.get(player_id)
            if bid is None:
                raise BiddingError(BIDDING_INCOMPLETE, f"Player {player_id} has not bid yet")
            if not bid.is_pass:
                remaining.append((player_id, bid.amount))
        if len(remaining) != 1:
            raise BiddingError(BIDDING_INCOMPLETE, "All other players must pass")
        return remaining[0]

    def finish_bidding(self) -> Selection:
        """
        Hand over to selection if every other player has passed.

        Raises:
            BiddingError: BIDDING_INCOMPLETE while more than one player is
                still in, or someone has yet to bid
        """
        selector, goal = self._winning_bid()
        try:
            selection = Selection.start(selector, goal, self.roster, self.cards, self.hands)
        except SelectionError as e:
            raise BiddingError(BID_TOO_HIGH, e.message) from e
        logger.info(f"Player {selector} won the bidding with {goal}")
        return selection


@dataclass(frozen=True)
class KeepBidding:
    bidding: Bidding


@dataclass(frozen=True)
class StartSelection:
    selection: Selection


BiddingResult = Union[KeepBidding, StartSelection]
