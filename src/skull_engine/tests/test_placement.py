"""
Tests for the placement phase.
"""

import pytest
from skull_engine.errors import (
    BID_TOO_HIGH,
    BID_TOO_LOW,
    CARD_NOT_IN_HAND,
    OUT_OF_CARDS,
    PLAYER_NOT_FOUND,
    BiddingError,
    PlacementError,
)
from skull_engine.models import Bid, Card, Hand
from skull_engine.phases import Bidding, Placement
from skull_engine.roster import roster_from_names


@pytest.fixture
def placement():
    """Three players, full hands, nothing placed yet."""
    return Placement.new(roster_from_names(["Alice", "Bob", "Charlie"]))


def test_new_round_defaults(placement):
    """A new round deals full hands and starts at the head of turn order."""
    a, b, c = placement.roster.player_ids
    assert placement.current_player == a
    assert all(hand == Hand.full() for hand in placement.hands.values())
    assert placement.total_cards == 0


def test_new_round_with_first_player():
    """A round can start with given hands and a chosen first player."""
    roster = roster_from_names(["Alice", "Bob"])
    a, b = roster.player_ids
    placement = Placement.new(roster, hands={a: Hand.from_single_card(Card.SKULL)}, first_player=b)
    assert placement.current_player == b
    assert b not in placement.hands

    with pytest.raises(PlacementError) as exc:
        Placement.new(roster, first_player=99)
    assert exc.value.code == PLAYER_NOT_FOUND


def test_place_card(placement):
    """Placing moves a card from hand to stack and passes the turn."""
    a, b, c = placement.roster.player_ids

    after = placement.place_card(a, Card.SKULL)
    assert after.cards == {a: (Card.SKULL,)}
    assert after.hands[a] == Hand(num_cards=3, has_skull=False)
    assert after.current_player == b

    # The previous state is untouched
    assert placement.cards == {}
    assert placement.hands[a] == Hand.full()


def test_stacks_grow_on_top(placement):
    """Later cards sit on top of a player's stack."""
    a, b, c = placement.roster.player_ids
    state = placement
    for card in (Card.FLOWER, Card.SKULL):
        state = state.place_card(a, card).place_card(b, Card.FLOWER).place_card(c, Card.FLOWER)

    assert state.stack(a) == (Card.FLOWER, Card.SKULL)
    assert state.total_cards == 6
    assert state.current_player == a


def test_last_card_removes_hand():
    """Placing the last card removes the hand entry."""
    roster = roster_from_names(["Alice", "Bob"])
    a, b = roster.player_ids
    placement = Placement.new(roster, hands={a: Hand.from_single_card(Card.FLOWER), b: Hand.full()})

    after = placement.place_card(a, Card.FLOWER)
    assert a not in after.hands

    with pytest.raises(PlacementError) as exc:
        after.place_card(a, Card.FLOWER)
    assert exc.value.code == OUT_OF_CARDS


def test_place_card_errors(placement):
    """Placing fails for unknown players and missing cards."""
    a, b, c = placement.roster.player_ids

    with pytest.raises(PlacementError) as exc:
        placement.place_card(99, Card.FLOWER)
    assert exc.value.code == PLAYER_NOT_FOUND

    no_skull = placement.place_card(a, Card.SKULL)
    with pytest.raises(PlacementError) as exc:
        no_skull.place_card(a, Card.SKULL)
    assert exc.value.code == CARD_NOT_IN_HAND
    assert no_skull.hands[a] == Hand(num_cards=3, has_skull=False)


def test_bid_opens_bidding(placement):
    """A bid during placement opens the bidding phase."""
    a, b, c = placement.roster.player_ids
    state = placement.place_card(a, Card.FLOWER).place_card(b, Card.FLOWER).place_card(c, Card.SKULL)

    bidding = state.bid(a, 3)
    assert isinstance(bidding, Bidding)
    assert bidding.bids == {a: Bid.of(3)}
    assert bidding.current_player == b
    assert bidding.cards == state.cards
    assert bidding.hands == state.hands


def test_bid_bounds(placement):
    """The opening bid must fit the cards on the table."""
    a, b, c = placement.roster.player_ids
    state = placement.place_card(a, Card.FLOWER).place_card(b, Card.FLOWER)

    with pytest.raises(BiddingError) as exc:
        state.bid(c, 3)
    assert exc.value.code == BID_TOO_HIGH

    with pytest.raises(BiddingError) as exc:
        state.bid(c, 0)
    assert exc.value.code == BID_TOO_LOW

    with pytest.raises(BiddingError) as exc:
        state.bid(99, 1)
    assert exc.value.code == PLAYER_NOT_FOUND


def test_place_unknown_card_kind(placement):
    """Only flowers and skulls can be placed."""
    a = placement.current_player
    with pytest.raises(PlacementError) as exc:
        placement.place_card(a, "diamond")
    assert exc.value.code == CARD_NOT_IN_HAND
    assert placement.cards == {}
    assert placement.hands[a] == Hand.full()

    # Plain strings naming a card kind are accepted
    after = placement.place_card(a, "flower")
    assert after.stack(a) == (Card.FLOWER,)


def test_states_compare_by_value(placement):
    """States compare by value, are unhashable and keep their own mappings."""
    hands = dict(placement.hands)
    state = Placement(roster=placement.roster, hands=hands, cards={}, current_player=placement.current_player)
    assert state == placement

    with pytest.raises(TypeError):
        hash(state)
    with pytest.raises(TypeError):
        hash(state.roster)

    hands.clear()
    assert state.hands == placement.hands


def test_current_player_must_be_playing(placement):
    """A placement cannot name a current player outside turn order."""
    with pytest.raises(PlacementError) as exc:
        Placement(roster=placement.roster, hands=placement.hands, cards={}, current_player=99)
    assert exc.value.code == PLAYER_NOT_FOUND
