"""
Tests for the setup phase and rule configuration.
"""

import pytest
from pydantic import ValidationError
from skull_engine.errors import INSUFFICIENT_PLAYERS, TOO_MANY_PLAYERS, RosterError
from skull_engine.models import Hand
from skull_engine.phases import Placement, Setup
from skull_engine.rules import create_rules, default_rules


def test_setup_accumulates_players():
    """Setup collects, reorders and moves players."""
    setup = Setup()
    setup, alice = setup.add_player("Alice")
    setup, bob = setup.add_player("Bob")
    setup, charlie = setup.add_player("Charlie")

    setup = setup.reorder_players([charlie, alice, bob])
    setup = setup.to_observer(alice)
    assert setup.roster.player_ids == (charlie, bob)

    setup = setup.to_player(alice).remove_player(bob)
    assert setup.roster.player_ids == (charlie, alice)


def test_start_deals_full_hands():
    """Starting deals every player a full hand."""
    setup = Setup()
    setup, alice = setup.add_player("Alice")
    setup, bob = setup.add_player("Bob")

    placement = setup.start()
    assert isinstance(placement, Placement)
    assert placement.current_player == alice
    assert placement.hands == {alice: Hand.full(), bob: Hand.full()}
    assert placement.cards == {}
    assert placement.roster == setup.roster


def test_start_needs_enough_players():
    """Starting checks the player count against the rules."""
    setup, _ = Setup().add_player("Alice")
    with pytest.raises(RosterError) as exc:
        setup.start()
    assert exc.value.code == INSUFFICIENT_PLAYERS

    setup, _ = setup.add_player("Bob")
    with pytest.raises(RosterError) as exc:
        setup.start(create_rules(min_players=3))
    assert exc.value.code == INSUFFICIENT_PLAYERS

    setup, _ = setup.add_player("Charlie")
    with pytest.raises(RosterError) as exc:
        setup.start(create_rules(max_players=2))
    assert exc.value.code == TOO_MANY_PLAYERS
    assert "At most 2" in exc.value.message


def test_rule_config():
    """Rule configuration validates its bounds."""
    assert default_rules.max_name_length == 128
    assert default_rules.min_players == 2
    assert default_rules.validate_player_count(7)
    assert not default_rules.validate_player_count(1)

    rules = create_rules(min_players=3, max_players=6)
    assert rules.validate_player_count(6)
    assert not rules.validate_player_count(7)

    with pytest.raises(ValidationError):
        create_rules(min_players=4, max_players=3)

    with pytest.raises(ValidationError):
        create_rules(min_players=1)
