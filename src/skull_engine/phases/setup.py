"""
Setup phase: gather players before the first round.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Sequence, Tuple

from ..errors import INSUFFICIENT_PLAYERS, TOO_MANY_PLAYERS, RosterError
from ..models import PlayerID
from ..roster import Roster
from ..rules import RuleConfig, default_rules
from .placement import Placement

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=True)
class Setup:
    __hash__ = None

    roster: Roster = field(default_factory=Roster)

    def add_player(self, name: str, rules: RuleConfig = default_rules) -> Tuple['Setup', PlayerID]:
        roster, player_id = self.roster.add_player(name, rules)
        return replace(self, roster=roster), player_id

    def remove_player(self, player_id: PlayerID) -> 'Setup':
        return replace(self, roster=self.roster.remove_player(player_id))

    def reorder_players(self, player_ids: Sequence[PlayerID]) -> 'Setup':
        return replace(self, roster=self.roster.reorder_players(player_ids))

    def to_observer(self, player_id: PlayerID) -> 'Setup':
        return replace(self, roster=self.roster.to_observer(player_id))

    def to_player(self, player_id: PlayerID) -> 'Setup':
        return replace(self, roster=self.roster.to_player(player_id))

    def start(self, rules: RuleConfig = default_rules) -> Placement:
        """
        Deal full hands and open the first placement round.

        Raises:
            RosterError: INSUFFICIENT_PLAYERS below ``rules.min_players``,
                TOO_MANY_PLAYERS above ``rules.max_players``
        """
        num_players = self.roster.num_players
        if num_players < rules.min_players:
            raise RosterError(
                INSUFFICIENT_PLAYERS,
                f"Need at least {rules.min_players} players, have {num_players}"
            )
        if not rules.validate_player_count(num_players):
            raise RosterError(
                TOO_MANY_PLAYERS,
                f"At most {rules.max_players} players may play, have {num_players}"
            )
        logger.info(f"Starting game with {self.roster.num_players} players")
        return Placement.new(self.roster)
