"""
The ordered set of people taking part in a game.

Turn order lives in ``player_ids`` and is kept separate from the ``players``
lookup so that it survives a snapshot round-trip unchanged.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .constants import FIRST_PLAYER_ID
from .errors import (
    ALREADY_WON,
    MISMATCHED_IDS,
    NAME_TOO_LONG,
    PLAYER_NOT_FOUND,
    RosterError,
)
from .models import Player, PlayerID, Score
from .rules import RuleConfig, default_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=True)
class Roster:
    """
    Compares by value. ``players`` is a private copy, so rosters are not
    hashable and should be treated as read-only.
    """
    __hash__ = None

    player_ids: Tuple[PlayerID, ...] = ()
    players: Dict[PlayerID, Player] = field(default_factory=dict)
    observers: Tuple[Player, ...] = ()
    next_player_id: PlayerID = PlayerID(FIRST_PLAYER_ID)

    def __post_init__(self):
        # Accept lists from callers and decoded snapshots
        object.__setattr__(self, "player_ids", tuple(self.player_ids))
        object.__setattr__(self, "observers", tuple(self.observers))
        object.__setattr__(self, "players", dict(self.players))
        self._check_invariants()

    def _check_invariants(self):
        if len(set(self.player_ids)) != len(self.player_ids):
            raise RosterError(MISMATCHED_IDS, "Turn order lists a player twice")
        if set(self.player_ids) != set(self.players):
            raise RosterError(MISMATCHED_IDS, "Turn order does not match the player records")
        for player_id, player in self.players.items():
            if player.player_id != player_id:
                raise RosterError(MISMATCHED_IDS, f"Player record {player.player_id} filed under {player_id}")
        observer_ids = [o.player_id for o in self.observers]
        if len(set(observer_ids)) != len(observer_ids) or set(observer_ids) & set(self.player_ids):
            raise RosterError(MISMATCHED_IDS, "A member is listed more than once")
        allocated = list(self.player_ids) + observer_ids
        if allocated and max(allocated) >= self.next_player_id:
            raise RosterError(MISMATCHED_IDS, "Next player ID was already allocated")

    def __contains__(self, player_id) -> bool:
        return player_id in self.players or any(o.player_id == player_id for o in self.observers)

    @property
    def num_players(self) -> int:
        return len(self.player_ids)

    def playing(self) -> Iterator[Player]:
        """Playing members, in turn order."""
        for player_id in self.player_ids:
            yield self.players[player_id]

    def members(self) -> Iterator[Player]:
        yield from self.playing()
        yield from self.observers

    def player(self, player_id: PlayerID) -> Player:
        """Look up a playing member. Observers are not found here."""
        try:
            return self.players[player_id]
        except KeyError:
            raise RosterError(PLAYER_NOT_FOUND, f"Player {player_id} is not playing") from None

    def add_player(self, name: str, rules: RuleConfig = default_rules) -> Tuple['Roster', PlayerID]:
        """
        Add a player by name, appending them to the end of turn order.

        Adding a name that is already playing or observing returns the
        existing ID and an equal roster.

        Returns:
            The new roster and the player's ID.
        """
        if len(name) > rules.max_name_length:
            raise RosterError(NAME_TOO_LONG, f"Player name exceeds {rules.max_name_length} characters")

        for member in self.members():
            if member.name == name:
                return self, member.player_id

        player_id = self.next_player_id
        players = dict(self.players)
        players[player_id] = Player(player_id=player_id, name=name)
        logger.debug(f"Added player {name!r} as {player_id}")
        return replace(
            self,
            player_ids=self.player_ids + (player_id,),
            players=players,
            next_player_id=PlayerID(player_id + 1),
        ), player_id

    def remove_player(self, player_id: PlayerID) -> 'Roster':
        """Remove a member from turn order and from the observers."""
        if player_id not in self:
            raise RosterError(PLAYER_NOT_FOUND, f"Player {player_id} does not exist")

        players = dict(self.players)
        players.pop(player_id, None)
        return replace(
            self,
            player_ids=tuple(p for p in self.player_ids if p != player_id),
            players=players,
            observers=tuple(o for o in self.observers if o.player_id != player_id),
        )

    def next_player(self, player_id: PlayerID) -> PlayerID:
        """The player after ``player_id`` in turn order, wrapping to the front."""
        try:
            index = self.player_ids.index(player_id)
        except ValueError:
            raise RosterError(PLAYER_NOT_FOUND, f"Player {player_id} is not playing") from None
        return self.player_ids[(index + 1) % len(self.player_ids)]

    def reorder_players(self, player_ids: Sequence[PlayerID]) -> 'Roster':
        """Replace turn order. ``player_ids`` must be a permutation of it."""
        if sorted(player_ids) != sorted(self.player_ids):
            raise RosterError(MISMATCHED_IDS, "Reordered player IDs don't match existing")
        return replace(self, player_ids=tuple(player_ids))

    def to_observer(self, player_id: PlayerID) -> 'Roster':
        player = self.player(player_id)
        players = dict(self.players)
        del players[player_id]
        return replace(
            self,
            player_ids=tuple(p for p in self.player_ids if p != player_id),
            players=players,
            observers=self.observers + (player,),
        )

    def to_player(self, player_id: PlayerID) -> 'Roster':
        observer = self._observer(player_id)
        players = dict(self.players)
        players[player_id] = observer
        return replace(
            self,
            player_ids=self.player_ids + (player_id,),
            players=players,
            observers=tuple(o for o in self.observers if o.player_id != player_id),
        )

    def _observer(self, player_id: PlayerID) -> Player:
        for observer in self.observers:
            if observer.player_id == player_id:
                return observer
        raise RosterError(PLAYER_NOT_FOUND, f"Player {player_id} is not observing")

    def increment_score(self, player_id: PlayerID) -> Tuple['Roster', Optional[PlayerID]]:
        """
        Move a playing member up one score tier.

        A player on WON_ONE reaches WON_GAME only while nobody else holds it.

        Returns:
            The new roster and, if this call won the game, the winner's ID.
        """
        player = self.player(player_id)
        someone_won = any(m.score == Score.WON_GAME for m in self.members())

        if player.score == Score.ZERO:
            score = Score.WON_ONE
        elif player.score == Score.WON_ONE and not someone_won:
            score = Score.WON_GAME
        else:
            raise RosterError(ALREADY_WON, "Player has already won the game!")

        players = dict(self.players)
        players[player_id] = replace(player, score=score)
        winner = player_id if score == Score.WON_GAME else None
        if winner is not None:
            logger.info(f"Player {player.name!r} ({player_id}) won the game")
        return replace(self, players=players), winner

    def reset_all_scores(self) -> 'Roster':
        """Reset every player's and observer's score to ZERO."""
        players = {pid: replace(p, score=Score.ZERO) for pid, p in self.players.items()}
        observers = tuple(replace(o, score=Score.ZERO) for o in self.observers)
        return replace(self, players=players, observers=observers)


def roster_from_names(names: List[str], rules: RuleConfig = default_rules) -> Roster:
    """Build a roster with ``names`` playing, in that order."""
    roster = Roster()
    for name in names:
        roster, _ = roster.add_player(name, rules)
    return roster
