"""
State serialization and sanitization utilities.
"""

from functools import lru_cache
from typing import Any, Dict, Optional, Type, TypeVar

import orjson
from pydantic import TypeAdapter, ValidationError

from .constants import SCHEMA_VERSION
from .errors import INVALID_SNAPSHOT, GameError
from .models import PlayerID
from .phases import PHASES, GameState, phase_of

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(cls: type) -> TypeAdapter:
    return TypeAdapter(cls)


def to_dict(value: Any) -> Dict[str, Any]:
    """Encode any model or phase state as a JSON-compatible dict."""
    return _adapter(type(value)).dump_python(value, mode="json")


def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """
    Decode a dict produced by ``to_dict`` back into ``cls``.

    Raises:
        GameError: INVALID_SNAPSHOT if the data is malformed or describes a
            value that breaks the model's invariants
    """
    try:
        return _adapter(cls).validate_python(data)
    except ValidationError as e:
        raise GameError(INVALID_SNAPSHOT, f"Invalid {cls.__name__} data: {e}") from e
    except GameError as e:
        raise GameError(INVALID_SNAPSHOT, f"Invalid {cls.__name__} data: {e.message}") from e


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """
    Serialize a phase state with its phase name.

    Args:
        state: Any phase state

    Returns:
        Dict with schema_version, phase and state
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "phase": phase_of(state),
        "state": to_dict(state),
    }


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """Deserialize a phase state from a dict produced by ``state_to_dict``."""
    version = data.get("schema_version")
    if version != SCHEMA_VERSION:
        raise GameError(INVALID_SNAPSHOT, f"Unsupported schema version: {version}")
    cls = PHASES.get(data.get("phase"))
    if cls is None:
        raise GameError(INVALID_SNAPSHOT, f"Unknown phase: {data.get('phase')}")
    return from_dict(cls, data.get("state", {}))


def state_to_json(state: GameState) -> bytes:
    return orjson.dumps(state_to_dict(state))


def state_from_json(raw) -> GameState:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise GameError(INVALID_SNAPSHOT, f"Malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise GameError(INVALID_SNAPSHOT, "Snapshot must be a JSON object")
    return state_from_dict(data)


def sanitize_state(state: GameState, viewer_id: Optional[PlayerID] = None) -> Dict[str, Any]:
    """
    Sanitize a phase state for transmission to one player.

    Args:
        state: Phase state to sanitize
        viewer_id: ID of the player viewing the state (to show their hand)

    Returns:
        Snapshot dict where stacks are reduced to their sizes and only the
        viewer's own hand shows whether it still holds the skull
    """
    sanitized = state_to_dict(state)
    inner = sanitized["state"]

    if "hands" in inner:
        hands = {}
        for player_id, hand in inner["hands"].items():
            if viewer_id is not None and player_id == str(viewer_id):
                hands[player_id] = hand
            else:
                hands[player_id] = {"num_cards": hand["num_cards"]}
        inner["hands"] = hands

    if "cards" in inner:
        inner["stack_sizes"] = {
            player_id: len(stack) for player_id, stack in inner.pop("cards").items()
        }

    return sanitized
