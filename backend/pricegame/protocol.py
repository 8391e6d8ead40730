"""Wire codec for the `/ws` namespace.

Every frame is one JSON object. Inbound:

    {"type": "join", "name": "Alice"}
    {"type": "start"}
    {"type": "guess", "guess": 449.5}

Outbound: `welcome`, `players` and `update` (see the encode_* helpers).
"""

import json
import math
from typing import Iterable, NamedTuple, Optional, Union

from pricegame.models import GameState, Player


class MessageError(ValueError):
    """Inbound frame that cannot be turned into a command."""


class JoinCommand(NamedTuple):
    name: str


class StartCommand(NamedTuple):
    pass


class GuessCommand(NamedTuple):
    guess: float


Command = Union[JoinCommand, StartCommand, GuessCommand]


def _parse_join(data: dict) -> JoinCommand:
    name = data.get('name')
    if not isinstance(name, str):
        raise MessageError('join requires a string name')
    return JoinCommand(name=name)


def _parse_start(data: dict) -> StartCommand:
    return StartCommand()


def _parse_guess(data: dict) -> GuessCommand:
    guess = data.get('guess')
    # bool is an int subclass; reject it explicitly
    if isinstance(guess, bool) or not isinstance(guess, (int, float)):
        raise MessageError('guess requires a number')
    guess = float(guess)
    if not math.isfinite(guess):
        raise MessageError('guess must be finite')
    return GuessCommand(guess=guess)


_PARSERS = {
    'join': _parse_join,
    'start': _parse_start,
    'guess': _parse_guess,
}


def parse_command(frame: Union[str, bytes, dict]) -> Optional[Command]:
    """Decode one inbound frame.

    Returns None for an unknown `type`; raises MessageError for anything malformed.
    """
    if isinstance(frame, dict):
        data = frame
    else:
        try:
            data = json.loads(frame)
        except (TypeError, ValueError) as exc:
            raise MessageError(f'invalid JSON: {exc}') from exc
    if not isinstance(data, dict):
        raise MessageError('frame must be a JSON object')
    msg_type = data.get('type')
    if not isinstance(msg_type, str):
        raise MessageError('frame requires a string type')
    parser = _PARSERS.get(msg_type)
    if parser is None:
        return None
    return parser(data)


def encode_welcome(player_id: str) -> str:
    return json.dumps({'type': 'welcome', 'playerId': player_id})


def encode_players(players: Iterable[Player]) -> str:
    return json.dumps({'type': 'players', 'players': [p.to_dict() for p in players]})


def encode_update(state: GameState) -> str:
    return json.dumps({'type': 'update', 'gameState': state.to_dict()})
