from typing import List, Optional
import uuid

WAITING = 'waiting'
SHOWING = 'showing'
GUESSING = 'guessing'
RESULTS = 'results'


class Item:
    def __init__(self, id: str, name: str, description: str, price: float, image: str):
        self.id = id
        self.name = name
        self.description = description
        self.price = float(price)
        if self.price <= 0:
            raise ValueError(f'Item {id} needs a positive price, got {price}')
        self.image = image

    def to_dict(self):
        return {
            'id': self.id,
            'desc': self.description,
            'img': self.image,
            'price': self.price,
        }

    def __repr__(self):
        return f'<Item {self.id} {self.name!r} {self.price}>'


class Player:
    """A joined connection.

    `connection` is the Socket.IO session id the player was bound to; the
    registry's sid -> player id map is what disconnect handling trusts.
    """

    def __init__(self, name: str, connection: str, id: Optional[str] = None):
        self.id = id or str(uuid.uuid4())
        self.name = name
        self.connection = connection
        self.score = 0
        self.current_guess = 0.0
        self.last_diff: Optional[float] = None

    def reset_round(self) -> None:
        self.current_guess = 0.0
        self.last_diff = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
        }

    def to_state_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'currentGuess': self.current_guess,
            'lastDiff': self.last_diff if self.last_diff is not None else 0,
        }

    def __repr__(self):
        return f'<Player {self.id} {self.name!r} score={self.score}>'


class GameState:
    """The process-wide game snapshot.

    `players` is the roster captured at start; it holds the same Player
    objects as the registry so score updates show up in both.
    """

    def __init__(self):
        self.is_running = False
        self.phase = WAITING
        self.time_remaining = 0
        self.current_item: Optional[Item] = None
        self.players: List[Player] = []

    def in_roster(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.players)

    def drop_player(self, player_id: str) -> bool:
        before = len(self.players)
        self.players = [p for p in self.players if p.id != player_id]
        return len(self.players) != before

    def to_dict(self):
        data = {
            'phase': self.phase,
            'timeRemaining': self.time_remaining,
            'isRunning': self.is_running,
        }
        if self.current_item is not None:
            data['currentItem'] = self.current_item.to_dict()
        data['players'] = [p.to_state_dict() for p in self.players]
        return data
