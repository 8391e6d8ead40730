"""Session registry: Socket.IO session ids <-> joined players.

Not locked on its own; `PriceGame` holds its lock around every call so the
two maps always change together.
"""

from typing import Dict, List, Optional

from pricegame.models import Player


class SessionRegistry:
    def __init__(self):
        # sid -> player id (None until the connection sends `join`)
        self.connections: Dict[str, Optional[str]] = {}
        # player id -> Player
        self.players: Dict[str, Player] = {}

    def __len__(self) -> int:
        return len(self.connections)

    def attach(self, sid: str) -> None:
        self.connections.setdefault(sid, None)

    def bind(self, sid: str, name: str) -> Player:
        """Create a fresh player for `sid`. The caller drops any previous binding first."""
        player = Player(name=name, connection=sid)
        self.players[player.id] = player
        self.connections[sid] = player.id
        return player

    def detach(self, sid: str) -> Optional[Player]:
        """Forget the connection. Returns the player that was bound to it, if any."""
        player_id = self.connections.pop(sid, None)
        if player_id is None:
            return None
        return self.players.pop(player_id, None)

    def unbind(self, sid: str) -> Optional[Player]:
        """Drop the player bound to `sid` but keep the connection attached."""
        player_id = self.connections.get(sid)
        if player_id is None:
            return None
        self.connections[sid] = None
        return self.players.pop(player_id, None)

    def lookup(self, sid: str) -> Optional[Player]:
        player_id = self.connections.get(sid)
        if player_id is None:
            return None
        return self.players.get(player_id)

    def sids(self) -> List[str]:
        return list(self.connections)

    def snapshot(self) -> List[Player]:
        return list(self.players.values())
