import logging
from typing import Callable, Iterable


log = logging.getLogger(__name__)


class BroadcastHub:
    """Fan-out of text frames to Socket.IO sessions.

    `send` is `socketio.send`; it hands the packet to the session's
    Engine.IO queue, so a slow peer never blocks the caller. A session that
    fails (closed mid-broadcast) is logged and skipped.
    """

    def __init__(self, send: Callable, namespace: str = '/ws', logger=None):
        self._send = send
        self.namespace = namespace
        self.logger = logger or log

    def unicast(self, sid: str, text: str) -> bool:
        try:
            self._send(text, to=sid, namespace=self.namespace)
        except Exception as exc:
            self.logger.warning(f"[send-fail] sid={sid} error={exc!r}")
            return False
        return True

    def broadcast(self, sids: Iterable[str], text: str) -> int:
        delivered = 0
        for sid in sids:
            if self.unicast(sid, text):
                delivered += 1
        return delivered
