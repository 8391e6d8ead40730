import logging
import threading
from typing import Optional

from pricegame.broadcast import BroadcastHub
from pricegame.models import GameState, Player, WAITING, SHOWING, GUESSING, RESULTS
from pricegame.protocol import (
    GuessCommand, JoinCommand, MessageError, StartCommand,
    encode_players, encode_update, encode_welcome, parse_command,
)
from pricegame.sessions import SessionRegistry
from .catalog import ItemCatalog
from .scheduler import Ticker
from .scoring import apply_guess


log = logging.getLogger(__name__)

DEFAULT_DURATIONS = {SHOWING: 5, GUESSING: 30, RESULTS: 10}


class PriceGame:
    """Authoritative round state machine for the single process-wide game.

    waiting -> showing -> guessing -> results -> showing ... -> waiting

    Every public method takes `self.lock`, so joins, leaves, guesses and ticks
    are applied one at a time and each broadcast reflects a whole mutation.
    Broadcasts are issued while the lock is held, which keeps the order every
    client sees equal to the order the mutations happened.
    """

    def __init__(self, catalog: ItemCatalog, registry: SessionRegistry, hub: BroadcastHub,
                 ticker: Ticker, durations: Optional[dict] = None,
                 roster_only_guesses: bool = True, logger=None):
        self.catalog = catalog
        self.registry = registry
        self.hub = hub
        self.ticker = ticker
        self.durations = dict(DEFAULT_DURATIONS, **(durations or {}))
        self.roster_only_guesses = roster_only_guesses
        self.logger = logger or log
        self.state = GameState()
        self.lock = threading.RLock()

    # ---- connection lifecycle ----

    def connect(self, sid: str) -> None:
        with self.lock:
            self.registry.attach(sid)
        self.logger.info(f"[connect] sid={sid}")

    def disconnect(self, sid: str) -> Optional[Player]:
        with self.lock:
            player = self.registry.detach(sid)
            if player is None:
                self.logger.info(f"[disconnect] sid={sid} unbound")
                return None
            self.state.drop_player(player.id)
            self.logger.info(f"[disconnect] sid={sid} player={player.id} name={player.name!r}")
            self._broadcast_players()
            return player

    def handle_message(self, sid: str, frame) -> None:
        """Decode one inbound frame and dispatch it. Malformed frames are logged and dropped."""
        try:
            command = parse_command(frame)
        except MessageError as exc:
            self.logger.warning(f"[message-drop] sid={sid} error={exc}")
            return
        if command is None:
            self.logger.debug(f"[message-drop] sid={sid} unknown type")
            return
        if isinstance(command, JoinCommand):
            self.join(sid, command.name)
        elif isinstance(command, StartCommand):
            self.start()
        elif isinstance(command, GuessCommand):
            self.guess(sid, command.guess)

    # ---- commands ----

    def join(self, sid: str, name: str) -> Player:
        with self.lock:
            self.registry.attach(sid)
            previous = self.registry.unbind(sid)
            if previous is not None:
                self.state.drop_player(previous.id)
            player = self.registry.bind(sid, name)
            self.logger.info(f"[join] sid={sid} player={player.id} name={name!r}")
            self.hub.unicast(sid, encode_welcome(player.id))
            self._broadcast_players()
            return player

    def start(self) -> bool:
        with self.lock:
            if self.state.is_running:
                self.logger.info(f"[start-skip] phase={self.state.phase} already running")
                return False
            state = GameState()
            state.is_running = True
            state.players = self.registry.snapshot()
            for player in state.players:
                player.score = 0
            self.state = state
            self.logger.info(f"[start] roster={[p.id for p in state.players]} deck={len(self.catalog)}")
            self._enter_showing()
            return True

    def guess(self, sid: str, value: float) -> Optional[int]:
        """Apply a guess. Returns the points scored, or None when the guess was dropped."""
        with self.lock:
            player = self.registry.lookup(sid)
            if player is None:
                self.logger.debug(f"[guess-drop] sid={sid} unbound")
                return None
            if self.state.phase != GUESSING or self.state.current_item is None:
                self.logger.debug(f"[guess-drop] player={player.id} phase={self.state.phase}")
                return None
            if self.roster_only_guesses and not self.state.in_roster(player.id):
                self.logger.debug(f"[guess-drop] player={player.id} not in roster")
                return None
            points = apply_guess(player, self.state.current_item, value)
            self.logger.info(
                f"[guess] player={player.id} guess={value} diff={player.last_diff} points={points} score={player.score}"
            )
            self._broadcast_players()
            return points

    # ---- clock ----

    def tick(self, generation: Optional[int] = None) -> None:
        """One countdown step. `generation` None means the current countdown."""
        with self.lock:
            if generation is None:
                generation = self.ticker.generation
            if not self.ticker.is_current(generation):
                self.logger.debug(f"[tick-stale] generation={generation} current={self.ticker.generation}")
                return
            if not self.state.is_running or self.state.phase == WAITING:
                self.logger.debug(f"[tick-stale] phase={self.state.phase}")
                return
            self.state.time_remaining = max(0, self.state.time_remaining - 1)
            self._broadcast_update()
            if self.state.time_remaining == 0:
                self._advance()

    def shutdown(self) -> None:
        with self.lock:
            self.ticker.cancel()
        self.logger.info('[shutdown] countdown cancelled')

    # ---- views ----

    def snapshot(self) -> dict:
        with self.lock:
            return self.state.to_dict()

    def players_snapshot(self) -> list:
        with self.lock:
            return [p.to_dict() for p in self.registry.snapshot()]

    # ---- transitions (lock held) ----

    def _advance(self) -> None:
        phase = self.state.phase
        if phase == SHOWING:
            self._enter_guessing()
        elif phase == GUESSING:
            self._enter_results()
        elif phase == RESULTS:
            self._enter_showing()

    def _enter_showing(self) -> None:
        self.ticker.cancel()
        if not len(self.catalog):
            self._end_game()
            return
        item = self.catalog.draw()
        for player in self.registry.snapshot():
            player.reset_round()
        self.state.current_item = item
        self._enter_phase(SHOWING, extra=f"item={item.id} deck={len(self.catalog)}")

    def _enter_guessing(self) -> None:
        self._enter_phase(GUESSING)

    def _enter_results(self) -> None:
        # Scores were applied per guess; nothing to tally here
        self._enter_phase(RESULTS)

    def _enter_phase(self, phase: str, extra: str = '') -> None:
        self.ticker.cancel()
        self.state.phase = phase
        self.state.time_remaining = int(self.durations[phase])
        self.logger.info(f"[phase] {phase} duration={self.state.time_remaining}s {extra}".rstrip())
        self._broadcast_update()
        self.ticker.start(self.tick)

    def _end_game(self) -> None:
        self.ticker.cancel()
        self.state.is_running = False
        self.state.phase = WAITING
        self.state.current_item = None
        self.state.time_remaining = 0
        self.catalog.reset()
        self.logger.info(f"[game-end] scores={[(p.name, p.score) for p in self.state.players]}")
        self._broadcast_update()

    def _broadcast_players(self) -> None:
        self.hub.broadcast(self.registry.sids(), encode_players(self.registry.snapshot()))

    def _broadcast_update(self) -> None:
        self.hub.broadcast(self.registry.sids(), encode_update(self.state))
