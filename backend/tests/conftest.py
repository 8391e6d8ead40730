import json
import os
import sys
import pytest

# Ensure the backend root (containing the `pricegame` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pricegame import create_app, socketio, NAMESPACE
from pricegame.broadcast import BroadcastHub
from pricegame.sessions import SessionRegistry
from pricegame.services.games import ItemCatalog, PriceGame, Ticker
import random


class TestConfig:
    TESTING = True
    RANDOM_SEED = 1234
    SHOWING_DURATION_SEC = 5
    GUESSING_DURATION_SEC = 30
    RESULTS_DURATION_SEC = 10
    ROSTER_ONLY_GUESSES = True


@pytest.fixture()
def config_class():
    return TestConfig


@pytest.fixture()
def flask_app(config_class):
    application = create_app(config_class)
    yield application
    application.extensions['price_game'].shutdown()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def game(flask_app):
    return flask_app.extensions['price_game']


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients on /ws; all are disconnected at teardown."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, namespace=NAMESPACE)
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except Exception:
            pass


def send(test_client, payload):
    test_client.send(json.dumps(payload), namespace=NAMESPACE)


def frames(test_client):
    """Decode and drain the text frames a test client has received."""
    return [
        json.loads(pkt['args'])
        for pkt in test_client.get_received(NAMESPACE)
        if pkt['name'] == 'message'
    ]


def updates(messages):
    return [m['gameState'] for m in messages if m['type'] == 'update']


class RecordingHub(BroadcastHub):
    """Hub that records what would have been sent instead of sending it."""

    def __init__(self, fail_sids=()):
        self.sent = []
        self.fail_sids = set(fail_sids)

        def _send(text, to=None, namespace=None):
            if to in self.fail_sids:
                raise ConnectionError('closed')
            self.sent.append((to, json.loads(text)))

        super().__init__(_send)

    def to(self, sid):
        return [msg for target, msg in self.sent if target == sid]


@pytest.fixture()
def hub():
    return RecordingHub()


@pytest.fixture()
def engine(hub):
    return PriceGame(
        catalog=ItemCatalog(rng=random.Random(7)),
        registry=SessionRegistry(),
        hub=hub,
        ticker=Ticker(lambda *a: None, lambda s: None, enabled=False),
    )
