import random

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

NAMESPACE = '/ws'

socketio = SocketIO(async_mode=None)


def _cors_origins(value):
    if not value or value == '*':
        return '*'
    if isinstance(value, str):
        return [origin.strip() for origin in value.split(',') if origin.strip()]
    return list(value)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _cors_origins(flask_app.config.get('CORS_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import here so the services bind to the initialised socketio instance
    from pricegame.broadcast import BroadcastHub
    from pricegame.sessions import SessionRegistry
    from pricegame.services.games import ItemCatalog, PriceGame, Ticker
    from pricegame.models import SHOWING, GUESSING, RESULTS

    seed = flask_app.config.get('RANDOM_SEED')
    rng = random.Random(seed) if seed is not None else random.Random()
    catalog = ItemCatalog(flask_app.config.get('CATALOG_ITEMS'), rng=rng)

    testing = flask_app.config.get('TESTING', False)
    ticker = Ticker(
        socketio.start_background_task,
        socketio.sleep,
        interval=float(flask_app.config.get('TICK_INTERVAL_SEC', 1.0)),
        # Tests drive ticks by hand unless they opt in
        enabled=not testing or flask_app.config.get('ENABLE_SCHEDULER_IN_TESTS', False),
        logger=flask_app.logger,
    )
    game = PriceGame(
        catalog=catalog,
        registry=SessionRegistry(),
        hub=BroadcastHub(socketio.send, namespace=NAMESPACE, logger=flask_app.logger),
        ticker=ticker,
        durations={
            SHOWING: flask_app.config.get('SHOWING_DURATION_SEC', 5),
            GUESSING: flask_app.config.get('GUESSING_DURATION_SEC', 30),
            RESULTS: flask_app.config.get('RESULTS_DURATION_SEC', 10),
        },
        roster_only_guesses=flask_app.config.get('ROSTER_ONLY_GUESSES', True),
        logger=flask_app.logger,
    )
    flask_app.extensions['price_game'] = game

    from pricegame.main import main
    flask_app.register_blueprint(main)

    from pricegame.api.game import game_api
    flask_app.register_blueprint(game_api, url_prefix='/api/game')

    from pricegame.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    return flask_app
