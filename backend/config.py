import os


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8887'))
    # Comma separated list; '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Phase durations (seconds)
    SHOWING_DURATION_SEC = int(os.environ.get('SHOWING_DURATION_SEC', '5'))
    GUESSING_DURATION_SEC = int(os.environ.get('GUESSING_DURATION_SEC', '30'))
    RESULTS_DURATION_SEC = int(os.environ.get('RESULTS_DURATION_SEC', '10'))
    TICK_INTERVAL_SEC = float(os.environ.get('TICK_INTERVAL_SEC', '1.0'))
    # Only players captured in the roster at start may score
    ROSTER_ONLY_GUESSES = _env_bool('ROSTER_ONLY_GUESSES', True)
    # Optional: seed the deck RNG for reproducible games
    RANDOM_SEED = os.environ.get('RANDOM_SEED')
    # Optional: list of Item objects replacing the built-in deck
    CATALOG_ITEMS = None
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
