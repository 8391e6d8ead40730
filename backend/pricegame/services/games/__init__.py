"""Game domain services: deck, scoring, countdown and the round state machine.

Socket handlers and HTTP routes talk to `PriceGame`; everything in here is
transport-free apart from the hub and ticker that get injected.
"""

from .catalog import ItemCatalog, SEED_ITEMS
from .rounds import PriceGame
from .scheduler import Ticker
from .scoring import score_guess

__all__ = ['ItemCatalog', 'SEED_ITEMS', 'PriceGame', 'Ticker', 'score_guess']
