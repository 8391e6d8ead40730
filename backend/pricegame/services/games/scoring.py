import math

from pricegame.models import Item, Player

MAX_POINTS = 100


def score_guess(guess: float, price: float) -> int:
    """Points for one guess: 100 when exact, down to 0 once off by the full price."""
    diff = abs(guess - price)
    return max(0, MAX_POINTS - math.floor(diff / price * 100))


def apply_guess(player: Player, item: Item, guess: float) -> int:
    """Record `guess` on the player and add its points. Returns the points added."""
    player.current_guess = guess
    player.last_diff = abs(guess - item.price)
    points = score_guess(guess, item.price)
    player.score += points
    return points
