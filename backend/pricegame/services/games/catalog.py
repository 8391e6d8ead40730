import random
from typing import Iterable, List, Optional

from pricegame.models import Item


SEED_ITEMS = (
    Item('1', 'Smartphone', 'Like-new smartphone, 128GB storage', 1099.99, 'phone.jpg'),
    Item('2', 'Coffee machine', 'Premium coffee machine with milk frother', 449.50, 'coffee.jpg'),
    Item('3', 'Office chair', 'Ergonomic office chair, black', 389.00, 'chair.jpg'),
    Item('4', 'Headphones', 'Noise-cancelling headphones', 179.99, 'headphones.jpg'),
    Item('5', 'Bicycle', 'Mountain bike', 1349.00, 'bike.jpg'),
)


class ItemCatalog:
    """The deck rounds draw from.

    Draws are uniform and destructive; `reset()` puts the full seed list back.
    """

    def __init__(self, items: Optional[Iterable[Item]] = None, rng: Optional[random.Random] = None):
        self.items: List[Item] = list(items if items is not None else SEED_ITEMS)
        if not self.items:
            raise ValueError('Item catalog needs at least one item')
        self.rng = rng or random.Random()
        self.deck: List[Item] = list(self.items)

    def __len__(self) -> int:
        return len(self.deck)

    def draw(self) -> Item:
        if not self.deck:
            raise IndexError('Deck is empty')
        return self.deck.pop(self.rng.randrange(len(self.deck)))

    def reset(self) -> None:
        self.deck = list(self.items)
