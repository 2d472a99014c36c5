# backend/utils/basket.py
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List

logger = logging.getLogger(__name__)


# Purchasable unit as loaded from the catalog; never changes once in a basket
@dataclass(frozen=True)
class CatalogItemRef:
    id: int
    unit_price: int
    brand: str = ""
    model: str = ""
    warranty_years: int = 0
    description: str = ""


# Single basket position (item + quantity >= 1)
@dataclass(frozen=True)
class BasketLine:
    item: CatalogItemRef
    quantity: int

    @property
    def line_total(self) -> int:
        return self.item.unit_price * self.quantity


class Basket:
    """
    In-memory multiset of catalog items keyed by item id.

    Every operation runs under ``lock``. The lock is re-entrant so that the
    checkout sequence can hold it while it reads the total and clears the basket.
    """

    def __init__(self):
        self._lines: Dict[int, BasketLine] = {}
        self.lock = threading.RLock()

    def add_item(self, item: CatalogItemRef) -> None:
        # Bad refs come from upstream bugs, not from users
        if not isinstance(item.id, int) or isinstance(item.id, bool):
            raise ValueError(f"Catalog item id must be an integer, got {item.id!r}")
        if item.unit_price < 0:
            raise ValueError(f"Catalog item {item.id} has negative unit price {item.unit_price}")

        with self.lock:
            line = self._lines.get(item.id)
            if line:
                self._lines[item.id] = BasketLine(item=line.item, quantity=line.quantity + 1)
            else:
                self._lines[item.id] = BasketLine(item=item, quantity=1)

    def remove_item(self, item_id: int) -> bool:
        """Take one unit of ``item_id`` out. Returns False when there was nothing to remove."""
        with self.lock:
            line = self._lines.get(item_id)
            if line is None:
                logger.info("Item %s is not in the basket, nothing to remove", item_id)
                return False
            if line.quantity > 1:
                self._lines[item_id] = BasketLine(item=line.item, quantity=line.quantity - 1)
            else:
                del self._lines[item_id]
            return True

    def get_lines(self) -> List[BasketLine]:
        with self.lock:
            return list(self._lines.values())

    def get_total_price(self) -> int:
        with self.lock:
            return sum(line.line_total for line in self._lines.values())

    def quantity_of(self, item_id: int) -> int:
        with self.lock:
            line = self._lines.get(item_id)
            return line.quantity if line else 0

    def is_empty(self) -> bool:
        with self.lock:
            return not self._lines

    def clear(self) -> None:
        with self.lock:
            self._lines.clear()
