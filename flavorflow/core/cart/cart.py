from __future__ import annotations
import dataclasses
import logging
from threading import RLock
from typing import List, Optional, Tuple

from flavorflow.core.menu.models import Dish
from flavorflow.infra.settings import settings
from .models import Bill, CartLine

log = logging.getLogger("flavorflow.cart")


class Cart:
    """Order in progress. One line per dish id, never a line with quantity 0."""

    def __init__(self, tax_rate: Optional[float] = None, delivery_charge: Optional[float] = None):
        self.tax_rate = settings.TAX_RATE if tax_rate is None else tax_rate
        self.delivery_charge = settings.DELIVERY_CHARGE if delivery_charge is None else delivery_charge
        self._lines: List[CartLine] = []
        self._lock = RLock()

    def _find(self, dish_id: str) -> Optional[CartLine]:
        for line in self._lines:
            if line.dish_id == dish_id:
                return line
        return None

    def lines(self) -> List[CartLine]:
        with self._lock:
            return [CartLine(dish=l.dish, quantity=l.quantity) for l in self._lines]

    def add(self, dish: Dish) -> CartLine:
        with self._lock:
            line = self._find(dish.id)
            if line:
                line.quantity += 1
            else:
                line = CartLine(dish=dataclasses.replace(dish), quantity=1)
                self._lines.append(line)
            return CartLine(dish=line.dish, quantity=line.quantity)

    def update_quantity(self, dish_id: str, delta: int) -> int:
        """Apply delta; returns the new quantity (0 means the line is gone)."""
        with self._lock:
            line = self._find(dish_id)
            if line is None:
                return 0
            qty = max(0, line.quantity + int(delta))
            if qty == 0:
                self._lines.remove(line)
            else:
                line.quantity = qty
            return qty

    def quantity_of(self, dish_id: str) -> int:
        with self._lock:
            line = self._find(dish_id)
            return line.quantity if line else 0

    def clear(self) -> None:
        with self._lock:
            self._lines = []

    def total(self) -> float:
        with self._lock:
            return sum(l.line_total for l in self._lines)

    def count(self) -> int:
        with self._lock:
            return sum(l.quantity for l in self._lines)

    def bill(self) -> Bill:
        item_total = self.total()
        tax = item_total * self.tax_rate
        delivery = self.delivery_charge
        return Bill(item_total=item_total, tax=tax, delivery=delivery,
                    grand_total=item_total + tax + delivery)

    def summarize(self) -> Tuple[str, float]:
        with self._lock:
            parts = [f"{l.quantity}× {l.dish.title}" for l in self._lines]
            return ("; ".join(parts) if parts else "no items"), round(self.total(), 2)

    def checkout(self) -> Bill:
        """No payment backend: report the bill and leave the cart as it is."""
        bill = self.bill()
        log.info("checkout requested: %d item(s), total %.2f", self.count(), bill.grand_total)
        return bill
