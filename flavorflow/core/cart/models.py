from __future__ import annotations
from dataclasses import dataclass
from flavorflow.core.menu.models import Dish

@dataclass
class CartLine:
    dish: Dish  # snapshot taken when the dish was added
    quantity: int = 1

    @property
    def dish_id(self) -> str:
        return self.dish.id

    @property
    def line_total(self) -> float:
        return self.dish.price * self.quantity

@dataclass(frozen=True)
class Bill:
    item_total: float
    tax: float
    delivery: float
    grand_total: float
