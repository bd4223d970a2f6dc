from __future__ import annotations
import math
from typing import Any, List, Set

def validate(data: Any) -> List[str]:
    errors: List[str] = []
    if not isinstance(data, list):
        return ["catalog payload is not a list"]

    seen_ids: Set[str] = set()
    for idx, it in enumerate(data, start=1):
        if not isinstance(it, dict):
            errors.append(f"item[{idx}] is not an object")
            continue
        dish_id = it.get("id")
        if not dish_id or not isinstance(dish_id, str):
            errors.append(f"item[{idx}] missing id")
        elif dish_id in seen_ids:
            errors.append(f"duplicate id: {dish_id}")
        else:
            seen_ids.add(dish_id)

        if not it.get("title"):
            errors.append(f"{dish_id}: missing title")

        price = it.get("price")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            errors.append(f"{dish_id}: price must be a number")
        elif not math.isfinite(price):
            errors.append(f"{dish_id}: price must be finite")
        elif price < 0:
            errors.append(f"{dish_id}: price must be >= 0")

        if "isVeg" in it and not isinstance(it["isVeg"], bool):
            errors.append(f"{dish_id}: isVeg must be boolean")

    return errors
