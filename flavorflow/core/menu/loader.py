from __future__ import annotations
import json
from typing import List, Optional
from .models import Dish
from .validator import validate

def parse_catalog(raw: Optional[str]) -> List[Dish]:
    """Turn the stored JSON blob into dishes. Raises ValueError on bad data."""
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Catalog is not valid JSON: {e}") from e
    errors = validate(data)
    if errors:
        raise ValueError("Catalog validation failed:\n" + "\n".join(errors))
    return [Dish.from_dict(x) for x in data]

def dump_catalog(dishes: List[Dish]) -> str:
    return json.dumps([d.to_dict() for d in dishes], ensure_ascii=False)
