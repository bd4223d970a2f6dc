from __future__ import annotations
from typing import Optional
from urllib.parse import quote

from flavorflow.core.menu.models import Dish
from flavorflow.infra.settings import settings

def _price(p: float) -> str:
    return str(int(p)) if float(p).is_integer() else f"{p:g}"

def share_text(dish: Dish, base_url: Optional[str] = None) -> str:
    base = base_url or settings.PUBLIC_BASE_URL
    return (
        f"🔥 *{dish.title}* is now available!\n\n"
        f"{dish.description}\n\n"
        f"Price: {settings.CURRENCY}{_price(dish.price)}\n\n"
        f"😋 Order now at: {base}#/"
    )

def share_link(dish: Dish, base_url: Optional[str] = None) -> str:
    """WhatsApp deep link carrying the announcement."""
    return f"https://wa.me/?text={quote(share_text(dish, base_url), safe='')}"
