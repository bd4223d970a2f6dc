from __future__ import annotations
import random
import re
from typing import Optional
from urllib.parse import quote

FALLBACK_TEMPLATE = "https://loremflickr.com/800/800/food,{query}/all?sig={sig}"

def keyword_image_url(query: str, rng: Optional[random.Random] = None) -> str:
    """Search-image URL for a dish title; sig only busts the cache."""
    words = re.sub(r"\s+", ",", (query or "").strip())
    sig = (rng or random).randrange(1000)
    return FALLBACK_TEMPLATE.format(query=quote(words, safe=""), sig=sig)
