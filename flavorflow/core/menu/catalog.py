from __future__ import annotations
import logging
import math
from threading import RLock
from typing import List, Optional

from flavorflow.infra.settings import settings
from flavorflow.ports.blob_store import BlobStorePort, StorageError
from .loader import dump_catalog, parse_catalog
from .models import Dish

log = logging.getLogger("flavorflow.catalog")

ALL_CATEGORIES = "All"

class MenuCatalog:
    """Published dishes, newest first. Sole writer of the persisted catalog."""

    def __init__(self, store: BlobStorePort, key: Optional[str] = None):
        self.store = store
        self.key = key or settings.STORAGE_KEY
        self.degraded = False
        self._lock = RLock()
        self._dishes: List[Dish] = self._load()

    def _load(self) -> List[Dish]:
        try:
            raw = self.store.load(self.key)
        except StorageError as e:
            log.warning("catalog store unavailable, starting empty: %s", e)
            self.degraded = True
            return []
        try:
            return parse_catalog(raw)
        except ValueError as e:
            log.warning("stored catalog unreadable, starting empty: %s", e)
            return []

    def _persist(self) -> None:
        try:
            self.store.save(self.key, dump_catalog(self._dishes))
        except StorageError as e:
            log.warning("catalog not persisted, keeping it in memory: %s", e)
            self.degraded = True

    def list(self) -> List[Dish]:
        with self._lock:
            return list(self._dishes)

    def get(self, dish_id: str) -> Optional[Dish]:
        with self._lock:
            for d in self._dishes:
                if d.id == dish_id:
                    return d
            return None

    def add(self, dish: Dish) -> None:
        with self._lock:
            if self.get(dish.id) is not None:
                raise ValueError(f"duplicate dish id: {dish.id}")
            if not math.isfinite(dish.price) or dish.price < 0:
                raise ValueError(f"{dish.id}: price must be a finite number >= 0")
            self._dishes = [dish] + self._dishes
            self._persist()
        log.info("dish published: %s (%s)", dish.title, dish.id)

    def remove(self, dish_id: str) -> bool:
        with self._lock:
            kept = [d for d in self._dishes if d.id != dish_id]
            if len(kept) == len(self._dishes):
                return False
            self._dishes = kept
            self._persist()
        log.info("dish removed: %s", dish_id)
        return True

    def categories(self) -> List[str]:
        cats = [ALL_CATEGORIES]
        for d in self.list():
            if d.category not in cats:
                cats.append(d.category)
        return cats

    def filter(self, category: Optional[str] = None) -> List[Dish]:
        dishes = self.list()
        if not category or category == ALL_CATEGORIES:
            return dishes
        return [d for d in dishes if d.category == category]
