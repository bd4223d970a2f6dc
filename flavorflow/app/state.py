from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from flavorflow.adapters.openai_extraction import OpenAIDishExtractor
from flavorflow.adapters.openai_images import OpenAIImageGenerator
from flavorflow.adapters.sql_blob_store import SqlBlobStore
from flavorflow.core.cart.cart import Cart
from flavorflow.core.menu.catalog import MenuCatalog
from flavorflow.ports.blob_store import StorageError
from flavorflow.workflows.draft_flow import DraftWorkflow
from flavorflow.workflows.image_policy import ImageResolutionPolicy

log = logging.getLogger("flavorflow.app")


@dataclass
class Storefront:
    """Everything one storefront session owns."""
    catalog: MenuCatalog
    cart: Cart
    studio: DraftWorkflow


def build_storefront() -> Storefront:
    store = SqlBlobStore()
    try:
        store.ensure_table()
    except StorageError as e:
        log.warning("persistence unavailable, catalog stays in memory: %s", e)
    catalog = MenuCatalog(store)
    extractor = OpenAIDishExtractor()
    images = ImageResolutionPolicy(generator=OpenAIImageGenerator())
    log.info("storefront ready: %d dish(es), AI configured=%s", len(catalog.list()), extractor.available)
    return Storefront(
        catalog=catalog,
        cart=Cart(),
        studio=DraftWorkflow(catalog, extractor=extractor, images=images),
    )


_storefront: Optional[Storefront] = None
_build_lock = threading.Lock()

def get_storefront() -> Storefront:
    """The process-wide storefront; built on app startup, or on first use."""
    global _storefront
    if _storefront is None:
        with _build_lock:
            if _storefront is None:
                _storefront = build_storefront()
    return _storefront
