import os

# must happen before flavorflow.infra.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""

from typing import List, Optional

import pytest

from flavorflow.adapters.memory_blob_store import MemoryBlobStore
from flavorflow.core.cart.cart import Cart
from flavorflow.core.menu.catalog import MenuCatalog
from flavorflow.core.menu.models import Dish, Draft
from flavorflow.ports.blob_store import BlobStorePort, StorageError
from flavorflow.ports.extraction import DishExtractionPort, ExtractionError
from flavorflow.ports.image_generation import GenerationResult, ImageGenerationPort
from flavorflow.workflows.draft_flow import DraftWorkflow
from flavorflow.workflows.image_policy import ImageResolutionPolicy


def fake_fallback(title: str) -> str:
    return "https://img.test/" + title.replace(" ", ",")


class FakeExtractor(DishExtractionPort):
    def __init__(self, draft: Optional[Draft] = None, error: Optional[str] = None, available: bool = True):
        self.draft = draft
        self.error = error
        self._available = available
        self.calls: List[str] = []

    @property
    def available(self) -> bool:
        return self._available

    def extract(self, text: str) -> Draft:
        self.calls.append(text)
        if self.error:
            raise ExtractionError(self.error)
        return self.draft


class FakeGenerator(ImageGenerationPort):
    def __init__(self, result: GenerationResult):
        self.result = result
        self.calls: List[str] = []

    def generate(self, descriptor: str) -> GenerationResult:
        self.calls.append(descriptor)
        return self.result


class BrokenStore(BlobStorePort):
    def load(self, key):
        raise StorageError("disk on fire")

    def save(self, key, value):
        raise StorageError("disk on fire")


def make_dish(dish_id: str = "d1", price: float = 199.0, category: str = "Main Course", title: str = "Veg Burger") -> Dish:
    return Dish(
        id=dish_id,
        title=title,
        description="Crispy patty, soft bun.",
        price=price,
        image_url="https://img.test/burger",
        is_veg=True,
        category=category,
        created_at=1700000000000,
    )


VEG_BURGER = Draft(
    title="Veg Burger",
    description="A crunchy veggie patty in a toasted bun.",
    price=199,
    is_veg=True,
    category="Main Course",
)


@pytest.fixture
def store():
    return MemoryBlobStore()


@pytest.fixture
def catalog(store):
    return MenuCatalog(store, key="test_items")


@pytest.fixture
def cart():
    return Cart(tax_rate=0.05, delivery_charge=0)


@pytest.fixture
def extractor():
    return FakeExtractor(VEG_BURGER)


@pytest.fixture
def workflow(catalog, extractor):
    ids = iter(f"id{i}" for i in range(1, 100))
    return DraftWorkflow(
        catalog,
        extractor=extractor,
        images=ImageResolutionPolicy(fallback=fake_fallback),
        clock=lambda: 1700000000000,
        id_factory=lambda: next(ids),
    )
