import threading
import time

import pytest
from fastapi.testclient import TestClient

from conftest import FakeExtractor, FakeGenerator, VEG_BURGER, fake_fallback
from flavorflow.app.app import app
from flavorflow.app import state
from flavorflow.app.state import Storefront, get_storefront
from flavorflow.core.cart.cart import Cart
from flavorflow.ports.image_generation import QuotaExceeded
from flavorflow.workflows.draft_flow import DraftWorkflow
from flavorflow.workflows.image_policy import ImageResolutionPolicy


@pytest.fixture
def storefront(catalog):
    studio = DraftWorkflow(
        catalog,
        extractor=FakeExtractor(VEG_BURGER),
        images=ImageResolutionPolicy(generator=FakeGenerator(QuotaExceeded()), fallback=fake_fallback),
    )
    return Storefront(catalog=catalog, cart=Cart(tax_rate=0.05, delivery_charge=0), studio=studio)


@pytest.fixture
def client(storefront):
    app.dependency_overrides[get_storefront] = lambda: storefront
    yield TestClient(app)
    app.dependency_overrides.clear()


def _publish(client):
    assert client.post("/studio/describe", json={"text": "Veg Burger for ₹199"}).status_code == 200
    body = client.post("/studio/publish").json()
    return body["dish"]["id"]


def test_health(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_studio_flow_and_public_menu(client):
    r = client.post("/studio/describe", json={"text": "Veg Burger for ₹199"})
    body = r.json()
    assert body["state"] == "drafted"
    assert body["image"] == {"source": "keyword", "uri": fake_fallback("Veg Burger")}

    r = client.post("/studio/image/ai")
    assert r.status_code == 200
    assert r.json()["notice"]["kind"] == "quota"
    assert r.json()["notice"]["blocking"] is False

    r = client.post("/studio/publish")
    dish = r.json()["dish"]
    assert dish["price"] == 199
    assert dish["isVeg"] is True
    assert r.json()["state"] == "idle"

    menu = client.get("/menu").json()
    assert menu["categories"] == ["All", "Main Course"]
    assert [d["id"] for d in menu["items"]] == [dish["id"]]
    assert client.get("/menu", params={"category": "Dessert"}).json()["items"] == []


def test_blank_description_is_400(client):
    r = client.post("/studio/describe", json={"text": "  "})
    assert r.status_code == 400
    assert r.json()["detail"]["kind"] == "user"


def test_publish_without_draft_is_409(client, catalog):
    r = client.post("/studio/publish")
    assert r.status_code == 409
    assert catalog.list() == []


def test_upload_image(client):
    client.post("/studio/describe", json={"text": "Veg Burger for ₹199"})
    r = client.post("/studio/image/upload", files={"file": ("dish.jpg", b"hello", "image/jpeg")})
    assert r.status_code == 200
    assert r.json()["image"] == {"source": "upload", "uri": "data:image/jpeg;base64,aGVsbG8="}
    client.post("/studio/discard")
    assert client.get("/studio/draft").json()["state"] == "idle"


def test_cart_endpoints(client):
    dish_id = _publish(client)
    client.post("/cart/add", json={"dish_id": dish_id})
    body = client.post("/cart/add", json={"dish_id": dish_id}).json()
    assert body["count"] == 2
    assert body["bill"] == {"itemTotal": 398.0, "tax": 19.9, "delivery": 0.0, "grandTotal": 417.9}
    assert client.get("/menu").json()["items"][0]["inCart"] == 2

    body = client.post("/cart/update", json={"dish_id": dish_id, "delta": -5}).json()
    assert body["lines"] == []
    assert body["count"] == 0

    assert client.post("/cart/add", json={"dish_id": "missing"}).status_code == 404
    assert client.post("/cart/checkout").json()["ok"] is True


def test_delete_and_share(client, catalog):
    dish_id = _publish(client)
    share = client.get(f"/studio/dishes/{dish_id}/share", params={"base_url": "https://shop.test/"}).json()
    assert share["text"].startswith("🔥 *Veg Burger* is now available!")
    assert share["link"].startswith("https://wa.me/?text=")

    assert client.delete(f"/studio/dishes/{dish_id}").json() == {"ok": True, "removed": True}
    assert client.delete(f"/studio/dishes/{dish_id}").json()["removed"] is False
    assert client.get("/studio/dishes").json()["items"] == []
    assert client.get(f"/studio/dishes/{dish_id}/share").status_code == 404


def test_logs_endpoint(client):
    _publish(client)
    items = client.get("/studio/logs", params={"q": "dish published"}).json()["items"]
    assert any("Veg Burger" in row["msg"] for row in items)


def test_storefront_is_built_once_under_concurrent_first_use(monkeypatch):
    built = []

    def slow_build():
        time.sleep(0.05)
        built.append(object())
        return built[-1]

    monkeypatch.setattr(state, "_storefront", None)
    monkeypatch.setattr(state, "build_storefront", slow_build)
    results = []
    threads = [threading.Thread(target=lambda: results.append(state.get_storefront())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(built) == 1
    assert all(r is built[0] for r in results)
