import logging

from fastapi import FastAPI

from flavorflow.app.menu_routes import router as menu_router
from flavorflow.app.state import get_storefront
from flavorflow.app.studio_routes import router as studio_router
from flavorflow.infra.logs import setup_logging
from flavorflow.infra.settings import is_dev, settings

setup_logging(logging.DEBUG if is_dev() else logging.INFO)
app = FastAPI(title="FlavorFlow")

@app.on_event("startup")
def _init_storefront():
    get_storefront()

@app.get("/")
def read_root():
    return {"status": "ok", "message": "FlavorFlow storefront running", "mode": settings.FLAVORFLOW_MODE}

@app.get("/healthz")
def health():
    return {"ok": True}

app.include_router(menu_router)
app.include_router(studio_router)
