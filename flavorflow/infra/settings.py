import os

class Settings:
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

    EXTRACT_MODEL = os.getenv("EXTRACT_MODEL", "gpt-4o-mini")
    IMAGE_MODEL = os.getenv("IMAGE_MODEL", "gpt-image-1")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/flavorflow.db")

    # Key under which the whole catalog is stored as one JSON list
    STORAGE_KEY = os.getenv("FLAVORFLOW_STORAGE_KEY", "flavorflow_items_v2")

    TAX_RATE = float(os.getenv("FLAVORFLOW_TAX_RATE", "0.05"))
    DELIVERY_CHARGE = float(os.getenv("FLAVORFLOW_DELIVERY_CHARGE", "0"))
    CURRENCY = os.getenv("FLAVORFLOW_CURRENCY", "₹")

    PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000/")

    # MODE: 'dev' or 'prod'
    FLAVORFLOW_MODE = os.getenv("FLAVORFLOW_MODE", "dev")

settings = Settings()

def is_dev() -> bool:
    """True when the storefront runs in development mode."""
    return (settings.FLAVORFLOW_MODE or "dev").lower() == "dev"
