from abc import ABC, abstractmethod
from flavorflow.core.menu.models import Draft

class ExtractionError(Exception):
    """The service could not turn the description into a dish."""

class DishExtractionPort(ABC):
    @property
    def available(self) -> bool:
        return True

    @abstractmethod
    def extract(self, text: str) -> Draft:
        """Extract title, description, price, veg flag and category from free text."""
        pass
