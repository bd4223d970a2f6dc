from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

@dataclass(frozen=True)
class Draft:
    """Unpublished dish candidate as returned by the extraction service."""
    title: str
    description: str
    price: float
    is_veg: bool
    category: str

@dataclass(frozen=True)
class Dish:
    id: str
    title: str
    description: str
    price: float
    image_url: str
    is_veg: bool
    category: str
    created_at: int  # epoch ms
    is_bestseller: bool = False

    # stored with the keys the browser build used, so old saves keep loading
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "imageUrl": self.image_url,
            "isVeg": self.is_veg,
            "category": self.category,
            "isBestseller": self.is_bestseller,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Dish":
        return cls(
            id=str(d["id"]),
            title=str(d["title"]),
            description=str(d.get("description") or ""),
            price=float(d["price"]),
            image_url=str(d.get("imageUrl") or ""),
            is_veg=bool(d.get("isVeg", False)),
            category=str(d.get("category") or ""),
            created_at=int(d.get("createdAt") or 0),
            is_bestseller=bool(d.get("isBestseller", False)),
        )
