from __future__ import annotations
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from flavorflow.core.cart.cart import Cart
from flavorflow.core.menu.models import Dish
from flavorflow.workflows.draft_flow import DraftWorkflow


class AddToCartIn(BaseModel):
    dish_id: str


class UpdateQuantityIn(BaseModel):
    dish_id: str
    delta: int


class DescribeIn(BaseModel):
    text: str = Field(default="")


def dish_out(d: Dish, cart: Optional[Cart] = None) -> Dict[str, Any]:
    out = d.to_dict()
    if cart is not None:
        out["inCart"] = cart.quantity_of(d.id)
    return out


def cart_out(cart: Cart) -> Dict[str, Any]:
    bill = cart.bill()
    return {
        "lines": [
            {
                "dishId": l.dish_id,
                "title": l.dish.title,
                "price": l.dish.price,
                "isVeg": l.dish.is_veg,
                "imageUrl": l.dish.image_url,
                "quantity": l.quantity,
                "lineTotal": round(l.line_total, 2),
            }
            for l in cart.lines()
        ],
        "count": cart.count(),
        "bill": {
            "itemTotal": round(bill.item_total, 2),
            "tax": round(bill.tax, 2),
            "delivery": round(bill.delivery, 2),
            "grandTotal": round(bill.grand_total, 2),
        },
    }


def studio_out(wf: DraftWorkflow) -> Dict[str, Any]:
    draft = None
    if wf.draft is not None:
        d = wf.draft
        draft = {"title": d.title, "description": d.description, "price": d.price,
                 "isVeg": d.is_veg, "category": d.category}
    img = wf.pending_image
    return {
        "state": wf.state.value,
        "draft": draft,
        "image": {"source": img.source.value, "uri": img.uri} if img else None,
        "notice": wf.notice.as_dict() if wf.notice else None,
        "extracting": wf.extracting,
        "generating": wf.generating,
    }
