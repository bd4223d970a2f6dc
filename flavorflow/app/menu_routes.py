from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from flavorflow.app.schemas import AddToCartIn, UpdateQuantityIn, cart_out, dish_out
from flavorflow.app.state import Storefront, get_storefront

router = APIRouter(tags=["menu"])


# -------- public menu --------

@router.get("/menu")
def list_menu(category: Optional[str] = None, sf: Storefront = Depends(get_storefront)):
    items = sf.catalog.filter(category)
    return {
        "categories": sf.catalog.categories(),
        "selected": category or "All",
        "items": [dish_out(d, sf.cart) for d in items],
    }


@router.get("/menu/categories")
def list_categories(sf: Storefront = Depends(get_storefront)):
    return {"categories": sf.catalog.categories()}


# -------- cart --------

@router.get("/cart")
def get_cart(sf: Storefront = Depends(get_storefront)):
    return cart_out(sf.cart)


@router.post("/cart/add")
def add_to_cart(payload: AddToCartIn, sf: Storefront = Depends(get_storefront)):
    dish = sf.catalog.get(payload.dish_id)
    if dish is None:
        raise HTTPException(status_code=404, detail=f"unknown dish: {payload.dish_id}")
    sf.cart.add(dish)
    return cart_out(sf.cart)


@router.post("/cart/update")
def update_cart(payload: UpdateQuantityIn, sf: Storefront = Depends(get_storefront)):
    sf.cart.update_quantity(payload.dish_id, payload.delta)
    return cart_out(sf.cart)


@router.post("/cart/checkout")
def checkout(sf: Storefront = Depends(get_storefront)):
    # no payment backend; the cart is left as it is
    sf.cart.checkout()
    return {"ok": True, **cart_out(sf.cart)}
