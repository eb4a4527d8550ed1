from typing import Optional

from storefront.db import get_db
from storefront.services.cart_service import CartService
from storefront.services.exceptions import NotFoundError, ValidationError
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/cart", tags=["cart"])

CART_COOKIE = "cart_uuid"


class AddItemIn(BaseModel):
    product_id: str
    qty: int = 1


class UpdateQuantityIn(BaseModel):
    quantity: int = Field(...)


def _get_cart_uuid_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(CART_COOKIE)


def _remember_cart(response: Response, cart_uuid: str):
    response.set_cookie(CART_COOKIE, cart_uuid, httponly=False, samesite="Lax")


@router.get("", summary="Get cart")
def get_cart(request: Request, response: Response, db: Session = Depends(get_db)):
    svc = CartService(db)
    cart = svc.get_or_create_cart_for_guest(_get_cart_uuid_cookie(request))
    _remember_cart(response, cart.cart_uuid)
    return CartService.to_dict(cart)


@router.post("/items", summary="Add item to cart")
def add_item(
    payload: AddItemIn,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    cart = svc.get_or_create_cart_for_guest(_get_cart_uuid_cookie(request))
    try:
        item = svc.add_item(cart, payload.product_id, payload.qty)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _remember_cart(response, cart.cart_uuid)
    return {"product_id": item.product_id, "quantity": item.quantity, "cart_uuid": cart.cart_uuid}


@router.patch("/items/{product_id}", summary="Change item quantity")
def update_item(
    product_id: str,
    payload: UpdateQuantityIn,
    request: Request,
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    cart = svc.get_or_create_cart_for_guest(_get_cart_uuid_cookie(request))
    try:
        item = svc.update_quantity(cart, product_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"product_id": item.product_id, "quantity": item.quantity}


@router.delete("/items/{product_id}", summary="Remove item")
def remove_item(product_id: str, request: Request, db: Session = Depends(get_db)):
    svc = CartService(db)
    cart = svc.get_or_create_cart_for_guest(_get_cart_uuid_cookie(request))
    svc.remove_item(cart, product_id)
    return {"ok": True}
