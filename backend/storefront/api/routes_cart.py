from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.models.user import User
from storefront.schemas.cart_schema import AddToCartIn, CartOut, UpdateCartItemIn
from storefront.schemas.common import dump, success
from storefront.security import get_current_user
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_body(view: dict, message: str = None) -> dict:
    cart = CartOut.model_validate(view)
    return success({"cart": dump(cart)}, results=len(cart.items), message=message)


@router.get("", summary="Get cart")
def get_cart(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _cart_body(CartService(db).get_cart(user.id))


@router.post("/add", summary="Add item to cart")
def add_to_cart(
    payload: AddToCartIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    view = CartService(db).add_to_cart(
        user.id, payload.product_id, payload.size, payload.quantity
    )
    return _cart_body(view, message="Item added to cart")


@router.put("/update", summary="Set line item quantity")
def update_cart_item(
    payload: UpdateCartItemIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    view = CartService(db).update_cart_item(user.id, payload.item_id, payload.quantity)
    return _cart_body(view)


@router.delete("/remove/{item_id}", summary="Remove line item")
def remove_from_cart(
    item_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _cart_body(CartService(db).remove_from_cart(user.id, item_id))


@router.delete("/clear", summary="Empty the cart")
def clear_cart(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _cart_body(CartService(db).clear_cart(user.id))
