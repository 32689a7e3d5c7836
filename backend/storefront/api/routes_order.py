from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.models.user import User
from storefront.schemas.common import dump, success
from storefront.schemas.order_schema import CheckoutIn, OrderOut, StatusIn
from storefront.security import get_current_user, require_admin
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _orders_body(orders) -> dict:
    data = [dump(OrderOut.model_validate(o)) for o in orders]
    return success({"orders": data}, results=len(data))


@router.post("/checkout", summary="Create order (checkout)")
def checkout(
    payload: CheckoutIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    order = OrderService(db).create_order(
        user.id,
        [it.model_dump() for it in payload.order_items],
        payload.shipping_address,
        payload.payment_method,
        items_price=payload.items_price,
        tax_price=payload.tax_price,
        shipping_price=payload.shipping_price,
        total_price=payload.total_price,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=success({"order": dump(OrderOut.model_validate(order))}),
    )


@router.get("/my", summary="List own orders")
def my_orders(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _orders_body(OrderService(db).get_my_orders(user.id))


@router.get("", summary="List all orders (admin)")
def all_orders(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return _orders_body(OrderService(db).get_all_orders())


@router.put("/{order_id}/status", summary="Overwrite order status (admin)")
def update_status(
    order_id: int,
    payload: StatusIn,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    order = OrderService(db).update_order_status(order_id, payload.status)
    return success({"order": dump(OrderOut.model_validate(order))})


@router.put("/{order_id}/pay", summary="Mark order as paid (admin)")
def mark_paid(
    order_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    order = OrderService(db).mark_paid(order_id)
    return success({"order": dump(OrderOut.model_validate(order))})


@router.get("/{order_id}", summary="Fetch one order")
def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    order = OrderService(db).get_order(order_id, user)
    return success({"order": dump(OrderOut.model_validate(order))})
