from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.models.user import User
from storefront.schemas.common import dump, success
from storefront.schemas.product_schema import ProductSummary
from storefront.security import get_current_user
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.get("", summary="Get wishlist")
def get_wishlist(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    products = WishlistService(db).get_wishlist(user.id)
    data = [dump(ProductSummary.model_validate(p)) for p in products]
    return success({"products": data}, results=len(data))


@router.post("/{product_id}", summary="Add product to wishlist")
def add_to_wishlist(
    product_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    WishlistService(db).add(user.id, product_id)
    return success(message="Product added to wishlist")


@router.delete("/{product_id}", summary="Remove product from wishlist")
def remove_from_wishlist(
    product_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    WishlistService(db).remove(user.id, product_id)
    return success(message="Product removed from wishlist")
