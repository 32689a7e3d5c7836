from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.schemas.common import dump, success
from storefront.schemas.product_schema import Gender, ProductOut
from storefront.services.catalogue_service import CatalogueService

router = APIRouter(tags=["catalogue"])


def products_body(items, total: int, page: int) -> dict:
    data = [dump(ProductOut.model_validate(p)) for p in items]
    return success({"products": data, "total": total, "page": page}, results=len(data))


@router.get("/api/products", summary="List products")
def list_products(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    items, total = CatalogueService(db).list_products(page=page, limit=limit)
    return products_body(items, total, page)


@router.get("/api/products/{id_or_slug}", summary="Get product by id or slug")
def get_product(id_or_slug: str, db: Session = Depends(get_db)):
    product = CatalogueService(db).get_product(id_or_slug)
    return success({"product": dump(ProductOut.model_validate(product))})


@router.get("/api/search", summary="Search products")
def search_products(
    keyword: Optional[str] = Query(None, description="search term"),
    gender: Optional[Gender] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    size: Optional[int] = Query(None, ge=1),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    is_best_seller: Optional[bool] = Query(None, alias="isBestSeller"),
    is_new_arrival: Optional[bool] = Query(None, alias="isNewArrival"),
    is_on_sale: Optional[bool] = Query(None, alias="isOnSale"),
    sort: Optional[str] = Query(None, description="e.g. price,-createdAt"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    items, total = CatalogueService(db).search(
        keyword=keyword,
        gender=gender,
        category=category,
        brand=brand,
        size=size,
        min_price=min_price,
        max_price=max_price,
        flags={
            "isBestSeller": is_best_seller,
            "isNewArrival": is_new_arrival,
            "isOnSale": is_on_sale,
        },
        sort=sort,
        page=page,
        limit=limit,
    )
    return products_body(items, total, page)
