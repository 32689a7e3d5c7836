from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from storefront.api.routes_catalogue import products_body
from storefront.db import get_db
from storefront.models.user import User
from storefront.schemas.common import dump, success
from storefront.schemas.order_schema import OrderOut
from storefront.schemas.product_schema import ProductIn, ProductOut, ProductUpdate
from storefront.schemas.user_schema import UserOut
from storefront.security import require_admin
from storefront.services.admin_service import AdminService
from storefront.services.catalogue_service import CatalogueService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/me", summary="Current admin profile")
def admin_profile(admin: User = Depends(require_admin)):
    return success({"user": dump(UserOut.model_validate(admin))})


@router.get("/stats", summary="Dashboard stats")
def dashboard_stats(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    stats = AdminService(db).dashboard_stats()
    stats["recentOrders"] = [dump(OrderOut.model_validate(o)) for o in stats["recentOrders"]]
    return success(stats)


@router.get("/products", summary="List products (admin)")
def list_products(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    include_deleted: bool = Query(False, alias="includeDeleted"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    items, total = CatalogueService(db).list_products(
        page=page, limit=limit, include_deleted=include_deleted
    )
    return products_body(items, total, page)


@router.post("/products", summary="Create product")
def create_product(
    payload: ProductIn,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    product = CatalogueService(db).create_product(payload.model_dump(), created_by=admin.id)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=success({"product": dump(ProductOut.model_validate(product))}),
    )


@router.get("/products/{product_id}", summary="Get product (admin)")
def get_product(
    product_id: int,
    include_deleted: bool = Query(False, alias="includeDeleted"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    product = CatalogueService(db).get_product(str(product_id), include_deleted=include_deleted)
    return success({"product": dump(ProductOut.model_validate(product))})


@router.put("/products/{product_id}", summary="Update product")
def update_product(
    product_id: int,
    payload: ProductUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    product = CatalogueService(db).update_product(
        product_id, payload.model_dump(exclude_unset=True)
    )
    return success({"product": dump(ProductOut.model_validate(product))})


@router.delete("/products/{product_id}", summary="Soft-delete product", status_code=204)
def delete_product(
    product_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    CatalogueService(db).delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
