from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from storefront.models.product import Product, ProductSize
from storefront.utils.text import slugify

# public sort keys -> columns
SORT_FIELDS = {
    "price": Product.price,
    "name": Product.name,
    "createdAt": Product.created_at,
    "rating": Product.rating,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProductRepository:
    """
    Catalog store. Every read goes through ``_query`` which injects the
    ``deleted_at IS NULL`` predicate, so callers cannot see soft-deleted
    products unless they ask for them with ``include_deleted=True``.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self, include_deleted: bool = False) -> Query:
        qry = self.db.query(Product)
        if not include_deleted:
            qry = qry.filter(Product.deleted_at.is_(None))
        return qry

    def get(self, product_id: int, include_deleted: bool = False) -> Optional[Product]:
        return self._query(include_deleted).filter(Product.id == product_id).first()

    def get_by_slug(self, slug: str, include_deleted: bool = False) -> Optional[Product]:
        return self._query(include_deleted).filter(Product.slug == slug).first()

    def get_many(self, ids: Iterable[int]) -> Dict[int, Product]:
        """Resolve ids to active products; ids that do not resolve are absent from the map."""
        ids = set(ids)
        if not ids:
            return {}
        rows = self._query().filter(Product.id.in_(ids)).all()
        return {p.id: p for p in rows}

    def count(self) -> int:
        return self._query().with_entities(func.count(Product.id)).scalar() or 0

    def list(
        self,
        page: int = 1,
        size: int = 20,
        include_deleted: bool = False,
    ) -> Tuple[List[Product], int]:
        return self.search(page=page, size=size, include_deleted=include_deleted)

    def search(
        self,
        keyword: Optional[str] = None,
        gender: Optional[str] = None,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        shoe_size: Optional[int] = None,
        min_price=None,
        max_price=None,
        flags: Optional[Dict[str, bool]] = None,
        sort: Optional[List[Tuple[str, bool]]] = None,
        page: int = 1,
        size: int = 20,
        include_deleted: bool = False,
    ) -> Tuple[List[Product], int]:
        query = self._query(include_deleted)
        if keyword:
            like = f"%{_escape_like(keyword)}%"
            query = query.filter(
                or_(
                    Product.name.ilike(like, escape="\\"),
                    Product.brand.ilike(like, escape="\\"),
                    Product.category.ilike(like, escape="\\"),
                    Product.description.ilike(like, escape="\\"),
                )
            )
        if gender:
            query = query.filter(Product.gender == gender)
        if category:
            query = query.filter(Product.category.ilike(_escape_like(category), escape="\\"))
        if brand:
            query = query.filter(Product.brand.ilike(_escape_like(brand), escape="\\"))
        if shoe_size is not None:
            query = query.filter(Product.sizes.any(ProductSize.size == shoe_size))
        if min_price is not None:
            query = query.filter(Product.price >= min_price)
        if max_price is not None:
            query = query.filter(Product.price <= max_price)
        for column_name, wanted in (flags or {}).items():
            query = query.filter(getattr(Product, column_name) == wanted)

        total = query.with_entities(func.count(Product.id)).scalar() or 0

        order_by = []
        for field, descending in sort or [("createdAt", True)]:
            col = SORT_FIELDS[field]
            order_by.append(col.desc() if descending else col.asc())
        order_by.append(Product.id.desc())
        items = query.order_by(*order_by).offset((page - 1) * size).limit(size).all()
        return items, total

    def unique_slug(self, name: str, exclude_id: Optional[int] = None) -> str:
        """Slug for ``name``; soft-deleted rows keep theirs, so collisions get a numeric suffix."""
        base = slugify(name) or "product"
        candidate, n = base, 1
        while True:
            qry = self._query(include_deleted=True).filter(Product.slug == candidate)
            if exclude_id is not None:
                qry = qry.filter(Product.id != exclude_id)
            if not qry.first():
                return candidate
            n += 1
            candidate = f"{base}-{n}"

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def soft_delete(self, product: Product) -> Product:
        product.deleted_at = datetime.now(timezone.utc)
        self.db.flush()
        return product
