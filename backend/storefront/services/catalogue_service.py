from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.errors import InvalidInput, NotFound
from storefront.models.product import Product
from storefront.repositories.product_repo import SORT_FIELDS, ProductRepository
from storefront.utils.logging import get_logger
from storefront.utils.transactions import atomic

log = get_logger(__name__)

_FLAG_COLUMNS = {
    "isBestSeller": "is_best_seller",
    "isNewArrival": "is_new_arrival",
    "isOnSale": "is_on_sale",
}


def parse_sort(sort: Optional[str]) -> List[Tuple[str, bool]]:
    """``"price,-createdAt"`` -> ``[("price", False), ("createdAt", True)]``."""
    if not sort:
        return [("createdAt", True)]
    parsed = []
    for raw in sort.split(","):
        raw = raw.strip()
        if not raw:
            continue
        descending = raw.startswith("-")
        field = raw.lstrip("-")
        if field not in SORT_FIELDS:
            raise InvalidInput(
                f"Cannot sort by '{field}'. Allowed: {', '.join(sorted(SORT_FIELDS))}"
            )
        parsed.append((field, descending))
    return parsed or [("createdAt", True)]


class CatalogueService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def _page_size(self, limit: Optional[int]) -> int:
        return min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)

    def list_products(self, page: int = 1, limit: Optional[int] = None, include_deleted: bool = False):
        return self.repo.list(page=page, size=self._page_size(limit), include_deleted=include_deleted)

    def get_product(self, id_or_slug: str, include_deleted: bool = False) -> Product:
        product = None
        if str(id_or_slug).isdigit():
            product = self.repo.get(int(id_or_slug), include_deleted=include_deleted)
        if product is None:
            product = self.repo.get_by_slug(str(id_or_slug), include_deleted=include_deleted)
        if product is None:
            raise NotFound("No product found with that ID")
        return product

    def search(
        self,
        keyword: Optional[str] = None,
        gender: Optional[str] = None,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        size: Optional[int] = None,
        min_price=None,
        max_price=None,
        flags: Optional[Dict[str, Optional[bool]]] = None,
        sort: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ):
        if min_price is not None and max_price is not None and min_price > max_price:
            raise InvalidInput("minPrice cannot be greater than maxPrice")
        column_flags = {
            _FLAG_COLUMNS[k]: v for k, v in (flags or {}).items() if v is not None
        }
        return self.repo.search(
            keyword=keyword.strip() if keyword else None,
            gender=gender,
            category=category,
            brand=brand,
            shoe_size=size,
            min_price=min_price,
            max_price=max_price,
            flags=column_flags,
            sort=parse_sort(sort),
            page=page,
            size=self._page_size(limit),
        )

    # admin

    def create_product(self, data: dict, created_by: Optional[int] = None) -> Product:
        sizes = data.pop("sizes", []) or []
        with atomic(self.db):
            product = Product(**data, user_id=created_by)
            product.slug = self.repo.unique_slug(product.name)
            product.size_values = sizes
            self.repo.add(product)
        log.info("product %s created slug=%s", product.id, product.slug)
        return product

    def update_product(self, product_id: int, changes: dict) -> Product:
        with atomic(self.db):
            product = self.repo.get(product_id)
            if not product:
                raise NotFound("No product found with that ID")
            sizes = changes.pop("sizes", None)
            for key, value in changes.items():
                setattr(product, key, value)
            if "name" in changes:
                product.slug = self.repo.unique_slug(product.name, exclude_id=product.id)
            if sizes is not None:
                product.size_values = sizes
        return product

    def delete_product(self, product_id: int) -> None:
        with atomic(self.db):
            product = self.repo.get(product_id)
            if not product:
                raise NotFound("No product found with that ID")
            self.repo.soft_delete(product)
        log.info("product %s soft-deleted", product_id)
