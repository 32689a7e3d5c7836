#!/usr/bin/env python3
"""
Seed an admin user and a starter catalogue, then print a bearer token for the admin.

Usage:
    python scripts/seed.py --file catalogue.json --admin-email admin@example.com
"""
import argparse
import json
import os
import sys
from decimal import Decimal, InvalidOperation

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import SessionLocal, init_db
from storefront.models.user import User
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.user_repo import UserRepository
from storefront.security import create_access_token
from storefront.services.catalogue_service import CatalogueService
from storefront.utils.text import slugify

DEFAULT_PRODUCTS = [
    {"name": "Court Classic", "brand": "Stride", "category": "sneakers", "price": "89.99",
     "sizes": [40, 41, 42, 43, 44], "gender": "unisex", "isNewArrival": True},
    {"name": "Trail Runner GTX", "brand": "Summit", "category": "running", "price": "149.00",
     "discountPrice": "119.00", "sizes": [41, 42, 43, 44, 45], "gender": "men", "isOnSale": True},
    {"name": "City Loafer", "brand": "Atelier", "category": "loafers", "price": "120.00",
     "sizes": [36, 37, 38, 39, 40], "gender": "women", "isBestSeller": True},
]


def _money(value):
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def _normalize_entry(entry: dict) -> dict:
    """Accept camelCase or snake_case product entries."""
    return {
        "name": entry.get("name") or entry.get("title") or "",
        "brand": entry.get("brand"),
        "category": entry.get("category"),
        "description": entry.get("description"),
        "price": _money(entry.get("price")) or Decimal("0"),
        "discount_price": _money(entry.get("discountPrice", entry.get("discount_price"))),
        "images": entry.get("images") or ([entry["image"]] if entry.get("image") else []),
        "sizes": [int(s) for s in entry.get("sizes") or []],
        "colors": entry.get("colors") or [],
        "gender": entry.get("gender"),
        "is_best_seller": bool(entry.get("isBestSeller", entry.get("is_best_seller", False))),
        "is_new_arrival": bool(entry.get("isNewArrival", entry.get("is_new_arrival", False))),
        "is_on_sale": bool(entry.get("isOnSale", entry.get("is_on_sale", False))),
    }


def seed(db, entries, admin_email: str = "admin@example.com", admin_name: str = "Admin User"):
    """Idempotent: an existing admin is reused and products whose slug already exists are skipped."""
    users = UserRepository(db)
    admin = users.get_by_email(admin_email)
    if admin is None:
        admin = users.add(User(name=admin_name, email=admin_email, is_admin=True))
        db.commit()

    products = ProductRepository(db)
    catalogue = CatalogueService(db)
    created = 0
    for entry in entries:
        data = _normalize_entry(entry)
        if not data["name"] or products.get_by_slug(slugify(data["name"]), include_deleted=True):
            continue
        catalogue.create_product(data, created_by=admin.id)
        created += 1
    return admin, created


def _load(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("items") or data.get("products") or []
    return data


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="JSON list of products (defaults to a built-in starter set)")
    parser.add_argument("--admin-email", default="admin@example.com")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    args = parser.parse_args()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)

    init_db(reset=args.reset)
    db = SessionLocal()
    try:
        admin, created = seed(db, _load(args.file) if args.file else DEFAULT_PRODUCTS, args.admin_email)
        print("Seeded products:", created)
        print("Admin token:", create_access_token(admin.id))
    finally:
        db.close()
