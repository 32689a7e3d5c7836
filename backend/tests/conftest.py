import os

# must be set before storefront.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["VERIFY_CHECKOUT_TOTALS"] = "false"
os.environ["ENFORCE_ORDER_TRANSITIONS"] = "false"

from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from storefront.db import SessionLocal, init_db
from storefront.main import app
from storefront.models.user import User
from storefront.security import create_access_token
from storefront.services.catalogue_service import CatalogueService


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(name="Jane Doe", email=None, is_admin=False):
        u = User(name=name, email=email or f"{uuid4().hex[:8]}@example.com", is_admin=is_admin)
        db.add(u)
        db.commit()
        db.refresh(u)
        return u

    return _make


@pytest.fixture
def user(make_user):
    return make_user("Jane Doe", "jane@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user("John Roe", "john@example.com")


@pytest.fixture
def admin(make_user):
    return make_user("Admin User", "admin@example.com", is_admin=True)


def bearer(u):
    return {"Authorization": f"Bearer {create_access_token(u.id)}"}


@pytest.fixture
def user_headers(user):
    return bearer(user)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def make_product(db):
    def _make(name=None, price="50.00", discount_price=None, sizes=(40, 41, 42), **extra):
        data = {
            "name": name or f"Runner {uuid4().hex[:6]}",
            "price": Decimal(price),
            "discount_price": Decimal(discount_price) if discount_price is not None else None,
            "sizes": list(sizes),
        }
        data.update(extra)
        return CatalogueService(db).create_product(data)

    return _make


@pytest.fixture
def product(make_product):
    return make_product("Air Court 90", price="50.00", sizes=(40, 41, 42, 43))


@pytest.fixture
def headers_for():
    return bearer
