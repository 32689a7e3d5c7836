import pytest

from storefront.errors import Conflict, NotFound
from storefront.models.wishlist import Wishlist, WishlistEntry
from storefront.repositories.wishlist_repo import WishlistRepository
from storefront.services.wishlist_service import WishlistService


def test_empty_wishlist(client, user_headers):
    body = client.get("/api/wishlist", headers=user_headers).json()
    assert body == {"status": "success", "results": 0, "data": {"products": []}}


def test_add_and_list_in_insertion_order(client, user_headers, make_product):
    a = make_product("Zeta Boot")
    b = make_product("Alpha Boot")
    assert client.post(f"/api/wishlist/{a.id}", headers=user_headers).status_code == 200
    res = client.post(f"/api/wishlist/{b.id}", headers=user_headers)
    assert res.json() == {"status": "success", "message": "Product added to wishlist"}

    products = client.get("/api/wishlist", headers=user_headers).json()["data"]["products"]
    assert [p["id"] for p in products] == [a.id, b.id]
    assert products[0]["slug"] == "zeta-boot"


def test_duplicate_add_conflicts_and_keeps_set(client, db, user_headers, product):
    client.post(f"/api/wishlist/{product.id}", headers=user_headers)
    res = client.post(f"/api/wishlist/{product.id}", headers=user_headers)
    assert res.status_code == 409
    assert res.json()["message"] == "Product already in wishlist"
    assert db.query(WishlistEntry).count() == 1


def test_add_unknown_product(client, user_headers):
    assert client.post("/api/wishlist/999", headers=user_headers).status_code == 404


def test_remove(client, user_headers, product):
    client.post(f"/api/wishlist/{product.id}", headers=user_headers)
    res = client.delete(f"/api/wishlist/{product.id}", headers=user_headers)
    assert res.status_code == 200
    assert client.get("/api/wishlist", headers=user_headers).json()["results"] == 0


def test_remove_without_wishlist_or_membership(client, user_headers, product, make_product):
    res = client.delete(f"/api/wishlist/{product.id}", headers=user_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Wishlist not found"

    other = make_product("Other")
    client.post(f"/api/wishlist/{other.id}", headers=user_headers)
    res = client.delete(f"/api/wishlist/{product.id}", headers=user_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Product not in wishlist"


def test_deleted_products_are_dropped_from_view(client, db, user_headers, admin_headers, product, make_product):
    keep = make_product("Keeper")
    client.post(f"/api/wishlist/{product.id}", headers=user_headers)
    client.post(f"/api/wishlist/{keep.id}", headers=user_headers)
    client.delete(f"/api/admin/products/{product.id}", headers=admin_headers)

    products = client.get("/api/wishlist", headers=user_headers).json()["data"]["products"]
    assert [p["id"] for p in products] == [keep.id]
    assert db.query(WishlistEntry).count() == 2


def test_service_errors(db, user, product):
    svc = WishlistService(db)
    with pytest.raises(NotFound):
        svc.remove(user.id, product.id)
    svc.add(user.id, product.id)
    with pytest.raises(Conflict):
        svc.add(user.id, product.id)
    assert [p.id for p in svc.get_wishlist(user.id)] == [product.id]


def test_concurrent_wishlist_creation_is_a_conflict(db, user, product, monkeypatch):
    db.add(Wishlist(user_id=user.id))
    db.commit()
    monkeypatch.setattr(WishlistRepository, "get_by_user", lambda self, user_id: None)

    with pytest.raises(Conflict):
        WishlistService(db).add(user.id, product.id)

    monkeypatch.undo()
    assert db.query(Wishlist).count() == 1
    assert db.query(WishlistEntry).count() == 0
