from decimal import Decimal

import pytest

from storefront.errors import Conflict, InvalidInput, NotFound
from storefront.models.cart import Cart
from storefront.models.cart_item import CartItem
from storefront.repositories.cart_repo import CartRepository
from storefront.services.cart_service import CartService


def _add(client, headers, product_id, size=42, quantity=1):
    return client.post(
        "/api/cart/add",
        json={"productId": product_id, "size": size, "quantity": quantity},
        headers=headers,
    )


def _stored_cart(db, user_id):
    db.expire_all()
    return db.query(Cart).filter(Cart.user_id == user_id).first()


def test_get_cart_requires_token(client):
    res = client.get("/api/cart")
    assert res.status_code == 401
    assert res.json()["status"] == "error"


def test_get_cart_without_cart_returns_empty_view(client, user_headers):
    res = client.get("/api/cart", headers=user_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert body["data"]["cart"]["items"] == []
    assert body["data"]["cart"]["subtotal"] == 0


def test_add_item_to_cart(client, user_headers, product):
    res = _add(client, user_headers, product.id, size=42, quantity=2)
    assert res.status_code == 200
    cart = res.json()["data"]["cart"]
    assert len(cart["items"]) == 1
    line = cart["items"][0]
    assert line["productId"] == product.id
    assert line["name"] == "Air Court 90"
    assert line["size"] == 42
    assert line["quantity"] == 2
    assert line["price"] == 50.0
    assert cart["subtotal"] == 100.0


def test_add_uses_discount_price_when_set(client, user_headers, make_product):
    p = make_product("Sale Runner", price="80.00", discount_price="60.00")
    cart = _add(client, user_headers, p.id, size=41, quantity=1).json()["data"]["cart"]
    assert cart["items"][0]["price"] == 60.0


def test_zero_discount_falls_back_to_list_price(db, user, make_product):
    p = make_product("Free Sale", price="80.00", discount_price="0")
    assert p.effective_price == Decimal("80.00")
    view = CartService(db).add_to_cart(user.id, p.id, 41, 1)
    assert view["items"][0]["price"] == Decimal("80.00")
    assert _stored_cart(db, user.id).subtotal == Decimal("80.00")


def test_same_product_and_size_merges_with_latest_price(client, db, user, user_headers, product):
    _add(client, user_headers, product.id, size=42, quantity=2)

    product.discount_price = Decimal("45.00")
    db.commit()

    cart = _add(client, user_headers, product.id, size=42, quantity=3).json()["data"]["cart"]
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 5
    assert cart["items"][0]["price"] == 45.0
    assert cart["subtotal"] == 225.0

    stored = _stored_cart(db, user.id)
    assert len(stored.items) == 1
    assert stored.subtotal == Decimal("225.00")


def test_different_sizes_are_separate_lines(client, user_headers, product):
    _add(client, user_headers, product.id, size=41, quantity=1)
    cart = _add(client, user_headers, product.id, size=42, quantity=1).json()["data"]["cart"]
    assert [it["size"] for it in cart["items"]] == [41, 42]
    assert cart["subtotal"] == 100.0


def test_add_unknown_product_is_not_found(client, user_headers):
    res = _add(client, user_headers, 999)
    assert res.status_code == 404
    assert res.json() == {"status": "error", "message": "Product not found"}


def test_add_soft_deleted_product_is_not_found(client, admin_headers, user_headers, product):
    assert client.delete(f"/api/admin/products/{product.id}", headers=admin_headers).status_code == 204
    assert _add(client, user_headers, product.id).status_code == 404


def test_add_rejects_non_positive_quantity(client, user_headers, product):
    res = _add(client, user_headers, product.id, quantity=0)
    assert res.status_code == 400
    assert res.json()["status"] == "error"


def test_update_and_remove_scenario(client, user_headers, product):
    cart = _add(client, user_headers, product.id, size=42, quantity=2).json()["data"]["cart"]
    item_id = cart["items"][0]["id"]

    res = client.put(
        "/api/cart/update", json={"itemId": item_id, "quantity": 3}, headers=user_headers
    )
    assert res.status_code == 200
    assert res.json()["data"]["cart"]["subtotal"] == 150.0

    res = client.delete(f"/api/cart/remove/{item_id}", headers=user_headers)
    assert res.status_code == 200
    cart = res.json()["data"]["cart"]
    assert cart["items"] == []
    assert cart["subtotal"] == 0


@pytest.mark.parametrize("quantity", [0, -2])
def test_update_to_non_positive_quantity_removes_line(client, db, user, user_headers, product, quantity):
    cart = _add(client, user_headers, product.id, quantity=2).json()["data"]["cart"]
    item_id = cart["items"][0]["id"]

    res = client.put(
        "/api/cart/update", json={"itemId": item_id, "quantity": quantity}, headers=user_headers
    )
    assert res.status_code == 200
    assert res.json()["data"]["cart"]["items"] == []
    assert db.query(CartItem).count() == 0
    assert _stored_cart(db, user.id).subtotal == 0


def test_update_unknown_item_is_not_found(client, user_headers, product):
    _add(client, user_headers, product.id)
    res = client.put("/api/cart/update", json={"itemId": "nope", "quantity": 1}, headers=user_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Item not found in cart"


def test_update_without_cart_is_not_found(client, user_headers):
    res = client.put("/api/cart/update", json={"itemId": "x", "quantity": 1}, headers=user_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Cart not found"


def test_remove_missing_item_leaves_cart_unchanged(client, db, user, user_headers, product):
    _add(client, user_headers, product.id, quantity=2)
    res = client.delete("/api/cart/remove/does-not-exist", headers=user_headers)
    assert res.status_code == 404

    stored = _stored_cart(db, user.id)
    assert len(stored.items) == 1
    assert stored.items[0].quantity == 2
    assert stored.subtotal == Decimal("100.00")


def test_deleted_product_line_hidden_but_kept_in_storage(
    client, db, user, user_headers, admin_headers, product, make_product
):
    other = make_product("Still Here", price="20.00")
    _add(client, user_headers, product.id, quantity=1)
    _add(client, user_headers, other.id, quantity=2)

    client.delete(f"/api/admin/products/{product.id}", headers=admin_headers)

    cart = client.get("/api/cart", headers=user_headers).json()["data"]["cart"]
    assert [it["productId"] for it in cart["items"]] == [other.id]
    assert cart["subtotal"] == 40.0

    stored = _stored_cart(db, user.id)
    assert {it.product_id for it in stored.items} == {product.id, other.id}


def test_clear_cart(client, db, user, user_headers, product):
    _add(client, user_headers, product.id, quantity=2)
    res = client.delete("/api/cart/clear", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"]["cart"]["items"] == []
    stored = _stored_cart(db, user.id)
    assert stored is not None
    assert stored.items == []
    assert stored.subtotal == 0


def test_subtotal_matches_items_after_every_mutation(db, user, make_product):
    svc = CartService(db)
    a = make_product("Alpha", price="19.99")
    b = make_product("Beta", price="5.50", discount_price="4.25")

    def check():
        cart = _stored_cart(db, user.id)
        assert cart.subtotal == sum((it.price * it.quantity for it in cart.items), Decimal("0"))

    svc.add_to_cart(user.id, a.id, 40, 3)
    check()
    view = svc.add_to_cart(user.id, b.id, 41, 2)
    check()
    svc.add_to_cart(user.id, a.id, 40, 1)
    check()
    svc.update_cart_item(user.id, view["items"][1]["id"], 7)
    check()
    svc.remove_from_cart(user.id, view["items"][0]["id"])
    check()
    assert _stored_cart(db, user.id).subtotal == Decimal("29.75")


def test_service_rejects_bad_quantity(db, user, product):
    with pytest.raises(InvalidInput):
        CartService(db).add_to_cart(user.id, product.id, 42, 0)


def test_service_remove_without_cart(db, user):
    with pytest.raises(NotFound):
        CartService(db).remove_from_cart(user.id, "missing")


def test_concurrent_cart_creation_is_a_conflict(db, user, product, monkeypatch):
    # another request already created this user's cart after our lookup
    db.add(Cart(user_id=user.id, subtotal=0))
    db.commit()
    monkeypatch.setattr(CartRepository, "get_by_user", lambda self, user_id: None)

    with pytest.raises(Conflict):
        CartService(db).add_to_cart(user.id, product.id, 42, 1)

    monkeypatch.undo()
    assert _stored_cart(db, user.id).items == []
