# tests/test_api.py
from decimal import Decimal

from fastapi.routing import APIRoute

from app.main import app

ADMIN_HEADERS = {"Authorization": "Bearer admin-token"}
USER_HEADERS = {"Authorization": "Bearer user-token"}
OTHER_HEADERS = {"Authorization": "Bearer other-token"}

PRODUCT = {
    "name": "iPhone 15 Pro",
    "description": "Latest iPhone with advanced features",
    "price": "999.99",
    "stock_quantity": 50,
    "sku": "IPHONE-15-PRO",
}


def test_routes_registered_under_api_prefix():
    paths = {r.path for r in app.routes if isinstance(r, APIRoute)}

    assert "/api/v1/products" in paths
    assert "/api/v1/categories/{category_id}" in paths
    assert "/api/v1/orders/{order_id}/status" in paths
    assert "/health" in paths


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "Healthy"
    assert {c["name"] for c in body["checks"]} == {"Self", "Database"}


def test_list_products_envelope(client, make_product):
    make_product()

    resp = client.get("/api/v1/products", params={"pageNumber": 1, "pageSize": 10})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["statusCode"] == 200
    assert body["message"] == "Products retrieved successfully"
    page = body["data"]
    assert page["totalCount"] == 1
    assert page["hasNextPage"] is False
    assert Decimal(page["items"][0]["price"]) == Decimal("999.99")
    assert page["items"][0]["category"]["name"] == "Electronics"


def test_list_products_rejects_bad_paging(client):
    resp = client.get("/api/v1/products", params={"pageSize": 51})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Page size must be between 1 and 50"
    assert client.get("/api/v1/products", params={"pageNumber": 0}).status_code == 400


def test_list_products_rejects_inverted_price_range(client):
    resp = client.get("/api/v1/products", params={"minPrice": 100, "maxPrice": 10})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Minimum price cannot be greater than maximum price"


def test_get_missing_product(client):
    resp = client.get("/api/v1/products/999")

    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["statusCode"] == 404


def test_get_by_sku_and_search(client, make_product):
    make_product()

    assert client.get("/api/v1/products/sku/IPHONE-15-PRO").json()["data"]["name"] == "iPhone 15 Pro"
    found = client.get("/api/v1/products/search", params={"searchTerm": "phone"}).json()["data"]
    assert [p["sku"] for p in found] == ["IPHONE-15-PRO"]
    assert client.get("/api/v1/products/search").status_code == 400


def test_create_product_requires_token(client, category):
    resp = client.post("/api/v1/products", json={**PRODUCT, "category_id": category.id})

    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_create_product_requires_admin(client, category):
    resp = client.post("/api/v1/products", json={**PRODUCT, "category_id": category.id}, headers=USER_HEADERS)

    assert resp.status_code == 403


def test_create_product(client, category, db):
    resp = client.post("/api/v1/products", json={**PRODUCT, "category_id": category.id}, headers=ADMIN_HEADERS)

    assert resp.status_code == 201
    body = resp.json()
    assert body["statusCode"] == 201
    assert body["message"] == "Product created successfully"
    assert body["data"]["sku"] == "IPHONE-15-PRO"


def test_create_product_validation_messages(client, category):
    resp = client.post("/api/v1/products", json={"sku": "bad sku"}, headers=ADMIN_HEADERS)

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert "Product name is required" in body["errors"]
    assert "Product SKU can only contain uppercase letters, numbers, hyphens, and underscores" in body["errors"]


def test_create_duplicate_sku_is_conflict(client, category, make_product):
    make_product()

    resp = client.post("/api/v1/products", json={**PRODUCT, "category_id": category.id}, headers=ADMIN_HEADERS)

    assert resp.status_code == 409
    assert "already exists" in resp.json()["message"]


def test_update_stock_endpoint(client, make_product):
    product = make_product(stock=5)

    resp = client.patch(f"/api/v1/products/{product.id}/stock", json={"quantity": -1000}, headers=ADMIN_HEADERS)

    assert resp.status_code == 200
    assert resp.json()["data"]["stock_quantity"] == 0


def test_delete_product_then_not_found(client, make_product):
    product = make_product()

    resp = client.delete(f"/api/v1/products/{product.id}", headers=ADMIN_HEADERS)

    assert resp.status_code == 200
    assert resp.json()["data"] is True
    assert client.get(f"/api/v1/products/{product.id}").status_code == 404


def test_low_stock_requires_admin_and_valid_threshold(client, make_product):
    make_product(stock=3)

    assert client.get("/api/v1/products/low-stock", headers=USER_HEADERS).status_code == 403
    assert client.get("/api/v1/products/low-stock", params={"threshold": -1}, headers=ADMIN_HEADERS).status_code == 400
    resp = client.get("/api/v1/products/low-stock", headers=ADMIN_HEADERS)
    assert len(resp.json()["data"]) == 1


def test_statistics_endpoint(client, make_product):
    make_product(price="10.00", stock=2)

    data = client.get("/api/v1/products/statistics", headers=ADMIN_HEADERS).json()["data"]

    assert data["total_products"] == 1
    assert Decimal(data["total_inventory_value"]) == Decimal("20.00")


def test_delete_category_with_products_is_conflict(client, category, make_product):
    make_product()

    resp = client.delete(f"/api/v1/categories/{category.id}", headers=ADMIN_HEADERS)

    assert resp.status_code == 409


def test_create_user_and_audit_actor(client, db):
    resp = client.post(
        "/api/v1/users",
        json={
            "user_name": "anna.nowak",
            "email": "anna@example.com",
            "first_name": "Anna",
            "last_name": "Nowak",
        },
        headers=ADMIN_HEADERS,
    )

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["full_name"] == "Anna Nowak"

    from app.data.models import UserModel

    assert db.get(UserModel, data["id"]).created_by == "admin@test.local"


def test_order_flow(client, user, make_product):
    product = make_product(stock=5)
    payload = {
        "user_id": user.id,
        "shipping_address": "ul. Dluga 1",
        "billing_address": "ul. Dluga 1",
        "items": [{"product_id": product.id, "quantity": 2}],
    }

    created = client.post("/api/v1/orders", json=payload, headers=USER_HEADERS)
    assert created.status_code == 201
    order_id = created.json()["data"]["id"]

    own = client.get(f"/api/v1/orders/{order_id}", params={"user_id": user.id}, headers=USER_HEADERS)
    assert own.status_code == 200
    other = client.get(f"/api/v1/orders/{order_id}", params={"user_id": user.id + 1}, headers=USER_HEADERS)
    assert other.status_code == 403

    assert client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "Shipped"}, headers=USER_HEADERS).status_code == 403
    shipped = client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "Shipped"}, headers=ADMIN_HEADERS)
    assert shipped.json()["data"]["status"] == "Shipped"

    listing = client.get("/api/v1/orders", params={"user_id": user.id}, headers=USER_HEADERS).json()["data"]
    assert listing["totalCount"] == 1


def test_order_with_no_items_is_bad_request(client, user):
    resp = client.post(
        "/api/v1/orders",
        json={"user_id": user.id, "shipping_address": "a", "billing_address": "b", "items": []},
        headers=USER_HEADERS,
    )

    assert resp.status_code == 400
    assert "Order must contain at least one item" in resp.json()["errors"]


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/v1/nothing-here")

    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_user_lookups_and_conflicts(client, user):
    resp = client.post(
        "/api/v1/users",
        json={"user_name": "other", "email": "JAN@example.com", "first_name": "Jan", "last_name": "Inny"},
        headers=ADMIN_HEADERS,
    )

    assert resp.status_code == 409
    assert client.get(f"/api/v1/users/{user.id}").status_code == 401
    assert client.get(f"/api/v1/users/{user.id}", headers=USER_HEADERS).json()["data"]["email"] == "jan@example.com"
    assert client.delete(f"/api/v1/users/{user.id}", headers=USER_HEADERS).status_code == 403
    assert client.delete(f"/api/v1/users/{user.id}", headers=ADMIN_HEADERS).status_code == 200
    #konto usuniete, token nie jest juz powiazany z uzytkownikiem
    assert client.get(f"/api/v1/users/{user.id}", headers=USER_HEADERS).status_code == 403
    assert client.get(f"/api/v1/users/{user.id}", headers=ADMIN_HEADERS).status_code == 404


def test_catalog_read_endpoints(client, category, make_product):
    make_product(name="Cheap", sku="CHEAP", price="5.00")
    make_product(name="Hidden", sku="HIDDEN", price="50.00", is_active=False)

    active = client.get("/api/v1/products/active").json()["data"]
    by_category = client.get(f"/api/v1/products/category/{category.id}").json()["data"]
    in_range = client.get("/api/v1/products/price-range", params={"minPrice": 1, "maxPrice": 10}).json()["data"]

    assert [p["sku"] for p in active] == ["CHEAP"]
    assert [p["sku"] for p in by_category] == ["CHEAP"]
    assert [p["sku"] for p in in_range] == ["CHEAP"]


def test_category_endpoints(client, category):
    listing = client.get("/api/v1/categories").json()["data"]
    assert listing["items"][0]["name"] == "Electronics"

    updated = client.put(
        f"/api/v1/categories/{category.id}",
        json={"name": "Gadgets", "description": "Small gadgets"},
        headers=ADMIN_HEADERS,
    )
    assert updated.json()["data"]["name"] == "Gadgets"

    created = client.post("/api/v1/categories", json={"name": "Books"}, headers=ADMIN_HEADERS)
    assert created.status_code == 201
    assert client.post("/api/v1/categories", json={"name": "books"}, headers=ADMIN_HEADERS).status_code == 409

    assert client.delete(f"/api/v1/categories/{category.id}", headers=ADMIN_HEADERS).status_code == 200
    assert client.get(f"/api/v1/categories/{category.id}").status_code == 404


def test_update_user(client, user):
    resp = client.put(
        f"/api/v1/users/{user.id}",
        json={"first_name": "Janusz", "last_name": "Kowalski", "date_of_birth": "1990-05-05"},
        headers=USER_HEADERS,
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["full_name"] == "Janusz Kowalski"
    assert data["date_of_birth"] == "1990-05-05"
    assert data["email"] == "jan@example.com"


def test_orders_and_account_of_another_user_are_forbidden(client, db, user, make_product):
    from app.data.models import UserModel

    product = make_product(stock=5)
    order = {
        "user_id": user.id,
        "shipping_address": "ul. Dluga 1",
        "billing_address": "ul. Dluga 1",
        "items": [{"product_id": product.id, "quantity": 1}],
    }
    order_id = client.post("/api/v1/orders", json=order, headers=USER_HEADERS).json()["data"]["id"]

    #token bez konta w bazie
    assert client.get(f"/api/v1/orders/{order_id}", params={"user_id": user.id}, headers=OTHER_HEADERS).status_code == 403

    other = UserModel(user_name="other", email="other@test.local", first_name="Ola", last_name="Nowak")
    db.add(other)
    db.commit()

    assert client.get(f"/api/v1/orders/{order_id}", params={"user_id": user.id}, headers=OTHER_HEADERS).status_code == 403
    assert client.get(f"/api/v1/orders/{order_id}", params={"user_id": other.id}, headers=OTHER_HEADERS).status_code == 403
    assert client.get("/api/v1/orders", params={"user_id": user.id}, headers=OTHER_HEADERS).status_code == 403
    assert client.post("/api/v1/orders", json=order, headers=OTHER_HEADERS).status_code == 403
    assert client.get(f"/api/v1/users/{user.id}", headers=OTHER_HEADERS).status_code == 403

    resp = client.put(
        f"/api/v1/users/{user.id}",
        json={"first_name": "Evil", "last_name": "Kowalski"},
        headers=OTHER_HEADERS,
    )
    assert resp.status_code == 403
    assert client.get(f"/api/v1/users/{user.id}", headers=USER_HEADERS).json()["data"]["first_name"] == "Jan"

    assert client.get(f"/api/v1/users/{other.id}", headers=OTHER_HEADERS).status_code == 200
    assert client.get(f"/api/v1/orders/{order_id}", params={"user_id": user.id}, headers=ADMIN_HEADERS).status_code == 200
    assert client.get("/api/v1/orders", params={"user_id": user.id}, headers=ADMIN_HEADERS).status_code == 200
