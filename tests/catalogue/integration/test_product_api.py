"""Integration tests for the /products endpoints."""


def _product_payload(category_id, **overrides):
    payload = {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse",
        "price": 24.99,
        "compare_price": 34.99,
        "cost": 12.0,
        "sku": "elec-mse-001",
        "quantity": 150,
        "category_id": category_id,
        "images": [{"url": "https://cdn.example.com/mouse.jpg", "alt": "Mouse"}],
    }
    payload.update(overrides)
    return payload


class TestCreateProductEndpoint:
    def test_admin_creates_product(self, client, admin, category, auth_headers):
        response = client.post("/products", json=_product_payload(category.id), headers=auth_headers(admin))

        assert response.status_code == 201
        product = response.json()["product"]
        assert product["slug"] == "wireless-mouse"
        assert product["sku"] == "ELEC-MSE-001"
        assert product["in_stock"] is True
        assert product["discount_percentage"] == 29
        assert product["main_image"]["url"] == "https://cdn.example.com/mouse.jpg"
        assert product["category"] == {"id": category.id, "name": "Electronics", "slug": "electronics"}
        assert "cost" not in product

    def test_customer_is_refused(self, client, customer, category, auth_headers):
        response = client.post("/products", json=_product_payload(category.id), headers=auth_headers(customer))
        assert response.status_code == 401
        assert response.json()["message"] == "Admin privileges required"

    def test_anonymous_is_refused(self, client, category):
        response = client.post("/products", json=_product_payload(category.id))
        assert response.status_code == 401

    def test_invalid_category(self, client, admin, auth_headers):
        response = client.post(
            "/products", json=_product_payload("65a1f0c2e4b0a1b2c3d4e5f6"), headers=auth_headers(admin)
        )
        assert response.status_code == 400
        assert response.json()["errors"] == {"category_id": ["Invalid category"]}

    def test_duplicate_sku(self, client, admin, category, auth_headers):
        client.post("/products", json=_product_payload(category.id), headers=auth_headers(admin))
        response = client.post(
            "/products",
            json=_product_payload(category.id, name="Another Mouse"),
            headers=auth_headers(admin),
        )
        assert response.status_code == 400
        assert "sku" in response.json()["errors"]

    def test_negative_price(self, client, admin, category, auth_headers):
        response = client.post(
            "/products", json=_product_payload(category.id, price=-1), headers=auth_headers(admin)
        )
        assert response.status_code == 400
        assert "price" in response.json()["errors"]


class TestListProductsEndpoint:
    def test_lists_active_products_with_pagination(self, client, make_product):
        make_product(name="Visible")
        make_product(name="Hidden", status="draft")

        response = client.get("/products")

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data["products"]] == ["Visible"]
        assert data["pagination"] == {"page": 1, "limit": 20, "total": 1, "pages": 1}

    def test_status_parameter_ignored_for_customers(self, client, customer, make_product, auth_headers):
        make_product(name="Hidden", status="draft")
        response = client.get("/products", params={"status": "draft"}, headers=auth_headers(customer))
        assert response.json()["products"] == []

    def test_admin_can_list_drafts(self, client, admin, make_product, auth_headers):
        make_product(name="Hidden", status="draft")
        response = client.get("/products", params={"status": "draft"}, headers=auth_headers(admin))
        assert [p["name"] for p in response.json()["products"]] == ["Hidden"]

    def test_price_filters_use_camel_case(self, client, make_product):
        make_product(name="Cheap", price=5.0)
        make_product(name="Mid", price=50.0)
        make_product(name="Pricey", price=500.0)

        response = client.get("/products", params={"minPrice": 10, "maxPrice": 100})
        assert [p["name"] for p in response.json()["products"]] == ["Mid"]

    def test_sort_and_order(self, client, make_product):
        make_product(name="B", price=2.0)
        make_product(name="A", price=3.0)
        make_product(name="C", price=1.0)

        response = client.get("/products", params={"sort": "name", "order": "asc"})
        assert [p["name"] for p in response.json()["products"]] == ["A", "B", "C"]

    def test_invalid_sort(self, client):
        response = client.get("/products", params={"sort": "cost"})
        assert response.status_code == 400
        assert "sort" in response.json()["errors"]

    def test_limit_bounds(self, client):
        assert client.get("/products", params={"limit": 0}).status_code == 400
        assert client.get("/products", params={"limit": 101}).status_code == 400

    def test_search(self, client, monkeypatch):
        from catalogue.product.repository import ProductRepository

        captured = {}

        def fake_list(self, query, **options):
            captured["query"] = query
            return [], {"page": 1, "limit": 20, "total": 0, "pages": 0}

        monkeypatch.setattr(ProductRepository, "list", fake_list)
        response = client.get("/products", params={"search": "wireless"})

        assert response.status_code == 200
        assert captured["query"]["$text"] == {"$search": "wireless"}
        assert captured["query"]["status"] == "active"


class TestProductDetailEndpoints:
    def test_by_id_and_slug(self, client, make_product):
        product = make_product(name="Wireless Mouse")

        by_id = client.get(f"/products/{product.id}")
        by_slug = client.get("/products/wireless-mouse")

        assert by_id.status_code == by_slug.status_code == 200
        assert by_id.json()["product"]["id"] == by_slug.json()["product"]["id"] == product.id

    def test_draft_is_not_available(self, client, make_product):
        product = make_product(status="draft")
        response = client.get(f"/products/{product.id}")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not available"

    def test_unknown(self, client):
        assert client.get("/products/no-such-thing").status_code == 404

    def test_featured(self, client, make_product):
        make_product(name="Star", featured=True)
        make_product(name="Plain")
        response = client.get("/products/featured/list")
        assert [p["name"] for p in response.json()["products"]] == ["Star"]

    def test_related(self, client, make_product):
        product = make_product(name="Mouse")
        make_product(name="Mouse Pad")
        response = client.get(f"/products/{product.id}/related")
        assert [p["name"] for p in response.json()["products"]] == ["Mouse Pad"]

    def test_related_of_inactive_product(self, client, make_product):
        product = make_product(name="Retired", status="inactive")
        make_product(name="Mouse Pad")
        response = client.get(f"/products/{product.id}/related")
        assert response.status_code == 404


class TestUpdateAndDeleteEndpoints:
    def test_update(self, client, admin, make_product, auth_headers):
        product = make_product(price=10.0)
        response = client.put(f"/products/{product.id}", json={"price": 12.0}, headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["product"]["price"] == 12.0
        assert response.json()["product"]["name"] == product.name

    def test_update_unknown(self, client, admin, auth_headers):
        response = client.put("/products/65a1f0c2e4b0a1b2c3d4e5f6", json={"price": 1}, headers=auth_headers(admin))
        assert response.status_code == 404

    def test_delete(self, client, admin, make_product, auth_headers):
        product = make_product()
        response = client.delete(f"/products/{product.id}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert client.get(f"/products/{product.id}").status_code == 404
