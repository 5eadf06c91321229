"""HTTP-level tests: status codes and response bodies."""

from sqlmodel import select

from app.core.auth import credentials
from app.models.user import User


class TestAuthRoutes:
    def test_register_then_login(self, client):
        body = {"email": "a@x.com", "password": "secret"}

        assert client.post("/api/register", json=body).status_code == 201

        response = client.post("/api/login", json=body)
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["email"] == "a@x.com"
        assert set(data["user"]) == {"id", "email", "role"}
        assert credentials.decode_token(data["token"])["email"] == "a@x.com"

    def test_register_duplicate(self, client):
        body = {"email": "a@x.com", "password": "secret"}
        client.post("/api/register", json=body)

        response = client.post("/api/register", json=body)
        assert response.status_code == 409
        assert response.json() == {"message": "Email already exists!"}

    def test_register_short_password(self, client):
        response = client.post("/api/register", json={"email": "a@x.com", "password": "abc"})
        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 4 characters long!"

    def test_login_wrong_password(self, client):
        client.post("/api/register", json={"email": "a@x.com", "password": "secret"})

        response = client.post("/api/login", json={"email": "a@x.com", "password": "nope!"})
        assert response.status_code == 401

    def test_current_user(self, client, user_headers):
        response = client.post("/api/current-user", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "user@x.com"
        assert "password" not in response.json()

    def test_current_user_requires_token(self, client):
        assert client.post("/api/current-user").status_code == 401

    def test_current_user_bad_token(self, client):
        headers = {"Authorization": "Bearer not-a-token"}
        assert client.post("/api/current-user", headers=headers).status_code == 401

    def test_current_admin_forbidden_for_user(self, client, user_headers):
        assert client.post("/api/current-admin", headers=user_headers).status_code == 403

    def test_disabled_user_token_rejected(self, client, session, user_headers):
        user = session.exec(select(User).where(User.email == "user@x.com")).one()
        user.enabled = False
        session.commit()

        assert client.post("/api/current-user", headers=user_headers).status_code == 401


class TestCategoryRoutes:
    def test_create_list_delete(self, client, admin_headers):
        created = client.post("/api/category", json={"name": " Shoes "}, headers=admin_headers)
        assert created.status_code == 201
        category_id = created.json()["id"]

        listed = client.get("/api/category")
        assert [c["name"] for c in listed.json()] == ["Shoes"]

        deleted = client.delete(f"/api/category/{category_id}", headers=admin_headers)
        assert deleted.status_code == 200
        assert client.get("/api/category").json() == []

    def test_duplicate(self, client, admin_headers):
        client.post("/api/category", json={"name": "Shoes"}, headers=admin_headers)
        response = client.post("/api/category", json={"name": "Shoes"}, headers=admin_headers)
        assert response.status_code == 409

    def test_create_requires_admin(self, client, user_headers):
        response = client.post("/api/category", json={"name": "Shoes"}, headers=user_headers)
        assert response.status_code == 403

    def test_delete_errors(self, client, admin_headers):
        assert client.delete("/api/category/abc", headers=admin_headers).status_code == 400
        assert client.delete("/api/category/999", headers=admin_headers).status_code == 404


class TestProductRoutes:
    def _category_id(self, client, admin_headers, name="Shirts"):
        return client.post("/api/category", json={"name": name}, headers=admin_headers).json()["id"]

    def test_create_and_fetch_one(self, client, admin_headers, image_data):
        category_id = self._category_id(client, admin_headers)
        body = {"category_id": category_id, "title": "Shirt", "images": [image_data(1)]}

        created = client.post("/api/product", json=body, headers=admin_headers)
        assert created.status_code == 201

        product = client.get(f"/api/product-one/{created.json()['id']}").json()
        assert product["category"]["name"] == "Shirts"
        assert product["price"] == 0
        assert product["quantity"] == 0
        assert [img["asset_id"] for img in product["images"]] == ["asset-1"]

    def test_create_validation_error(self, client, admin_headers):
        category_id = self._category_id(client, admin_headers)
        body = {"category_id": category_id, "title": "Shirt", "price": -5}

        response = client.post("/api/product", json=body, headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"message": "Price must be a positive number or zero!"}

    def test_update_replaces_images(self, client, admin_headers, image_data):
        category_id = self._category_id(client, admin_headers)
        body = {"category_id": category_id, "title": "Shirt", "images": [image_data(1), image_data(2)]}
        product_id = client.post("/api/product", json=body, headers=admin_headers).json()["id"]

        body["images"] = [image_data(3)]
        response = client.put(f"/api/product/{product_id}", json=body, headers=admin_headers)

        assert response.status_code == 200
        assert [img["asset_id"] for img in response.json()["images"]] == ["asset-3"]

    def test_fetch_one_errors(self, client):
        assert client.get("/api/product-one/abc").status_code == 400
        assert client.get("/api/product-one/77").status_code == 404

    def test_delete(self, client, admin_headers):
        category_id = self._category_id(client, admin_headers)
        body = {"category_id": category_id, "title": "Shirt"}
        product_id = client.post("/api/product", json=body, headers=admin_headers).json()["id"]

        assert client.delete(f"/api/product/{product_id}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/product-one/{product_id}").status_code == 404

    def test_limit_sort_filter(self, client, admin_headers):
        category_id = self._category_id(client, admin_headers)
        for title, price in (("A", 10), ("B", 20), ("C", 30)):
            body = {"category_id": category_id, "title": title, "price": price}
            client.post("/api/product", json=body, headers=admin_headers)

        limited = client.get("/api/product-limit/2").json()
        assert [p["title"] for p in limited] == ["C", "B"]

        sorted_ = client.post("/api/product-sort", json={"sort": "price", "order": "asc", "limit": 3})
        assert [p["price"] for p in sorted_.json()] == [10, 20, 30]

        bad_sort = client.post("/api/product-sort", json={"sort": "password", "order": "asc"})
        assert bad_sort.status_code == 400

        filtered = client.post("/api/product-filter", json={"price": [10, 20]})
        assert sorted(p["title"] for p in filtered.json()) == ["A", "B"]

    def test_create_with_camel_case_category_id(self, client, admin_headers):
        category_id = self._category_id(client, admin_headers)
        body = {"categoryId": category_id, "title": "Shirt"}

        response = client.post("/api/product", json=body, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["category_id"] == category_id

    def test_infinite_price_is_rejected(self, client, admin_headers):
        category_id = self._category_id(client, admin_headers)
        raw = '{"category_id": %d, "title": "Shirt", "price": Infinity}' % category_id

        response = client.post(
            "/api/product",
            content=raw,
            headers={**admin_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Price must be a positive number or zero!"}
        assert client.get("/api/product-limit/10").json() == []

    def test_non_string_image_field_is_rejected(self, client, admin_headers):
        category_id = self._category_id(client, admin_headers)
        body = {"category_id": category_id, "title": "Shirt", "images": [{"url": {"x": 1}}]}

        response = client.post("/api/product", json=body, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Image fields must be strings!"}

    def test_wrong_field_types_are_400_not_422(self, client, admin_headers):
        category_id = self._category_id(client, admin_headers)
        body = {"category_id": str(category_id), "title": "Shirt"}

        response = client.post("/api/product", json=body, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Category ID is required and must be a number!"}


class TestMalformedBodies:
    def test_invalid_json(self, client):
        response = client.post(
            "/api/login",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid request body!"}

    def test_missing_body(self, client):
        response = client.post("/api/register")
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid email format!"}

    def test_non_object_body(self, client, admin_headers):
        response = client.post("/api/category", json=["Shoes"], headers=admin_headers)
        assert response.status_code == 400
