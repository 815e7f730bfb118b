"""
Shopfront Backend: Product Endpoint Tests
==========================================

What:  The /products endpoints end-to-end over HTTP, against an in-memory
       SQLite database.

What we test:
    ✅ Listing, category filtering and owner expansion on show
    ✅ Create forces the owner to the requester
    ✅ PATCH: blanks stripped, owner immutable, ownership enforced, 404s
    ✅ DELETE: ownership enforced, 404 on unknown/already-deleted ids
    ✅ Validation failures come back as 422 in the error envelope
"""

from uuid import uuid4

import pytest

from conftest import ALICE_TOKEN, BOB_TOKEN


class TestListProducts:

    @pytest.mark.asyncio
    async def test_empty(self, test_client):
        response = await test_client.get("/products")

        assert response.status_code == 200
        assert response.json() == {"products": []}

    @pytest.mark.asyncio
    async def test_lists_all_with_owner_ids(self, test_client, users, seed_product):
        await seed_product(users["alice"], category="tools", name="Hammer")
        await seed_product(users["bob"], category="garden", name="Rake")

        response = await test_client.get("/products")

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["name"] for p in products] == ["Hammer", "Rake"]
        assert products[0]["owner"] == str(users["alice"].id)

    @pytest.mark.asyncio
    async def test_category_filter_is_exact(self, test_client, users, seed_product):
        await seed_product(users["alice"], category="tools", name="Hammer")
        await seed_product(users["alice"], category="Tools", name="Wrench")
        await seed_product(users["bob"], category="garden", name="Rake")
        await seed_product(users["bob"], category="tools", name="Saw")

        response = await test_client.get("/products/category/tools")

        assert response.status_code == 200
        products = response.json()["products"]
        assert sorted(p["name"] for p in products) == ["Hammer", "Saw"]
        assert all(p["category"] == "tools" for p in products)

    @pytest.mark.asyncio
    async def test_category_with_no_products(self, test_client, users, seed_product):
        await seed_product(users["alice"], category="tools")

        response = await test_client.get("/products/category/kitchen")

        assert response.status_code == 200
        assert response.json() == {"products": []}


class TestShowProduct:

    @pytest.mark.asyncio
    async def test_returns_fields_with_owner_expanded(self, test_client, users, seed_product):
        product = await seed_product(
            users["alice"], category="tools", name="Hammer", price=12.5
        )

        response = await test_client.get(f"/products/{product.id}")

        assert response.status_code == 200
        body = response.json()["product"]
        assert body["id"] == str(product.id)
        assert body["name"] == "Hammer"
        assert body["price"] == 12.5
        assert body["category"] == "tools"
        assert body["owner"]["id"] == str(users["alice"].id)
        assert body["owner"]["email"] == "alice@example.com"
        assert "token" not in body["owner"]

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        missing = uuid4()

        response = await test_client.get(f"/products/{missing}")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert str(missing) in body["message"]
        assert "request_id" in body

    @pytest.mark.asyncio
    async def test_malformed_id_is_422(self, test_client):
        response = await test_client.get("/products/not-a-uuid")

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"


class TestCreateProduct:

    @pytest.mark.asyncio
    async def test_create_with_category_only(self, test_client, users, auth_headers):
        response = await test_client.post(
            "/products",
            json={"product": {"category": "tools"}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 201
        product = response.json()["product"]
        assert product["category"] == "tools"
        assert product["owner"] == str(users["alice"].id)

        listed = (await test_client.get("/products")).json()["products"]
        assert [p["id"] for p in listed] == [product["id"]]

    @pytest.mark.asyncio
    async def test_client_supplied_owner_is_overridden(self, test_client, users, auth_headers):
        response = await test_client.post(
            "/products",
            json={"product": {"category": "tools", "owner": str(users["bob"].id)}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 201
        assert response.json()["product"]["owner"] == str(users["alice"].id)

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client, users):
        response = await test_client.post("/products", json={"product": {"category": "tools"}})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_missing_category_is_422(self, test_client, users, auth_headers):
        response = await test_client.post(
            "/products",
            json={"product": {"name": "Nameless"}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_negative_price_is_422(self, test_client, users, auth_headers):
        response = await test_client.post(
            "/products",
            json={"product": {"category": "tools", "price": -1}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 422


class TestUpdateProduct:

    @pytest.mark.asyncio
    async def test_owner_updates_fields(self, test_client, users, seed_product, auth_headers):
        product = await seed_product(users["alice"], category="tools", name="Hammer")

        response = await test_client.patch(
            f"/products/{product.id}",
            json={"product": {"name": "Claw Hammer", "price": 20}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 204
        assert response.content == b""

        shown = (await test_client.get(f"/products/{product.id}")).json()["product"]
        assert shown["name"] == "Claw Hammer"
        assert shown["price"] == 20
        assert shown["category"] == "tools"

    @pytest.mark.asyncio
    async def test_blank_fields_leave_values_untouched(
        self, test_client, users, seed_product, auth_headers
    ):
        product = await seed_product(
            users["alice"], category="tools", name="Hammer", description="Steel"
        )

        response = await test_client.patch(
            f"/products/{product.id}",
            json={"product": {"name": "", "category": "", "description": "Forged steel"}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 204
        shown = (await test_client.get(f"/products/{product.id}")).json()["product"]
        assert shown["name"] == "Hammer"
        assert shown["category"] == "tools"
        assert shown["description"] == "Forged steel"

    @pytest.mark.asyncio
    async def test_owner_field_is_ignored(self, test_client, users, seed_product, auth_headers):
        product = await seed_product(users["alice"], category="tools")

        response = await test_client.patch(
            f"/products/{product.id}",
            json={"product": {"owner": str(users["bob"].id), "name": "Mine now"}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 204
        shown = (await test_client.get(f"/products/{product.id}")).json()["product"]
        assert shown["owner"]["id"] == str(users["alice"].id)
        assert shown["name"] == "Mine now"

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden_and_nothing_changes(
        self, test_client, users, seed_product, auth_headers
    ):
        product = await seed_product(users["alice"], category="tools", name="Hammer")

        response = await test_client.patch(
            f"/products/{product.id}",
            json={"product": {"name": "Stolen"}},
            headers=auth_headers(BOB_TOKEN),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"
        shown = (await test_client.get(f"/products/{product.id}")).json()["product"]
        assert shown["name"] == "Hammer"

    @pytest.mark.asyncio
    async def test_non_owner_forbidden_even_with_owner_in_payload(
        self, test_client, users, seed_product, auth_headers
    ):
        product = await seed_product(users["alice"], category="tools")

        response = await test_client.patch(
            f"/products/{product.id}",
            json={"product": {"owner": str(users["bob"].id)}},
            headers=auth_headers(BOB_TOKEN),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"product": {"colour": "red"}},
            {"product": {"price": -5}},
            {"product": {"category": None}},
            {"name": "Unwrapped"},
        ],
    )
    async def test_non_owner_forbidden_whatever_the_payload(
        self, test_client, users, seed_product, auth_headers, payload
    ):
        product = await seed_product(users["alice"], category="tools", name="Hammer")

        response = await test_client.patch(
            f"/products/{product.id}", json=payload, headers=auth_headers(BOB_TOKEN)
        )

        assert response.status_code == 403
        shown = (await test_client.get(f"/products/{product.id}")).json()["product"]
        assert shown["name"] == "Hammer"

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client, users, auth_headers):
        response = await test_client.patch(
            f"/products/{uuid4()}",
            json={"product": {"name": "Ghost"}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_id_with_invalid_payload_is_404(self, test_client, users, auth_headers):
        response = await test_client.patch(
            f"/products/{uuid4()}",
            json={"product": {"colour": "red"}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_unknown_field_is_422(self, test_client, users, seed_product, auth_headers):
        product = await seed_product(users["alice"], category="tools")

        response = await test_client.patch(
            f"/products/{product.id}",
            json={"product": {"colour": "red"}},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_missing_product_key_is_422(self, test_client, users, seed_product, auth_headers):
        product = await seed_product(users["alice"], category="tools")

        response = await test_client.patch(
            f"/products/{product.id}",
            json={"name": "Unwrapped"},
            headers=auth_headers(ALICE_TOKEN),
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client, users, seed_product):
        product = await seed_product(users["alice"], category="tools")

        response = await test_client.patch(
            f"/products/{product.id}", json={"product": {"name": "Anon"}}
        )

        assert response.status_code == 401


class TestDeleteProduct:

    @pytest.mark.asyncio
    async def test_owner_deletes(self, test_client, users, seed_product, auth_headers):
        product = await seed_product(users["alice"], category="tools")

        response = await test_client.delete(
            f"/products/{product.id}", headers=auth_headers(ALICE_TOKEN)
        )

        assert response.status_code == 204
        assert (await test_client.get(f"/products/{product.id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(self, test_client, users, seed_product, auth_headers):
        product = await seed_product(users["alice"], category="tools")

        response = await test_client.delete(
            f"/products/{product.id}", headers=auth_headers(BOB_TOKEN)
        )

        assert response.status_code == 403
        assert (await test_client.get(f"/products/{product.id}")).status_code == 200

    @pytest.mark.asyncio
    async def test_delete_twice_is_404(self, test_client, users, seed_product, auth_headers):
        product = await seed_product(users["alice"], category="tools")
        headers = auth_headers(ALICE_TOKEN)

        first = await test_client.delete(f"/products/{product.id}", headers=headers)
        second = await test_client.delete(f"/products/{product.id}", headers=headers)

        assert first.status_code == 204
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_deleting_product_removes_its_favorites(
        self, test_client, users, seed_product, seed_favorite, auth_headers
    ):
        product = await seed_product(users["alice"], category="tools")
        await seed_favorite(users["bob"], product)

        response = await test_client.delete(
            f"/products/{product.id}", headers=auth_headers(ALICE_TOKEN)
        )

        assert response.status_code == 204
        assert (await test_client.get("/favorites")).json() == {"favorites": []}
