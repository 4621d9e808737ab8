"""API tests for the generated CRUD routes: envelopes, role gate and CSRF guard."""

import unittest

from api_case import API, ApiTestCase


class EntityTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.register_and_login("admin@x.com", "admin", "admin")

    def create_product(self, name: str = "Phone", price: float = 199.0) -> int:
        response = self.client.post(
            f"{API}/products",
            json={"product_name": name, "price": price},
            headers=self.auth_headers(self.admin),
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]["product_id"]


class TestCrudEnvelopes(EntityTestCase):
    """Response shapes and status codes for list/get/create/update/delete."""

    def test_create_returns_201_with_id(self) -> None:
        response = self.client.post(
            f"{API}/brands",
            json={"brand_name": "Acme"},
            headers=self.auth_headers(self.admin),
        )
        self.assertEqual(response.status_code, 201)
        data = response.json()["data"]
        self.assertEqual(data["brand_name"], "Acme")
        self.assertIsInstance(data["brand_id"], int)

    def test_list_returns_data_and_meta(self) -> None:
        for i in range(3):
            self.create_product(f"P{i}")
        response = self.client.get(f"{API}/products", params={"limit": 2, "page": 2})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["meta"], {"limit": 2, "page": 2, "total": 3})
        self.assertEqual(len(body["data"]), 1)
        self.assertEqual(body["data"][0]["product_name"], "P2")

    def test_get_by_id_and_404(self) -> None:
        product_id = self.create_product()
        response = self.client.get(f"{API}/products/{product_id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["product_name"], "Phone")

        missing = self.client.get(f"{API}/products/9999")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "products not found with ID: 9999")

    def test_non_integer_id_returns_400(self) -> None:
        self.assertEqual(self.client.get(f"{API}/products/abc").status_code, 400)

    def test_update_and_delete(self) -> None:
        product_id = self.create_product()
        headers = self.auth_headers(self.admin)
        updated = self.client.put(
            f"{API}/products/{product_id}", json={"product_name": "Tablet"}, headers=headers
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["message"], "Updated successfully")
        self.assertEqual(
            self.client.get(f"{API}/products/{product_id}").json()["data"]["product_name"],
            "Tablet",
        )

        deleted = self.client.delete(f"{API}/products/{product_id}", headers=headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json()["message"], "Deleted successfully")
        self.assertEqual(self.client.get(f"{API}/products/{product_id}").status_code, 404)

    def test_update_and_delete_missing_row_return_404(self) -> None:
        headers = self.auth_headers(self.admin)
        self.assertEqual(
            self.client.put(f"{API}/products/42", json={"price": 1}, headers=headers).status_code,
            404,
        )
        self.assertEqual(self.client.delete(f"{API}/products/42", headers=headers).status_code, 404)

    def test_empty_and_unknown_bodies_return_400(self) -> None:
        product_id = self.create_product()
        headers = self.auth_headers(self.admin)
        empty_update = self.client.put(f"{API}/products/{product_id}", json={}, headers=headers)
        self.assertEqual(empty_update.status_code, 400)
        self.assertEqual(empty_update.json()["message"], "Update data cannot be empty")

        unknown = self.client.post(
            f"{API}/products", json={"product_name": "X", "price": 1, "colour": "red"}, headers=headers
        )
        self.assertEqual(unknown.status_code, 400)

        missing_required = self.client.post(f"{API}/products", json={"price": 1}, headers=headers)
        self.assertEqual(missing_required.status_code, 400)

    def test_duplicate_unique_value_returns_409(self) -> None:
        headers = self.auth_headers(self.admin)
        self.client.post(f"{API}/brands", json={"brand_name": "Acme"}, headers=headers)
        response = self.client.post(f"{API}/brands", json={"brand_name": "Acme"}, headers=headers)
        self.assertEqual(response.status_code, 409)

    def test_users_route_hides_password_hash_and_has_no_create(self) -> None:
        response = self.client.get(f"{API}/users", headers=self.auth_headers(self.admin))
        self.assertEqual(response.status_code, 200)
        row = response.json()["data"][0]
        self.assertEqual(row["email"], "admin@x.com")
        self.assertNotIn("password_hash", row)

        create = self.client.post(
            f"{API}/users", json={"username": "x"}, headers=self.auth_headers(self.admin)
        )
        self.assertEqual(create.status_code, 405)

    def test_customer_password_hash_is_not_writable(self) -> None:
        headers = self.auth_headers(self.admin)
        rejected = self.client.post(
            f"{API}/customers",
            json={"username": "c", "email": "c@x.com", "password_hash": "plaintext"},
            headers=headers,
        )
        self.assertEqual(rejected.status_code, 400)

        created = self.client.post(
            f"{API}/customers", json={"username": "c", "email": "c@x.com"}, headers=headers
        )
        self.assertEqual(created.status_code, 201)
        customer_id = created.json()["data"]["customer_id"]
        update = self.client.put(
            f"{API}/customers/{customer_id}", json={"password_hash": "plaintext"}, headers=headers
        )
        self.assertEqual(update.status_code, 400)


class TestRoleGate(EntityTestCase):
    """Role-gated routes admit only their configured roles."""

    def test_example_staff_cannot_delete_product(self) -> None:
        product_id = self.create_product()
        staff = self.register_and_login("a@x.com", "a", "staff")
        self.assertEqual(staff["user"]["role"], "staff")

        listing = self.client.get(f"{API}/products", headers=self.auth_headers(staff, csrf=False))
        self.assertEqual(listing.status_code, 200)

        response = self.client.delete(
            f"{API}/products/{product_id}", headers=self.auth_headers(staff)
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Access denied. Required roles: admin")

    def test_admin_can_delete_product(self) -> None:
        product_id = self.create_product()
        response = self.client.delete(
            f"{API}/products/{product_id}", headers=self.auth_headers(self.admin)
        )
        self.assertEqual(response.status_code, 200)

    def test_staff_can_create_but_not_read_admin_tables(self) -> None:
        staff = self.register_and_login("a@x.com", "a", "staff")
        created = self.client.post(
            f"{API}/warehouses", json={"warehouse_name": "Main"}, headers=self.auth_headers(staff)
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(
            self.client.get(f"{API}/users", headers=self.auth_headers(staff, csrf=False)).status_code,
            403,
        )
        self.assertEqual(
            self.client.get(f"{API}/audit_logs", headers=self.auth_headers(staff, csrf=False)).status_code,
            403,
        )

    def test_protected_read_without_token_returns_401(self) -> None:
        self.assertEqual(self.client.get(f"{API}/orders").status_code, 401)


class TestCsrfGuard(EntityTestCase):
    """Mutations need the X-CSRF-Token header echoing the signed cookie."""

    def test_missing_csrf_header_returns_403_for_admin(self) -> None:
        response = self.client.post(
            f"{API}/brands",
            json={"brand_name": "Acme"},
            headers=self.auth_headers(self.admin, csrf=False),
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Invalid or missing CSRF token")

    def test_mismatched_csrf_header_returns_403(self) -> None:
        headers = self.auth_headers(self.admin, csrf=False)
        headers["X-CSRF-Token"] = "not-the-cookie"
        response = self.client.post(f"{API}/brands", json={"brand_name": "Acme"}, headers=headers)
        self.assertEqual(response.status_code, 403)

    def test_forged_token_in_cookie_and_header_returns_403(self) -> None:
        self.client.cookies.set("csrf_token", "forged")
        headers = self.auth_headers(self.admin, csrf=False)
        headers["X-CSRF-Token"] = "forged"
        response = self.client.post(f"{API}/brands", json={"brand_name": "Acme"}, headers=headers)
        self.assertEqual(response.status_code, 403)

    def test_non_ascii_csrf_header_returns_403(self) -> None:
        product_id = self.create_product()
        self.client.get(f"{API}/csrf-token")
        response = self.client.post(
            f"{API}/reviews",
            json={"product_id": product_id, "rating": 5},
            headers={"X-CSRF-Token": "café".encode("latin-1")},
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Invalid or missing CSRF token")

    def test_reads_do_not_need_csrf(self) -> None:
        response = self.client.get(f"{API}/orders", headers=self.auth_headers(self.admin, csrf=False))
        self.assertEqual(response.status_code, 200)

    def test_public_mutation_needs_csrf_but_no_login(self) -> None:
        product_id = self.create_product()
        self.client.cookies.clear()

        rejected = self.client.post(f"{API}/reviews", json={"product_id": product_id, "rating": 5})
        self.assertEqual(rejected.status_code, 403)

        csrf_token = self.client.get(f"{API}/csrf-token").json()["csrfToken"]
        self.assertEqual(self.client.cookies.get("csrf_token"), csrf_token)
        accepted = self.client.post(
            f"{API}/reviews",
            json={"product_id": product_id, "rating": 5, "comment": "Great"},
            headers={"X-CSRF-Token": csrf_token},
        )
        self.assertEqual(accepted.status_code, 201, accepted.text)
        self.assertEqual(accepted.json()["data"]["rating"], 5)


if __name__ == "__main__":
    unittest.main()
