"""Shared TestCase for API tests: in-memory SQLite behind the real app."""

import unittest
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.database import get_db
from storefront.main import app
from storefront.models import Base

API = "/api/v1"


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class ApiTestCase(unittest.TestCase):
    """Fresh schema per test; get_db is overridden to use the test engine."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        Base.metadata.create_all(self.engine)
        self.SessionTesting = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def register(
        self,
        email: str = "a@x.com",
        username: str = "a",
        password: str = "secret1",
        role: str = "staff",
    ):
        return self.client.post(
            f"{API}/register",
            json={"email": email, "username": username, "password": password, "role": role},
        )

    def login(self, email: str = "a@x.com", password: str = "secret1"):
        return self.client.post(f"{API}/login", json={"email": email, "password": password})

    def register_and_login(
        self, email: str, username: str, role: str, password: str = "secret1"
    ) -> dict[str, Any]:
        self.assertEqual(self.register(email, username, password, role).status_code, 201)
        response = self.login(email, password)
        self.assertEqual(response.status_code, 200)
        return response.json()

    def auth_headers(self, login_body: dict[str, Any], *, csrf: bool = True) -> dict[str, str]:
        """Bearer header, plus the CSRF header echoing the cookie currently in the jar."""
        headers = {"Authorization": f"Bearer {login_body['accessToken']}"}
        if csrf:
            headers["X-CSRF-Token"] = self.client.cookies.get("csrf_token") or ""
        return headers

    def use_refresh_cookie(self, token: str) -> None:
        """Replace the client's cookie jar with just this refresh token."""
        self.client.cookies.clear()
        self.client.cookies.set("refreshToken", token)
