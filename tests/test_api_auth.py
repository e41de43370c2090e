"""API tests for /register, /login and the bearer-token gate on catalog routes."""

import unittest

import jwt

from app.core.security import decode_access_token
from support import ApiTestCase, bearer, expired_bearer


class TestRegisterAndLogin(ApiTestCase):
    def test_scenario_register_login_and_empty_listing(self) -> None:
        creds = {"email": "a@x.com", "password": "p"}

        resp = self.client.post("/api/register", json=creds)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json(), {"message": "User registered"})

        resp = self.client.post("/api/register", json=creds)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Email already exists"})

        resp = self.client.post("/api/login", json=creds)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["role"], "user")
        self.assertEqual(decode_access_token(body["token"])["role"], "user")

        resp = self.client.get(
            "/api/devices", headers={"Authorization": f"Bearer {body['token']}"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"devices": [], "total": 0, "page": 1, "limit": 10})

    def test_register_requires_both_fields(self) -> None:
        for body in ({"email": "a@x.com"}, {"password": "p"}, {"email": "", "password": ""}):
            with self.subTest(body=body):
                resp = self.client.post("/api/register", json=body)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json(), {"error": "Invalid input"})

    def test_register_without_json_body(self) -> None:
        resp = self.client.post("/api/register")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid input"})

    def test_login_wrong_password(self) -> None:
        self.client.post("/api/register", json={"email": "a@x.com", "password": "p"})
        resp = self.client.post("/api/login", json={"email": "a@x.com", "password": "nope"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "Invalid password"})

    def test_login_unknown_email(self) -> None:
        resp = self.client.post("/api/login", json={"email": "ghost@x.com", "password": "p"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "User not found"})

    def test_login_token_carries_user_id(self) -> None:
        self.client.post("/api/register", json={"email": "b@x.com", "password": "p"})
        token = self.client.post(
            "/api/login", json={"email": "b@x.com", "password": "p"}
        ).json()["token"]
        self.assertIsInstance(decode_access_token(token)["id"], int)


class TestAuthGate(ApiTestCase):
    """Every catalog route needs a bearer token: 401 without one, 403 when invalid."""

    ROUTES = (
        ("get", "/api/devices"),
        ("post", "/api/devices"),
        ("put", "/api/devices/1"),
        ("delete", "/api/devices/1"),
        ("get", "/api/services"),
        ("post", "/api/services"),
        ("put", "/api/services/1"),
        ("delete", "/api/services/1"),
    )

    def _call(self, method: str, path: str, headers: dict[str, str] | None = None):
        return self.client.request(method.upper(), path, headers=headers or {})

    def test_missing_token(self) -> None:
        for method, path in self.ROUTES:
            with self.subTest(method=method, path=path):
                resp = self._call(method, path)
                self.assertEqual(resp.status_code, 401)
                self.assertEqual(resp.json(), {"error": "Token required"})

    def test_malformed_token(self) -> None:
        for method, path in self.ROUTES:
            with self.subTest(method=method, path=path):
                resp = self._call(method, path, {"Authorization": "Bearer not-a-jwt"})
                self.assertEqual(resp.status_code, 403)
                self.assertEqual(resp.json(), {"error": "Invalid token"})

    def test_expired_token(self) -> None:
        resp = self._call("get", "/api/services", expired_bearer())
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"error": "Invalid token"})

    def test_token_signed_with_other_secret(self) -> None:
        token = jwt.encode({"id": 1, "role": "user", "exp": 4102444800}, "other", algorithm="HS256")
        resp = self._call("get", "/api/devices", {"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 403)

    def test_token_without_integer_id(self) -> None:
        from app.core.config import settings

        token = jwt.encode(
            {"id": "1", "role": "user", "exp": 4102444800},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        resp = self._call("get", "/api/devices", {"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 403)

    def test_valid_token_passes(self) -> None:
        resp = self._call("get", "/api/devices", bearer())
        self.assertEqual(resp.status_code, 200)

    def test_register_and_login_need_no_token(self) -> None:
        resp = self.client.post("/api/login", json={"email": "x@x.com", "password": "p"})
        self.assertEqual(resp.json(), {"error": "User not found"})


if __name__ == "__main__":
    unittest.main()
