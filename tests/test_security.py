"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """Passwords are stored as salted bcrypt hashes."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("p")
        self.assertNotEqual(hashed, "p")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("p", hashed))

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("correct horse")
        self.assertFalse(verify_password("battery staple", hashed))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("p"), hash_password("p"))

    def test_malformed_hash_is_rejected_not_raised(self) -> None:
        self.assertFalse(verify_password("p", "plaintext-from-an-old-row"))


class TestAccessToken(unittest.TestCase):
    """Tokens carry {id, role} and expire after JWT_EXPIRE_MINUTES."""

    def test_round_trip_claims(self) -> None:
        payload = decode_access_token(create_access_token(7, "admin"))
        self.assertEqual(payload["id"], 7)
        self.assertEqual(payload["role"], "admin")

    def test_expiry_is_one_hour_by_default(self) -> None:
        payload = decode_access_token(create_access_token(1, "user"))
        self.assertEqual(payload["exp"] - payload["iat"], settings.JWT_EXPIRE_MINUTES * 60)

    def test_expired_token_raises(self) -> None:
        token = jwt.encode(
            {"id": 1, "role": "user", "exp": datetime.now(UTC) - timedelta(seconds=5)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_foreign_secret_raises(self) -> None:
        token = jwt.encode(
            {"id": 1, "role": "user", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "some-other-secret",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token)

    def test_token_without_exp_raises(self) -> None:
        token = jwt.encode(
            {"id": 1, "role": "user"},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.MissingRequiredClaimError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
