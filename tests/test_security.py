"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.models import Role
from tests.support import make_settings


class TestPasswordHashing(unittest.TestCase):
    """Passwords are stored as salted bcrypt hashes, never as plaintext."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertNotEqual(hashed, "s3cret-password")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("s3cret-password", hashed))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertFalse(verify_password("other-password", hashed))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("s3cret-password"), hash_password("s3cret-password"))

    def test_malformed_hash_is_rejected(self) -> None:
        self.assertFalse(verify_password("s3cret-password", "s3cret-password"))
        self.assertFalse(verify_password("s3cret-password", ""))

    def test_input_past_bcrypt_limit_never_matches_its_prefix(self) -> None:
        hashed = hash_password("a" * 72)
        self.assertTrue(verify_password("a" * 72, hashed))
        self.assertFalse(verify_password("a" * 72 + "something-else", hashed))
        # 40 two-byte characters already fill 80 bytes
        self.assertFalse(verify_password("é" * 40, hash_password("é" * 36)))

    def test_hashing_refuses_input_past_bcrypt_limit(self) -> None:
        with self.assertRaises(ValueError):
            hash_password("a" * 73)


class TestAccessTokens(unittest.TestCase):
    """Tokens carry sub and role, expire after a day, and fail closed."""

    def setUp(self) -> None:
        self.settings = make_settings()

    def test_round_trip_yields_subject_and_role(self) -> None:
        token = create_access_token("user-123", Role.ADMIN, self.settings)
        claims = decode_access_token(token, self.settings)
        self.assertEqual(claims.subject_id, "user-123")
        self.assertEqual(claims.role, Role.ADMIN)

    def test_payload_has_iat_and_one_day_expiry(self) -> None:
        issued = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
        token = create_access_token("u", "user", self.settings, now=issued)
        payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
        self.assertEqual(payload["iat"], int(issued.timestamp()))
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 60 * 60)
        self.assertEqual(payload["role"], "user")

    def test_token_past_expiry_is_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=1, seconds=1)
        token = create_access_token("user-123", Role.USER, self.settings, now=issued)
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, self.settings)

    def test_token_just_before_expiry_is_accepted(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=1) + timedelta(minutes=5)
        token = create_access_token("user-123", Role.USER, self.settings, now=issued)
        self.assertEqual(decode_access_token(token, self.settings).subject_id, "user-123")

    def test_token_signed_with_other_secret_is_rejected(self) -> None:
        other = make_settings(JWT_SECRET="a-completely-different-signing-secret")
        token = create_access_token("user-123", Role.ADMIN, other)
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, self.settings)

    def test_tampered_token_is_rejected(self) -> None:
        token = create_access_token("user-123", Role.USER, self.settings)
        forged = create_access_token("user-456", Role.ADMIN, self.settings)
        header, _payload, signature = token.split(".")
        tampered = ".".join([header, forged.split(".")[1], signature])
        with self.assertRaises(InvalidTokenError):
            decode_access_token(tampered, self.settings)

    def test_garbage_is_rejected(self) -> None:
        for token in ("", "not-a-token", "a.b.c", "Bearer x"):
            with self.subTest(token=token):
                with self.assertRaises(InvalidTokenError):
                    decode_access_token(token, self.settings)

    def test_unsigned_token_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "user-123", "role": "admin", "iat": now, "exp": now + timedelta(hours=1)},
            key=None,
            algorithm="none",
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, self.settings)

    def _signed(self, payload: dict) -> str:
        return jwt.encode(
            payload,
            self.settings.JWT_SECRET.get_secret_value(),
            algorithm=self.settings.JWT_ALGORITHM,
        )

    def test_unknown_role_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = self._signed(
            {"sub": "user-123", "role": "superuser", "iat": now, "exp": now + timedelta(hours=1)}
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, self.settings)

    def test_missing_subject_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = self._signed({"role": "user", "iat": now, "exp": now + timedelta(hours=1)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, self.settings)

    def test_missing_expiry_is_rejected(self) -> None:
        token = self._signed({"sub": "user-123", "role": "user", "iat": datetime.now(UTC)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, self.settings)


if __name__ == "__main__":
    unittest.main()
