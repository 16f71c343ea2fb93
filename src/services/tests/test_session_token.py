"""Tests for SessionTokenCodec (JWT issue/verify)."""

import string
import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from domain.model.errors import InvalidJWTError, InvalidJWTSignatureError
from services.session_token import JWT_ALGORITHM, SESSION_VALIDITY, SessionTokenCodec

SECRET = "codec-test-secret"
B64URL_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"


def _substitutions(token: str):
    """Every token that differs from `token` in exactly one non-dot character."""
    for i, char in enumerate(token):
        if char == ".":
            continue
        for replacement in B64URL_ALPHABET:
            if replacement != char:
                yield i, token[:i] + replacement + token[i + 1:]


class TestIssueAndVerify(unittest.TestCase):

    def setUp(self):
        self.codec = SessionTokenCodec(SECRET)

    def test_round_trip_yields_user_id(self):
        token = self.codec.issue("user-123")

        claims = self.codec.verify(token)

        self.assertEqual(claims.user_id, "user-123")

    def test_expiry_is_24_hours_out(self):
        before = datetime.now(timezone.utc)
        claims = self.codec.verify(self.codec.issue("user-123"))

        self.assertEqual(SESSION_VALIDITY, timedelta(hours=24))
        # exp has one-second resolution
        self.assertGreaterEqual(claims.expires_at, before + SESSION_VALIDITY - timedelta(seconds=1))
        self.assertLessEqual(claims.expires_at, datetime.now(timezone.utc) + SESSION_VALIDITY)

    def test_claims_carry_only_user_id_and_exp(self):
        payload = jwt.get_unverified_claims(self.codec.issue("user-123"))

        self.assertEqual(set(payload), {"user_id", "exp"})

    def test_empty_secret_is_rejected(self):
        with self.assertRaises(ValueError):
            SessionTokenCodec("")


class TestVerifyFailures(unittest.TestCase):

    def setUp(self):
        self.codec = SessionTokenCodec(SECRET)

    def test_foreign_secret_is_signature_error(self):
        token = SessionTokenCodec("another-secret").issue("user-123")

        with self.assertRaises(InvalidJWTSignatureError):
            self.codec.verify(token)

    def test_any_single_character_substitution_is_rejected(self):
        token = self.codec.issue("user-123")

        for i, tampered in _substitutions(token):
            with self.subTest(position=i, token=tampered):
                with self.assertRaises(InvalidJWTError):
                    self.codec.verify(tampered)

    def test_low_bit_change_in_last_signature_character_is_rejected(self):
        # The last of 43 signature characters has two unused bits
        for user_id in ("user-1", "user-2", "user-3", "user-4"):
            token = self.codec.issue(user_id)
            last = token[-1]
            for bit in (1, 2, 3):
                tampered = token[:-1] + B64URL_ALPHABET[B64URL_ALPHABET.index(last) ^ bit]
                with self.subTest(user_id=user_id, bit=bit):
                    with self.assertRaises(InvalidJWTError):
                        self.codec.verify(tampered)

    def test_padded_or_non_url_safe_segments_are_invalid_jwt(self):
        token = self.codec.issue("user-123")
        header, payload, signature = token.split(".")
        standard_alphabet = signature.translate(str.maketrans("-_", "+/"))
        variants = {
            f"{header}=.{payload}.{signature}",
            f"{header}.{payload}.{signature}=",
            f"{header}.{payload}.{standard_alphabet}",
        } - {token}

        for tampered in sorted(variants):
            with self.subTest(token=tampered):
                with self.assertRaises(InvalidJWTError) as ctx:
                    self.codec.verify(tampered)
                self.assertNotIsInstance(ctx.exception, InvalidJWTSignatureError)

    def test_garbage_is_invalid_jwt_not_signature(self):
        for token in ("not-a-jwt", "a.b", "a.b.c.d", "...."):
            with self.subTest(token=token):
                with self.assertRaises(InvalidJWTError) as ctx:
                    self.codec.verify(token)
                self.assertNotIsInstance(ctx.exception, InvalidJWTSignatureError)

    def test_expired_token_is_invalid_jwt(self):
        expired = SessionTokenCodec(SECRET, validity=timedelta(minutes=-5)).issue("user-123")

        with self.assertRaises(InvalidJWTError) as ctx:
            self.codec.verify(expired)
        self.assertNotIsInstance(ctx.exception, InvalidJWTSignatureError)

    def test_missing_user_id_is_invalid_jwt(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"exp": exp}, SECRET, algorithm=JWT_ALGORITHM)

        with self.assertRaises(InvalidJWTError) as ctx:
            self.codec.verify(token)
        self.assertNotIsInstance(ctx.exception, InvalidJWTSignatureError)

    def test_missing_exp_is_invalid_jwt(self):
        token = jwt.encode({"user_id": "user-123"}, SECRET, algorithm=JWT_ALGORITHM)

        with self.assertRaises(InvalidJWTError):
            self.codec.verify(token)

    def test_out_of_range_exp_is_invalid_jwt(self):
        token = jwt.encode({"user_id": "user-123", "exp": 10**20}, SECRET, algorithm=JWT_ALGORITHM)

        with self.assertRaises(InvalidJWTError) as ctx:
            self.codec.verify(token)
        self.assertNotIsInstance(ctx.exception, InvalidJWTSignatureError)

    def test_other_algorithm_is_signature_error(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"user_id": "user-123", "exp": exp}, SECRET, algorithm="HS512")

        with self.assertRaises(InvalidJWTSignatureError):
            self.codec.verify(token)


if __name__ == "__main__":
    unittest.main()
