"""Tests for request validation and bcrypt password management."""

import unittest

from domain.model.errors import MissingFieldError, PasswordMismatchError, ValidationError
from domain.model.user import LoginRequest, RegistrationRequest
from services.password import BcryptPasswordManager
from services.validation import RequiredFieldValidator


class TestRequiredFieldValidator(unittest.TestCase):

    def setUp(self):
        self.validator = RequiredFieldValidator()

    def test_complete_requests_pass(self):
        self.validator.validate_registration(RegistrationRequest(email="a@b.com", password="x"))
        self.validator.validate_login(LoginRequest(email="a@b.com", password="x"))

    def test_names_are_optional(self):
        self.validator.validate_registration(
            RegistrationRequest(email="a@b.com", password="x", first_name="", last_name="")
        )

    def test_email_is_checked_before_password(self):
        with self.assertRaises(MissingFieldError) as ctx:
            self.validator.validate_registration(RegistrationRequest(email="", password=""))
        self.assertEqual(ctx.exception.field, "email")

    def test_missing_password(self):
        with self.assertRaises(MissingFieldError) as ctx:
            self.validator.validate_login(LoginRequest(email="a@b.com", password=""))
        self.assertEqual(ctx.exception.field, "password")
        self.assertIsInstance(ctx.exception, ValidationError)
        self.assertIn("password", str(ctx.exception))


class TestBcryptPasswordManager(unittest.TestCase):

    def setUp(self):
        self.manager = BcryptPasswordManager(rounds=4)

    def test_hash_verifies(self):
        hashed = self.manager.generate_hash("correct horse")

        self.assertNotEqual(hashed, "correct horse")
        self.assertTrue(hashed.startswith("$2"))
        self.manager.compare_hash(hashed, "correct horse")

    def test_hashes_are_salted(self):
        self.assertNotEqual(self.manager.generate_hash("pw"), self.manager.generate_hash("pw"))

    def test_mismatch_raises(self):
        hashed = self.manager.generate_hash("correct horse")

        with self.assertRaises(PasswordMismatchError):
            self.manager.compare_hash(hashed, "battery staple")

    def test_malformed_hash_raises_mismatch(self):
        with self.assertRaises(PasswordMismatchError):
            self.manager.compare_hash("not-a-bcrypt-hash", "pw")


if __name__ == "__main__":
    unittest.main()
