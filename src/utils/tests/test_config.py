"""Tests for environment-driven settings."""

import unittest

from adapter.mongodb.connection import DEFAULT_DATABASE_NAME
from services.password import BCRYPT_ROUNDS
from utils.config import ConfigError, Settings

FULL_ENV = {
    "JWT_SECRET_KEY": "secret",
    "MONGO_URL": "mongodb://localhost:27017",
    "TOKEN_SERVICE_URL": "http://token:8080",
    "MAILER_SERVICE_URL": "http://mailer:8080",
}


class TestSettingsFromEnv(unittest.TestCase):

    def test_defaults(self):
        settings = Settings.from_env(FULL_ENV)

        self.assertEqual(settings.jwt_secret_key, "secret")
        self.assertEqual(settings.token_client, "http")
        self.assertEqual(settings.mailer_client, "http")
        self.assertEqual(settings.mongo_database, DEFAULT_DATABASE_NAME)
        self.assertEqual(settings.bcrypt_rounds, BCRYPT_ROUNDS)
        self.assertEqual(settings.http_timeout_seconds, 5.0)

    def test_all_missing_variables_reported_together(self):
        with self.assertRaises(ConfigError) as ctx:
            Settings.from_env({})

        self.assertEqual(
            ctx.exception.missing,
            ["JWT_SECRET_KEY", "TOKEN_SERVICE_URL", "MAILER_SERVICE_URL"],
        )
        self.assertIn("JWT_SECRET_KEY", str(ctx.exception))

    def test_memory_transports_need_no_urls(self):
        settings = Settings.from_env({
            "JWT_SECRET_KEY": "secret",
            "TOKEN_CLIENT": "memory",
            "MAILER_CLIENT": "MEMORY",
        })

        self.assertEqual(settings.token_client, "memory")
        self.assertEqual(settings.mailer_client, "memory")
        self.assertIsNone(settings.token_service_url)
        self.assertIsNone(settings.mongo_url)

    def test_invalid_values(self):
        env = dict(FULL_ENV, TOKEN_CLIENT="grpc", BCRYPT_ROUNDS="many", HTTP_TIMEOUT_SECONDS="1.5")

        with self.assertRaises(ConfigError) as ctx:
            Settings.from_env(env)

        self.assertEqual(ctx.exception.invalid, ["TOKEN_CLIENT", "BCRYPT_ROUNDS"])
        self.assertEqual(ctx.exception.missing, [])

    def test_overrides(self):
        env = dict(
            FULL_ENV,
            MONGODB_DATABASE="accounts_test",
            ACTIVATION_PAGE_URL="https://app.test/activate",
            BCRYPT_ROUNDS="10",
        )

        settings = Settings.from_env(env)

        self.assertEqual(settings.mongo_database, "accounts_test")
        self.assertEqual(settings.activation_page_url, "https://app.test/activate")
        self.assertEqual(settings.bcrypt_rounds, 10)


if __name__ == "__main__":
    unittest.main()
