"""Tests for the JSON log formatter."""

import json
import logging
import sys
import unittest

from utils.logging import REDACTED, JSONFormatter, setup_structured_logging


def _record(msg="User registered", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord("services.user_service", logging.INFO, __file__, 1, msg, (), exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def test_base_fields(self):
        data = json.loads(JSONFormatter().format(_record()))

        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "services.user_service")
        self.assertEqual(data["message"], "User registered")
        self.assertTrue(data["timestamp"].endswith("Z"))

    def test_extra_fields_included(self):
        data = json.loads(JSONFormatter().format(_record(userId="user-1", errorType="MailerServiceError")))

        self.assertEqual(data["userId"], "user-1")
        self.assertEqual(data["errorType"], "MailerServiceError")

    def test_secrets_redacted(self):
        data = json.loads(JSONFormatter().format(_record(password="hunter2", token="eyJ...")))

        self.assertEqual(data["password"], "[REDACTED]")
        self.assertEqual(data["token"], "[REDACTED]")

    def test_camel_case_secret_keys_redacted(self):
        data = json.loads(JSONFormatter().format(_record(activationToken="ABC", sessionToken="eyJ...")))

        self.assertEqual(data["activationToken"], REDACTED)
        self.assertEqual(data["sessionToken"], REDACTED)

    def test_service_name_included_when_set(self):
        data = json.loads(JSONFormatter(service="user-account-service").format(_record()))

        self.assertEqual(data["service"], "user-account-service")
        self.assertNotIn("service", json.loads(JSONFormatter().format(_record())))

    def test_extra_cannot_overwrite_base_fields(self):
        data = json.loads(JSONFormatter(service="svc").format(_record(service="spoofed")))

        self.assertEqual(data["service"], "svc")

    def test_non_json_values_stringified(self):
        class Opaque:
            def __str__(self):
                return "opaque"

        data = json.loads(JSONFormatter().format(_record(thing=Opaque())))

        self.assertEqual(data["thing"], "opaque")

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        self.assertIn("RuntimeError: boom", data["exception"])


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        root.setLevel(self._saved[0])
        root.handlers = self._saved[1]

    def test_level_name_accepted(self):
        setup_structured_logging("debug")

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)

    def test_unknown_level_name_falls_back_to_info(self):
        setup_structured_logging("LOUD")

        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_http_client_logs_quieted(self):
        setup_structured_logging(logging.DEBUG)

        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)
        self.assertEqual(logging.getLogger("uvicorn.access").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
