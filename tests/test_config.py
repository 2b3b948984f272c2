import os
import unittest
from pathlib import Path
from unittest import mock

from termweek.config import load_settings


class TestLoadSettings(unittest.TestCase):
    def test_values_from_environment(self) -> None:
        env = {
            "TERMWEEK_STORE": "memory",
            "TERMWEEK_DATA_FILE": "/tmp/cal.json",
            "TERMWEEK_CATALOG_URL": "https://example.org/t.json",
            "TERMWEEK_HTTP_TIMEOUT": "5",
            "TERMWEEK_LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env):
            s = load_settings()
        self.assertEqual(s.store_backend, "memory")
        self.assertEqual(s.data_file, Path("/tmp/cal.json"))
        self.assertEqual(s.catalog_url, "https://example.org/t.json")
        self.assertEqual(s.http_timeout, 5.0)
        self.assertEqual(s.log_level, "DEBUG")

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        env = {
            "TERMWEEK_STORE": "redis",
            "TERMWEEK_CATALOG_URL": "",
            "TERMWEEK_HTTP_TIMEOUT": "soon",
            "TERMWEEK_LOG_LEVEL": "loud",
        }
        with mock.patch.dict(os.environ, env):
            s = load_settings()
        self.assertEqual(s.store_backend, "json")
        self.assertIsNone(s.catalog_url)
        self.assertEqual(s.http_timeout, 30.0)
        self.assertEqual(s.log_level, "WARNING")
        self.assertEqual(s.data_file.name, "calendars.json")

    def test_invalid_timeout_is_logged(self) -> None:
        with mock.patch.dict(os.environ, {"TERMWEEK_HTTP_TIMEOUT": "-3"}):
            with self.assertLogs("termweek.config", level="WARNING") as logs:
                s = load_settings()
        self.assertEqual(s.http_timeout, 30.0)
        self.assertIn("TERMWEEK_HTTP_TIMEOUT", logs.output[0])


if __name__ == "__main__":
    unittest.main()
