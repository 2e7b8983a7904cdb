import io
import os
import tempfile
import unittest
from unittest import mock

from loguru import logger
from pydantic import ValidationError

from debridkit.clients.realdebrid import RealDebridClient
from debridkit.config import Settings, get_settings
from debridkit.log import setup_logging
from tests.fakes import INFO_HASH, MAGNET, FakeApi


class TestSettings(unittest.TestCase):
    def setUp(self):
        get_settings.cache_clear()

    def tearDown(self):
        get_settings.cache_clear()

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.provider, "real_debrid")
        self.assertEqual(settings.max_attempts, 3)
        self.assertEqual(settings.retry_delay, 1.0)
        self.assertFalse(settings.has_token)

    def test_environment(self):
        env = {"DEBRID_PROVIDER": "torbox", "DEBRID_TOKEN": "tb", "DEBRID_MAX_ATTEMPTS": "5"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = get_settings()
        self.assertEqual(settings.provider, "torbox")
        self.assertEqual(settings.max_attempts, 5)
        self.assertTrue(settings.has_token)

    def test_yaml_overrides_environment(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "debrid.yaml")
            with open(path, "w") as f:
                f.write("provider: premiumize\nretry_delay: 0.5\nalldebrid_agent: myapp\n")
            with mock.patch.dict(os.environ, {"DEBRID_PROVIDER": "torbox", "DEBRID_TOKEN": "env-token"}, clear=True):
                settings = Settings.from_yaml(path)
        self.assertEqual(settings.provider, "premiumize")
        self.assertEqual(settings.retry_delay, 0.5)
        self.assertEqual(settings.alldebrid_agent, "myapp")
        self.assertEqual(settings.token, "env-token")

    def test_missing_yaml_falls_back(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_yaml("/nonexistent/debrid.yaml")
        self.assertEqual(settings.provider, "real_debrid")

    def test_rejects_invalid_values(self):
        with self.assertRaises(ValidationError):
            Settings(max_attempts=0)
        with self.assertRaises(ValidationError):
            Settings(timeout=0)


class TestLogging(unittest.TestCase):
    def tearDown(self):
        logger.remove()
        logger.disable("debridkit")

    def test_silent_until_enabled(self):
        sink = io.StringIO()
        logger.remove()
        logger.add(sink, level="DEBUG")
        self._add_existing()
        self.assertEqual(sink.getvalue(), "")

    def test_setup_logging(self):
        sink = io.StringIO()
        setup_logging("debug", sink=sink)
        self._add_existing()
        output = sink.getvalue()
        self.assertIn("DEBUG", output)
        self.assertIn("already added", output)

    def _add_existing(self):
        api = FakeApi("/rest/1.0")
        api.add("GET", "/torrents", [{"id": "ABC123", "hash": INFO_HASH, "status": "downloaded"}])
        client = RealDebridClient("token", http=api.http(), retry_delay=0)
        self.assertEqual(client.add_magnet(MAGNET), "ABC123")


if __name__ == "__main__":
    unittest.main()
