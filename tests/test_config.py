import unittest
from unittest.mock import patch
from pydantic import ValidationError
from podmanager.config import load_settings, parse_sources


class TestConfig(unittest.TestCase):

    def test_parse_sources(self):
        self.assertEqual(
            parse_sources(" https://a.example.com/pods.json, ,https://b.example.com/pods.json "),
            ["https://a.example.com/pods.json", "https://b.example.com/pods.json"],
        )
        self.assertEqual(parse_sources(""), [])

    @patch.dict('os.environ', {}, clear=True)
    def test_defaults(self):
        settings = load_settings()

        self.assertEqual(settings.sources, [])
        self.assertEqual(settings.git_binary, "git")
        self.assertEqual(settings.update_branch, "master")
        self.assertFalse(settings.json_logs)

    @patch.dict('os.environ', {
        "PODS_SOURCES": "https://a.example.com/pods.json",
        "PODS_GIT_BINARY": "/usr/local/bin/git",
        "PODS_GIT_TIMEOUT": "60",
        "PODS_HTTP_TIMEOUT": "2.5",
        "PODS_UPDATE_BRANCH": "main",
        "PODS_LOG_JSON": "yes",
    }, clear=True)
    def test_environment_overrides(self):
        settings = load_settings()

        self.assertEqual(settings.sources, ["https://a.example.com/pods.json"])
        self.assertEqual(settings.git_binary, "/usr/local/bin/git")
        self.assertEqual(settings.git_timeout, 60)
        self.assertEqual(settings.http_timeout, 2.5)
        self.assertEqual(settings.update_branch, "main")
        self.assertTrue(settings.json_logs)

    @patch.dict('os.environ', {"PODS_HTTP_TIMEOUT": "0"}, clear=True)
    def test_invalid_timeout(self):
        with self.assertRaises(ValidationError):
            load_settings()


if __name__ == '__main__':
    unittest.main()
