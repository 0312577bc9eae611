import unittest
from unittest.mock import patch
import json
import os
import shutil
import tempfile

from swordsupper.core.config import ConfigManager, DEFAULT_CONFIG


class TestConfigManager(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.test_dir, "config.json")

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_defaults_without_file(self):
        cm = ConfigManager(self.config_file)
        self.assertEqual(cm.config, DEFAULT_CONFIG)
        self.assertEqual(cm.get_default_sort(), "level")
        self.assertFalse(cm.is_default_sort_descending())

    def test_file_merged_over_defaults(self):
        with open(self.config_file, 'w') as f:
            json.dump({"data_source": "https://example.com/data.json", "default_sort_order": "desc"}, f)
        cm = ConfigManager(self.config_file)
        self.assertEqual(cm.get_data_source(), "https://example.com/data.json")
        self.assertTrue(cm.is_default_sort_descending())
        self.assertEqual(cm.get_store_dir(), "data/store")

    def test_corrupt_file_uses_defaults(self):
        with open(self.config_file, 'w') as f:
            f.write("{")
        self.assertEqual(ConfigManager(self.config_file).config, DEFAULT_CONFIG)

    def test_set_persists(self):
        cm = ConfigManager(self.config_file)
        cm.set("dispatch_enabled", False)
        self.assertFalse(ConfigManager(self.config_file).is_dispatch_enabled())

    def test_yaml_config(self):
        path = os.path.join(self.test_dir, "config.yaml")
        with open(path, 'w') as f:
            f.write("request_timeout: 3\nlog_level: DEBUG\n")
        cm = ConfigManager(path)
        self.assertEqual(cm.get_request_timeout(), 3.0)
        self.assertEqual(cm.get_log_level(), "DEBUG")

        cm.set("default_sort", "name")
        self.assertEqual(ConfigManager(path).get_default_sort(), "name")

    def test_token_from_environment(self):
        cm = ConfigManager(self.config_file)
        with patch.dict(os.environ, {"SWORDSUPPER_GITHUB_TOKEN": "env-token"}):
            self.assertEqual(cm.get_github_token(), "env-token")


if __name__ == '__main__':
    unittest.main()
