import unittest
from unittest.mock import MagicMock, patch
import asyncio
import json
import os
import shutil
import tempfile

import yaml

from swordsupper.core.errors import DatasetLoadError
from swordsupper.services.dataset_service import DatasetService, parse_bosses_data

DATA = {
    "bosses": [
        {"id": 1, "name": "Goblin Keep", "level": "1-5", "difficulty": 1, "instanceType": "normal"},
        {"id": 2, "name": "The Gauntlet", "level": "21-40", "difficulty": "boss-rush", "instanceType": "boss",
         "hasRuinedPath": True},
    ]
}


class TestDatasetService(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def write(self, name, content):
        path = os.path.join(self.test_dir, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_load_local_json(self):
        path = self.write("data.json", json.dumps(DATA))
        bosses = DatasetService(path, timeout=1).load_bosses_sync()
        self.assertEqual([b.name for b in bosses], ["Goblin Keep", "The Gauntlet"])
        self.assertEqual(bosses[1].type, "Boss Rush")
        self.assertTrue(bosses[1].has_ruined_path)

    def test_load_local_yaml(self):
        path = self.write("data.yaml", yaml.safe_dump(DATA))
        bosses = DatasetService(path, timeout=1).load_bosses_sync()
        self.assertEqual(len(bosses), 2)

    def test_invalid_entry_skipped(self):
        data = {"bosses": [
            {"id": 1, "name": "Goblin Keep", "level": "1-5", "difficulty": 1, "instanceType": "normal"},
            {"id": 2, "name": "Broken", "level": 5, "difficulty": 2, "instanceType": "normal"},
        ]}
        path = self.write("data.json", json.dumps(data))

        bosses = DatasetService(path, timeout=1).load_bosses_sync()

        self.assertEqual([b.id for b in bosses], [1])

    def test_missing_file(self):
        service = DatasetService(os.path.join(self.test_dir, "nope.json"), timeout=1)
        with self.assertRaises(DatasetLoadError) as ctx:
            service.load_bosses_sync()
        self.assertIn("nope.json", str(ctx.exception))

    def test_unsupported_format(self):
        path = self.write("data.txt", "bosses")
        with self.assertRaises(DatasetLoadError):
            DatasetService(path, timeout=1).load_bosses_sync()

    def test_no_bosses_list(self):
        with self.assertRaises(ValueError):
            parse_bosses_data({"items": []})
        path = self.write("data.json", json.dumps({"bosses": "nope"}))
        with self.assertRaises(DatasetLoadError):
            DatasetService(path, timeout=1).load_bosses_sync()

    @patch('swordsupper.services.dataset_service.requests.get')
    def test_load_remote(self, mock_get):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = DATA
        mock_get.return_value = mock_response

        service = DatasetService("https://example.com/data.json", timeout=3)
        self.assertTrue(service.is_remote())
        bosses = service.load_bosses_sync()

        mock_get.assert_called_once_with("https://example.com/data.json", timeout=3)
        self.assertEqual(len(bosses), 2)

    @patch('swordsupper.services.dataset_service.requests.get')
    def test_remote_http_error(self, mock_get):
        mock_get.return_value = MagicMock(status_code=404)
        with self.assertRaises(DatasetLoadError) as ctx:
            DatasetService("https://example.com/data.json", timeout=3).load_bosses_sync()
        self.assertIn("404", ctx.exception.reason)

    def test_load_bosses_uses_io_bound(self):
        path = self.write("data.json", json.dumps(DATA))
        service = DatasetService(path, timeout=1)

        async def fake_io_bound(func, *args):
            return func(*args)

        with patch('swordsupper.services.dataset_service.run.io_bound', side_effect=fake_io_bound) as mock_io_bound:
            bosses = asyncio.run(service.load_bosses())

        mock_io_bound.assert_called_once()
        self.assertEqual(len(bosses), 2)


if __name__ == '__main__':
    unittest.main()
