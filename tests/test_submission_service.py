import unittest
from unittest.mock import MagicMock, patch, AsyncMock
from urllib.parse import urlparse, parse_qs

from swordsupper.core.models import BossRecord, ItemRecord
from swordsupper.services.notifier import Notifier
from swordsupper.services.submission_service import (
    SubmissionService, build_issue_url, build_instance_issue, build_item_issue
)


def mock_session_with_status(status):
    mock_response = AsyncMock()
    mock_response.status = status

    post_ctx = MagicMock()
    post_ctx.__aenter__.return_value = mock_response
    post_ctx.__aexit__.return_value = None

    mock_session = MagicMock()
    mock_session.post.return_value = post_ctx
    mock_session.__aenter__.return_value = mock_session
    mock_session.__aexit__.return_value = None
    return mock_session


class TestSubmissionService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.notifier = Notifier()
        self.opener = MagicMock()
        self.service = SubmissionService(self.notifier, repo="owner/repo", token="secret",
                                         dispatch_enabled=True, timeout=5, opener=self.opener)
        self.boss = BossRecord(id=1000, name="Goblin Keep", level="1-5", difficulty=2,
                               instance_type="normal", submitted_by="someone")

    async def test_dispatch_success(self):
        mock_session = mock_session_with_status(204)

        with patch('aiohttp.ClientSession', return_value=mock_session):
            result = await self.service.submit_instance(self.boss)

        self.assertTrue(result.dispatched)
        self.opener.assert_not_called()
        self.assertEqual(self.notifier.current.text, 'Instance submitted to database successfully!')
        self.assertEqual(self.notifier.current.severity, 'success')

        url = mock_session.post.call_args[0][0]
        kwargs = mock_session.post.call_args[1]
        self.assertEqual(url, "https://api.github.com/repos/owner/repo/dispatches")
        self.assertEqual(kwargs["json"]["event_type"], "add-instance")
        self.assertEqual(kwargs["json"]["client_payload"]["instance"]["name"], "Goblin Keep")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer secret")

    async def test_dispatch_failure_opens_issue(self):
        mock_session = mock_session_with_status(401)

        with patch('aiohttp.ClientSession', return_value=mock_session):
            result = await self.service.submit_instance(self.boss)

        self.assertFalse(result.dispatched)
        self.opener.assert_called_once_with(result.issue_url)
        self.assertTrue(result.issue_url.startswith("https://github.com/owner/repo/issues/new?"))
        self.assertEqual(self.notifier.current.severity, 'info')
        self.assertIn('GitHub issue', self.notifier.current.text)

    async def test_network_error_opens_issue(self):
        with patch('aiohttp.ClientSession', side_effect=OSError("offline")):
            result = await self.service.submit_instance(self.boss)
        self.assertFalse(result.dispatched)
        self.opener.assert_called_once()

    async def test_dispatch_disabled(self):
        self.service.dispatch_enabled = False
        with patch('aiohttp.ClientSession') as mock_cls:
            result = await self.service.submit_instance(self.boss)
        mock_cls.assert_not_called()
        self.assertFalse(result.dispatched)

    async def test_opener_failure_is_logged_only(self):
        self.opener.side_effect = RuntimeError("no browser")
        item = ItemRecord(id=5, name="Ring", type="accessory", rarity="rare", description="Shiny")
        result = await self.service.submit_item(item)
        self.assertIsNotNone(result.issue_url)
        self.assertEqual(self.notifier.current.text,
                         'Item saved locally! Please submit via the GitHub issue that opened.')

    def test_no_token_no_auth_header(self):
        service = SubmissionService(self.notifier, repo="owner/repo", token="", dispatch_enabled=True,
                                    timeout=5, opener=self.opener)
        self.assertNotIn("Authorization", service._headers())


def test_issue_url_contents():
    boss = BossRecord(id=1, name="Dragon Lair", level="21-40", difficulty="boss-rush",
                      instance_type="boss", has_ruined_path=True)
    title, body = build_instance_issue(boss)
    url = build_issue_url("owner/repo", title, body, "instance-submission")

    query = parse_qs(urlparse(url).query)
    assert query["title"] == ["Add new instance: Dragon Lair"]
    assert query["labels"] == ["instance-submission"]
    assert "**Has Ruined Path:** Yes" in query["body"][0]
    assert '"instanceType": "boss"' in query["body"][0]
    assert " " not in url


def test_item_issue():
    item = ItemRecord(name="Soulplate", type="armor", rarity="epic", description="Shield", dodge=10)
    title, body = build_item_issue(item)
    assert title == "Add new item: Soulplate"
    assert "**Dodge %:** 10" in body
    assert "**Crit %:** 0" in body
