import aiohttp
import json
import logging
import webbrowser
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple
from urllib.parse import urlencode, quote

from swordsupper.core.config import config_manager
from swordsupper.core.errors import SubmissionError
from swordsupper.core.models import BossRecord, ItemRecord
from swordsupper.services.notifier import Notifier

logger = logging.getLogger(__name__)

DISPATCH_URL = "https://api.github.com/repos/{repo}/dispatches"
NEW_ISSUE_URL = "https://github.com/{repo}/issues/new"

DISPATCH_EVENT = "add-instance"
INSTANCE_LABEL = "instance-submission"
ITEM_LABEL = "item-submission"


@dataclass
class SubmissionResult:
    dispatched: bool
    issue_url: Optional[str] = None


def _record_json(record) -> str:
    return json.dumps(record.model_dump(mode='json', by_alias=True), indent=2)


def build_instance_issue(boss: BossRecord) -> Tuple[str, str]:
    title = f"Add new instance: {boss.name}"
    body = f"""## New Instance Submission

**Instance Name:** {boss.name}
**Level:** {boss.level}
**Difficulty:** {boss.difficulty}
**Instance Type:** {boss.instance_type}
**Type:** {boss.type}
**Location:** {boss.location or 'None provided'}
**Reddit Link:** {boss.external_link or 'None provided'}
**Submitted By:** {boss.submitted_by or 'Anonymous'}

### Special Properties:
- **Has Ruined Path:** {'Yes' if boss.has_ruined_path else 'No'}
- **Has Increased:** {'Yes' if boss.has_increased else 'No'}

### JSON Data:
```json
{_record_json(boss)}
```

This instance was submitted through the website and should be added to the database."""
    return title, body


def build_item_issue(item: ItemRecord) -> Tuple[str, str]:
    title = f"Add new item: {item.name}"
    body = f"""## New Item Submission

**Item Name:** {item.name}
**Type:** {item.type}
**Rarity:** {item.rarity}
**Description:** {item.description}
**Image URL:** {item.image_url or 'None provided'}
**Gold Value:** {item.gold_value or 'None'}
**Source:** {item.source or 'None provided'}

### Properties:
- **Crit %:** {item.crit or 0}
- **Dodge %:** {item.dodge or 0}
- **Fire Resist %:** {item.fire_resist or 0}
- **Electric Resist %:** {item.elec_resist or 0}

### JSON Data:
```json
{_record_json(item)}
```

This item was submitted through the website and should be added to the database."""
    return title, body


def build_issue_url(repo: str, title: str, body: str, label: str) -> str:
    query = urlencode({"title": title, "body": body, "labels": label}, quote_via=quote)
    return f"{NEW_ISSUE_URL.format(repo=repo)}?{query}"


class SubmissionService:
    """
    Forwards newly added records to the GitHub repository for curation.
    Instances go through a repository_dispatch event first and fall back to a
    pre-filled issue page; items always use the issue page. Never raises.
    """

    def __init__(self, notifier: Notifier,
                 repo: Optional[str] = None,
                 token: Optional[str] = None,
                 dispatch_enabled: Optional[bool] = None,
                 timeout: Optional[float] = None,
                 opener: Callable[[str], object] = webbrowser.open):
        self.notifier = notifier
        self.repo = repo or config_manager.get_github_repo()
        self.token = token if token is not None else config_manager.get_github_token()
        self.dispatch_enabled = config_manager.is_dispatch_enabled() if dispatch_enabled is None else dispatch_enabled
        self.timeout = timeout if timeout is not None else config_manager.get_request_timeout()
        self.opener = opener

    def _headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def dispatch_instance(self, boss: BossRecord):
        payload = {
            "event_type": DISPATCH_EVENT,
            "client_payload": {
                "instance": boss.model_dump(mode='json', by_alias=True),
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
        url = DISPATCH_URL.format(repo=self.repo)

        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
            async with session.post(url, json=payload, headers=self._headers()) as response:
                if response.status >= 300:
                    raise SubmissionError(f"Failed to submit to database: Status {response.status}")

    async def submit_instance(self, boss: BossRecord) -> SubmissionResult:
        if self.dispatch_enabled:
            try:
                await self.dispatch_instance(boss)
                logger.info(f"Dispatched instance {boss.id} to {self.repo}")
                self.notifier.show_message('Instance submitted to database successfully!', 'success')
                return SubmissionResult(dispatched=True)
            except Exception as e:
                logger.error(f"Error submitting instance {boss.id}: {e}")

        title, body = build_instance_issue(boss)
        url = build_issue_url(self.repo, title, body, INSTANCE_LABEL)
        self._open(url)
        self.notifier.show_message('Instance saved locally! Please submit via the GitHub issue that opened.', 'info')
        return SubmissionResult(dispatched=False, issue_url=url)

    async def submit_item(self, item: ItemRecord) -> SubmissionResult:
        title, body = build_item_issue(item)
        url = build_issue_url(self.repo, title, body, ITEM_LABEL)
        self._open(url)
        self.notifier.show_message('Item saved locally! Please submit via the GitHub issue that opened.', 'success')
        return SubmissionResult(dispatched=False, issue_url=url)

    def _open(self, url: str):
        try:
            self.opener(url)
        except Exception as e:
            logger.error(f"Could not open issue page: {e}")
