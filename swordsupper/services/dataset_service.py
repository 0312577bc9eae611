import requests
import json
import yaml
import os
import asyncio
import logging
from typing import List, Dict, Any, Optional
from nicegui import run
from pydantic import ValidationError

from swordsupper.core.models import BossRecord
from swordsupper.core.errors import DatasetLoadError
from swordsupper.core.config import config_manager

logger = logging.getLogger(__name__)


def parse_bosses_data(data: Dict[str, Any]) -> List[BossRecord]:
    """Parses the `bosses` list. Entries that fail validation are logged and skipped."""
    if not isinstance(data, dict) or not isinstance(data.get("bosses"), list):
        raise ValueError("Dataset has no 'bosses' list")

    bosses = []
    for index, entry in enumerate(data["bosses"]):
        try:
            bosses.append(BossRecord.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping invalid boss entry #{index} in dataset: {e}")
    return bosses


class DatasetService:
    """Reads the static boss dataset from a URL or a local JSON/YAML file."""

    def __init__(self, source: Optional[str] = None, timeout: Optional[float] = None):
        self.source = source or config_manager.get_data_source()
        self.timeout = timeout if timeout is not None else config_manager.get_request_timeout()

    def is_remote(self) -> bool:
        return self.source.lower().startswith(("http://", "https://"))

    def _fetch_remote(self) -> Dict[str, Any]:
        response = requests.get(self.source, timeout=self.timeout)
        if response.status_code != 200:
            raise Exception(f"HTTP Error: {response.status_code}")
        return response.json()

    def _read_local(self) -> Dict[str, Any]:
        if not os.path.exists(self.source):
            raise FileNotFoundError(f"Dataset file {self.source} not found.")

        with open(self.source, 'r', encoding='utf-8') as f:
            if self.source.endswith('.json'):
                return json.load(f)
            elif self.source.endswith(('.yaml', '.yml')):
                return yaml.safe_load(f)
            else:
                raise ValueError("Unsupported file format")

    def read_raw(self) -> Dict[str, Any]:
        if self.is_remote():
            return self._fetch_remote()
        return self._read_local()

    def load_bosses_sync(self) -> List[BossRecord]:
        """Blocking load. Raises DatasetLoadError on any failure."""
        logger.info(f"Loading boss dataset from {self.source}")
        try:
            bosses = parse_bosses_data(self.read_raw())
        except Exception as e:
            logger.error(f"Error loading dataset {self.source}: {e}")
            raise DatasetLoadError(self.source, str(e)) from e

        logger.info(f"Loaded {len(bosses)} bosses from dataset.")
        return bosses

    async def load_bosses(self) -> List[BossRecord]:
        try:
            return await run.io_bound(self.load_bosses_sync)
        except RuntimeError:
            # Fallback for environments without a running NiceGUI app
            return await asyncio.to_thread(self.load_bosses_sync)
