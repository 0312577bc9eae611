import json
import os
import logging
import yaml
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

CONFIG_FILE = os.environ.get("SWORDSUPPER_CONFIG", "config.json")

DEFAULT_CONFIG = {
    "data_source": "data/data.json",
    "store_dir": "data/store",
    "github_repo": "ArkDouglas/swordsupperfilter",
    "github_token": None,
    "dispatch_enabled": True,
    "request_timeout": 10,
    "default_sort": "level",
    "default_sort_order": "asc",
    "log_dir": "logs",
    "log_level": "INFO"
}


class ConfigManager:
    """Settings file (JSON, or YAML by extension) merged over DEFAULT_CONFIG."""

    def __init__(self, config_file: str = CONFIG_FILE):
        self.config_file = config_file
        self.config: Dict[str, Any] = self._load_config()

    def _is_yaml(self) -> bool:
        return self.config_file.endswith(('.yaml', '.yml'))

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_file):
            return DEFAULT_CONFIG.copy()

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) if self._is_yaml() else json.load(f)
            # Merge with defaults to ensure all keys exist
            merged = DEFAULT_CONFIG.copy()
            merged.update(config or {})
            return merged
        except Exception as e:
            logger.error(f"Failed to load config: {e}")
            return DEFAULT_CONFIG.copy()

    def save_config(self):
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                if self._is_yaml():
                    yaml.safe_dump(self.config, f, sort_keys=False)
                else:
                    json.dump(self.config, f, indent=2)
        except Exception as e:
            logger.error(f"Failed to save config: {e}")

    def get(self, key: str) -> Any:
        return self.config.get(key, DEFAULT_CONFIG.get(key))

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()

    def get_data_source(self) -> str:
        return self.get("data_source")

    def get_store_dir(self) -> str:
        return self.get("store_dir")

    def get_github_repo(self) -> str:
        return self.get("github_repo")

    def get_github_token(self) -> Optional[str]:
        # Environment wins so the token never has to be written to config.json
        return os.environ.get("SWORDSUPPER_GITHUB_TOKEN") or self.get("github_token")

    def is_dispatch_enabled(self) -> bool:
        return bool(self.get("dispatch_enabled"))

    def get_request_timeout(self) -> float:
        return float(self.get("request_timeout"))

    def get_default_sort(self) -> str:
        return self.get("default_sort")

    def is_default_sort_descending(self) -> bool:
        return self.get("default_sort_order") == "desc"

    def get_log_dir(self) -> str:
        return self.get("log_dir")

    def get_log_level(self) -> str:
        return self.get("log_level")


config_manager = ConfigManager()
