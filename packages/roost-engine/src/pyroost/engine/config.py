import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pyroost.common.paths import realpath
from pyroost.interfaces.exceptions import MalformedInputError
from pyroost.interfaces.storage import CacheAdapter

from .rewriter import AssetUrlRewriter
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

CONFIG_DIR = ".roost"
CONFIG_FILE = "config.yml"

# Baseline for every setting a config file may override
DEFAULTS: Dict[str, Any] = {
    "url": "/",
    "cache": {
        "enabled": True,
        # Cached stores go stale when a template reads another node, so a
        # pass reads its own cache only when asked to.
        "read": False,
        # memory cache size, in node stores
        "max_entries": 1024,
    },
}


@dataclasses.dataclass
class RoostConfig:
    """Everything a node needs to load itself, owned by whoever builds the Root."""

    root: Path
    url: str = "/"
    cache: Optional[CacheAdapter] = None
    read_from_cache: bool = False
    renderer: TemplateRenderer = dataclasses.field(default_factory=TemplateRenderer)
    rewriter: AssetUrlRewriter = dataclasses.field(default_factory=AssetUrlRewriter)
    logger: logging.Logger = dataclasses.field(default_factory=lambda: logging.getLogger("pyroost.engine.node"))

    def __post_init__(self):
        self.root = realpath(self.root)


class ConfigManager:
    def __init__(self, root: Path):
        self.config_path = realpath(root) / CONFIG_DIR / CONFIG_FILE
        self.user_config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedInputError(f"{self.config_path} could not be parsed: {e}") from e

        if config_data is None:
            return {}
        if not isinstance(config_data, dict):
            logger.warning(f"Ignoring {self.config_path}: expected a mapping, got {type(config_data).__name__}")
            return {}
        return config_data

    def get(self, key: str, fallback: Any = None) -> Any:
        user_val = self._get_nested(self.user_config, key)
        if user_val is not None:
            return user_val

        default_val = self._get_nested(DEFAULTS, key)
        if default_val is not None:
            return default_val

        return fallback

    def _get_nested(self, data: Dict, key: str) -> Any:
        current = data
        for k in key.split("."):
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return None
        return current

    def set(self, key: str, value: Any):
        keys = key.split(".")
        d = self.user_config
        for k in keys[:-1]:
            d = d.setdefault(k, {})
        d[keys[-1]] = value
        logger.debug(f"Config updated: {key} = {value}")

    def save(self):
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.user_config, f, default_flow_style=False, allow_unicode=True)
        logger.debug(f"Config saved to {self.config_path}")
