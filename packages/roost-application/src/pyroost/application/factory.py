import logging
import os
from pathlib import Path
from typing import Optional

from pyroost.common.casts import cast
from pyroost.engine.cache import MemoryCache
from pyroost.engine.config import ConfigManager, RoostConfig
from pyroost.engine.root import Root
from pyroost.engine.templates import TemplateRenderer

logger = logging.getLogger(__name__)


def _env(name: str, kind: str) -> Optional[object]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return cast(kind, value)


def create_config(
    work_dir: Path,
    url: Optional[str] = None,
    read_from_cache: Optional[bool] = None,
) -> RoostConfig:
    """
    Layering, lowest first: built-in defaults, ``<root>/.roost/config.yml``,
    ROOST_* environment variables, explicit arguments.
    """
    manager = ConfigManager(work_dir)

    base_url = url or _env("ROOST_URL", "string") or manager.get("url", "/")

    if read_from_cache is None:
        read_from_cache = _env("ROOST_CACHE_READ", "bool")
    if read_from_cache is None:
        read_from_cache = bool(manager.get("cache.read", False))

    cache = None
    if manager.get("cache.enabled", True):
        cache = MemoryCache(max_entries=int(manager.get("cache.max_entries")))

    config = RoostConfig(
        root=work_dir,
        url=str(base_url),
        cache=cache,
        read_from_cache=read_from_cache,
        renderer=TemplateRenderer(search_path=Path(work_dir).resolve()),
    )
    logger.debug(
        f"Root configured: root={config.root} url={config.url} "
        f"cache={'on' if cache is not None else 'off'} read_from_cache={config.read_from_cache}"
    )
    return config


def create_root(
    work_dir: Optional[Path] = None,
    url: Optional[str] = None,
    read_from_cache: Optional[bool] = None,
) -> Root:
    if work_dir is None:
        work_dir = Path(_env("ROOST_ROOT", "string") or ".")
    return Root(create_config(Path(work_dir), url=url, read_from_cache=read_from_cache))
