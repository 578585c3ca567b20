import os
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pyroost.engine.cache import MemoryCache
from pyroost.engine.config import RoostConfig
from pyroost.engine.root import Root

FileContent = Union[str, bytes, dict]

# A small PNG header is enough for anything that only looks at file names
PNG_BYTES = b"\x89PNG\r\n\x1a\n"

BASE_URL = "https://example.com/content"


def write_file(path: Path, content: FileContent) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    elif isinstance(content, dict):
        path.write_text(yaml.safe_dump(content, sort_keys=False), "utf-8")
    else:
        path.write_text(content, "utf-8")
    return path


def make_node(root_dir: Path, identifier: str, files: Optional[Dict[str, FileContent]] = None) -> Path:
    """
    Create ``<root_dir>/<type>/<id>`` and write ``files`` into it.
    A dict value is dumped as YAML, so ``{"attributes.yml": {...}}`` works.
    """
    node_dir = root_dir / identifier
    node_dir.mkdir(parents=True, exist_ok=True)
    for rel, content in (files or {}).items():
        write_file(node_dir / rel, content)
    return node_dir


def set_timestamp(path: Path, timestamp: float) -> None:
    os.utime(path, (timestamp, timestamp))


def make_root(root_dir: Path, url: str = BASE_URL, read_from_cache: bool = False, cache=None) -> Root:
    config = RoostConfig(
        root=root_dir,
        url=url,
        cache=cache if cache is not None else MemoryCache(),
        read_from_cache=read_from_cache,
    )
    return Root(config)
