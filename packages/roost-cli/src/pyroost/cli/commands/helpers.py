import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

import typer
import yaml
from pyroost.application.factory import create_root
from pyroost.common.messaging import bus
from pyroost.engine.node import Node
from pyroost.engine.root import Root
from pyroost.interfaces.exceptions import NotFoundError, RoostError

from ..logger_config import setup_logging

logger = logging.getLogger(__name__)


@contextmanager
def root_context(work_dir: Path, url: Optional[str] = None) -> Generator[Root, None, None]:
    setup_logging()
    try:
        yield create_root(work_dir, url=url)
    except RoostError as e:
        logger.error(f"Operation failed under {work_dir}", exc_info=True)
        bus.error("common.error.generic", error=str(e))
        raise typer.Exit(1)


def find_node(root: Root, identifier: str) -> Node:
    try:
        return root.node(identifier)
    except NotFoundError:
        bus.error("common.error.nodeNotFound", identifier=identifier, root=root.path)
        raise typer.Exit(1)


def dump(data: Any, as_json: bool) -> str:
    if as_json:
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)
    if isinstance(data, str):
        return data
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False).rstrip()
