import logging
from pathlib import Path
from typing import Iterator, Optional

from pyroost.interfaces.exceptions import NotFoundError

from .config import RoostConfig
from .node import Node
from .nodelist import NodeList

logger = logging.getLogger(__name__)


def _visible_dirs(path: Path) -> Iterator[Path]:
    if not path.is_dir():
        return
    for entry in sorted(path.iterdir()):
        if entry.is_dir() and not entry.name.startswith("."):
            yield entry


class Root:
    """
    The content directory. Every ``<root>/<type>/<id>`` directory is a node;
    the node list (and its identifier index) is built once and shared, so
    every lookup hands out the same Node instances.
    """

    def __init__(self, config: RoostConfig):
        self.config = config
        self._nodes: Optional[NodeList] = None

    @property
    def path(self) -> Path:
        return self.config.root

    @property
    def nodes(self) -> NodeList:
        if self._nodes is None:
            self._nodes = self._scan()
        return self._nodes

    def _scan(self) -> NodeList:
        nodes = NodeList(self)
        for type_dir in _visible_dirs(self.path):
            for node_dir in _visible_dirs(type_dir):
                nodes.add(Node(node_dir, self))
        logger.debug(f"Found {len(nodes)} nodes under {self.path}")
        return nodes

    def refresh(self) -> NodeList:
        self._nodes = None
        return self.nodes

    def node(self, identifier: str) -> Node:
        node = self.nodes.get(identifier.strip("/"))
        if node is None:
            raise NotFoundError(f"no node '{identifier}' under {self.path}")
        return node

    def __repr__(self) -> str:
        return f"<Root {self.path}>"
