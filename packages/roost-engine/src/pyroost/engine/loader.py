import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Tuple

import yaml

from pyroost.common.paths import relative_path
from pyroost.interfaces.exceptions import MalformedInputError, RenderError

from .assets import ASSETS_DIR
from .attributes import AttributeMap
from .fingerprint import iter_files
from .promise import CycleContext

if TYPE_CHECKING:
    from .node import Node

logger = logging.getLogger(__name__)

SIDECAR_FILE = "attributes.yml"
RESERVED_KEYS = ("assets",)
FALLBACK_KEY = "_"


def key_for(rel_path: str) -> Tuple[str, ...]:
    """``"bio.html"`` -> ``("bio",)``; ``"posts/a.b.md"`` -> ``("posts", "a")``."""
    segments = rel_path.split("/")
    segments[-1] = segments[-1].split(".", 1)[0]
    return tuple(segments)


def load_sidecar(path: Path) -> dict:
    if not path.is_file() or path.stat().st_size == 0:
        return {}

    try:
        data = yaml.safe_load(path.read_text("utf-8"))
    except yaml.YAMLError as e:
        raise MalformedInputError(f"{path} could not be parsed: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"{path} is not valid UTF-8: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        data = {FALLBACK_KEY: data}

    for key in RESERVED_KEYS:
        if key in data:
            raise MalformedInputError(f"{SIDECAR_FILE} may not contain the key '{key}' ({path})")
    return data


class AttributeLoader:
    """One load pass for one node."""

    def __init__(self, node: "Node"):
        self.node = node
        self.context = CycleContext(node.identifier)

    @property
    def sidecar_path(self) -> Path:
        return self.node.path / SIDECAR_FILE

    def attribute_files(self) -> List[Path]:
        files = []
        for path in iter_files(self.node.path):
            rel = relative_path(path, to=self.node.path)
            if rel == SIDECAR_FILE or rel.startswith(f"{ASSETS_DIR}/"):
                continue
            # dotfiles and anything inside a dot-directory
            if any(part.startswith(".") for part in rel.split("/")):
                continue
            files.append(path)
        return files

    def load(self, attributes: AttributeMap = None) -> AttributeMap:
        """
        Populate ``attributes`` (a fresh map by default) and return it.

        The sidecar is parsed and validated before any promise exists, so a
        malformed sidecar fails the pass without scheduling renders.
        """
        attributes = AttributeMap() if attributes is None else attributes

        attributes.update(load_sidecar(self.sidecar_path))

        for path in self.attribute_files():
            rel = relative_path(path, to=self.node.path)
            self._schedule(attributes, key_for(rel), rel)

        logger.debug(f"Scheduled {len(self.context.promises)} attribute files for {self.node.identifier}")
        return attributes

    def restore(self, cached: AttributeMap) -> AttributeMap:
        """
        Adopt a cached store for this node.

        Plain values are shared; every promise is scheduled afresh against
        this node, so rendering uses this node's root and config.
        """
        attributes = cached.copy()
        for promise in list(cached.promises()):
            if promise.source is None:
                raise MalformedInputError(f"cached promise {'/'.join(promise.key)} has no source file")
            self._schedule(attributes, promise.key, promise.source)

        logger.debug(f"Restored {len(self.context.promises)} attribute files for {self.node.identifier}")
        return attributes

    def _schedule(self, attributes: AttributeMap, key: Tuple[str, ...], rel: str) -> None:
        compute = self._renderer_for(self.node.path / rel)
        attributes.set(key, self.context.promise(key, compute, source=rel))

    def _renderer_for(self, path: Path):
        node = self.node

        def compute() -> Any:
            try:
                html = node.config.renderer.render(path, node)
            except LookupError as e:
                # jinja reads a LookupError raised inside attribute access as "undefined"
                raise RenderError(f"rendering {path} failed: {e}") from e
            return node.config.rewriter.expand(html, node)

        return compute
