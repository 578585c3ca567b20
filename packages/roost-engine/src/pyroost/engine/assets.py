import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional

from pyroost.common.paths import relative_path, relative_path_for
from pyroost.interfaces.exceptions import NotFoundError

if TYPE_CHECKING:
    from .node import Node

logger = logging.getLogger(__name__)

ASSETS_DIR = "assets"


class Asset:
    """A file below a node's ``assets/`` directory."""

    def __init__(self, node: "Node", path: Path):
        self.node = node
        self.path = Path(path)

    @property
    def relative_path(self) -> str:
        return relative_path(self.path, to=self.node.asset_dir)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def suffix(self) -> str:
        return self.path.suffix

    @property
    def url(self) -> str:
        return self.node.url_for(f"{ASSETS_DIR}/{self.relative_path}")

    def __fspath__(self) -> str:
        return str(self.path)

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"Asset({self.node.identifier}, {self.relative_path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)


def _fuzzy(path_info: str) -> str:
    # '-' and '_' match each other; everything else literally
    return "".join("[_-]" if char in "_-" else re.escape(char) for char in path_info)


class AssetResolver:
    """
    Fuzzy lookup of a file under ``<node>/assets``.

    Three patterns of increasing looseness are tried together: exact,
    exact-with-suffix and any-depth-with-suffix. Matching ignores case and
    treats '-' and '_' alike; among all matches the lexicographically last
    path wins.
    """

    def __init__(self, node: "Node"):
        self.node = node

    @property
    def asset_dir(self) -> Path:
        return self.node.asset_dir

    def patterns_for(self, path_info: str) -> List[str]:
        fuzzy = _fuzzy(path_info)
        return [
            rf"{fuzzy}",
            rf"{fuzzy}[^/]*",
            rf"(?:.*/)?{fuzzy}[^/]*",
        ]

    def candidates(self, *names: Any) -> List[Path]:
        path_info = relative_path_for(*names)
        if not path_info:
            return []

        regexes = [re.compile(pattern, re.IGNORECASE) for pattern in self.patterns_for(path_info)]
        matches = set()
        for path in self.node.asset_paths:
            rel = relative_path(path, to=self.asset_dir)
            if any(regex.fullmatch(rel) for regex in regexes):
                matches.add(path)
        return sorted(matches, key=str)

    def resolve(self, *names: Any) -> Asset:
        candidates = self.candidates(*names)
        if not candidates:
            path_info = relative_path_for(*names)
            raise NotFoundError(
                f"no asset matching {path_info!r} under {self.asset_dir} "
                f"(patterns: {self.patterns_for(path_info)})"
            )
        return Asset(self.node, candidates[-1])

    def maybe_resolve(self, *names: Any) -> Optional[Asset]:
        try:
            return self.resolve(*names)
        except NotFoundError as e:
            logger.debug(str(e))
            return None
